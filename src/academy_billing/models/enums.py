'''
Static enums shared by the billing models and services.
'''
import enum

# --- Base Enum Class ---
class ListableEnum(str, enum.Enum):
    """String-valued Enum base class; members serialize to their value."""
    pass


class FeeType(ListableEnum):
    MONTHLY = "monthly"
    BUS = "bus"

class CoverageStatus(ListableEnum):
    """Status of a single month's coverage record, as stored by the caller."""
    PAID = "paid"
    PARTIAL = "partial"
    PENDING = "pending"
    OVERDUE = "overdue"

class PaymentStatus(ListableEnum):
    """Classification of a student for their current due period."""
    PAID = "paid"
    PARTIAL = "partial"
    OVERDUE = "overdue"
    NO_CONFIG = "no-config"
    NOT_DUE = "not-due"

class EscalationLevel(ListableEnum):
    REMINDER = "reminder"
    WARNING = "warning"
    BLOCKED = "blocked"
