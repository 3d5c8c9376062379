'''
Pydantic models for the billing engine and the billing status service.
'''
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from .enums import FeeType, CoverageStatus, PaymentStatus, EscalationLevel

# Canonical "YYYY-MM" pattern used by every year-month field
YEAR_MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"

# --- 1. Engine Output ---

class BillingInfo(BaseModel):
    """
    The billing position of one student as of a reference date.
    Recomputed on every call, never mutated.
    """
    current_due_year_month: str
    billing_day: int = Field(ge=1, le=31)
    days_since_due: int
    days_until_next_due: int = Field(ge=0)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return (
            f"due {self.current_due_year_month} (day {self.billing_day}), "
            f"{self.days_since_due}d since due, {self.days_until_next_due}d to next"
        )


# --- 2. Service Input Models ---
# Records owned by the caller (coverage and fee configuration live in their storage).

class CoverageInput(BaseModel):
    """How much of one month's fee has been paid."""
    year_month: str = Field(pattern=YEAR_MONTH_PATTERN)
    fee_type: FeeType = FeeType.MONTHLY
    status: CoverageStatus
    amount_paid: Decimal = Decimal("0")

class StudentBillingInput(BaseModel):
    """
    A student as the billing service needs to see them.
    `monthly_fee` is None when the student has no fee configuration.
    """
    student_id: UUID
    name: str
    registration_date: str
    monthly_fee: Optional[Decimal] = None
    is_active: bool = True
    coverages: list[CoverageInput] = []


# --- 3. Service Output Models ---

class StudentPaymentStatus(BaseModel):
    student_id: UUID
    name: str
    status: PaymentStatus
    billing: Optional[BillingInfo] = None
    amount_paid: Decimal = Decimal("0")
    amount_outstanding: Decimal = Decimal("0")
    escalation_level: Optional[EscalationLevel] = None

class OverdueStudent(BaseModel):
    student_id: UUID
    name: str
    amount: Decimal

class CollectionSummary(BaseModel):
    """Totals for the current due period across all configured students."""
    total_expected: Decimal
    total_collected: Decimal
    collection_rate: int
    paid_count: int = 0
    partial_count: int = 0
    overdue_count: int = 0
