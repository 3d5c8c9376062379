"""
This file contains custom, application-specific exceptions.
"""

class InvalidDateError(ValueError):
    """Raised when a date or year-month string is not a real calendar value."""
    pass

class BillingInvariantError(Exception):
    """Raised when a computed billing result breaks one of its guarantees."""
    pass
