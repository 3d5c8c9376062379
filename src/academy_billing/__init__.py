'''
Academy billing: per-student billing cycles anchored on the registration day.
'''
from .core.billing import (
    compute_billing_info,
    is_before_registration,
    get_registration_year_month,
)
from .common.exceptions import InvalidDateError, BillingInvariantError
from .models.billing import BillingInfo
