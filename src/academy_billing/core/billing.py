'''
Per-student billing cycle engine.

Each student is billed on the day-of-month they registered on (their
"billing day"), not on the 1st. A student who registered on Jan 15 owes
the "2026-02" period from Feb 15 onwards; until then they are still
inside the "2026-01" period and are not overdue for February.

Months shorter than the billing day clamp it to their last day, so a
student registered on the 31st is due on Feb 28 (or 29), Apr 30, etc.
The clamp is applied to each month on its own and never changes the
stored billing day.
'''
import calendar
import re
from datetime import date, datetime
from typing import Optional, Union

from ..common.logger import log
from ..common.exceptions import InvalidDateError, BillingInvariantError
from ..models.billing import BillingInfo

DateInput = Union[str, date, datetime]

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_DATETIME_RE = re.compile(r"^\d{4}-\d{2}-\d{2}[T ]")
_YEAR_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")


# --- 1. Parsing & Formatting ---

def parse_calendar_date(value: DateInput, allow_time: bool = False) -> date:
    """
    Normalizes `value` to a plain calendar date.

    Accepts a `date`, a `datetime` (its time is dropped) or a strict
    `YYYY-MM-DD` string. With `allow_time`, ISO date-time strings are
    accepted too and reduced to their date part.
    Raises InvalidDateError for anything that is not a real calendar date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidDateError(f"Expected a YYYY-MM-DD date, got {value!r}")

    try:
        if _DATE_RE.fullmatch(value):
            return datetime.strptime(value, "%Y-%m-%d").date()
        if allow_time and _DATETIME_RE.match(value):
            return datetime.fromisoformat(value).date()
    except ValueError as e:
        raise InvalidDateError(f"'{value}' is not a valid calendar date") from e

    raise InvalidDateError(f"'{value}' is not a valid YYYY-MM-DD date")


def format_year_month(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def parse_year_month(year_month: str) -> tuple[int, int]:
    """Splits a `YYYY-MM` string into (year, month)."""
    match = _YEAR_MONTH_RE.fullmatch(year_month) if isinstance(year_month, str) else None
    if not match or not 1 <= int(match.group(2)) <= 12:
        raise InvalidDateError(f"'{year_month}' is not a valid YYYY-MM year-month")
    return int(match.group(1)), int(match.group(2))


# --- 2. Month Arithmetic ---

def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    """Moves (year, month) by `offset` months, rolling over year boundaries."""
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def effective_billing_day(billing_day: int, year: int, month: int) -> int:
    """The billing day clamped to the length of the given month."""
    return min(billing_day, days_in_month(year, month))


def due_date_for(year: int, month: int, billing_day: int) -> date:
    """The date on which the (year, month) billing period starts."""
    return date(year, month, effective_billing_day(billing_day, year, month))


# --- 3. Public Operations ---

def compute_billing_info(
    registration_date: DateInput,
    reference_date: Optional[DateInput] = None
) -> BillingInfo:
    """
    Computes the billing position of a student as of `reference_date`.

    - current_due_year_month: the period the student should have paid for.
      It advances on the student's (clamped) billing day, inclusive.
    - days_since_due: days since that period's own due date.
    - days_until_next_due: days until the next period starts.

    `reference_date` defaults to today, read at call time.
    """
    billing_day = parse_calendar_date(registration_date).day
    if reference_date is None:
        today = date.today()
    else:
        today = parse_calendar_date(reference_date, allow_time=True)

    this_month_billing_day = effective_billing_day(billing_day, today.year, today.month)

    try:
        if today.day >= this_month_billing_day:
            # This month's period has started, the next one starts next month
            due_year, due_month = today.year, today.month
            next_year, next_month = shift_month(today.year, today.month, 1)
            next_due_date = due_date_for(next_year, next_month, billing_day)
        else:
            # Still inside the previous month's period
            due_year, due_month = shift_month(today.year, today.month, -1)
            next_due_date = date(today.year, today.month, this_month_billing_day)

        # The due period is clamped against its own month, not the reference month
        period_due_date = due_date_for(due_year, due_month, billing_day)
    except ValueError as e:
        # The previous or next period falls outside years 1-9999
        raise InvalidDateError(
            f"Reference date {today.isoformat()} is too close to the supported date range limits"
        ) from e

    days_since_due = (today - period_due_date).days
    days_until_next_due = max(0, (next_due_date - today).days)

    if days_since_due < 0:
        raise BillingInvariantError(
            f"Negative days_since_due ({days_since_due}) for registration "
            f"{registration_date!r} as of {today.isoformat()}"
        )

    info = BillingInfo(
        current_due_year_month=format_year_month(due_year, due_month),
        billing_day=billing_day,
        days_since_due=days_since_due,
        days_until_next_due=days_until_next_due,
    )
    log.debug(f"Billing info for registration {registration_date!r} as of {today}: {info}")
    return info


def get_registration_year_month(registration_date: DateInput) -> str:
    """The `YYYY-MM` of the registration date itself (the first billing period)."""
    reg_date = parse_calendar_date(registration_date)
    return format_year_month(reg_date.year, reg_date.month)


def is_before_registration(year_month: str, registration_date: DateInput) -> bool:
    """
    True if `year_month` precedes the month the student registered in.
    Months before registration should never be reported as overdue.
    """
    return parse_year_month(year_month) < parse_year_month(
        get_registration_year_month(registration_date)
    )
