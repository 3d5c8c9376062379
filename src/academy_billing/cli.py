'''
Command line access to the billing engine, for backdated or forward-dated checks.

    academy-billing 2026-01-15 --as-of 2026-02-15
    academy-billing 2025-12-20 --as-of 2026-01-10 --json
'''
import argparse
import sys
from typing import Optional

from .common.exceptions import InvalidDateError
from .core.billing import compute_billing_info, get_registration_year_month, is_before_registration


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="academy-billing",
        description="Show a student's billing cycle position for a registration date."
    )
    parser.add_argument("registration_date", help="Registration date, YYYY-MM-DD")
    parser.add_argument("--as-of", dest="reference_date", default=None, help="Reference date, YYYY-MM-DD (default: today)")
    parser.add_argument("--check-month", default=None, help="Also report whether this YYYY-MM precedes registration")
    parser.add_argument("--json", action="store_true", help="Print the billing info as JSON")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        info = compute_billing_info(args.registration_date, args.reference_date)
        before = None
        if args.check_month:
            before = is_before_registration(args.check_month, args.registration_date)
    except InvalidDateError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.json:
        print(info.model_dump_json(indent=2))
    else:
        print(f"Registration month:  {get_registration_year_month(args.registration_date)}")
        print(f"Billing day:         {info.billing_day}")
        print(f"Current due period:  {info.current_due_year_month}")
        print(f"Days since due:      {info.days_since_due}")
        print(f"Days until next due: {info.days_until_next_due}")

    if before is not None:
        print(f"{args.check_month} before registration: {'yes' if before else 'no'}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
