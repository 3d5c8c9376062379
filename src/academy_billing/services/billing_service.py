'''
Billing status service.

Classifies students against their current due period using coverage
records supplied by the caller. Nothing here reads or writes storage.
'''
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Iterable

from ..core.billing import DateInput, compute_billing_info, is_before_registration
from ..models.billing import (
    BillingInfo,
    CoverageInput,
    StudentBillingInput,
    StudentPaymentStatus,
    OverdueStudent,
    CollectionSummary,
)
from ..models.enums import FeeType, CoverageStatus, PaymentStatus, EscalationLevel
from ..common.logger import log
from ..common.config import settings


class BillingService:
    """
    Service for the dashboard, report and escalation views of billing.
    Stateless: every call recomputes from its inputs and the reference date.
    """

    # --- 1. Helpers ---

    def get_current_coverage(
        self,
        student: StudentBillingInput,
        billing: BillingInfo
    ) -> Optional[CoverageInput]:
        """Finds the monthly coverage record for the student's current due period."""
        for coverage in student.coverages:
            if (coverage.fee_type == FeeType.MONTHLY
                    and coverage.year_month == billing.current_due_year_month):
                return coverage
        return None

    def get_escalation_level(self, days_overdue: int) -> EscalationLevel:
        """Maps days since the due date to an escalation stage."""
        if days_overdue >= settings.ESCALATION_BLOCK_DAYS:
            return EscalationLevel.BLOCKED
        if days_overdue >= settings.ESCALATION_WARNING_DAYS:
            return EscalationLevel.WARNING
        return EscalationLevel.REMINDER

    # --- 2. Per-Student Status ---

    def get_payment_status(
        self,
        student: StudentBillingInput,
        reference_date: Optional[DateInput] = None
    ) -> StudentPaymentStatus:
        """
        Classifies one student for their current due period.

        - no fee configuration -> NO_CONFIG
        - due period before the registration month -> NOT_DUE
        - coverage paid / partial -> PAID / PARTIAL
        - anything else (pending, overdue or no coverage) -> OVERDUE

        Unpaid students also get an escalation level from days since due.
        """
        if student.monthly_fee is None:
            return StudentPaymentStatus(
                student_id=student.student_id,
                name=student.name,
                status=PaymentStatus.NO_CONFIG,
            )

        billing = compute_billing_info(student.registration_date, reference_date)

        if is_before_registration(billing.current_due_year_month, student.registration_date):
            log.info(
                f"Student {student.student_id} registered on {student.registration_date}, "
                f"after period {billing.current_due_year_month}. Not due yet."
            )
            return StudentPaymentStatus(
                student_id=student.student_id,
                name=student.name,
                status=PaymentStatus.NOT_DUE,
                billing=billing,
            )

        coverage = self.get_current_coverage(student, billing)
        amount_paid = coverage.amount_paid if coverage else Decimal("0")

        if coverage and coverage.status == CoverageStatus.PAID:
            status = PaymentStatus.PAID
        elif coverage and coverage.status == CoverageStatus.PARTIAL:
            status = PaymentStatus.PARTIAL
        else:
            status = PaymentStatus.OVERDUE

        escalation_level = None
        if amount_paid < student.monthly_fee:
            escalation_level = self.get_escalation_level(billing.days_since_due)

        return StudentPaymentStatus(
            student_id=student.student_id,
            name=student.name,
            status=status,
            billing=billing,
            amount_paid=amount_paid,
            amount_outstanding=max(Decimal("0"), student.monthly_fee - amount_paid),
            escalation_level=escalation_level,
        )

    # --- 3. Aggregates ---

    def get_overdue_students(
        self,
        students: Iterable[StudentBillingInput],
        reference_date: Optional[DateInput] = None,
        limit: Optional[int] = None
    ) -> list[OverdueStudent]:
        """
        Active, configured students who owe money for their current period,
        largest amount first.
        """
        if limit is None:
            limit = settings.OVERDUE_LIST_LIMIT

        overdue = []
        for student in students:
            if not student.is_active or student.monthly_fee is None:
                continue

            billing = compute_billing_info(student.registration_date, reference_date)
            if is_before_registration(billing.current_due_year_month, student.registration_date):
                continue

            coverage = self.get_current_coverage(student, billing)
            if coverage is None or coverage.status in (CoverageStatus.PENDING, CoverageStatus.OVERDUE):
                amount = student.monthly_fee
            elif coverage.status == CoverageStatus.PARTIAL:
                amount = student.monthly_fee - coverage.amount_paid
            else:
                continue

            overdue.append(OverdueStudent(
                student_id=student.student_id,
                name=student.name,
                amount=amount,
            ))

        overdue.sort(key=lambda s: s.amount, reverse=True)
        log.info(f"Found {len(overdue)} overdue students, returning at most {limit}.")
        return overdue[:limit]

    def get_collection_summary(
        self,
        students: Iterable[StudentBillingInput],
        reference_date: Optional[DateInput] = None
    ) -> CollectionSummary:
        """Expected vs. collected fees for every configured student's current due period."""
        total_expected = Decimal("0")
        total_collected = Decimal("0")
        counts = {PaymentStatus.PAID: 0, PaymentStatus.PARTIAL: 0, PaymentStatus.OVERDUE: 0}

        for student in students:
            if student.monthly_fee is None:
                continue
            payment_status = self.get_payment_status(student, reference_date)
            if payment_status.status == PaymentStatus.NOT_DUE:
                continue
            total_expected += student.monthly_fee
            total_collected += payment_status.amount_paid
            if payment_status.status in counts:
                counts[payment_status.status] += 1

        collection_rate = 0
        if total_expected > 0:
            collection_rate = int(
                (total_collected / total_expected * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
            )

        return CollectionSummary(
            total_expected=total_expected,
            total_collected=total_collected,
            collection_rate=collection_rate,
            paid_count=counts[PaymentStatus.PAID],
            partial_count=counts[PaymentStatus.PARTIAL],
            overdue_count=counts[PaymentStatus.OVERDUE],
        )
