'''
API endpoints for the per-student billing cycle engine.
'''
from datetime import date
from typing import Annotated, Any, Optional
from fastapi import APIRouter, Body, Depends, HTTPException, Query, status

from ..common.exceptions import InvalidDateError
from ..common.logger import log
from ..core import billing as billing_core
from ..models import billing as billing_models
from ..services.billing_service import BillingService


def _invalid_date(e: InvalidDateError) -> HTTPException:
    log.warning(f"Rejected billing request with invalid date: {e}")
    return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


class BillingAPI:
    """
    A class to encapsulate endpoints for billing cycles and payment status.
    """
    def __init__(self):
        self.router = APIRouter(
            prefix="/billing",
            tags=["Billing"]
        )
        self._register_routes()

    def _register_routes(self):
        """Registers all the API routes for this class."""
        self.router.add_api_route(
                "/info",
                self.get_billing_info,
                methods=["GET"],
                response_model=billing_models.BillingInfo)
        self.router.add_api_route(
                "/registration-month",
                self.get_registration_month,
                methods=["GET"])
        self.router.add_api_route(
                "/before-registration",
                self.check_before_registration,
                methods=["GET"])
        self.router.add_api_route(
                "/status",
                self.get_payment_status,
                methods=["POST"],
                response_model=billing_models.StudentPaymentStatus)
        self.router.add_api_route(
                "/overdue",
                self.list_overdue_students,
                methods=["POST"],
                response_model=list[billing_models.OverdueStudent])
        self.router.add_api_route(
                "/summary",
                self.get_collection_summary,
                methods=["POST"],
                response_model=billing_models.CollectionSummary)

    async def get_billing_info(
        self,
        registration_date: Annotated[str, Query(description="Registration date, YYYY-MM-DD")],
        reference_date: Annotated[Optional[date], Query(description="As-of date, defaults to today")] = None
    ) -> Any:
        """
        Returns the current due period, days since it was due and days until the next one.
        """
        try:
            return billing_core.compute_billing_info(registration_date, reference_date)
        except InvalidDateError as e:
            raise _invalid_date(e)

    async def get_registration_month(
        self,
        registration_date: Annotated[str, Query(description="Registration date, YYYY-MM-DD")]
    ) -> dict[str, str]:
        try:
            year_month = billing_core.get_registration_year_month(registration_date)
        except InvalidDateError as e:
            raise _invalid_date(e)
        return {"registration_date": registration_date, "year_month": year_month}

    async def check_before_registration(
        self,
        year_month: Annotated[str, Query(description="Period to check, YYYY-MM")],
        registration_date: Annotated[str, Query(description="Registration date, YYYY-MM-DD")]
    ) -> dict[str, Any]:
        """
        Tells whether a period precedes the student's registration month.
        """
        try:
            before = billing_core.is_before_registration(year_month, registration_date)
        except InvalidDateError as e:
            raise _invalid_date(e)
        return {
            "year_month": year_month,
            "registration_date": registration_date,
            "is_before_registration": before,
        }

    async def get_payment_status(
        self,
        student: billing_models.StudentBillingInput,
        billing_service: Annotated[BillingService, Depends(BillingService)],
        reference_date: Annotated[Optional[date], Query(description="As-of date, defaults to today")] = None
    ) -> Any:
        """
        Classifies a student as paid, partial, overdue, not-due or without fee configuration.
        """
        try:
            return billing_service.get_payment_status(student, reference_date)
        except InvalidDateError as e:
            raise _invalid_date(e)

    async def list_overdue_students(
        self,
        students: Annotated[list[billing_models.StudentBillingInput], Body()],
        billing_service: Annotated[BillingService, Depends(BillingService)],
        reference_date: Annotated[Optional[date], Query(description="As-of date, defaults to today")] = None,
        limit: Annotated[Optional[int], Query(ge=1, description="Maximum number of students returned")] = None
    ) -> list[Any]:
        """
        Returns the students owing money for their current period, largest amount first.
        """
        try:
            return billing_service.get_overdue_students(students, reference_date, limit)
        except InvalidDateError as e:
            raise _invalid_date(e)

    async def get_collection_summary(
        self,
        students: Annotated[list[billing_models.StudentBillingInput], Body()],
        billing_service: Annotated[BillingService, Depends(BillingService)],
        reference_date: Annotated[Optional[date], Query(description="As-of date, defaults to today")] = None
    ) -> Any:
        try:
            return billing_service.get_collection_summary(students, reference_date)
        except InvalidDateError as e:
            raise _invalid_date(e)

# Instantiate the class and export its router
billing_api = BillingAPI()
router = billing_api.router
