'''
Pytest configuration for the billing application.

This file sets up fixtures for:
1. Forcing the application into TEST_MODE before any app code is imported.
2. Providing a FastAPI TestClient for endpoint testing.
3. Providing the BillingService and a few ready-made student records.
'''
import os

# Force test mode before the settings singleton is created
os.environ["TEST_MODE"] = "True"

import pytest
from decimal import Decimal

from fastapi.testclient import TestClient

from academy_billing.main import app
from academy_billing.common.config import settings
from academy_billing.services.billing_service import BillingService
from academy_billing.models.billing import StudentBillingInput, CoverageInput
from academy_billing.models.enums import CoverageStatus, FeeType

from tests.constants import (
    STUDENT_AHMED_ID,
    STUDENT_SARA_ID,
    STUDENT_OMAR_ID,
    STUDENT_LAYLA_ID,
    STUDENT_YUSUF_ID,
    REG_MID_MONTH,
)


@pytest.fixture(scope="function")
def client() -> TestClient:
    """
    Runs the app's lifespan and yields a TestClient.
    """
    assert settings.TEST_MODE is True, \
        "TEST_MODE was not set to True! Check your .env file or environment."

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def billing_service() -> BillingService:
    return BillingService()


# --- Student Fixtures ---
# All registered on the 15th, so as of 2026-02-15 their due period is "2026-02".

@pytest.fixture(scope="function")
def paid_student() -> StudentBillingInput:
    return StudentBillingInput(
        student_id=STUDENT_AHMED_ID,
        name="Ahmed",
        registration_date=REG_MID_MONTH,
        monthly_fee=Decimal("300.00"),
        coverages=[
            CoverageInput(year_month="2026-01", status=CoverageStatus.PAID, amount_paid=Decimal("300.00")),
            CoverageInput(year_month="2026-02", status=CoverageStatus.PAID, amount_paid=Decimal("300.00")),
        ],
    )

@pytest.fixture(scope="function")
def partial_student() -> StudentBillingInput:
    return StudentBillingInput(
        student_id=STUDENT_SARA_ID,
        name="Sara",
        registration_date=REG_MID_MONTH,
        monthly_fee=Decimal("300.00"),
        coverages=[
            CoverageInput(year_month="2026-02", status=CoverageStatus.PARTIAL, amount_paid=Decimal("100.00")),
        ],
    )

@pytest.fixture(scope="function")
def unpaid_student() -> StudentBillingInput:
    """Only a bus coverage for the current period, which does not count as monthly."""
    return StudentBillingInput(
        student_id=STUDENT_OMAR_ID,
        name="Omar",
        registration_date=REG_MID_MONTH,
        monthly_fee=Decimal("250.00"),
        coverages=[
            CoverageInput(year_month="2026-02", fee_type=FeeType.BUS, status=CoverageStatus.PAID, amount_paid=Decimal("50.00")),
        ],
    )

@pytest.fixture(scope="function")
def unconfigured_student() -> StudentBillingInput:
    return StudentBillingInput(
        student_id=STUDENT_LAYLA_ID,
        name="Layla",
        registration_date=REG_MID_MONTH,
    )

@pytest.fixture(scope="function")
def inactive_student() -> StudentBillingInput:
    return StudentBillingInput(
        student_id=STUDENT_YUSUF_ID,
        name="Yusuf",
        registration_date=REG_MID_MONTH,
        monthly_fee=Decimal("400.00"),
        is_active=False,
    )

@pytest.fixture(scope="function")
def all_students(
    paid_student: StudentBillingInput,
    partial_student: StudentBillingInput,
    unpaid_student: StudentBillingInput,
    unconfigured_student: StudentBillingInput,
    inactive_student: StudentBillingInput,
) -> list[StudentBillingInput]:
    return [paid_student, partial_student, unpaid_student, unconfigured_student, inactive_student]
