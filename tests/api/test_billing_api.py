"""
Tests for the Billing API endpoints.
"""
import pytest
from decimal import Decimal
from fastapi.testclient import TestClient

from academy_billing.models.billing import StudentBillingInput

from tests.constants import REG_MID_MONTH, REG_DECEMBER, REG_EARLY_JANUARY


def _as_payload(students: list[StudentBillingInput]) -> list[dict]:
    return [s.model_dump(mode="json") for s in students]


class TestHealthCheck:

    def test_health_check(self, client: TestClient):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"


class TestBillingInfoAPI:
    """Test class for the GET /billing/info endpoint."""

    def test_get_billing_info(self, client: TestClient):
        response = client.get(
            "/billing/info",
            params={"registration_date": REG_DECEMBER, "reference_date": "2026-01-10"}
        )
        print(f"\n--- Response: {response.json()} ---")
        assert response.status_code == 200
        assert response.json() == {
            "current_due_year_month": "2025-12",
            "billing_day": 20,
            "days_since_due": 21,
            "days_until_next_due": 10,
        }

    def test_get_billing_info_defaults_to_today(self, client: TestClient):
        response = client.get("/billing/info", params={"registration_date": REG_MID_MONTH})
        assert response.status_code == 200
        assert response.json()["billing_day"] == 15

    def test_invalid_registration_date_is_rejected(self, client: TestClient):
        response = client.get(
            "/billing/info",
            params={"registration_date": "2023-02-29", "reference_date": "2026-01-10"}
        )
        assert response.status_code == 422
        assert "2023-02-29" in response.json()["detail"]

    def test_invalid_reference_date_is_rejected(self, client: TestClient):
        response = client.get(
            "/billing/info",
            params={"registration_date": REG_MID_MONTH, "reference_date": "yesterday"}
        )
        assert response.status_code == 422


class TestRegistrationMonthAPI:

    def test_get_registration_month(self, client: TestClient):
        response = client.get("/billing/registration-month", params={"registration_date": REG_EARLY_JANUARY})
        assert response.status_code == 200
        assert response.json()["year_month"] == "2025-01"

    @pytest.mark.parametrize("year_month, expected", [("2024-12", True), ("2025-01", False)])
    def test_before_registration(self, client: TestClient, year_month, expected):
        response = client.get(
            "/billing/before-registration",
            params={"year_month": year_month, "registration_date": REG_EARLY_JANUARY}
        )
        assert response.status_code == 200
        assert response.json()["is_before_registration"] is expected

    def test_before_registration_bad_year_month(self, client: TestClient):
        response = client.get(
            "/billing/before-registration",
            params={"year_month": "2024-13", "registration_date": REG_EARLY_JANUARY}
        )
        assert response.status_code == 422


class TestPaymentStatusAPI:
    """Tests for the POST endpoints that classify students."""

    def test_status_for_partial_student(self, client: TestClient, partial_student: StudentBillingInput):
        response = client.post(
            "/billing/status",
            params={"reference_date": "2026-02-15"},
            json=partial_student.model_dump(mode="json"),
        )
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "partial"
        assert data["billing"]["current_due_year_month"] == "2026-02"
        assert Decimal(data["amount_outstanding"]) == Decimal("200.00")
        assert data["escalation_level"] == "reminder"

    def test_status_with_invalid_registration_date(self, client: TestClient, paid_student: StudentBillingInput):
        payload = paid_student.model_dump(mode="json")
        payload["registration_date"] = "2026-02-30"
        response = client.post("/billing/status", params={"reference_date": "2026-02-15"}, json=payload)
        assert response.status_code == 422

    def test_overdue_list(self, client: TestClient, all_students: list[StudentBillingInput]):
        response = client.post(
            "/billing/overdue",
            params={"reference_date": "2026-02-15"},
            json=_as_payload(all_students),
        )
        assert response.status_code == 200
        assert [s["name"] for s in response.json()] == ["Omar", "Sara"]

    def test_overdue_list_limit(self, client: TestClient, all_students: list[StudentBillingInput]):
        response = client.post(
            "/billing/overdue",
            params={"reference_date": "2026-02-15", "limit": 1},
            json=_as_payload(all_students),
        )
        assert response.status_code == 200
        assert len(response.json()) == 1

    def test_collection_summary(self, client: TestClient, all_students: list[StudentBillingInput]):
        response = client.post(
            "/billing/summary",
            params={"reference_date": "2026-02-15"},
            json=_as_payload(all_students),
        )
        assert response.status_code == 200
        data = response.json()
        assert data["collection_rate"] == 32
        assert data["overdue_count"] == 2
