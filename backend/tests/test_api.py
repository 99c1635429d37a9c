"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from backend.main import app

client = TestClient(app)


def txn(amount: float, txn_type: str = "expense", category: str = "other", when: str = "2024-03-05T10:00:00") -> dict:
    """Helper to build a transaction payload."""
    return {"amount": amount, "type": txn_type, "category": category, "date": when, "note": "test"}


class TestHealth:
    """Test service endpoints."""

    def test_health_check(self):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_vocabulary(self):
        data = client.get("/vocabulary").json()

        assert data["categories"]["food"] == "طعام ومشروبات"
        assert data["payment_methods"]["wallet"] == "محفظة إلكترونية"
        assert set(data["frequencies"]) == {"monthly", "quarterly", "yearly"}


class TestParseEndpoint:
    """Test POST /parse."""

    def test_parses_text(self):
        response = client.post("/parse", json={"text": "دفعت 250.75 في مطعم بالفيزا"})

        assert response.status_code == 200
        data = response.json()
        assert data["amount"] == 250.75
        assert data["type"] == "expense"
        assert data["category"] == "food"
        assert data["payment_method"] == "card"
        assert data["note"] == "دفعت 250.75 في مطعم بالفيزا"

    def test_no_amount_is_422(self):
        response = client.post("/parse", json={"text": "اكل في المطعم"})

        assert response.status_code == 422
        assert "amount" in response.json()["detail"]

    def test_overflowing_amount_is_422(self):
        response = client.post("/parse", json={"text": "اكل " + "9" * 400})

        assert response.status_code == 422


class TestTransactionEndpoints:
    """Test draft to transaction conversion and edits."""

    def test_create_assigns_id_and_date(self):
        draft = {"amount": 60, "category": "transport", "note": "تاكسي 60"}
        response = client.post("/transactions", json={"draft": draft, "date": "2024-04-01T08:00:00"})

        assert response.status_code == 200
        data = response.json()
        assert data["id"]
        assert data["date"].startswith("2024-04-01T08:00:00")
        assert data["category"] == "transport"
        assert data["payment_method"] == "cash"

    def test_edit(self):
        original = {**txn(100, category="other"), "id": "abc"}
        update = {"category": "health", "note": "دواء"}

        data = client.post("/transactions/edit", json={"transaction": original, "update": update}).json()

        assert data["id"] == "abc"
        assert data["category"] == "health"
        assert data["note"] == "دواء"
        assert data["amount"] == 100

    def test_edit_rejects_non_positive_amount(self):
        original = {**txn(100), "id": "abc"}
        response = client.post("/transactions/edit", json={"transaction": original, "update": {"amount": 0}})

        assert response.status_code == 422


class TestAdviceEndpoints:
    """Test POST /advice and /summary."""

    def test_advice_excellent(self):
        history = [txn(1000, "income", "salary"), txn(300, "expense", "food")]
        response = client.post("/advice", json={"history": history, "query": "ملخص"})

        assert response.status_code == 200
        answer = response.json()["answer"]
        assert "700" in answer
        assert "70.0" in answer

    def test_advice_empty_history(self):
        answer = client.post("/advice", json={"query": "ملخص"}).json()["answer"]
        assert "مستقر" in answer

    def test_summary(self):
        history = [txn(1000, "income", "salary"), txn(250, "expense", "food")]
        data = client.post("/summary", json={"transactions": history}).json()

        assert data == {"total_income": 1000, "total_expense": 250, "balance": 750, "savings_rate": 75.0}

    def test_rejects_negative_amount(self):
        response = client.post("/advice", json={"history": [txn(-5)], "query": "ملخص"})
        assert response.status_code == 422


class TestReportEndpoints:
    """Test report and dashboard endpoints."""

    def test_monthly_report(self):
        transactions = [
            txn(2000, "income", "salary", "2024-03-01T09:00:00"),
            txn(500, "expense", "food", "2024-03-02T09:00:00"),
            txn(400, "expense", "food", "2024-02-02T09:00:00"),
        ]
        response = client.post("/reports/monthly", json={"transactions": transactions, "year": 2024, "month": 3})

        assert response.status_code == 200
        data = response.json()
        assert data["current"] == {"income": 2000, "expense": 500, "net": 1500}
        assert data["expense_change_percent"] == 25.0
        assert data["income_change_percent"] == 100.0
        assert data["highest_category"]["category"] == "food"
        assert len(data["daily"]) == 31

    def test_monthly_report_bad_month(self):
        response = client.post("/reports/monthly", json={"transactions": [], "year": 2024, "month": 13})

        assert response.status_code == 400
        assert "Month" in response.json()["detail"]

    def test_dashboard(self):
        payload = {
            "transactions": [txn(3000, "income", "salary", "2024-05-01T09:00:00"), txn(200, "expense", "food")],
            "recurring": [
                {"title": "نت", "amount": 300, "frequency": "quarterly", "next_due_date": "2024-05-20"},
            ],
            "goals": [{"name": "سفر", "target_amount": 5000, "current_amount": 1200, "deadline": "2024-12-31"}],
            "today": "2024-05-10",
        }
        data = client.post("/dashboard", json=payload).json()

        assert data["balance"] == 2800
        assert data["actual_month_income"] == 3000
        assert data["pending_month_expense"] == 300
        assert data["projected_expense"] == 300
        assert data["monthly_fixed_burden"] == 100
        assert data["total_savings"] == 1200
        assert data["category_breakdown"][0]["label"] == "طعام ومشروبات"
        assert [m["month"] for m in data["monthly_history"]] == ["2024-03", "2024-05"]
        assert data["recent_transactions"][0]["amount"] == 3000


class TestRecurringEndpoints:
    """Test recurring item endpoints."""

    @pytest.fixture
    def item(self) -> dict:
        return {
            "id": "rent",
            "title": "إيجار",
            "amount": 2500,
            "type": "expense",
            "category": "utilities",
            "frequency": "monthly",
            "next_due_date": "2024-01-31",
        }

    def test_status(self, item):
        data = client.post("/recurring/status", json={"items": [item], "today": "2024-01-01"}).json()

        status = data["items"][0]
        assert status["due"] is False
        assert status["days_remaining"] == 30
        assert status["months_left"] == 1
        assert status["days_left"] == 0
        assert status["frequency_label"] == "شهري"

    def test_process(self, item):
        response = client.post("/recurring/process", json={"item": item, "now": "2024-01-31T12:00:00"})

        assert response.status_code == 200
        data = response.json()
        assert data["transaction"]["amount"] == 2500
        assert data["transaction"]["note"] == "دفع تلقائي: إيجار"
        assert data["item"]["next_due_date"] == "2024-02-29"

    def test_process_inactive(self, item):
        item["active"] = False
        response = client.post("/recurring/process", json={"item": item})

        assert response.status_code == 400

    def test_process_past_last_year(self, item):
        item["next_due_date"] = "9999-12-15"
        response = client.post("/recurring/process", json={"item": item, "now": "9999-12-15T12:00:00"})

        assert response.status_code == 400
        assert "9999-12-15" in response.json()["detail"]


class TestGoalEndpoints:
    """Test goal endpoints."""

    @pytest.fixture
    def goal(self) -> dict:
        return {"id": "car", "name": "عربية", "target_amount": 1000, "current_amount": 250, "deadline": "2024-06-30"}

    def test_status(self, goal):
        data = client.post("/goals/status", json={"goals": [goal], "today": "2024-06-20"}).json()

        status = data["goals"][0]
        assert status["progress_percent"] == 25.0
        assert status["remaining_amount"] == 750
        assert status["days_left"] == 10
        assert status["expired"] is False

    def test_add_funds(self, goal):
        data = client.post("/goals/add-funds", json={"goal": goal, "amount": 100}).json()

        assert data["current_amount"] == 350
        assert data["id"] == "car"

    def test_add_funds_rejects_zero(self, goal):
        response = client.post("/goals/add-funds", json={"goal": goal, "amount": 0})

        assert response.status_code == 400
