"""Tests for audit log, loan, payment and credit score endpoints."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from lending_identity.models.loan import Loan, Payment
from lending_identity.models.user import User
from lending_identity.services.auth import TokenIssuer
from lending_identity.services.credit_score import determine_category


@pytest.fixture
def other_headers(session):
    other = User(name="Other", email="other@example.com", is_email_verified=True)
    session.add(other)
    session.commit()
    session.refresh(other)
    return {"Authorization": f"Bearer {TokenIssuer().issue(other.id).access_token}"}


# ---------------------------------------------------------------------------
# 1. Audit logs
# ---------------------------------------------------------------------------

def test_audit_log_crud(client, auth_headers):
    resp = client.post("/audit-logs", json={"action": "LOGIN", "details": "wallet"}, headers=auth_headers)
    assert resp.status_code == 201
    log_id = resp.json()["id"]

    resp = client.put(f"/audit-logs/{log_id}", json={"details": "password"}, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["action"] == "LOGIN"
    assert resp.json()["details"] == "password"

    assert client.delete(f"/audit-logs/{log_id}", headers=auth_headers).status_code == 204
    assert client.get(f"/audit-logs/{log_id}", headers=auth_headers).status_code == 404


def test_audit_log_update_rejects_null_action(client, auth_headers):
    log_id = client.post("/audit-logs", json={"action": "LOGIN"}, headers=auth_headers).json()["id"]

    resp = client.put(f"/audit-logs/{log_id}", json={"action": None}, headers=auth_headers)
    assert resp.status_code == 422

    resp = client.get(f"/audit-logs/{log_id}", headers=auth_headers)
    assert resp.json()["action"] == "LOGIN"

    # details may still be cleared
    resp = client.put(f"/audit-logs/{log_id}", json={"details": None}, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["details"] is None


def test_audit_log_pagination_newest_first(client, auth_headers):
    for i in range(5):
        client.post("/audit-logs", json={"action": f"A{i}"}, headers=auth_headers)

    page1 = client.get("/audit-logs", params={"page": 1, "limit": 2}, headers=auth_headers).json()
    page3 = client.get("/audit-logs", params={"page": 3, "limit": 2}, headers=auth_headers).json()
    assert [log["action"] for log in page1] == ["A4", "A3"]
    assert [log["action"] for log in page3] == ["A0"]

    clamped = client.get("/audit-logs", params={"page": 0, "limit": 0}, headers=auth_headers).json()
    assert [log["action"] for log in clamped] == ["A4"]


def test_audit_logs_are_private(client, auth_headers, other_headers):
    log_id = client.post("/audit-logs", json={"action": "X"}, headers=auth_headers).json()["id"]

    assert client.get(f"/audit-logs/{log_id}", headers=other_headers).status_code == 404
    assert client.get("/audit-logs", headers=other_headers).json() == []


# ---------------------------------------------------------------------------
# 2. Loans and payments
# ---------------------------------------------------------------------------

def test_loan_lifecycle(client, auth_headers):
    resp = client.post("/loans", json={"amount": "1500.00"}, headers=auth_headers)
    assert resp.status_code == 201
    loan = resp.json()
    assert loan["status"] == "active"
    assert loan["end_date"] is None
    assert loan["payments"] == []

    resp = client.put(f"/loans/{loan['id']}/status", json={"status": "completed"}, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["status"] == "completed"
    assert resp.json()["end_date"] is not None

    resp = client.put(f"/loans/{loan['id']}/status", json={"status": "paid"}, headers=auth_headers)
    assert resp.status_code == 422


def test_loan_list_and_payments(client, session, wallet_user, auth_headers, other_headers):
    now = datetime.now(timezone.utc)
    loan = Loan(user_id=wallet_user.id, amount=Decimal("900.00"))
    session.add(loan)
    session.commit()
    session.refresh(loan)
    session.add(Payment(loan_id=loan.id, amount=Decimal("300.00"), status="on_time",
                        due_date=now - timedelta(days=60), payment_date=now - timedelta(days=61)))
    session.add(Payment(loan_id=loan.id, amount=Decimal("300.00"), status="late",
                        due_date=now - timedelta(days=30), payment_date=now - timedelta(days=25)))
    session.add(Payment(loan_id=loan.id, amount=Decimal("300.00"), status="pending",
                        due_date=now + timedelta(days=5)))
    session.commit()

    loans = client.get("/loans", headers=auth_headers).json()
    assert len(loans) == 1
    assert len(loans[0]["payments"]) == 3

    payments = client.get("/payments", headers=auth_headers).json()
    assert [p["status"] for p in payments] == ["late", "on_time", "pending"]

    assert client.get("/payments", headers=other_headers).json() == []
    assert client.get(f"/loans/{loan.id}", headers=other_headers).status_code == 404


def test_records_require_auth(client):
    assert client.get("/loans").status_code in (401, 403)
    assert client.get("/payments").status_code in (401, 403)
    assert client.get("/audit-logs").status_code in (401, 403)


# ---------------------------------------------------------------------------
# 3. Credit score
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "score, category",
    [(300, "Poor"), (579, "Poor"), (580, "Fair"), (669, "Fair"), (670, "Good"),
     (739, "Good"), (740, "Very Good"), (799, "Very Good"), (800, "Excellent"), (850, "Excellent")],
)
def test_determine_category_bands(score, category):
    assert determine_category(score) == category


def test_credit_score_upsert(client, auth_headers):
    assert client.get("/credit-score", headers=auth_headers).status_code == 404

    resp = client.put("/credit-score", json={"score": 650}, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["category"] == "Fair"

    resp = client.put("/credit-score", json={"score": 810}, headers=auth_headers)
    assert resp.json()["category"] == "Excellent"

    resp = client.get("/credit-score", headers=auth_headers)
    assert resp.json()["score"] == 810


def test_credit_score_out_of_range(client, auth_headers):
    assert client.put("/credit-score", json={"score": 900}, headers=auth_headers).status_code == 422
