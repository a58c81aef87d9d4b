"""
Tests for ledger API endpoints.

These test the HTTP layer: status codes, response format,
and error mapping. Business logic is tested in tests/services.
"""

import uuid

from sqlalchemy import func, select

from household_ledger.models.audit_log import AuditLog
from household_ledger.models.ledger_entry import LedgerEntry
from household_ledger.models.transaction import Transaction


def headers_for(household, user_id=None, request_id=None):
    h = {
        "X-User-Id": str(user_id or household.owner_id),
        "X-Household-Id": str(household.household_id),
    }
    if request_id:
        h["X-Request-Id"] = request_id
    return h


def transaction_body(household, debit=800000, credit=800000, **overrides):
    body = {
        "household_id": str(household.household_id),
        "occurred_at": "2026-10-01T12:00:00Z",
        "description": "Monthly contribution",
        "entries": [
            {
                "account_id": str(household.checking_id),
                "direction": "debit",
                "amount_minor": debit,
                "currency": "MXN",
            },
            {
                "account_id": str(household.shared_id),
                "direction": "credit",
                "amount_minor": credit,
                "currency": "MXN",
                "category": "household",
            },
        ],
    }
    body.update(overrides)
    return body


def count(db_session, model):
    return db_session.execute(
        select(func.count()).select_from(model)
    ).scalar_one()


class TestHouseholds:

    def test_create_household_returns_201(self, client):
        response = client.post("/households", json={
            "name": "Casa",
            "owner_user_id": str(uuid.uuid4()),
        })
        assert response.status_code == 201
        assert response.json()["name"] == "Casa"

    def test_add_member(self, client, household):
        user_id = uuid.uuid4()
        response = client.post(
            f"/households/{household.household_id}/members",
            json={"user_id": str(user_id)},
        )
        assert response.status_code == 201
        assert response.json()["role"] == "member"

    def test_duplicate_member_returns_400(self, client, household):
        response = client.post(
            f"/households/{household.household_id}/members",
            json={"user_id": str(household.partner_id)},
        )
        assert response.status_code == 400


class TestAccess:

    def test_missing_identity_headers_returns_422(self, client, household):
        response = client.get("/ledger/accounts")
        assert response.status_code == 422

    def test_non_member_returns_403(self, client, household):
        response = client.get(
            "/ledger/accounts",
            headers=headers_for(household, user_id=uuid.uuid4()),
        )
        assert response.status_code == 403


class TestAccounts:

    def test_list_accounts(self, client, household):
        response = client.get("/ledger/accounts", headers=headers_for(household))
        assert response.status_code == 200
        names = [a["name"] for a in response.json()["data"]]
        assert names == ["Checking", "Savings", "Shared"]

    def test_list_accounts_by_owner(self, client, household):
        response = client.get(
            "/ledger/accounts",
            params={"owner_id": str(household.owner_id)},
            headers=headers_for(household),
        )
        data = response.json()["data"]
        assert [a["id"] for a in data] == [str(household.checking_id)]

    def test_create_account(self, client, household):
        response = client.post(
            "/ledger/accounts",
            headers=headers_for(household),
            json={
                "household_id": str(household.household_id),
                "name": "Credit card",
                "type": "credit",
                "currency": "MXN",
            },
        )
        assert response.status_code == 201
        assert response.json()["is_personal"] is False

    def test_create_account_in_other_household_returns_400(
        self, client, household
    ):
        response = client.post(
            "/ledger/accounts",
            headers=headers_for(household),
            json={
                "household_id": str(uuid.uuid4()),
                "name": "Elsewhere",
                "type": "checking",
            },
        )
        assert response.status_code == 400


class TestCreateTransaction:

    def test_balanced_transaction_returns_201(
        self, client, household, db_session
    ):
        response = client.post(
            "/ledger/transactions",
            headers=headers_for(household),
            json=transaction_body(household),
        )
        assert response.status_code == 201
        txn_id = uuid.UUID(response.json()["data"]["id"])

        assert count(db_session, Transaction) == 1
        assert count(db_session, LedgerEntry) == 2
        assert db_session.get(Transaction, txn_id).created_by == household.owner_id

    def test_unbalanced_returns_validation_error(
        self, client, household, db_session
    ):
        response = client.post(
            "/ledger/transactions",
            headers=headers_for(household, request_id="req-42"),
            json=transaction_body(household, debit=500, credit=300),
        )
        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "validation_error"
        assert "must balance" in data["message"]
        assert data["requestId"] == "req-42"
        assert count(db_session, Transaction) == 0

    def test_non_positive_amount_returns_validation_error(
        self, client, household
    ):
        response = client.post(
            "/ledger/transactions",
            headers=headers_for(household),
            json=transaction_body(household, debit=0, credit=0),
        )
        assert response.status_code == 400
        assert "positive" in response.json()["message"]

    def test_mixed_currency_returns_validation_error(self, client, household):
        body = transaction_body(household)
        body["entries"][1]["currency"] = "USD"
        response = client.post(
            "/ledger/transactions", headers=headers_for(household), json=body,
        )
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_single_entry_rejected_by_schema(self, client, household):
        body = transaction_body(household)
        body["entries"] = body["entries"][:1]
        response = client.post(
            "/ledger/transactions", headers=headers_for(household), json=body,
        )
        assert response.status_code == 422

    def test_lowercase_currency_rejected_by_schema(self, client, household):
        body = transaction_body(household)
        body["entries"][0]["currency"] = "mxn"
        response = client.post(
            "/ledger/transactions", headers=headers_for(household), json=body,
        )
        assert response.status_code == 422

    def test_household_mismatch_returns_400(self, client, household, db_session):
        response = client.post(
            "/ledger/transactions",
            headers=headers_for(household),
            json=transaction_body(household, household_id=str(uuid.uuid4())),
        )
        assert response.status_code == 400
        assert response.json()["error"] == "household_mismatch"
        assert count(db_session, Transaction) == 0

    def test_writes_disabled_returns_503_and_audits(
        self, client, household, write_gate, db_session
    ):
        write_gate.enabled = False

        response = client.post(
            "/ledger/transactions",
            headers=headers_for(household, request_id="req-frozen"),
            json=transaction_body(household),
        )

        assert response.status_code == 503
        data = response.json()
        assert data["error"] == "ledger_write_disabled"
        assert data["requestId"] == "req-frozen"

        assert count(db_session, Transaction) == 0
        assert count(db_session, LedgerEntry) == 0
        audit = db_session.execute(select(AuditLog)).scalar_one()
        assert audit.payload["request_id"] == "req-frozen"
        assert audit.payload["household_id"] == str(household.household_id)

    def test_repeated_external_ref_returns_same_id(self, client, household):
        body = transaction_body(household, external_ref="import-77")
        first = client.post(
            "/ledger/transactions", headers=headers_for(household), json=body,
        )
        second = client.post(
            "/ledger/transactions", headers=headers_for(household), json=body,
        )
        assert first.json()["data"]["id"] == second.json()["data"]["id"]

    def test_reused_external_ref_with_other_amounts_returns_400(
        self, client, household, db_session
    ):
        first = client.post(
            "/ledger/transactions",
            headers=headers_for(household),
            json=transaction_body(household, external_ref="import-78"),
        )
        assert first.status_code == 201

        response = client.post(
            "/ledger/transactions",
            headers=headers_for(household),
            json=transaction_body(
                household, debit=5, credit=5, external_ref="import-78"
            ),
        )
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
        assert "import-78" in response.json()["message"]
        assert count(db_session, Transaction) == 1


class TestReadTransaction:

    def test_get_transaction(self, client, household):
        created = client.post(
            "/ledger/transactions",
            headers=headers_for(household),
            json=transaction_body(household),
        )
        txn_id = created.json()["data"]["id"]

        response = client.get(
            f"/ledger/transactions/{txn_id}", headers=headers_for(household),
        )
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "posted"
        assert [e["direction"] for e in data["entries"]] == ["debit", "credit"]
        assert data["entries"][1]["category"] == "household"

    def test_unknown_transaction_returns_404(self, client, household):
        response = client.get(
            f"/ledger/transactions/{uuid.uuid4()}",
            headers=headers_for(household),
        )
        assert response.status_code == 404


class TestBalancesAndSummary:

    def test_balances_after_transaction(self, client, household):
        client.post(
            "/ledger/transactions",
            headers=headers_for(household),
            json=transaction_body(household),
        )

        response = client.get("/ledger/balances", headers=headers_for(household))
        assert response.status_code == 200
        by_account = {
            row["account_id"]: row["balance_minor"]
            for row in response.json()["data"]
        }
        assert by_account[str(household.checking_id)] == 800000
        assert by_account[str(household.shared_id)] == -800000

    def test_summary_net_worth(self, client, household):
        client.post(
            "/ledger/transactions",
            headers=headers_for(household),
            json=transaction_body(household, debit=1234550, credit=1234550),
        )

        response = client.get("/ledger/summary", headers=headers_for(household))
        assert response.status_code == 200
        data = response.json()
        assert data["net_worth"] == 0
        assert data["personal_net_worth"] == 12346
        assert data["account_count"] == 3

    def test_partner_sees_own_personal_net_worth(self, client, household):
        response = client.get(
            "/ledger/summary",
            headers=headers_for(household, user_id=household.partner_id),
        )
        assert response.json()["personal_net_worth"] == 0
