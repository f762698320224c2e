"""Tests for the HTTP endpoints."""
import pytest


@pytest.mark.asyncio
class TestTenderEndpoints:
    """Tests for /tenders."""

    async def test_list_and_search(self, api_client):
        """Listing returns every tender; q narrows it."""
        response = await api_client.get("/tenders")
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 3
        assert data["items"][0]["tenderId"] == "TD-001"

        response = await api_client.get("/tenders", params={"q": "mumbai"})
        assert [t["tenderId"] for t in response.json()["items"]] == ["TD-002"]

    async def test_next_id(self, api_client):
        """The next tender ID follows the highest number."""
        response = await api_client.get("/tenders/next-id")
        assert response.json() == {"nextId": "TD-008"}

    async def test_get_unknown_tender(self, api_client):
        """An unknown tender is a 404."""
        response = await api_client.get("/tenders/TD-404")
        assert response.status_code == 404

    async def test_create(self, api_client, remote):
        """Creating a tender converts the local date and saves."""
        response = await api_client.post(
            "/tenders",
            json={"tenderName": "Flyover", "tenderCity": "Pune", "tenderDateLocal": "2025-08-15T13:30"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["saved"] is True
        assert data["tender"]["tenderId"] == "TD-008"
        assert data["tender"]["tenderDate"] == "2025-08-15T08:00:00Z"
        assert remote.last_saved["tenders"][-1]["tenderName"] == "Flyover"

    async def test_validation_error_is_422(self, api_client):
        """Only the first failing rule is reported."""
        response = await api_client.post("/tenders", json={"tenderPincode": "12"})
        assert response.status_code == 422
        assert response.json()["detail"] == "Tender Name is required"

    async def test_blank_form_values_are_accepted(self, api_client, remote):
        """Blank form fields and a numeric pincode are accepted."""
        response = await api_client.post(
            "/tenders",
            json={"tenderName": "Flyover", "tenderValue": "", "tenderDate": "", "tenderPincode": 411002},
        )
        assert response.status_code == 201
        tender = response.json()["tender"]
        assert tender["tenderValue"] is None
        assert tender["tenderDate"] is None
        assert tender["tenderPincode"] == "411002"

    async def test_non_finite_value_is_422(self, api_client, remote):
        """A non-finite tender value is rejected before any save."""
        response = await api_client.post("/tenders", json={"tenderName": "x", "tenderValue": "Infinity"})
        assert response.status_code == 422
        assert remote.saves == []

    async def test_duplicate_is_409(self, api_client):
        """Creating an existing tender ID is a conflict."""
        response = await api_client.post("/tenders", json={"tenderId": "TD-001", "tenderName": "x"})
        assert response.status_code == 409

    async def test_rename_cascades(self, api_client):
        """Renaming a tender moves its transactions with it."""
        response = await api_client.put(
            "/tenders/TD-001", json={"tenderId": "TD-101", "tenderName": "Road Work"}
        )
        assert response.status_code == 200
        assert response.json()["affectedTransactions"] == 3

        response = await api_client.get("/transactions/manage", params={"tender_id": "TD-101"})
        assert response.json()["total"] == 3

    async def test_delete_requires_confirmation(self, api_client, remote):
        """Delete without confirm=true changes nothing."""
        response = await api_client.delete("/tenders/TD-001")
        assert response.status_code == 400
        assert remote.saves == []

        response = await api_client.get("/tenders/TD-001")
        assert response.status_code == 200

    async def test_delete_cascades(self, api_client):
        """Deleting a tender removes its transactions."""
        response = await api_client.delete("/tenders/TD-001", params={"confirm": "true"})
        assert response.status_code == 200
        assert response.json()["affectedTransactions"] == 3

        response = await api_client.get("/transactions")
        assert [x["txnId"] for x in response.json()["items"]] == ["TD-002-TX001"]

    async def test_failed_save_is_reported(self, api_client, remote):
        """A rejected save still returns the created tender."""
        remote.save_reply = {"status": "error", "message": "Drive is read-only"}
        response = await api_client.post("/tenders", json={"tenderName": "Flyover"})
        assert response.status_code == 201
        data = response.json()
        assert data["saved"] is False
        assert "Drive is read-only" in data["message"]


@pytest.mark.asyncio
class TestTransactionEndpoints:
    """Tests for /transactions."""

    async def test_manage_view_pagination(self, api_client):
        """The manage view echoes the tender name and page size."""
        response = await api_client.get(
            "/transactions/manage", params={"tender_id": "TD-001", "page": 1}
        )
        data = response.json()
        assert data["tenderName"] == "Road Work"
        assert data["pageSize"] == 5
        assert data["pages"] == 1
        assert len(data["items"]) == 3

    async def test_manage_view_out_of_range_page(self, api_client):
        """A page past the end falls back to page 1."""
        response = await api_client.get("/transactions/manage", params={"page": 9})
        data = response.json()
        assert data["page"] == 1
        assert data["tenderId"] == "all"

    async def test_next_id(self, api_client):
        """The next transaction ID is scoped to the tender."""
        response = await api_client.get("/transactions/next-id", params={"tender_id": "TD-001"})
        assert response.json()["nextId"] == "TD-001-TX004"

        response = await api_client.get("/transactions/next-id")
        assert response.json()["nextId"] == ""

    async def test_create_and_fetch(self, api_client):
        """A created transaction can be fetched by ID."""
        response = await api_client.post(
            "/transactions",
            json={"txnId": "TD-002-TX002", "tenderId": "TD-002", "txnType": "Credit", "amount": 300},
        )
        assert response.status_code == 201
        assert response.json()["transaction"]["amount"] == 300

        response = await api_client.get("/transactions/TD-002-TX002")
        assert response.json()["tenderId"] == "TD-002"

    async def test_non_finite_amount_is_422(self, api_client, remote):
        """A NaN amount is rejected and the summary is unchanged."""
        response = await api_client.post(
            "/transactions",
            json={"txnId": "TD-001-TX004", "tenderId": "TD-001", "txnType": "Credit", "amount": "NaN"},
        )
        assert response.status_code == 422
        assert remote.saves == []

        response = await api_client.get("/summary", params={"tender_id": "TD-001"})
        assert response.json()["items"][0]["totalCredit"] == 100

    async def test_missing_tender_is_422(self, api_client):
        """A transaction needs a linked tender."""
        response = await api_client.post("/transactions", json={"txnId": "X-TX001"})
        assert response.status_code == 422
        assert response.json()["detail"] == "Linked Tender ID is required"

    async def test_edit(self, api_client):
        """Editing keeps the transaction ID from the path."""
        response = await api_client.put(
            "/transactions/TD-001-TX001",
            json={"tenderId": "TD-001", "txnType": "Credit", "amount": 500},
        )
        assert response.status_code == 200
        assert response.json()["transaction"]["txnId"] == "TD-001-TX001"

    async def test_delete(self, api_client):
        """Transaction delete needs confirmation."""
        response = await api_client.delete("/transactions/TD-001-TX001")
        assert response.status_code == 400

        response = await api_client.delete("/transactions/TD-001-TX001", params={"confirm": "true"})
        assert response.status_code == 200

        response = await api_client.get("/transactions/TD-001-TX001")
        assert response.status_code == 404


@pytest.mark.asyncio
class TestSummaryAndReports:
    """Tests for /summary and /reports."""

    async def test_summary(self, api_client):
        """Summary rows follow tender order with grand totals."""
        response = await api_client.get("/summary")
        data = response.json()
        assert [r["tenderId"] for r in data["items"]] == ["TD-001", "TD-002", "TD-007"]
        first = data["items"][0]
        assert first["totalCredit"] == 100
        assert first["totalDebit"] == 40
        assert first["netAmount"] == 60
        assert first["status"] == "Profit"
        assert data["totals"]["netAmount"] == -190
        assert data["pageSize"] == 10

    async def test_summary_reflects_mutations(self, api_client):
        """The summary is recomputed after a new transaction."""
        await api_client.post(
            "/transactions",
            json={"txnId": "TD-007-TX001", "tenderId": "TD-007", "txnType": "Debit", "amount": 5},
        )
        response = await api_client.get("/summary", params={"tender_id": "TD-007"})
        row = response.json()["items"][0]
        assert row["netAmount"] == -5
        assert row["status"] == "Loss"

    async def test_report(self, api_client):
        """The report groups only tenders with transactions."""
        response = await api_client.get("/reports/transactions")
        data = response.json()
        assert [g["tender"]["tenderId"] for g in data["groups"]] == ["TD-001", "TD-002"]
        assert data["groups"][0]["dateDisplay"] == "2025-08-15 13:30"


@pytest.mark.asyncio
class TestAdminEndpoints:
    """Tests for /health and /store/reload."""

    async def test_health(self, api_client):
        """Health check responds."""
        response = await api_client.get("/health")
        assert response.json() == {"status": "healthy"}

    async def test_reload_replaces_memory(self, api_client, remote):
        """Reload replaces the in-memory collections."""
        remote.document = {"tenders": [{"tenderId": "TD-900", "tenderName": "Only"}]}
        response = await api_client.post("/store/reload")
        assert response.json()["tenders"] == 1

        response = await api_client.get("/tenders")
        assert [t["tenderId"] for t in response.json()["items"]] == ["TD-900"]
