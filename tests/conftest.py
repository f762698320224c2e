"""Pytest fixtures: sample records, a fake document store and a wired-up app."""
import json
from datetime import datetime, timezone

import httpx
import pytest
import pytest_asyncio

from tenderbook.app import app
from tenderbook.gateway.document_store import DocumentStoreGateway
from tenderbook.models.tender import Tender
from tenderbook.models.transaction import Transaction
from tenderbook.services.entity_store import EntityStore, get_store

STORE_URL = "https://docs.example.test/store"


class FakeDocumentStore:
    """In-process stand-in for the remote whole-document endpoint."""

    def __init__(self, document: dict | None = None):
        self.document = document or {"tenders": [], "transactions": []}
        self.saves: list[dict] = []
        self.status_code = 200
        self.save_reply = {"status": "success"}

    def handler(self, request: httpx.Request) -> httpx.Response:
        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"error": "unavailable"})
        if request.method == "GET":
            return httpx.Response(200, json=self.document)
        body = json.loads(request.content)
        self.saves.append(body)
        if self.save_reply.get("status") == "success":
            self.document = body
        return httpx.Response(200, json=self.save_reply)

    @property
    def last_saved(self) -> dict:
        return self.saves[-1]


@pytest.fixture
def sample_tenders() -> list[Tender]:
    """Three tenders; TD-007 leaves a gap in the numbering."""
    return [
        Tender(
            tender_id="TD-001",
            tender_name="Road Work",
            tender_desc="Resurfacing of ring road",
            tender_city="Pune",
            tender_pincode="411001",
            tender_value=500000,
            tender_date=datetime(2025, 8, 15, 8, 0, tzinfo=timezone.utc),
        ),
        Tender(
            tender_id="TD-002",
            tender_name="Bridge Repair",
            tender_city="Mumbai",
            tender_pincode="400001",
        ),
        Tender(
            tender_id="TD-007",
            tender_name="Water Pipeline",
            tender_city="Nagpur",
        ),
    ]


@pytest.fixture
def sample_transactions() -> list[Transaction]:
    """TD-001 nets 100 - 40 with one ignored 'Other' row; TD-002 is a loss."""
    return [
        Transaction(
            txn_id="TD-001-TX001",
            tender_id="TD-001",
            txn_desc="Advance received",
            txn_type="Credit",
            amount=100,
            txn_date=datetime(2025, 8, 16, 4, 30, tzinfo=timezone.utc),
        ),
        Transaction(
            txn_id="TD-001-TX002",
            tender_id="TD-001",
            txn_desc="Asphalt",
            txn_type="Debit",
            vendor_name="Acme Materials",
            amount=40,
        ),
        Transaction(
            txn_id="TD-001-TX003",
            tender_id="TD-001",
            txn_desc="Security deposit",
            txn_type="Other",
            amount=1000,
        ),
        Transaction(
            txn_id="TD-002-TX001",
            tender_id="TD-002",
            txn_desc="Steel girders",
            txn_type="debit",
            vendor_name="Acme Steel",
            amount=250,
        ),
    ]


@pytest.fixture
def remote(sample_tenders, sample_transactions) -> FakeDocumentStore:
    """Fake remote store pre-loaded with the sample data."""
    document = {
        "tenders": [t.model_dump(mode="json", by_alias=True) for t in sample_tenders],
        "transactions": [
            x.model_dump(mode="json", by_alias=True) for x in sample_transactions
        ],
    }
    return FakeDocumentStore(document)


@pytest_asyncio.fixture
async def http_client(remote):
    """httpx client whose requests are answered by the fake store."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(remote.handler)) as client:
        yield client


@pytest.fixture
def gateway(http_client) -> DocumentStoreGateway:
    return DocumentStoreGateway(STORE_URL, client=http_client)


@pytest_asyncio.fixture
async def store(gateway) -> EntityStore:
    """Entity store loaded from the fake remote document."""
    entity_store = EntityStore(gateway)
    await entity_store.load()
    return entity_store


@pytest_asyncio.fixture
async def api_client(store):
    """Client for the ASGI app with the store dependency overridden."""
    app.dependency_overrides[get_store] = lambda: store
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
