"""Remote document store gateway.

The store keeps the whole dataset as one JSON document:

- ``GET <url>``  -> ``{"tenders": [...], "transactions": [...]}`` or ``{"error": "..."}``
- ``POST <url>`` with the same document -> ``{"status": "success"}`` or
  ``{"status": "...", "message": "..."}``

Public methods never raise; failures come back as ``LoadResult.error`` or
``SaveResult.ok == False`` so the caller has to decide what to do with them.
"""
import logging
from dataclasses import dataclass, field
from typing import Optional

import httpx
import pydantic

from tenderbook.exceptions.store_exception import PersistenceError
from tenderbook.models.state import StateDocument
from tenderbook.models.tender import Tender
from tenderbook.models.transaction import Transaction
from tenderbook.settings import settings

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """Outcome of a whole-state load."""

    tenders: list[Tender] = field(default_factory=list)
    transactions: list[Transaction] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class SaveResult:
    """Outcome of a whole-state save."""

    ok: bool
    message: str = ""


class DocumentStoreGateway:
    """Whole-document load/save against the remote store."""

    def __init__(
        self,
        url: str,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the gateway.

        Args:
            url: Endpoint of the document store
            timeout: Request timeout in seconds
            client: Optional preconfigured client (tests pass a MockTransport)
        """
        self.url = url
        self.timeout = timeout
        self._client = client

    def _new_client(self) -> httpx.AsyncClient:
        # Script hosts answer POST with a redirect to the result
        return httpx.AsyncClient(timeout=self.timeout, follow_redirects=True)

    async def _send(
        self, client: httpx.AsyncClient, method: str, payload: Optional[dict]
    ) -> httpx.Response:
        try:
            request = client.build_request(method, self.url, json=payload)
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"Document could not be encoded: {e}") from e
        return await client.send(request)

    async def _request(self, method: str, payload: Optional[dict] = None) -> dict:
        """Send one request and return the decoded JSON body."""
        try:
            if self._client is not None:
                response = await self._send(self._client, method, payload)
            else:
                async with self._new_client() as client:
                    response = await self._send(client, method, payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise PersistenceError(
                f"{e.response.status_code} {e.response.reason_phrase}"
            ) from e
        except httpx.HTTPError as e:
            raise PersistenceError(str(e) or e.__class__.__name__) from e
        except ValueError as e:
            raise PersistenceError(f"Invalid JSON from document store: {e}") from e

        if not isinstance(data, dict):
            raise PersistenceError("Document store returned an unexpected payload")
        return data

    async def load(self) -> LoadResult:
        """
        Fetch both collections.

        Any failure yields empty collections with ``error`` set.
        """
        logger.info("Loading state from %s", self.url)
        try:
            data = await self._request("GET")
            if data.get("error"):
                raise PersistenceError(str(data["error"]))
            document = StateDocument.model_validate(
                {
                    "tenders": data.get("tenders") or [],
                    "transactions": data.get("transactions") or [],
                }
            )
        except pydantic.ValidationError as e:
            logger.error("Stored document is malformed: %s", e)
            return LoadResult(error=f"Stored document is malformed: {e.error_count()} invalid field(s)")
        except PersistenceError as e:
            logger.error("Failed to load state: %s", e.message)
            return LoadResult(error=e.message)

        logger.info(
            "Loaded %d tender(s) and %d transaction(s)",
            len(document.tenders),
            len(document.transactions),
        )
        return LoadResult(tenders=document.tenders, transactions=document.transactions)

    async def save(
        self, tenders: list[Tender], transactions: list[Transaction]
    ) -> SaveResult:
        """Replace the stored document with the given collections."""
        payload = StateDocument(tenders=tenders, transactions=transactions).to_payload()
        try:
            result = await self._request("POST", payload)
        except PersistenceError as e:
            logger.error("Failed to save state: %s", e.message)
            return SaveResult(ok=False, message=e.message)

        if result.get("status") != "success":
            message = str(result.get("message") or f"Unexpected status: {result.get('status')}")
            logger.error("Document store rejected save: %s", message)
            return SaveResult(ok=False, message=message)

        logger.info(
            "Saved %d tender(s) and %d transaction(s)", len(tenders), len(transactions)
        )
        return SaveResult(ok=True, message="Data saved")


gateway = DocumentStoreGateway(settings.STORE_URL, timeout=settings.STORE_TIMEOUT_SECONDS)
