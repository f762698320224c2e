"""Entity store service module.

Owns the tender and transaction collections and enforces their invariants:

- tender ids are unique; transaction ids are unique
- renaming a tender re-points all of its transactions in the same update
- deleting a tender deletes all of its transactions in the same update

Every mutation validates first and only then touches the collections, so a
rejected submission leaves state unchanged. After a mutation the full state
is pushed to the document store. A failed save is reported in the result but
the in-memory change is kept; the next successful save catches the remote
copy up.

Collections are replaced wholesale on each mutation and records are
immutable, so snapshots handed to readers never change underneath them.
"""
import logging
import re
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from tenderbook.exceptions.store_exception import (
    DuplicateIdError,
    RecordNotFoundError,
    ValidationError,
)
from tenderbook.gateway.document_store import (
    DocumentStoreGateway,
    LoadResult,
    SaveResult,
    gateway as default_gateway,
)
from tenderbook.models.tender import Tender
from tenderbook.models.transaction import Transaction
from tenderbook.schemas.tender import TenderInput
from tenderbook.schemas.transaction import TransactionInput
from tenderbook.services.identifier_service import next_tender_id, next_txn_id

logger = logging.getLogger(__name__)

_PINCODE_PATTERN = re.compile(r"[0-9]{6}")

R = TypeVar("R")


@dataclass
class MutationResult(Generic[R]):
    """Outcome of a store mutation: the record plus the save outcome."""

    record: R
    saved: bool
    message: str
    affected_transactions: int = 0


class EntityStore:
    """In-memory owner of the tender and transaction collections."""

    def __init__(self, gateway: DocumentStoreGateway):
        self._gateway = gateway
        self._tenders: list[Tender] = []
        self._transactions: list[Transaction] = []

    # --- Read access ---

    @property
    def tenders(self) -> list[Tender]:
        return list(self._tenders)

    @property
    def transactions(self) -> list[Transaction]:
        return list(self._transactions)

    def snapshot(self) -> tuple[list[Tender], list[Transaction]]:
        """Copies of both collections taken at the same moment."""
        return list(self._tenders), list(self._transactions)

    def get_tender(self, tender_id: str) -> Tender:
        for tender in self._tenders:
            if tender.tender_id == tender_id:
                return tender
        raise RecordNotFoundError(f"Tender '{tender_id}' not found")

    def get_transaction(self, txn_id: str) -> Transaction:
        for txn in self._transactions:
            if txn.txn_id == txn_id:
                return txn
        raise RecordNotFoundError(f"Transaction '{txn_id}' not found")

    def next_tender_id(self) -> str:
        return next_tender_id(self._tenders)

    def next_txn_id(self, tender_id: Optional[str]) -> str:
        return next_txn_id(self._transactions, tender_id)

    # --- Persistence ---

    async def load(self) -> LoadResult:
        """Replace both collections with the remote document (empty on failure)."""
        result = await self._gateway.load()
        self._tenders = list(result.tenders)
        self._transactions = list(result.transactions)
        return result

    async def _persist(self) -> SaveResult:
        tenders, transactions = self.snapshot()
        return await self._gateway.save(tenders, transactions)

    async def _finish(self, record: R, message: str, affected: int = 0) -> MutationResult[R]:
        outcome = await self._persist()
        if not outcome.ok:
            message = f"{message}, but saving failed: {outcome.message}"
        return MutationResult(
            record=record,
            saved=outcome.ok,
            message=message,
            affected_transactions=affected,
        )

    # --- Tenders ---

    def _build_tender(self, data: TenderInput, editing_id: Optional[str]) -> Tender:
        """Validate a submission; the first failing rule wins."""
        tender_id = data.tender_id.strip()
        if not tender_id:
            tender_id = editing_id or next_tender_id(self._tenders)

        tender_name = data.tender_name.strip()
        if not tender_name:
            raise ValidationError("Tender Name is required")

        pincode = data.tender_pincode.strip()
        if pincode and not _PINCODE_PATTERN.fullmatch(pincode):
            raise ValidationError("Pincode must be 6 digits")

        return Tender(
            tender_id=tender_id,
            tender_name=tender_name,
            tender_desc=data.tender_desc.strip(),
            tender_city=data.tender_city.strip(),
            tender_pincode=pincode,
            tender_value=data.tender_value,
            tender_date=data.tender_date,
        )

    async def create_or_update_tender(
        self, data: TenderInput, editing_id: Optional[str] = None
    ) -> MutationResult[Tender]:
        """
        Create a tender, or replace the one identified by ``editing_id``.

        When an edit changes the identifier, every transaction that pointed at
        the old identifier is re-pointed at the new one.

        Raises:
            ValidationError: Missing name or malformed pincode
            DuplicateIdError: Identifier taken by another tender
            RecordNotFoundError: ``editing_id`` does not exist
        """
        try:
            tender = self._build_tender(data, editing_id)
        except ValidationError as e:
            logger.info("Rejected tender submission: %s", e.message)
            raise

        if editing_id is None:
            if any(t.tender_id == tender.tender_id for t in self._tenders):
                raise DuplicateIdError("Tender ID already exists")
            self._tenders = [*self._tenders, tender]
            logger.info("Created tender %s", tender.tender_id)
            return await self._finish(tender, "Tender saved")

        index = next(
            (i for i, t in enumerate(self._tenders) if t.tender_id == editing_id), None
        )
        if index is None:
            raise RecordNotFoundError(f"Tender '{editing_id}' not found")
        renamed = tender.tender_id != editing_id
        if renamed and any(t.tender_id == tender.tender_id for t in self._tenders):
            raise DuplicateIdError("Tender ID already exists")

        tenders = list(self._tenders)
        tenders[index] = tender
        rewritten = 0
        if renamed:
            transactions = []
            for txn in self._transactions:
                if txn.tender_id == editing_id:
                    txn = txn.model_copy(update={"tender_id": tender.tender_id})
                    rewritten += 1
                transactions.append(txn)
            self._transactions = transactions
            logger.info(
                "Renamed tender %s to %s, re-pointed %d transaction(s)",
                editing_id, tender.tender_id, rewritten,
            )
        self._tenders = tenders
        logger.info("Updated tender %s", tender.tender_id)
        return await self._finish(tender, "Tender updated", rewritten)

    async def delete_tender(self, tender_id: str) -> MutationResult[Tender]:
        """Remove a tender together with every transaction linked to it."""
        tender = self.get_tender(tender_id)
        remaining = [x for x in self._transactions if x.tender_id != tender_id]
        removed = len(self._transactions) - len(remaining)

        self._tenders = [t for t in self._tenders if t.tender_id != tender_id]
        self._transactions = remaining
        logger.info("Deleted tender %s and %d linked transaction(s)", tender_id, removed)
        return await self._finish(tender, "Tender and linked transactions deleted", removed)

    # --- Transactions ---

    def _build_transaction(
        self, data: TransactionInput, editing_id: Optional[str]
    ) -> Transaction:
        # The identifier of an existing transaction never changes
        txn_id = editing_id if editing_id is not None else data.txn_id.strip()
        if not txn_id:
            raise ValidationError("Transaction ID is required")

        tender_id = data.tender_id.strip()
        if not tender_id:
            raise ValidationError("Linked Tender ID is required")

        if not any(t.tender_id == tender_id for t in self._tenders):
            # Accepted as-is; only the form restricts choices to existing tenders
            logger.warning("Transaction %s references unknown tender %s", txn_id, tender_id)

        return Transaction(
            txn_id=txn_id,
            tender_id=tender_id,
            txn_desc=data.txn_desc.strip(),
            txn_type=data.txn_type.strip(),
            vendor_name=data.vendor_name.strip(),
            amount=data.amount if data.amount is not None else 0.0,
            txn_date=data.txn_date,
        )

    async def create_or_update_transaction(
        self, data: TransactionInput, editing_id: Optional[str] = None
    ) -> MutationResult[Transaction]:
        """
        Create a transaction, or replace the one identified by ``editing_id``.

        Raises:
            ValidationError: Missing transaction or tender identifier
            DuplicateIdError: Identifier taken by another transaction
            RecordNotFoundError: ``editing_id`` does not exist
        """
        try:
            txn = self._build_transaction(data, editing_id)
        except ValidationError as e:
            logger.info("Rejected transaction submission: %s", e.message)
            raise

        if editing_id is None:
            if any(x.txn_id == txn.txn_id for x in self._transactions):
                raise DuplicateIdError("Transaction ID already exists")
            self._transactions = [*self._transactions, txn]
            logger.info("Created transaction %s for tender %s", txn.txn_id, txn.tender_id)
            return await self._finish(txn, "Transaction saved")

        index = next(
            (i for i, x in enumerate(self._transactions) if x.txn_id == editing_id), None
        )
        if index is None:
            raise RecordNotFoundError(f"Transaction '{editing_id}' not found")
        transactions = list(self._transactions)
        transactions[index] = txn
        self._transactions = transactions
        logger.info("Updated transaction %s", txn.txn_id)
        return await self._finish(txn, "Transaction updated")

    async def delete_transaction(self, txn_id: str) -> MutationResult[Transaction]:
        txn = self.get_transaction(txn_id)
        self._transactions = [x for x in self._transactions if x.txn_id != txn_id]
        logger.info("Deleted transaction %s", txn_id)
        return await self._finish(txn, "Transaction deleted")


store = EntityStore(default_gateway)


def get_store() -> EntityStore:
    """Dependency returning the process-wide store."""
    return store
