"""Transaction endpoints module."""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from tenderbook.exceptions.api_exception import BadRequestError
from tenderbook.models.transaction import Transaction
from tenderbook.schemas.tender import NextIdResponse
from tenderbook.schemas.transaction import (
    TransactionInput,
    TransactionListResponse,
    TransactionMutationResponse,
    TransactionPageResponse,
)
from tenderbook.services.entity_store import EntityStore, MutationResult, get_store
from tenderbook.services.view_service import (
    ALL_TENDERS,
    manage_transactions,
    search_transactions,
)
from tenderbook.settings import settings

router = APIRouter(prefix="/transactions", tags=["transactions"])


def _to_response(result: MutationResult[Transaction]) -> TransactionMutationResponse:
    return TransactionMutationResponse(
        transaction=result.record,
        saved=result.saved,
        message=result.message,
    )


@router.get("", response_model=TransactionListResponse)
async def list_transactions(
    q: Optional[str] = Query(None, description="Case-insensitive search over all fields"),
    store: EntityStore = Depends(get_store),
) -> TransactionListResponse:
    """List transactions in insertion order, optionally filtered by a search query."""
    items = search_transactions(store.transactions, q)
    return TransactionListResponse(items=items, total=len(items))


@router.get("/manage", response_model=TransactionPageResponse)
async def list_transactions_by_tender(
    tender_id: str = Query(ALL_TENDERS, description="Tender ID, or 'all'"),
    page: int = Query(1, description="Page number; out of range falls back to 1"),
    store: EntityStore = Depends(get_store),
) -> TransactionPageResponse:
    """
    Transactions of one tender (or all), paginated.

    Page size is fixed by configuration (TXN_PAGE_SIZE).
    """
    tenders, transactions = store.snapshot()
    return manage_transactions(
        tenders, transactions, tender_id, page, settings.TXN_PAGE_SIZE
    )


@router.get("/next-id", response_model=NextIdResponse)
async def get_next_txn_id(
    tender_id: str = Query("", description="Tender the transaction will belong to"),
    store: EntityStore = Depends(get_store),
) -> NextIdResponse:
    """Next transaction ID within a tender; empty when no tender is given."""
    return NextIdResponse(next_id=store.next_txn_id(tender_id))


@router.get("/{txn_id}", response_model=Transaction)
async def get_transaction(
    txn_id: str,
    store: EntityStore = Depends(get_store),
) -> Transaction:
    """Get a single transaction by ID."""
    return store.get_transaction(txn_id)


@router.post("", response_model=TransactionMutationResponse, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    transaction: TransactionInput,
    store: EntityStore = Depends(get_store),
) -> TransactionMutationResponse:
    """Create a transaction linked to a tender."""
    return _to_response(await store.create_or_update_transaction(transaction))


@router.put("/{txn_id}", response_model=TransactionMutationResponse)
async def update_transaction(
    txn_id: str,
    transaction: TransactionInput,
    store: EntityStore = Depends(get_store),
) -> TransactionMutationResponse:
    """Replace a transaction. Its ID stays the same whatever the body says."""
    return _to_response(
        await store.create_or_update_transaction(transaction, editing_id=txn_id)
    )


@router.delete("/{txn_id}", response_model=TransactionMutationResponse)
async def delete_transaction(
    txn_id: str,
    confirm: bool = Query(False, description="Confirm deletion"),
    store: EntityStore = Depends(get_store),
) -> TransactionMutationResponse:
    """
    Delete a transaction.

    Requires confirm=true query parameter as safety measure.
    """
    if not confirm:
        raise BadRequestError(
            f"Please confirm deletion of transaction {txn_id} by setting confirm=true"
        )
    return _to_response(await store.delete_transaction(txn_id))
