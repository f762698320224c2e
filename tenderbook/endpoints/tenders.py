"""Tender endpoints module."""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from tenderbook.exceptions.api_exception import BadRequestError
from tenderbook.models.tender import Tender
from tenderbook.schemas.tender import (
    NextIdResponse,
    TenderInput,
    TenderListResponse,
    TenderMutationResponse,
)
from tenderbook.services.entity_store import EntityStore, MutationResult, get_store
from tenderbook.services.view_service import search_tenders

router = APIRouter(prefix="/tenders", tags=["tenders"])


def _to_response(result: MutationResult[Tender]) -> TenderMutationResponse:
    return TenderMutationResponse(
        tender=result.record,
        saved=result.saved,
        message=result.message,
        affected_transactions=result.affected_transactions,
    )


@router.get("", response_model=TenderListResponse)
async def list_tenders(
    q: Optional[str] = Query(None, description="Case-insensitive search over all fields"),
    store: EntityStore = Depends(get_store),
) -> TenderListResponse:
    """List tenders in insertion order, optionally filtered by a search query."""
    items = search_tenders(store.tenders, q)
    return TenderListResponse(items=items, total=len(items))


@router.get("/next-id", response_model=NextIdResponse)
async def get_next_tender_id(store: EntityStore = Depends(get_store)) -> NextIdResponse:
    """Identifier a new tender receives when submitted with a blank ID."""
    return NextIdResponse(next_id=store.next_tender_id())


@router.get("/{tender_id}", response_model=Tender)
async def get_tender(
    tender_id: str,
    store: EntityStore = Depends(get_store),
) -> Tender:
    """Get a single tender by ID."""
    return store.get_tender(tender_id)


@router.post("", response_model=TenderMutationResponse, status_code=status.HTTP_201_CREATED)
async def create_tender(
    tender: TenderInput,
    store: EntityStore = Depends(get_store),
) -> TenderMutationResponse:
    """
    Create a tender.

    A blank ``tenderId`` is replaced by the next generated ID. The response
    reports ``saved=false`` when the document store rejected the new state;
    the tender is created in memory either way.
    """
    return _to_response(await store.create_or_update_tender(tender))


@router.put("/{tender_id}", response_model=TenderMutationResponse)
async def update_tender(
    tender_id: str,
    tender: TenderInput,
    store: EntityStore = Depends(get_store),
) -> TenderMutationResponse:
    """
    Replace a tender.

    Changing ``tenderId`` re-points every linked transaction to the new ID.
    """
    return _to_response(await store.create_or_update_tender(tender, editing_id=tender_id))


@router.delete("/{tender_id}", response_model=TenderMutationResponse)
async def delete_tender(
    tender_id: str,
    confirm: bool = Query(False, description="Confirm deletion of the tender and its transactions"),
    store: EntityStore = Depends(get_store),
) -> TenderMutationResponse:
    """
    Delete a tender and all transactions linked to it.

    Requires confirm=true query parameter as safety measure.
    """
    if not confirm:
        raise BadRequestError(
            f"Please confirm deletion of tender {tender_id} and its transactions by setting confirm=true"
        )
    return _to_response(await store.delete_tender(tender_id))
