"""Summary endpoint module."""
from fastapi import APIRouter, Depends, Query

from tenderbook.schemas.summary import SummaryPageResponse
from tenderbook.services.entity_store import EntityStore, get_store
from tenderbook.services.summary_service import compute_summary, summary_page
from tenderbook.services.view_service import ALL_TENDERS
from tenderbook.settings import settings

router = APIRouter(prefix="/summary", tags=["summary"])


@router.get("", response_model=SummaryPageResponse)
async def get_summary(
    tender_id: str = Query(ALL_TENDERS, description="Tender ID, or 'all'"),
    page: int = Query(1, description="Page number; out of range falls back to 1"),
    store: EntityStore = Depends(get_store),
) -> SummaryPageResponse:
    """
    Credit/debit summary per tender.

    Returns per-tender rows including:
    - **totalCredit** / **totalDebit**: sums of Credit / Debit transactions
    - **netAmount**: credit minus debit
    - **status**: Profit (net >= 0) or Loss
    """
    tenders, transactions = store.snapshot()
    rows = compute_summary(tenders, transactions, tender_id)
    return summary_page(rows, page, settings.SUMMARY_PAGE_SIZE)
