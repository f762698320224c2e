"""Report endpoint module."""
from fastapi import APIRouter, Depends, Query

from tenderbook.schemas.report import ReportResponse
from tenderbook.services.entity_store import EntityStore, get_store
from tenderbook.services.report_service import build_report
from tenderbook.services.view_service import ALL_TENDERS
from tenderbook.settings import settings

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/transactions", response_model=ReportResponse)
async def get_transactions_report(
    tender_id: str = Query(ALL_TENDERS, description="Tender ID, or 'all'"),
    store: EntityStore = Depends(get_store),
) -> ReportResponse:
    """
    Transactions grouped by tender, ready for printing.

    Dates are additionally rendered in the configured display offset.
    """
    tenders, transactions = store.snapshot()
    return build_report(
        tenders, transactions, tender_id, settings.DISPLAY_UTC_OFFSET_MINUTES
    )
