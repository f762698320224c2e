"""Report service module.

Groups a filtered transaction list by tender for an external renderer.
"""
from typing import Sequence

from tenderbook.models.tender import Tender
from tenderbook.models.transaction import Transaction
from tenderbook.schemas.report import ReportGroup, ReportResponse, ReportTransactionRow
from tenderbook.services.view_service import ALL_TENDERS, filter_by_tender
from tenderbook.time_utils import format_display, now_utc


def _tenders_to_include(
    tenders: Sequence[Tender],
    transactions: Sequence[Transaction],
    tender_id: str,
) -> list[Tender]:
    if tender_id == ALL_TENDERS:
        with_rows = {x.tender_id for x in transactions}
        return [t for t in tenders if t.tender_id in with_rows]
    # An explicitly selected tender is reported even without transactions
    return [t for t in tenders if t.tender_id == tender_id][:1]


def build_report(
    tenders: Sequence[Tender],
    transactions: Sequence[Transaction],
    tender_id: str | None,
    offset_minutes: int,
) -> ReportResponse:
    """
    Build report groups for the selected tender (or all tenders).

    With "all", only tenders that have at least one transaction appear.
    Groups and rows keep collection order.
    """
    selected = tender_id or ALL_TENDERS
    filtered = filter_by_tender(transactions, selected)

    groups = []
    for tender in _tenders_to_include(tenders, filtered, selected):
        rows = [
            ReportTransactionRow(
                transaction=txn,
                date_display=format_display(txn.txn_date, offset_minutes),
            )
            for txn in filtered
            if txn.tender_id == tender.tender_id
        ]
        groups.append(
            ReportGroup(
                tender=tender,
                date_display=format_display(tender.tender_date, offset_minutes),
                rows=rows,
            )
        )
    return ReportResponse(tender_id=selected, generated_at=now_utc(), groups=groups)
