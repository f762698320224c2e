"""Summary aggregation service module.

Computes per-tender credit/debit totals from the transaction collection.

Rules:
- ``txnType`` is compared case-insensitively; only "credit" and "debit" count,
  any other type contributes to neither total
- ``netAmount = totalCredit - totalDebit``
- status is "Profit" when net is zero or positive, "Loss" otherwise

Pure functions of the collections; recompute after every mutation or filter
change rather than caching.
"""
from collections import defaultdict
from typing import Sequence

from tenderbook.models.tender import Tender
from tenderbook.models.transaction import Transaction
from tenderbook.schemas.summary import SummaryPageResponse, SummaryRow, SummaryTotals
from tenderbook.services.view_service import ALL_TENDERS, paginate

CREDIT = "credit"
DEBIT = "debit"
STATUS_PROFIT = "Profit"
STATUS_LOSS = "Loss"


def _status(net_amount: float) -> str:
    return STATUS_PROFIT if net_amount >= 0 else STATUS_LOSS


def _select_tenders(tenders: Sequence[Tender], tender_id: str | None) -> list[Tender]:
    if not tender_id or tender_id == ALL_TENDERS:
        return list(tenders)
    return [t for t in tenders if t.tender_id == tender_id][:1]


def compute_summary(
    tenders: Sequence[Tender],
    transactions: Sequence[Transaction],
    tender_id: str | None = ALL_TENDERS,
) -> list[SummaryRow]:
    """
    Build one summary row per selected tender.

    Args:
        tenders: Tender collection (row order follows it)
        transactions: Transaction collection
        tender_id: A single tender id, or "all"

    Returns:
        List of SummaryRow; empty when an unknown tender is selected
    """
    credit: dict[str, float] = defaultdict(float)
    debit: dict[str, float] = defaultdict(float)
    for txn in transactions:
        kind = txn.txn_type.strip().lower()
        if kind == CREDIT:
            credit[txn.tender_id] += txn.amount
        elif kind == DEBIT:
            debit[txn.tender_id] += txn.amount

    rows = []
    for tender in _select_tenders(tenders, tender_id):
        total_credit = credit.get(tender.tender_id, 0.0)
        total_debit = debit.get(tender.tender_id, 0.0)
        net_amount = total_credit - total_debit
        rows.append(
            SummaryRow(
                tender_id=tender.tender_id,
                tender_name=tender.tender_name,
                total_credit=total_credit,
                total_debit=total_debit,
                net_amount=net_amount,
                status=_status(net_amount),
            )
        )
    return rows


def summary_page(rows: Sequence[SummaryRow], page: int, page_size: int) -> SummaryPageResponse:
    """Paginate summary rows; totals cover every row, not only the page."""
    totals = SummaryTotals(
        total_credit=sum(r.total_credit for r in rows),
        total_debit=sum(r.total_debit for r in rows),
        net_amount=sum(r.net_amount for r in rows),
    )
    current = paginate(rows, page, page_size)
    return SummaryPageResponse(
        items=current.items,
        totals=totals,
        total=current.total,
        page=current.page,
        page_size=page_size,
        pages=current.pages,
    )
