"""View building service module.

Derives searched, filtered and paginated projections of the collections.
Nothing here mutates its inputs; every function returns new lists in the
original collection order.
"""
import math
from dataclasses import dataclass, field
from typing import Generic, Iterable, Sequence, TypeVar

from pydantic import BaseModel

from tenderbook.models.tender import Tender
from tenderbook.models.transaction import Transaction
from tenderbook.schemas.transaction import TransactionPageResponse

ALL_TENDERS = "all"

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """One page of a list plus the bounds used to navigate it."""

    items: list[T] = field(default_factory=list)
    page: int = 1
    pages: int = 1
    total: int = 0


def _field_text(value) -> str:
    """String form of a dumped field value, as a user would see it typed."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _matches(record: BaseModel, needle: str) -> bool:
    values = record.model_dump(mode="json").values()
    return any(needle in _field_text(v).lower() for v in values)


def _search(records: Iterable[T], query: str | None) -> list[T]:
    needle = (query or "").strip().lower()
    if not needle:
        return list(records)
    return [r for r in records if _matches(r, needle)]


def search_tenders(tenders: Iterable[Tender], query: str | None) -> list[Tender]:
    """Case-insensitive substring match against every field of each tender."""
    return _search(tenders, query)


def search_transactions(
    transactions: Iterable[Transaction], query: str | None
) -> list[Transaction]:
    """Case-insensitive substring match against every field of each transaction."""
    return _search(transactions, query)


def filter_by_tender(
    transactions: Iterable[Transaction], tender_id: str | None
) -> list[Transaction]:
    """Transactions of one tender, or all of them for the 'all' sentinel."""
    if not tender_id or tender_id == ALL_TENDERS:
        return list(transactions)
    return [x for x in transactions if x.tender_id == tender_id]


def paginate(items: Sequence[T], page: int, page_size: int) -> Page[T]:
    """
    Slice one page out of ``items``.

    ``pages`` is never below 1, so an empty list still has an (empty) first
    page. A page outside 1..pages falls back to page 1: after a delete or a
    new filter the caller lands on the first page instead of an empty one.
    """
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    total = len(items)
    pages = max(1, math.ceil(total / page_size))
    if page < 1 or page > pages:
        page = 1
    start = (page - 1) * page_size
    return Page(items=list(items[start:start + page_size]), page=page, pages=pages, total=total)


def manage_transactions(
    tenders: Sequence[Tender],
    transactions: Sequence[Transaction],
    tender_id: str,
    page: int,
    page_size: int,
) -> TransactionPageResponse:
    """Filter by tender then paginate, echoing the selected tender's name."""
    filtered = filter_by_tender(transactions, tender_id)
    tender_name = ""
    if tender_id and tender_id != ALL_TENDERS:
        tender_name = next(
            (t.tender_name for t in tenders if t.tender_id == tender_id), ""
        )
    current = paginate(filtered, page, page_size)
    return TransactionPageResponse(
        tender_id=tender_id or ALL_TENDERS,
        tender_name=tender_name,
        items=current.items,
        total=current.total,
        page=current.page,
        page_size=page_size,
        pages=current.pages,
    )
