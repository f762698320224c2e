"""Identifier generation service module.

Derives the next tender and transaction identifiers from the current
collections.

Formats:
- Tender: ``TD-<digits>``, zero-padded to at least 3 digits (TD-001, TD-1000)
- Transaction: ``<tenderId>-TX<digits>``, zero-padded to at least 3 digits

Only the current maximum is considered, so after the highest-numbered record
is deleted its number is handed out again. Identifiers outside the pattern are
ignored: they never collide with generated ones and never move the counter.
"""
import re
from typing import Iterable, Optional

from tenderbook.models.tender import Tender
from tenderbook.models.transaction import Transaction

TENDER_ID_PREFIX = "TD-"
TXN_ID_INFIX = "-TX"
ID_PAD_WIDTH = 3

_TENDER_ID_PATTERN = re.compile(r"^TD-(\d+)$", re.IGNORECASE)
_TXN_SUFFIX_PATTERN = re.compile(r"-TX(\d+)$", re.IGNORECASE)


def _max_suffix(ids: Iterable[str], pattern: re.Pattern) -> int:
    """Largest numeric group matched by ``pattern`` across ``ids``, 0 if none."""
    numbers = []
    for value in ids:
        match = pattern.search(value or "")
        if match:
            numbers.append(int(match.group(1)))
    return max(numbers, default=0)


def _format_number(number: int) -> str:
    return str(number).zfill(ID_PAD_WIDTH)


def next_tender_id(tenders: Iterable[Tender]) -> str:
    """Return ``TD-`` followed by the highest existing number plus one."""
    highest = _max_suffix((t.tender_id for t in tenders), _TENDER_ID_PATTERN)
    return f"{TENDER_ID_PREFIX}{_format_number(highest + 1)}"


def next_txn_id(
    transactions: Iterable[Transaction], tender_id: Optional[str]
) -> str:
    """
    Return the next transaction identifier within one tender.

    An empty ``tender_id`` yields an empty string; the caller must refuse
    to submit in that case.
    """
    if not tender_id:
        return ""
    highest = _max_suffix(
        (x.txn_id for x in transactions if x.tender_id == tender_id),
        _TXN_SUFFIX_PATTERN,
    )
    return f"{tender_id}{TXN_ID_INFIX}{_format_number(highest + 1)}"
