"""Report schemas module.

Shapes consumed by an external renderer (PDF, print view, CLI).
"""
from datetime import datetime

from pydantic import BaseModel, Field

from tenderbook.models.tender import Tender
from tenderbook.models.transaction import Transaction


class ReportTransactionRow(BaseModel):
    """One transaction line with its display-formatted date."""

    transaction: Transaction
    date_display: str = Field("", alias="dateDisplay")

    class Config:
        populate_by_name = True


class ReportGroup(BaseModel):
    """Tender header followed by its transactions."""

    tender: Tender
    date_display: str = Field("", alias="dateDisplay")
    rows: list[ReportTransactionRow] = Field(default_factory=list)

    class Config:
        populate_by_name = True


class ReportResponse(BaseModel):
    """Transactions grouped by tender."""

    tender_id: str = Field(..., alias="tenderId", description="Selected tender or 'all'")
    generated_at: datetime = Field(..., alias="generatedAt")
    groups: list[ReportGroup] = Field(default_factory=list)

    class Config:
        populate_by_name = True
