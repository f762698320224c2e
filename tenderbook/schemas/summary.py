"""Summary schemas module."""
from pydantic import BaseModel, Field


class SummaryRow(BaseModel):
    """Credit/debit aggregate for one tender."""

    tender_id: str = Field(..., alias="tenderId")
    tender_name: str = Field("", alias="tenderName")
    total_credit: float = Field(..., alias="totalCredit")
    total_debit: float = Field(..., alias="totalDebit")
    net_amount: float = Field(..., alias="netAmount", description="Credit minus debit")
    status: str = Field(..., description="'Profit' when net >= 0, else 'Loss'")

    class Config:
        populate_by_name = True


class SummaryTotals(BaseModel):
    """Totals across every selected summary row (not just the current page)."""

    total_credit: float = Field(0.0, alias="totalCredit")
    total_debit: float = Field(0.0, alias="totalDebit")
    net_amount: float = Field(0.0, alias="netAmount")

    class Config:
        populate_by_name = True


class SummaryPageResponse(BaseModel):
    """Paginated summary table."""

    items: list[SummaryRow] = Field(default_factory=list)
    totals: SummaryTotals = Field(default_factory=SummaryTotals)
    total: int = Field(..., description="Number of summary rows")
    page: int = Field(..., description="Current page number")
    page_size: int = Field(..., alias="pageSize")
    pages: int = Field(..., description="Total number of pages (at least 1)")

    class Config:
        populate_by_name = True
