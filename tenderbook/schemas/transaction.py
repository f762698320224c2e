"""Transaction schemas module for create/edit/list operations."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from tenderbook.models.fields import as_text, is_blank
from tenderbook.models.transaction import Transaction
from tenderbook.settings import settings
from tenderbook.time_utils import local_to_instant


class TransactionInput(BaseModel):
    """Transaction form submission."""

    txn_id: str = Field("", alias="txnId", description="Ignored when editing")
    tender_id: str = Field("", alias="tenderId", description="Linked tender")
    txn_desc: str = Field("", alias="txnDesc")
    txn_type: str = Field("", alias="txnType")
    vendor_name: str = Field("", alias="vendorName")
    amount: Optional[float] = Field(None, description="Defaults to 0", allow_inf_nan=False)
    txn_date: Optional[datetime] = Field(None, alias="txnDate", description="UTC instant")
    txn_date_local: Optional[str] = Field(
        None,
        alias="txnDateLocal",
        description="Wall-clock 'YYYY-MM-DDTHH:MM' in the display offset, used when txnDate is absent",
    )

    class Config:
        populate_by_name = True

    @field_validator(
        "txn_id", "tender_id", "txn_desc", "txn_type", "vendor_name",
        mode="before",
    )
    @classmethod
    def _coerce_text(cls, value):
        return as_text(value)

    @field_validator("amount", "txn_date", "txn_date_local", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        return None if is_blank(value) else value

    @model_validator(mode="after")
    def _resolve_local_date(self):
        if self.txn_date is None and self.txn_date_local:
            self.txn_date = local_to_instant(
                self.txn_date_local, settings.DISPLAY_UTC_OFFSET_MINUTES
            )
        return self


class TransactionMutationResponse(BaseModel):
    """Result of a transaction create, edit or delete."""

    transaction: Transaction
    saved: bool = Field(..., description="Whether the remote store accepted the new state")
    message: str


class TransactionListResponse(BaseModel):
    """Schema for transaction search results."""

    items: list[Transaction] = Field(default_factory=list)
    total: int = Field(..., description="Number of matching transactions")


class TransactionPageResponse(BaseModel):
    """Schema for the per-tender paginated transaction view."""

    tender_id: str = Field(..., alias="tenderId", description="Selected tender or 'all'")
    tender_name: str = Field("", alias="tenderName", description="Name of the selected tender")
    items: list[Transaction] = Field(default_factory=list)
    total: int = Field(..., description="Number of transactions after filtering")
    page: int = Field(..., description="Current page number")
    page_size: int = Field(..., alias="pageSize", description="Number of items per page")
    pages: int = Field(..., description="Total number of pages (at least 1)")

    class Config:
        populate_by_name = True
