"""Transaction model module."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_serializer, field_validator

from tenderbook.models.fields import as_amount, as_stored_instant, as_text
from tenderbook.time_utils import to_utc_z


class Transaction(BaseModel):
    """Financial entry linked to exactly one tender."""

    txn_id: str = Field(..., alias="txnId", description="<tenderId>-TXNNN identifier")
    tender_id: str = Field("", alias="tenderId", description="Owning tender")
    txn_desc: str = Field("", alias="txnDesc")
    txn_type: str = Field("", alias="txnType", description="Credit / Debit / free-form")
    vendor_name: str = Field("", alias="vendorName")
    amount: float = Field(0.0, alias="amount")
    txn_date: Optional[datetime] = Field(None, alias="txnDate")

    class Config:
        populate_by_name = True
        frozen = True

    @field_validator(
        "txn_id", "tender_id", "txn_desc", "txn_type", "vendor_name",
        mode="before",
    )
    @classmethod
    def _coerce_text(cls, value):
        return as_text(value)

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, value):
        return as_amount(value)

    @field_validator("txn_date", mode="before")
    @classmethod
    def _coerce_date(cls, value):
        return as_stored_instant(value, "txnDate")

    @field_serializer("txn_date")
    def _serialize_date(self, value: Optional[datetime]) -> Optional[str]:
        return to_utc_z(value)
