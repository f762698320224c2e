"""Tender model module."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_serializer, field_validator

from tenderbook.models.fields import as_optional_number, as_stored_instant, as_text
from tenderbook.time_utils import to_utc_z


class Tender(BaseModel):
    """Procurement contract record, the aggregation root for transactions."""

    tender_id: str = Field(..., alias="tenderId", description="TD-NNN identifier")
    tender_name: str = Field("", alias="tenderName")
    tender_desc: str = Field("", alias="tenderDesc")
    tender_city: str = Field("", alias="tenderCity")
    tender_pincode: str = Field("", alias="tenderPincode")
    tender_value: Optional[float] = Field(None, alias="tenderValue")
    tender_date: Optional[datetime] = Field(None, alias="tenderDate")

    class Config:
        populate_by_name = True
        frozen = True

    @field_validator(
        "tender_id", "tender_name", "tender_desc", "tender_city", "tender_pincode",
        mode="before",
    )
    @classmethod
    def _coerce_text(cls, value):
        return as_text(value)

    @field_validator("tender_value", mode="before")
    @classmethod
    def _coerce_value(cls, value):
        return as_optional_number(value)

    @field_validator("tender_date", mode="before")
    @classmethod
    def _coerce_date(cls, value):
        return as_stored_instant(value, "tenderDate")

    @field_serializer("tender_date")
    def _serialize_date(self, value: Optional[datetime]) -> Optional[str]:
        return to_utc_z(value)
