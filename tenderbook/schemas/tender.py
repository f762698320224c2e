"""Tender schemas module for create/edit/list operations."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from tenderbook.models.fields import as_text, is_blank
from tenderbook.models.tender import Tender
from tenderbook.settings import settings
from tenderbook.time_utils import local_to_instant


class TenderInput(BaseModel):
    """
    Tender form submission.

    Every field is optional at this level; required-field and format rules
    are enforced by the entity store so that the first failing rule is
    reported on its own.
    """

    tender_id: str = Field("", alias="tenderId", description="Blank to auto-generate")
    tender_name: str = Field("", alias="tenderName")
    tender_desc: str = Field("", alias="tenderDesc")
    tender_city: str = Field("", alias="tenderCity")
    tender_pincode: str = Field("", alias="tenderPincode", description="Empty or 6 digits")
    tender_value: Optional[float] = Field(None, alias="tenderValue", allow_inf_nan=False)
    tender_date: Optional[datetime] = Field(None, alias="tenderDate", description="UTC instant")
    tender_date_local: Optional[str] = Field(
        None,
        alias="tenderDateLocal",
        description="Wall-clock 'YYYY-MM-DDTHH:MM' in the display offset, used when tenderDate is absent",
    )

    class Config:
        populate_by_name = True

    @field_validator(
        "tender_id", "tender_name", "tender_desc", "tender_city", "tender_pincode",
        mode="before",
    )
    @classmethod
    def _coerce_text(cls, value):
        return as_text(value)

    @field_validator("tender_value", "tender_date", "tender_date_local", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        # Empty form inputs arrive as ""
        return None if is_blank(value) else value

    @model_validator(mode="after")
    def _resolve_local_date(self):
        if self.tender_date is None and self.tender_date_local:
            self.tender_date = local_to_instant(
                self.tender_date_local, settings.DISPLAY_UTC_OFFSET_MINUTES
            )
        return self


class TenderMutationResponse(BaseModel):
    """Result of a tender create, edit or delete."""

    tender: Tender
    saved: bool = Field(..., description="Whether the remote store accepted the new state")
    message: str
    affected_transactions: int = Field(
        0,
        alias="affectedTransactions",
        description="Transactions re-pointed by a rename or removed by a delete",
    )

    class Config:
        populate_by_name = True


class TenderListResponse(BaseModel):
    """Schema for tender search results."""

    items: list[Tender] = Field(default_factory=list)
    total: int = Field(..., description="Number of matching tenders")


class NextIdResponse(BaseModel):
    """Next identifier the generator would hand out."""

    next_id: str = Field(..., alias="nextId")

    class Config:
        populate_by_name = True
