"""Whole-dataset document exchanged with the remote store."""
from pydantic import BaseModel, Field

from tenderbook.models.tender import Tender
from tenderbook.models.transaction import Transaction


class StateDocument(BaseModel):
    """Both collections, loaded and saved as one unit."""

    tenders: list[Tender] = Field(default_factory=list)
    transactions: list[Transaction] = Field(default_factory=list)

    def to_payload(self) -> dict:
        """JSON-ready body using the stored camelCase field names."""
        return self.model_dump(mode="json", by_alias=True)
