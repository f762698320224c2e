"""Domain exception module.

Raised by the entity store and the persistence gateway. These carry no
HTTP semantics; ``api_exception`` maps them to status codes.
"""


class StoreError(Exception):
    """Base class for tender store errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StoreError):
    """Malformed or missing required input. Raised before any mutation."""


class DuplicateIdError(StoreError):
    """Identifier already used by another record. Raised before any mutation."""


class RecordNotFoundError(StoreError):
    """Edit or delete addressed an identifier that is not in the collection."""


class PersistenceError(StoreError):
    """Load or save against the remote document store failed."""
