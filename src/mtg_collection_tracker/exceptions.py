"""Error taxonomy for the collection tracker.

Every error raised by the card model, the collection manager and the CSV
codec derives from ``CollectionError``. Each concrete error also inherits
from the closest built-in exception so callers that only know the standard
hierarchy (``ValueError``, ``IndexError``, ``LookupError``, ``OSError``)
still catch them.
"""

from typing import Any, Optional, Sequence


class CollectionError(Exception):
    """Base class for all collection tracker errors."""


class CardValidationError(CollectionError, ValueError):
    """A card field rejected the value it was given."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class BlankFieldError(CardValidationError):
    """A required text field was None or whitespace only."""

    def __init__(self, field: str, label: Optional[str] = None):
        super().__init__(field, f"{label or field} cannot be empty")


class InvalidEnumerationError(CardValidationError):
    """A value did not match any member of a closed enumeration."""

    def __init__(self, field: str, value: Any, allowed: Sequence[str]):
        self.value = value
        self.allowed = list(allowed)
        super().__init__(
            field,
            f"Invalid {field}: {value!r}. Must be one of: {', '.join(self.allowed)}",
        )


class NegativeValueError(CardValidationError):
    """A numeric field was given a negative number."""

    def __init__(self, field: str, value: Any, label: Optional[str] = None):
        self.value = value
        super().__init__(field, f"{label or field} cannot be negative (got {value})")


class NullRecordError(CollectionError, ValueError):
    """A None record was handed to the collection."""

    def __init__(self) -> None:
        super().__init__("Cannot add a null card to the collection")


class UnsupportedRecordError(CollectionError, TypeError):
    """A record that is not a trading card was handed to the collection."""

    def __init__(self, record: Any):
        self.record = record
        variant = getattr(record, "variant", None)
        kind = f"a {variant.value} card" if variant is not None else type(record).__name__
        super().__init__(f"Only trading cards can be added to the collection (got {kind})")


class IndexOutOfRangeError(CollectionError, IndexError):
    """A positional lookup fell outside the collection."""

    def __init__(self, index: int, size: int):
        self.index = index
        self.size = size
        if size == 0:
            message = f"Invalid card index {index}: the collection is empty"
        else:
            message = f"Invalid card index {index}. Must be between 0 and {size - 1}"
        super().__init__(message)


class NotFoundError(CollectionError, LookupError):
    """No record matched a lookup by name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Card {name!r} not found in collection")


class MalformedRowError(CollectionError, ValueError):
    """A CSV line could not be turned into a card."""

    def __init__(self, line_number: int, name: str, reason: str):
        self.line_number = line_number
        self.name = name
        self.reason = reason
        super().__init__(f"Line {line_number}: error importing card {name!r} - {reason}")


class CollectionIOError(CollectionError, OSError):
    """Reading or writing a collection file failed."""

    def __init__(self, path: Any, operation: str, reason: str):
        self.path = path
        self.operation = operation
        super().__init__(f"Error {operation} {path}: {reason}")
