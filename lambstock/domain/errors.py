"""Error taxonomy for lambstock.

Every failure surfaced to the user is an ``InventoryError``. Each wrapper
keeps the underlying exception in ``cause`` so the full chain can be printed.
"""

from typing import Iterator, Optional


class InventoryError(Exception):
    """Base class for all lambstock failures."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.message = message
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class ListingError(InventoryError):
    """Raised when listing Lambda functions fails after retries."""

    def __init__(self, cause: BaseException):
        super().__init__("Failed to list functions", cause)


class TagsError(InventoryError):
    """Raised when listing resource tag mappings fails after retries."""

    def __init__(self, cause: BaseException):
        super().__init__("Failed to list tags", cause)


class SetupError(InventoryError):
    """Raised when the AWS session or clients cannot be built, e.g. no region or an unknown profile."""

    def __init__(self, cause: BaseException):
        super().__init__("Failed to set up AWS clients", cause)


class ArgumentError(InventoryError):
    """Raised for malformed command line values, before any network call."""


def iter_causes(error: BaseException) -> Iterator[BaseException]:
    """Yields the error followed by each wrapped cause until the chain ends."""
    seen = set()
    current: Optional[BaseException] = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = getattr(current, "cause", None) or current.__cause__
