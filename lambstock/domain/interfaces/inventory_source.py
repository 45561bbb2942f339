"""Interfaces for the two paginated remote listings.

Both sources expose a blocking page fetch plus the predicate deciding which
of their errors are transient. The core pagination loop only relies on
these contracts, so tests can plug in fakes.
"""

import abc
from typing import Optional, Sequence

from lambstock.domain.models.common import ContinuationToken
from lambstock.domain.models.inventory import FunctionRecord, PageResult, TagFilter, TagMapping


class FunctionSource(abc.ABC):
    """Lists deployed functions one page at a time."""

    @abc.abstractmethod
    def list_functions_page(self, token: Optional[ContinuationToken] = None) -> PageResult[FunctionRecord]:
        """Fetches one page of functions.

        Args:
            token: Continuation token from the previous page, or None for the first page.

        Returns:
            The page of function records and the next token, if any.
        """
        pass

    @abc.abstractmethod
    def is_retryable(self, error: BaseException) -> bool:
        """Returns True if the error is transient and the fetch may be retried."""
        pass


class TagSource(abc.ABC):
    """Lists resource tag mappings for functions one page at a time."""

    @abc.abstractmethod
    def get_tag_mappings_page(
        self,
        token: Optional[ContinuationToken] = None,
        filters: Sequence[TagFilter] = (),
    ) -> PageResult[TagMapping]:
        """Fetches one page of tag mappings.

        Args:
            token: Continuation token from the previous page, or None for the first page.
            filters: Tag filters to apply remotely. Empty means no filtering.

        Returns:
            The page of tag mappings and the next token, if any.
        """
        pass

    @abc.abstractmethod
    def is_retryable(self, error: BaseException) -> bool:
        """Returns True if the error is transient and the fetch may be retried."""
        pass
