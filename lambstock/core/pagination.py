"""Drains a paginated listing to completion.

Each page fetch is a blocking boto3 call, run on the executor handed in at
construction and wrapped by the RetryExecutor. Pages are fetched strictly
one after another because each request needs the previous page's token.
"""

import asyncio
import logging
from concurrent.futures import Executor
from typing import Callable, List, Optional, TypeVar

from lambstock.domain.models.common import ContinuationToken
from lambstock.domain.models.inventory import PageResult
from lambstock.infrastructure.resilience.backoff import RetryExecutor, RetryPredicate

logger = logging.getLogger(__name__)

T = TypeVar("T")

PageFetcher = Callable[[Optional[ContinuationToken]], PageResult[T]]


class Paginator:
    """Concatenates every page of a listing, in fetch order."""

    def __init__(self, retry_executor: RetryExecutor, executor: Optional[Executor] = None):
        self.retry_executor = retry_executor
        self.executor = executor

    async def drain(
        self,
        fetch_page: PageFetcher,
        is_retryable: RetryPredicate,
        initial_token: Optional[ContinuationToken] = None,
        endpoint_name: str = "listing",
    ) -> List[T]:
        """Fetches pages until one carries no continuation token.

        Args:
            fetch_page: Blocking callable taking the current token.
            is_retryable: Predicate for errors worth retrying.
            initial_token: Token to start from, normally None.
            endpoint_name: Name used in log messages.

        Returns:
            All items from all pages.

        Raises:
            Exception: The first error that is not retried away.
        """
        loop = asyncio.get_running_loop()
        items: List[T] = []
        token = initial_token
        page_number = 0

        while True:
            page_number += 1

            def fetch(current=token):
                return loop.run_in_executor(self.executor, fetch_page, current)

            page: PageResult[T] = await self.retry_executor.execute(
                fetch, is_retryable, endpoint_name=f"{endpoint_name}[page {page_number}]"
            )
            items.extend(page.items)
            logger.debug(f"{endpoint_name}: page {page_number} returned {len(page.items)} item(s)")

            if page.is_last:
                break
            token = page.next_token

        logger.info(f"{endpoint_name}: fetched {len(items)} item(s) across {page_number} page(s)")
        return items
