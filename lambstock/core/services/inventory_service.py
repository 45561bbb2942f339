"""Application Service for building the function inventory.

Drains the function listing and the tag-mapping listing concurrently and
joins them by function ARN. Also produces the set of tag keys in use.
"""

import asyncio
import logging
from functools import partial
from typing import Dict, List, Sequence, Set

from lambstock.core.pagination import Paginator
from lambstock.domain.errors import ListingError, TagsError
from lambstock.domain.interfaces.inventory_source import FunctionSource, TagSource
from lambstock.domain.models.common import FunctionArn, TagKey
from lambstock.domain.models.inventory import FunctionRecord, JoinedFunction, TagFilter, TagMapping

logger = logging.getLogger(__name__)


class InventoryService:
    """Aggregates functions and their tags into a single view."""

    def __init__(self, function_source: FunctionSource, tag_source: TagSource, paginator: Paginator):
        """Initializes the InventoryService.

        Args:
            function_source: Paged access to the function listing.
            tag_source: Paged access to the tag-mapping listing.
            paginator: Drives each listing to completion under the retry policy.
        """
        self.function_source = function_source
        self.tag_source = tag_source
        self.paginator = paginator

    async def _all_functions(self) -> List[FunctionRecord]:
        try:
            return await self.paginator.drain(
                self.function_source.list_functions_page,
                self.function_source.is_retryable,
                endpoint_name="lambda.list_functions",
            )
        except Exception as e:
            raise ListingError(e) from e

    async def _all_tag_mappings(self, tag_filters: Sequence[TagFilter] = ()) -> List[TagMapping]:
        fetch_page = partial(self.tag_source.get_tag_mappings_page, filters=tuple(tag_filters))
        try:
            return await self.paginator.drain(
                fetch_page,
                self.tag_source.is_retryable,
                endpoint_name="tagging.get_resources",
            )
        except Exception as e:
            raise TagsError(e) from e

    async def list_functions(
        self,
        tag_filters: Sequence[TagFilter] = (),
        include_untagged: bool = False,
    ) -> List[JoinedFunction]:
        """Lists functions joined with their tags.

        Tag mappings without a matching function are dropped. Functions that
        have no tag mapping are only included when ``include_untagged`` is
        set and no tag filters are active.

        Raises:
            ListingError: The function listing failed.
            TagsError: The tag listing failed.
        """
        logger.info(f"Listing functions with {len(tag_filters)} tag filter(s)")
        mappings, functions = await asyncio.gather(
            self._all_tag_mappings(tag_filters),
            self._all_functions(),
        )
        return join_functions(functions, mappings, include_untagged=include_untagged and not tag_filters)

    async def tag_keys(self) -> List[TagKey]:
        """Returns every distinct tag key in use, sorted.

        Raises:
            TagsError: The tag listing failed.
        """
        mappings = await self._all_tag_mappings()
        return collect_tag_keys(mappings)


def join_functions(
    functions: Sequence[FunctionRecord],
    mappings: Sequence[TagMapping],
    include_untagged: bool = False,
) -> List[JoinedFunction]:
    """Joins tag mappings to functions by ARN, in tag-listing order."""
    lookup: Dict[FunctionArn, FunctionRecord] = {}
    for function in functions:
        lookup[function.arn] = function

    joined: List[JoinedFunction] = []
    tagged: Set[FunctionArn] = set()
    for mapping in mappings:
        function = lookup.get(mapping.resource_arn)
        if function is None:
            logger.debug(f"Dropping tag mapping for unknown function {mapping.resource_arn}")
            continue
        joined.append(JoinedFunction(function=function, tags=mapping.tags))
        tagged.add(mapping.resource_arn)

    if include_untagged:
        for arn, function in lookup.items():
            if arn not in tagged:
                joined.append(JoinedFunction(function=function))

    return joined


def collect_tag_keys(mappings: Sequence[TagMapping]) -> List[TagKey]:
    keys: Set[TagKey] = set()
    for mapping in mappings:
        for tag in mapping.tags:
            keys.add(tag.key)
    return sorted(keys)
