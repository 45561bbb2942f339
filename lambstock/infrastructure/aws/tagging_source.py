"""TagSource backed by the Resource Groups Tagging ``GetResources`` API."""

import logging
from typing import Any, Dict, Iterable, Optional, Sequence

from lambstock.domain.interfaces.inventory_source import TagSource
from lambstock.domain.models.common import (
    LAMBDA_FUNCTION_RESOURCE_TYPE,
    ContinuationToken,
    FunctionArn,
    TagKey,
    TagValue,
)
from lambstock.domain.models.inventory import PageResult, Tag, TagFilter, TagMapping
from lambstock.infrastructure.aws.lambda_source import error_code

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50
DEFAULT_RETRYABLE_ERROR_CODES = ("InvalidParameterException",)


class TaggingSource(TagSource):
    """Lists Lambda tag mappings with a boto3 ``resourcegroupstaggingapi`` client."""

    def __init__(
        self,
        client: Any,
        page_size: int = DEFAULT_PAGE_SIZE,
        retryable_error_codes: Iterable[str] = DEFAULT_RETRYABLE_ERROR_CODES,
    ):
        self.client = client
        self.page_size = page_size
        self.retryable_error_codes = frozenset(retryable_error_codes)
        logger.debug(f"TaggingSource retryable codes: {sorted(self.retryable_error_codes)}")

    def get_tag_mappings_page(
        self,
        token: Optional[ContinuationToken] = None,
        filters: Sequence[TagFilter] = (),
    ) -> PageResult[TagMapping]:
        request: Dict[str, Any] = {
            "ResourceTypeFilters": [LAMBDA_FUNCTION_RESOURCE_TYPE],
            "ResourcesPerPage": self.page_size,
        }
        if token:
            request["PaginationToken"] = token
        if filters:
            request["TagFilters"] = [{"Key": f.key, "Values": list(f.values)} for f in filters]
        response = self.client.get_resources(**request)
        mappings = tuple(self._to_mapping(item) for item in response.get("ResourceTagMappingList") or [])
        return PageResult(items=mappings, next_token=response.get("PaginationToken"))

    def is_retryable(self, error: BaseException) -> bool:
        return error_code(error) in self.retryable_error_codes

    @staticmethod
    def _to_mapping(item: Dict[str, Any]) -> TagMapping:
        tags = tuple(
            Tag(key=TagKey(tag.get("Key", "")), value=TagValue(tag.get("Value", "")))
            for tag in item.get("Tags") or []
        )
        return TagMapping(resource_arn=FunctionArn(item.get("ResourceARN") or ""), tags=tags)
