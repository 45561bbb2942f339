"""FunctionSource backed by the Lambda ``ListFunctions`` API."""

import logging
from typing import Any, Dict, Optional

from botocore.exceptions import ClientError

from lambstock.domain.interfaces.inventory_source import FunctionSource
from lambstock.domain.models.common import ContinuationToken, FunctionArn, FunctionName, RuntimeId
from lambstock.domain.models.inventory import FunctionRecord, PageResult

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100
RETRYABLE_ERROR_CODES = frozenset({"TooManyRequestsException"})


def error_code(error: BaseException) -> Optional[str]:
    """Extracts the AWS error code from a botocore ClientError."""
    if isinstance(error, ClientError):
        return error.response.get("Error", {}).get("Code")
    return None


class LambdaFunctionSource(FunctionSource):
    """Lists functions with a boto3 ``lambda`` client."""

    def __init__(self, client: Any, page_size: int = DEFAULT_PAGE_SIZE):
        self.client = client
        self.page_size = page_size

    def list_functions_page(self, token: Optional[ContinuationToken] = None) -> PageResult[FunctionRecord]:
        request: Dict[str, Any] = {"MaxItems": self.page_size}
        if token:
            request["Marker"] = token
        response = self.client.list_functions(**request)
        records = tuple(self._to_record(item) for item in response.get("Functions") or [])
        return PageResult(items=records, next_token=response.get("NextMarker"))

    def is_retryable(self, error: BaseException) -> bool:
        return error_code(error) in RETRYABLE_ERROR_CODES

    @staticmethod
    def _to_record(item: Dict[str, Any]) -> FunctionRecord:
        name = item.get("FunctionName")
        runtime = item.get("Runtime")
        return FunctionRecord(
            arn=FunctionArn(item.get("FunctionArn") or ""),
            name=FunctionName(name) if name is not None else None,
            runtime=RuntimeId(runtime) if runtime is not None else None,
            code_size=item.get("CodeSize"),
        )
