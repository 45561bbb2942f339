"""Defines common Value Objects used across the inventory domain.

These objects represent simple values like ARNs, continuation tokens and
tag keys, giving semantic names to what are plain strings at runtime.
"""

from typing import NewType, Optional

# === Core Value Objects ===

FunctionArn = NewType("FunctionArn", str)        # Join key shared by both listings
FunctionName = NewType("FunctionName", str)
RuntimeId = NewType("RuntimeId", str)            # e.g. 'python3.12', 'nodejs20.x'
ContinuationToken = NewType("ContinuationToken", str)  # Opaque pagination cursor
TagKey = NewType("TagKey", str)
TagValue = NewType("TagValue", str)

# === Remote Resource Types ===
LAMBDA_FUNCTION_RESOURCE_TYPE = "lambda:function"


def is_terminal_token(token: Optional[str]) -> bool:
    """A missing or empty continuation token marks the last page."""
    return not token
