"""Inventory domain models: functions, tag mappings and their joined view.

Also holds the pagination and retry value objects shared by the core
services and the AWS adapters.
"""

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Optional, Tuple, TypeVar

from lambstock.domain.errors import ArgumentError
from lambstock.domain.models.common import (
    ContinuationToken,
    FunctionArn,
    FunctionName,
    RuntimeId,
    TagKey,
    TagValue,
    is_terminal_token,
)

T = TypeVar("T")


@dataclass(frozen=True)
class FunctionRecord:
    """A deployed function as reported by the function listing."""
    arn: FunctionArn
    name: Optional[FunctionName] = None
    runtime: Optional[RuntimeId] = None
    code_size: Optional[int] = None


@dataclass(frozen=True)
class Tag:
    key: TagKey
    value: TagValue


@dataclass(frozen=True)
class TagMapping:
    """Tags attached to one resource, in the order the API returned them."""
    resource_arn: FunctionArn
    tags: Tuple[Tag, ...] = ()


@dataclass
class JoinedFunction:
    """A function together with the tags found for it."""
    function: FunctionRecord
    tags: Tuple[Tag, ...] = ()


@dataclass(frozen=True)
class PageResult(Generic[T]):
    """One page of a listing plus the token for the next page, if any."""
    items: Tuple[T, ...] = ()
    next_token: Optional[ContinuationToken] = None

    @property
    def is_last(self) -> bool:
        return is_terminal_token(self.next_token)


@dataclass(frozen=True)
class TagFilter:
    """A single tag filter: one key and the set of accepted values."""
    key: TagKey
    values: Tuple[TagValue, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class RetryPolicy:
    """Exponential backoff settings.

    The delay before retry number ``attempt`` (zero based) is
    ``base_delay * 2 ** attempt`` seconds, scaled by a uniform factor in
    [0, 1] when ``jitter`` is enabled.
    """
    base_delay: float = 0.1
    jitter: bool = True
    max_retries: int = 15

    def delay_for(self, attempt: int, rng: Optional[random.Random] = None) -> float:
        delay = self.base_delay * (2 ** attempt)
        if self.jitter:
            delay *= (rng or random).random()
        return delay


class SortKey(str, Enum):
    """Column used to order the function listing."""
    NAME = "name"
    RUNTIME = "runtime"
    CODESIZE = "codesize"

    @classmethod
    def parse(cls, text: str) -> "SortKey":
        try:
            return cls(text.strip().lower())
        except ValueError:
            choices = ", ".join(member.value for member in cls)
            raise ArgumentError(f"Invalid sort key '{text}'. Choose one of: {choices}.") from None
