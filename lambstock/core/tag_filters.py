"""Converts ``--tag KEY=VALUE`` options into tag-listing filters."""

from typing import Iterable, List, Tuple

from lambstock.domain.errors import ArgumentError
from lambstock.domain.models.common import TagKey, TagValue
from lambstock.domain.models.inventory import TagFilter


def parse_tag_option(raw: str) -> Tuple[TagKey, TagValue]:
    """Splits a ``KEY=VALUE`` string on the first '='.

    The value may itself contain '=' or be empty; the key may not be empty.
    """
    key, sep, value = raw.partition("=")
    if not sep:
        raise ArgumentError(f"Invalid tag '{raw}': expected KEY=VALUE (no '=' found)")
    if not key:
        raise ArgumentError(f"Invalid tag '{raw}': tag key must not be empty")
    return TagKey(key), TagValue(value)


def parse_tag_options(raw_values: Iterable[str]) -> List[Tuple[TagKey, TagValue]]:
    return [parse_tag_option(raw) for raw in raw_values]


def build_tag_filters(pairs: Iterable[Tuple[str, str]]) -> List[TagFilter]:
    # one filter per pair, in command line order
    return [TagFilter(key=TagKey(key), values=(TagValue(value),)) for key, value in pairs]
