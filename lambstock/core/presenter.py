"""Sorting and formatting of the joined function listing.

Rendering itself is done by the UserInterface implementation; this module
only orders the rows and turns records into display strings.
"""

from typing import List, Optional, Sequence

from lambstock.domain.interfaces.user_interface import FunctionRow
from lambstock.domain.models.inventory import JoinedFunction, SortKey

SIZE_UNITS = ("B", "KB", "MB", "GB", "TB", "PB")


def human_size(size: Optional[int]) -> str:
    """Formats a byte count with binary multiples, e.g. 1024 -> '1 KB'."""
    value = float(size or 0)
    unit = SIZE_UNITS[0]
    for unit in SIZE_UNITS:
        # step up after rounding so 1023.999 KB shows as 1 MB
        if abs(round(value, 2)) < 1024 or unit == SIZE_UNITS[-1]:
            break
        value /= 1024
    if unit == SIZE_UNITS[0]:
        return f"{int(value)} {unit}"
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {unit}"


def sort_functions(functions: List[JoinedFunction], key: SortKey) -> None:
    """Sorts in place by the selected column."""
    if key is SortKey.NAME:
        functions.sort(key=lambda joined: joined.function.name or "")
    elif key is SortKey.RUNTIME:
        functions.sort(key=lambda joined: joined.function.runtime or "")
    elif key is SortKey.CODESIZE:
        # absent sizes sort first
        functions.sort(key=lambda joined: -1 if joined.function.code_size is None else joined.function.code_size)
    else:
        raise ValueError(f"Unsupported sort key: {key}")


def function_rows(functions: Sequence[JoinedFunction]) -> List[FunctionRow]:
    """Builds (name, runtime, size) rows.

    Every record must carry a name and a runtime.
    """
    rows: List[FunctionRow] = []
    for joined in functions:
        record = joined.function
        if record.name is None or record.runtime is None:
            raise ValueError(f"Function {record.arn} is missing a name or runtime")
        rows.append((record.name, record.runtime, human_size(record.code_size)))
    return rows
