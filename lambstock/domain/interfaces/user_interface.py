"""Interface for presenting inventory results to the user.

Defines the contract for rendering function rows, tag keys and error
chains, allowing different output implementations (e.g., console, tests).
"""

import abc
from typing import Any, Sequence, Tuple

FunctionRow = Tuple[str, str, str]  # (name, runtime, human readable size)


class UserInterface(abc.ABC):
    """Abstract Base Class for user-facing output."""

    @abc.abstractmethod
    def display_functions(self, rows: Sequence[FunctionRow], **kwargs: Any) -> None:
        """Displays the function listing as aligned columns.

        Args:
            rows: Already sorted rows of (name, runtime, size).
            **kwargs: Additional arguments for formatting.
        """
        pass

    @abc.abstractmethod
    def display_tag_keys(self, keys: Sequence[str], **kwargs: Any) -> None:
        """Displays tag keys, one per line.

        Args:
            keys: Sorted, de-duplicated tag keys.
            **kwargs: Additional arguments for formatting.
        """
        pass

    @abc.abstractmethod
    def display_error_chain(self, error: BaseException, **kwargs: Any) -> None:
        """Displays an error and every wrapped cause, one per line.

        Args:
            error: The top level error.
            **kwargs: Additional arguments for formatting.
        """
        pass
