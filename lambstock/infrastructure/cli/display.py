import logging
from typing import Any, List, Optional, Sequence

from rich.console import Console
from rich.text import Text

from lambstock.domain.errors import iter_causes
from lambstock.domain.interfaces.user_interface import FunctionRow, UserInterface

logger = logging.getLogger(__name__)

TAB_WIDTH = 8


def _tab_stop(width: int) -> int:
    """Column width rounded up to the next tab stop, leaving at least one space."""
    return (width // TAB_WIDTH + 1) * TAB_WIDTH


def align_columns(rows: Sequence[Sequence[str]]) -> List[str]:
    """Pads every column but the last to a shared tab stop."""
    if not rows:
        return []
    column_count = max(len(row) for row in rows)
    widths = [
        _tab_stop(max((len(row[i]) for row in rows if i < len(row)), default=0))
        for i in range(column_count - 1)
    ]
    lines = []
    for row in rows:
        cells = [cell.ljust(widths[i]) if i < len(widths) else cell for i, cell in enumerate(row)]
        lines.append("".join(cells).rstrip())
    return lines


class ConsoleDisplay(UserInterface):
    """Concrete implementation of UserInterface using the rich library for console output."""

    def __init__(self, console: Optional[Console] = None, error_console: Optional[Console] = None):
        """Initializes the rich Consoles for stdout and stderr."""
        self._console = console or Console(highlight=False)
        self._error_console = error_console or Console(stderr=True, highlight=False)

    @property
    def console(self) -> Console:
        """Get the Rich console instance used for results."""
        return self._console

    @property
    def error_console(self) -> Console:
        """Get the Rich console instance used for errors."""
        return self._error_console

    def display_functions(self, rows: Sequence[FunctionRow], **kwargs: Any) -> None:
        """Displays function rows as column-aligned text, one function per line.

        Lines are never wrapped or cropped so the output stays usable in pipes.

        Args:
            rows: Rows of (name, runtime, size).
        """
        logger.debug(f"display_functions called with {len(rows)} row(s)")
        for line in align_columns(rows):
            self.console.print(Text(line), soft_wrap=True)

    def display_tag_keys(self, keys: Sequence[str], **kwargs: Any) -> None:
        """Displays tag keys, one per line."""
        for key in keys:
            self.console.print(Text(key), soft_wrap=True)

    def display_error_chain(self, error: BaseException, **kwargs: Any) -> None:
        """Displays the error chain on stderr, most specific cause first.

        Args:
            error: The top level error.
        """
        for cause in reversed(list(iter_causes(error))):
            self.error_console.print(Text(str(cause) or type(cause).__name__, style="red"), soft_wrap=True)
