import io

import pytest
from rich.console import Console

from lambstock.domain.errors import ListingError
from lambstock.infrastructure.cli.display import ConsoleDisplay, align_columns


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def err():
    return io.StringIO()


@pytest.fixture
def console_display(out, err):
    """ConsoleDisplay writing plain text into buffers."""
    return ConsoleDisplay(
        console=Console(file=out, width=200, color_system=None, highlight=False),
        error_console=Console(file=err, width=200, color_system=None, highlight=False),
    )


def test_display_functions_aligns_columns(console_display: ConsoleDisplay, out):
    console_display.display_functions([
        ("api", "python3.12", "2 KB"),
        ("long-running-worker", "nodejs20.x", "1.5 MB"),
    ])

    lines = [line.rstrip() for line in out.getvalue().splitlines()]
    assert len(lines) == 2
    assert lines[0].startswith("api ")
    assert lines[0].index("python3.12") == lines[1].index("nodejs20.x")
    assert lines[0].index("2 KB") == lines[1].index("1.5 MB")


def test_display_functions_with_no_rows_prints_nothing(console_display: ConsoleDisplay, out):
    console_display.display_functions([])
    assert out.getvalue() == ""


def test_display_tag_keys_one_per_line(console_display: ConsoleDisplay, out):
    console_display.display_tag_keys(["env", "team", "[not-markup]"])
    assert out.getvalue().splitlines() == ["env", "team", "[not-markup]"]


def test_display_error_chain_prints_most_specific_first(console_display: ConsoleDisplay, err):
    root = ConnectionError("endpoint unreachable")
    middle = ValueError("bad page")
    middle.__cause__ = root

    console_display.display_error_chain(ListingError(middle))

    assert err.getvalue().splitlines() == ["endpoint unreachable", "bad page", "Failed to list functions"]


def test_display_error_chain_goes_to_stderr(console_display: ConsoleDisplay, out, err):
    error = ListingError(RuntimeError("Rate exceeded"))

    console_display.display_error_chain(error)

    assert out.getvalue() == ""
    assert err.getvalue().splitlines() == ["Rate exceeded", "Failed to list functions"]


def test_align_columns_pads_to_tab_stops():
    lines = align_columns([("api", "go1.x", "1 KB"), ("abcdefgh", "python3.12", "10 MB")])
    assert lines == [
        "api             go1.x           1 KB",
        "abcdefgh        python3.12      10 MB",
    ]


def test_long_rows_are_not_wrapped(console_display: ConsoleDisplay, out):
    name = "f" * 300
    console_display.display_functions([(name, "python3.12", "1 KB")])
    assert out.getvalue().splitlines() == [align_columns([(name, "python3.12", "1 KB")])[0]]
