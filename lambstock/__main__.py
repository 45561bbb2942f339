"""Main entry point when executing lambstock as a package.

This allows running the package using python -m lambstock.
"""

from lambstock.main import cli_entry_point

if __name__ == "__main__":
    cli_entry_point()
