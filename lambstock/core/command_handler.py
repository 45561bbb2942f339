"""Command Handler: Orchestrates CLI command execution.

Receives validated options from the main entry point (main.py), delegates
the work to the InventoryService and hands results to the UserInterface.
Returns the process exit code.
"""

import logging
from typing import Sequence, Tuple

from lambstock.core.presenter import function_rows, sort_functions
from lambstock.core.services.inventory_service import InventoryService
from lambstock.core.tag_filters import build_tag_filters
from lambstock.domain.errors import InventoryError, iter_causes
from lambstock.domain.interfaces.user_interface import UserInterface
from lambstock.domain.models.inventory import SortKey

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


class CommandHandler:
    """Handles incoming commands and delegates to the inventory service."""

    def __init__(self, inventory_service: InventoryService, ui: UserInterface):
        self.inventory_service = inventory_service
        self.ui = ui

    async def handle_list(
        self,
        tag_pairs: Sequence[Tuple[str, str]] = (),
        sort_key: SortKey = SortKey.NAME,
        include_untagged: bool = False,
    ) -> int:
        """Handles the 'list' command."""
        logger.info(f"Handling 'list' command: tags={list(tag_pairs)}, sort={sort_key.value}")
        filters = build_tag_filters(tag_pairs)
        try:
            functions = await self.inventory_service.list_functions(filters, include_untagged=include_untagged)
        except InventoryError as e:
            return self.report_failure(e)

        sort_functions(functions, sort_key)
        self.ui.display_functions(function_rows(functions))
        return EXIT_OK

    async def handle_tags(self) -> int:
        """Handles the 'tags' command."""
        logger.info("Handling 'tags' command")
        try:
            keys = await self.inventory_service.tag_keys()
        except InventoryError as e:
            return self.report_failure(e)

        self.ui.display_tag_keys(keys)
        return EXIT_OK

    def report_failure(self, error: InventoryError) -> int:
        logger.info(f"Command failed: {' <- '.join(type(c).__name__ for c in iter_causes(error))}")
        self.ui.display_error_chain(error)
        return EXIT_FAILURE
