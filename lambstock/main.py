"""Main entry point for the lambstock application.

Sets up the Typer CLI application, performs dependency injection (Composition Root),
defines CLI commands, and delegates execution to the CommandHandler.
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Coroutine, Dict, List, NoReturn, Optional

import typer
from botocore.exceptions import BotoCoreError, ClientError
from typing_extensions import Annotated

# --- Core Layer ---
from lambstock.core.command_handler import EXIT_FAILURE, EXIT_OK, CommandHandler
from lambstock.core.pagination import Paginator
from lambstock.core.services.inventory_service import InventoryService
from lambstock.core.tag_filters import parse_tag_options

# --- Domain Layer ---
from lambstock.domain.errors import ArgumentError, InventoryError, SetupError
from lambstock.domain.models.inventory import SortKey

# --- Infrastructure Layer ---
# AWS
from lambstock.infrastructure.aws.lambda_source import LambdaFunctionSource
from lambstock.infrastructure.aws.session import client_config, create_session
from lambstock.infrastructure.aws.tagging_source import TaggingSource
# UI
from lambstock.infrastructure.cli.display import ConsoleDisplay
# Config
from lambstock.infrastructure.config.settings import (
    DEFAULT_CONFIG_FILE,
    get_config,
    get_credential_timeout,
    get_retry_policy,
    get_tagging_retryable_errors,
    load_configuration,
)
# Monitoring
from lambstock.infrastructure.monitoring.logger_setup import DEFAULT_LOG_FORMAT, level_from_verbosity, setup_logging
# Resilience
from lambstock.infrastructure.resilience.backoff import RetryExecutor

logger = logging.getLogger(__name__)


# --- Dependency Injection Container (Manual) ---

def create_dependencies(profile: Optional[str] = None, region: Optional[str] = None) -> Dict[str, Any]:
    """Creates and wires up all dependencies for one invocation.

    This acts as the Composition Root. The thread pool created here is the
    only executor blocking AWS calls run on; it is passed down explicitly.
    """
    logger.debug("Initializing application dependencies...")
    dependencies: Dict[str, Any] = {}

    dependencies['ui'] = ConsoleDisplay()

    try:
        session = create_session(
            profile=profile or get_config('aws.profile'),
            region=region or get_config('aws.region'),
            credential_timeout=get_credential_timeout(),
        )
        dependencies['function_source'] = LambdaFunctionSource(
            session.client('lambda', config=client_config()),
            page_size=int(get_config('lambda.page_size')),
        )
        dependencies['tag_source'] = TaggingSource(
            session.client('resourcegroupstaggingapi', config=client_config()),
            page_size=int(get_config('tagging.page_size')),
            retryable_error_codes=get_tagging_retryable_errors(),
        )
    except (BotoCoreError, ClientError) as e:
        raise SetupError(e) from e

    dependencies['executor'] = ThreadPoolExecutor(max_workers=2, thread_name_prefix="lambstock")

    dependencies['retry_executor'] = RetryExecutor(policy=get_retry_policy())
    dependencies['paginator'] = Paginator(dependencies['retry_executor'], dependencies['executor'])
    dependencies['inventory_service'] = InventoryService(
        function_source=dependencies['function_source'],
        tag_source=dependencies['tag_source'],
        paginator=dependencies['paginator'],
    )
    dependencies['command_handler'] = CommandHandler(
        inventory_service=dependencies['inventory_service'],
        ui=dependencies['ui'],
    )
    logger.debug("All dependencies initialized successfully.")
    return dependencies


# --- Typer App Definition ---
app = typer.Typer(
    name="lambstock",
    help="Stock management for your AWS Lambda functions.",
    add_completion=False,
    no_args_is_help=True,
)


def run_async(coro: Coroutine[Any, Any, int]) -> None:
    """Runs a command coroutine and exits with its status code."""
    try:
        exit_code = asyncio.run(coro)
    except Exception as e:
        logger.error(f"Unexpected error executing command: {e}", exc_info=True)
        raise
    if exit_code != EXIT_OK:
        raise typer.Exit(code=exit_code)


def _handler(ctx: typer.Context) -> CommandHandler:
    options = ctx.obj or {}
    try:
        dependencies = create_dependencies(profile=options.get('profile'), region=options.get('region'))
    except SetupError as e:
        logger.info(f"Setup failed: {e.cause!r}")
        _report_failure(e)
    executor: ThreadPoolExecutor = dependencies['executor']
    ctx.call_on_close(lambda: executor.shutdown(wait=False, cancel_futures=True))
    return dependencies['command_handler']


def _report_failure(error: InventoryError) -> NoReturn:
    ConsoleDisplay().display_error_chain(error)
    raise typer.Exit(code=EXIT_FAILURE)


# --- CLI Commands ---

TagOption = Annotated[
    Optional[List[str]],
    typer.Option("--tag", "-t", metavar="KEY=VALUE", help="Only list functions tagged KEY=VALUE. Repeatable."),
]
SortOption = Annotated[
    str,
    typer.Option("--sort", "-s", help="Sort by 'name', 'runtime' or 'codesize' (case-insensitive)."),
]
UntaggedOption = Annotated[
    bool,
    typer.Option("--include-untagged", help="Also list functions without any tags (ignored with --tag)."),
]


@app.command(name="list")
def list_command(
    ctx: typer.Context,
    tag: TagOption = None,
    sort: SortOption = SortKey.NAME.value,
    include_untagged: UntaggedOption = False,
):
    """Lists lambdas."""
    try:
        tag_pairs = parse_tag_options(tag or [])
        sort_key = SortKey.parse(sort)
    except ArgumentError as e:
        _report_failure(e)
        return
    handler = _handler(ctx)
    run_async(handler.handle_list(tag_pairs, sort_key, include_untagged=include_untagged))


app.command(name="ls", hidden=True, help="Alias for 'list'.")(list_command)


@app.command(name="tags")
def tags_command(ctx: typer.Context):
    """Lists lambdas tags."""
    handler = _handler(ctx)
    run_async(handler.handle_tags())


@app.callback()
def main_callback(
    ctx: typer.Context,
    region: Annotated[Optional[str], typer.Option("--region", help="AWS region to query.")] = None,
    profile: Annotated[Optional[str], typer.Option("--profile", help="AWS named profile to use.")] = None,
    config: Annotated[Path, typer.Option("--config", help="Path to a YAML configuration file.")] = DEFAULT_CONFIG_FILE,
    verbose: Annotated[int, typer.Option("--verbose", "-v", count=True, help="Increase log verbosity (-v, -vv).")] = 0,
):
    """Stock management for your AWS lambda."""
    load_configuration(config_file=config, reload=True)
    setup_logging(
        log_level=level_from_verbosity(verbose, get_config('logging.level')),
        log_format=get_config('logging.format', DEFAULT_LOG_FORMAT),
        log_file=get_config('logging.file'),
    )
    ctx.obj = {'region': region, 'profile': profile}
    logger.debug(f"Global options: region={region}, profile={profile}, config={config}")


# --- Main Execution Guard ---

def cli_entry_point():
    """Function to be called by the script entry point in pyproject.toml."""
    app()


if __name__ == "__main__":
    cli_entry_point()
