"""CLI utilities."""

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import click

from nscover.config.loader import get_database_path, load_config
from nscover.config.models import NscoverConfig
from nscover.core.errors import NscoverError
from nscover.core.logging import configure_logging, get_log_file_path, get_logger
from nscover.store.db import Database
from nscover.store.selection import SelectionStore
from nscover.workspace import CoverageWorkspace

log = get_logger("cli")


@contextmanager
def cli_errors() -> Iterator[None]:
    """Report typed errors as click failures instead of tracebacks.

    When logging writes to a file, the message points at it.
    """
    try:
        yield
    except NscoverError as e:
        log.info("command_failed", **e.to_dict())
        message = e.message
        log_file = get_log_file_path()
        if log_file is not None:
            message = f"{message}\nSee {log_file} for details."
        raise click.ClickException(message) from e


def load_cli_config(solution_dir: Path | None = None) -> NscoverConfig:
    """Load config and apply its logging section.

    ``-v`` on the command group still forces DEBUG.
    """
    config = load_config(solution_dir)
    logging_config = config.logging
    ctx = click.get_current_context(silent=True)
    if ctx is not None and (ctx.find_root().obj or {}).get("verbose"):
        logging_config = logging_config.model_copy(update={"level": "DEBUG"})
    configure_logging(config=logging_config)
    return config


def open_store(config: NscoverConfig) -> SelectionStore:
    db = Database(get_database_path(config), busy_timeout_ms=config.database.busy_timeout_ms)
    store = SelectionStore(db)
    store.initialize()
    return store


def open_workspace(solution: Path) -> CoverageWorkspace:
    """Load config for the solution's directory, open the store, load the solution.

    Raises:
        click.ClickException: If config, store or solution cannot be read.
    """
    with cli_errors():
        config = load_cli_config(solution.resolve().parent)
        workspace = CoverageWorkspace(open_store(config), config)
        workspace.load_solution(solution)
    return workspace


def solution_key(path: Path) -> str:
    """Key under which a solution's records are stored."""
    return str(path.expanduser().resolve())
