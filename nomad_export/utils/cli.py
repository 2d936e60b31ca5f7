"""CLI utilities for error handling."""

import functools
import logging
from typing import Callable, TypeVar

import typer
from rich.markup import escape

from ..exceptions import ConfigurationError, NomadExportError
from .output import console

F = TypeVar('F', bound=Callable)

logger = logging.getLogger("nomad_export.cli")


def handle_cli_errors(action: str) -> Callable[[F], F]:
    """Decorator that turns nomad-export errors into a message and exit code 1.

    Configuration problems are printed to the console since they happen
    before logging matters; everything else is logged, so --silent hides it.

    Args:
        action: Description of the action being performed (e.g., "exporting data")

    Example:
        @handle_cli_errors("exporting data")
        def export(...):
            ...
    """
    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except typer.Exit:
                raise
            except ConfigurationError as e:
                console.print(f"[red]Error: {escape(str(e))}[/red]")
                raise typer.Exit(1) from e
            except NomadExportError as e:
                logger.error("error %s: %s", action, e)
                raise typer.Exit(1) from e
        return wrapper  # type: ignore[return-value]
    return decorator
