"""
Error presentation and logging setup for the cmdpal CLI.

- Rich Console for user-facing error messages
- Stdlib logging for developer diagnostics
- Consistent formatting and exit codes
"""

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from cmdpal.exceptions import (
    CatalogLoadError,
    CmdpalError,
    EnvironmentUnavailableError,
    ExecutionError,
    ValidationError,
)

# Console for error display
console = Console(stderr=True, force_terminal=True, color_system="auto")

logger = logging.getLogger("cmdpal")


class ErrorSeverity(Enum):
    """Error severity levels for categorization"""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


_CATEGORY_LABELS: list[tuple[type[CmdpalError], str]] = [
    (ValidationError, "Validation"),
    (CatalogLoadError, "Catalog"),
    (EnvironmentUnavailableError, "Environment"),
    (ExecutionError, "Execution"),
]


def error_category(error: Exception) -> str:
    """Short label for the panel title."""
    for error_type, label in _CATEGORY_LABELS:
        if isinstance(error, error_type):
            return label
    return "Internal"


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[Path] = None
) -> None:
    """
    Set up logging for cmdpal

    Args:
        verbose: Enable verbose (DEBUG) logging
        quiet: Only show errors on the console
        log_file: Optional log file path (defaults to ~/.config/cmdpal/cmdpal.log)
    """
    if verbose:
        console_level = logging.DEBUG
    elif quiet:
        console_level = logging.ERROR
    else:
        console_level = logging.WARNING

    detailed_formatter = logging.Formatter(
        '%(asctime)s | %(name)s | %(levelname)s | %(funcName)s:%(lineno)d | %(message)s'
    )
    simple_formatter = logging.Formatter('%(levelname)s: %(message)s')

    logger.handlers.clear()
    logger.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(simple_formatter)
    logger.addHandler(console_handler)

    if log_file is None:
        from cmdpal.config.settings import get_log_path

        try:
            log_file = get_log_path()
        except OSError:
            return

    try:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(detailed_formatter)
        logger.addHandler(file_handler)
    except OSError as e:
        # If we can't create log file, continue without it
        if verbose:
            console.print(f"[yellow]Warning: Could not create log file {log_file}: {e}[/yellow]")


def handle_error(
    error: Exception,
    operation: str = "unknown",
    show_details: bool = False,
    exit_code: int = 1,
) -> None:
    """
    Log an error, show it to the user and exit

    Args:
        error: The exception to handle
        operation: Description of the operation that failed
        show_details: Whether to show the error context to the user
        exit_code: Process exit code
    """
    if isinstance(error, CmdpalError):
        logger.error(f"{operation}: {error}")
        details = error.context
        message = error.message
    else:
        logger.error(f"Unexpected error during {operation}: {error}", exc_info=True)
        details = {"error_type": type(error).__name__, "original_error": str(error)}
        message = f"An unexpected error occurred during {operation}"

    display_error(
        message,
        title=f"{error_category(error)} Error",
        details=details if show_details else None,
    )
    raise typer.Exit(exit_code)


def display_error(
    message: str,
    *,
    title: str = "Error",
    severity: ErrorSeverity = ErrorSeverity.ERROR,
    details: Optional[Dict[str, Any]] = None,
    suggestion: Optional[str] = None,
) -> None:
    """Display a message to the user in a Rich panel"""
    color = {
        ErrorSeverity.INFO: "blue",
        ErrorSeverity.WARNING: "yellow",
        ErrorSeverity.ERROR: "red",
    }[severity]

    text = Text()
    text.append(message, style=f"bold {color}")

    if details:
        details_text = "\n".join(f"• {k}: {v}" for k, v in details.items())
        text.append(f"\n\nDetails:\n{details_text}", style=f"dim {color}")

    if suggestion:
        text.append(f"\n\nSuggestion: {suggestion}", style="cyan")

    console.print(
        Panel(
            text,
            title=f"[bold]{title}[/bold]",
            title_align="left",
            border_style=color,
            padding=(0, 1),
        )
    )


def warn_user(message: str, suggestion: Optional[str] = None) -> None:
    """Display a warning message to the user"""
    display_error(message, title="Warning", severity=ErrorSeverity.WARNING, suggestion=suggestion)


def info_user(message: str, suggestion: Optional[str] = None) -> None:
    """Display an info message to the user"""
    display_error(message, title="Info", severity=ErrorSeverity.INFO, suggestion=suggestion)
