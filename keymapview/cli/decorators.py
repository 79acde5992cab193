"""Error reporting for keymap commands."""

import logging
import sys
import traceback
from collections.abc import Callable
from functools import wraps
from typing import Any, NoReturn

import typer

from keymapview.core.errors import FileSystemError, KeymapError
from keymapview.core.logging import get_struct_logger


__all__ = ["handle_errors", "print_stack_trace_if_verbose"]

logger = get_struct_logger(__name__)


def handle_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Turn keymap read and parse failures into exit status 1.

    File errors are logged as ``keymap_file_not_found`` or
    ``keymap_file_error`` with the path and failed operation. Parse failures
    are logged as ``keymap_parse_failed`` with the file and the parser's
    reasons.
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except typer.Exit:
            raise
        except FileSystemError as e:
            event = "keymap_file_not_found" if e.is_not_found else "keymap_file_error"
            logger.error(
                event, error=e.message, path=str(e.path), operation=e.operation
            )
            _exit(e)
        except KeymapError as e:
            logger.error("keymap_parse_failed", error=e.message, **e.context)
            _exit(e)
        except Exception as e:
            exc_info = logger.isEnabledFor(logging.DEBUG)
            logger.error("unexpected_error", error=str(e), exc_info=exc_info)
            _exit(e)

    return wrapper


def _exit(error: Exception) -> NoReturn:
    print_stack_trace_if_verbose()
    raise typer.Exit(1) from error


def print_stack_trace_if_verbose() -> None:
    """Print stack trace if verbose mode is enabled."""
    if any(arg in sys.argv for arg in ["-vv", "--debug"]):
        print("\nStack trace:", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)
