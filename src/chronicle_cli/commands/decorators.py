"""Decorators for command functions."""

import functools
import time
import traceback
from collections.abc import Callable

import typer

from chronicle_cli.errors import AppError, PersistenceError, ValidationError
from chronicle_cli.utils import exit_codes
from chronicle_cli.utils.formatters import format_error
from chronicle_cli.utils.logger import get_logger


def _exit_code_for(error: Exception) -> int:
    if isinstance(error, AppError):
        return error.exit_code
    if isinstance(error, ValidationError):
        return exit_codes.ERROR_INVALID_ARGS
    if isinstance(error, PersistenceError):
        return exit_codes.ERROR_STORAGE
    return exit_codes.ERROR_GENERAL


def command_wrapper(func: Callable):
    """Log command timing and turn errors into exit codes."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            result = func(*args, **kwargs)
            logger.info("command completed: %s (%.3fs)", cmd, time.monotonic() - start)
            return result

        except typer.Exit:
            raise

        except (AppError, ValidationError, PersistenceError) as e:
            code = _exit_code_for(e)
            logger.error(
                "command failed: %s (%.3fs) %s - %s",
                cmd,
                time.monotonic() - start,
                exit_codes.get_exit_code_name(code),
                e,
            )
            format_error(str(e))
            raise typer.Exit(code=code) from e

        except Exception as e:
            logger.error(
                "command failed: %s (%.3fs) - %s\n%s",
                cmd,
                time.monotonic() - start,
                e,
                traceback.format_exc(),
            )
            format_error(f"An unexpected error occurred: {e}")
            raise typer.Exit(code=exit_codes.ERROR_GENERAL) from e

    return wrapper
