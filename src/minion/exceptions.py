"""Outward-facing errors and the process-level error handler."""

from __future__ import annotations

import logging
import traceback
from collections.abc import Mapping

import click

logger = logging.getLogger(__name__)


class MinionError(Exception):
    """Base error carrying a message and a process exit code."""

    def __init__(self, message: str, code: int = 0) -> None:
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        return self.message

    def format_for_cli(self) -> str:
        return f"{type(self).__name__}: {self.message}\n"


class UnknownTaskError(MinionError):
    """Requested identifier has no matching, conforming task."""

    def __init__(self, identifier: str) -> None:
        super().__init__(f"Task '{identifier}' is not a valid minion task", code=1)
        self.identifier = identifier

    def format_for_cli(self) -> str:
        return f"ERROR: {self.message}\n"


class OptionRejectedError(MinionError):
    """Supplied options failed the task's option contract."""

    def __init__(self, task: str, errors: Mapping[str, str]) -> None:
        super().__init__(f"Invalid options for task '{task}': {', '.join(errors)}", code=1)
        self.task = task
        self.errors = dict(errors)


class TaskRuntimeError(MinionError):
    """Any failure raised while a task body was running."""

    @classmethod
    def wrap(cls, error: BaseException) -> TaskRuntimeError:
        wrapped = cls(str(error) or type(error).__name__, code=_error_code(error))
        wrapped.__cause__ = error
        return wrapped

    def format_for_cli(self) -> str:
        origin = self.__cause__
        name = type(origin).__name__ if origin is not None else type(self).__name__
        return f"{name} [ {self.code} ]: {self.message}\n"


class InvalidColorError(MinionError, ValueError):
    """Unknown terminal color name."""


def handle_exception(error: BaseException, *, show_traceback: bool = False) -> int:
    """Log and print ``error``, then return the exit code to terminate with.

    A failed command never reports success: a zero code becomes ``1``.
    """

    try:
        logger.error("Unhandled error: %s", error, exc_info=error)
        click.echo(render_error(error, show_traceback=show_traceback), nl=False)
        exit_code = error.code if isinstance(error, MinionError) else _error_code(error)
        return exit_code or 1
    except Exception as secondary:  # noqa: BLE001
        click.echo(f"{type(secondary).__name__}: {secondary}")
        return 1


def render_error(error: BaseException, *, show_traceback: bool = False) -> str:
    text = (
        error.format_for_cli()
        if isinstance(error, MinionError)
        else f"{type(error).__name__}: {error}\n"
    )
    if show_traceback:
        origin = error.__cause__ or error
        text += "".join(traceback.format_exception(type(origin), origin, origin.__traceback__))
    return text


def _error_code(error: BaseException) -> int:
    for attribute in ("code", "exit_code", "returncode"):
        value = getattr(error, attribute, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return 0
