"""Dispatch a resolved task to either its help view or its execution body."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import click

from minion.arguments import parse
from minion.config import Settings
from minion.exceptions import OptionRejectedError, TaskRuntimeError, handle_exception
from minion.registry import TaskRegistry
from minion.rendering import render
from minion.task import ExecutionMode, Task

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DispatchResult:
    """Text produced by one dispatch and the exit code it implies."""

    output: str
    exit_code: int = 0


class Dispatcher:
    """Runs exactly one task in the mode chosen at resolution time."""

    def dispatch(self, task: Task) -> DispatchResult:
        options = task.get_options()
        if task.mode is ExecutionMode.SHOW_HELP:
            # Help renders whatever options were supplied, valid or not.
            return DispatchResult(output=self._guarded(task.help, options))

        result = task.validate()
        if not result.is_valid:
            rejected = OptionRejectedError(str(task), result.errors)
            logger.info("%s", rejected)
            return DispatchResult(
                output=render("error/validation", task=rejected.task, errors=rejected.errors),
                exit_code=rejected.code,
            )
        logger.debug("Executing task %s", task)
        return DispatchResult(output=self._guarded(task.execute, options))

    @staticmethod
    def _guarded(body: Callable[[dict], str | None], options: dict) -> str:
        try:
            output = body(options)
        except Exception as error:
            raise TaskRuntimeError.wrap(error) from error
        return "" if output is None else str(output)


def run(
    raw_args: Sequence[str],
    settings: Settings | None = None,
    registry: TaskRegistry | None = None,
) -> int:
    """Parse ``raw_args``, resolve and dispatch the task, return the exit code."""

    show_traceback = False
    try:
        settings = settings or Settings.from_env()
        show_traceback = settings.logging.show_traceback
        parsed = parse(raw_args)
        if registry is None:
            registry = TaskRegistry.from_settings(settings, program=parsed.program)
        else:
            registry.context.program = parsed.program
        resolved = registry.resolve(parsed)
        result = Dispatcher().dispatch(resolved.task)
    except Exception as error:  # noqa: BLE001
        return handle_exception(error, show_traceback=show_traceback)

    _emit(result.output)
    return result.exit_code


def _emit(text: str) -> None:
    if text:
        click.echo(text, nl=not text.endswith("\n"))
