"""Task registry: maps task identifiers to task implementations."""

from __future__ import annotations

import importlib
import inspect
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path
from types import ModuleType
from typing import Any

from minion.arguments import ParsedArguments
from minion.config import DEFAULT_TASK_PACKAGE, Settings
from minion.exceptions import UnknownTaskError
from minion.listing import compile_task_list, list_files
from minion.task import ExecutionMode, Task, TaskContext

logger = logging.getLogger(__name__)

DEFAULT_TASK = "help"
HELP_OPTION = "help"
TASK_OPTION = "task"

TaskFactory = Callable[[], Any]
ModuleNaming = Callable[[str, str, str], str | None]


def default_module_name(package: str, identifier: str, separator: str) -> str | None:
    """Map ``db:migrate`` in ``package`` to ``<package>.db.migrate``."""

    parts = [part.strip().lower() for part in identifier.split(separator)]
    if not all(part.isidentifier() for part in parts):
        return None
    return ".".join([package, *parts])


@dataclass(slots=True)
class ResolvedTask:
    """Task instance built for one invocation and the options it received."""

    task: Task
    options: dict[str, Any] = field(default_factory=dict)


class TaskRegistry:
    """Resolves identifiers to tasks.

    Explicit registrations win over module discovery. Discovery looks for a
    module named after the identifier in each configured package, in order.
    """

    def __init__(
        self,
        packages: Iterable[str] = (),
        *,
        separator: str = ":",
        naming: ModuleNaming = default_module_name,
        default_task: str = DEFAULT_TASK,
        context: TaskContext | None = None,
    ) -> None:
        packages = tuple(packages)
        # Built-in tasks, help included, are always the last place to look.
        if DEFAULT_TASK_PACKAGE not in packages:
            packages += (DEFAULT_TASK_PACKAGE,)
        self.packages = packages
        self.separator = separator
        self.naming = naming
        self.default_task = default_task
        self.context = context or TaskContext(task_index=self.task_index)
        self._factories: dict[str, TaskFactory] = {}

    @classmethod
    def from_settings(cls, settings: Settings, program: str = "minion") -> TaskRegistry:
        registry = cls(settings.tasks.packages, separator=settings.tasks.separator)
        registry.context.program = program
        registry.context.settings = settings
        return registry

    def register(self, identifier: str, factory: TaskFactory) -> TaskFactory:
        self._factories[identifier.lower()] = factory
        return factory

    def lookup(self, identifier: str) -> TaskFactory | None:
        key = identifier.lower()
        if key in self._factories:
            return self._factories[key]
        for package in self.packages:
            module_name = self.naming(package, key, self.separator)
            if module_name is None:
                continue
            module = _import_optional(module_name)
            if module is not None:
                return _task_from_module(module)
        return None

    def resolve(self, parsed: ParsedArguments) -> ResolvedTask:
        """Build the task requested by ``parsed``.

        The identifier comes from ``--task``, else the first positional
        value, else the default help task. Leftover positional values are
        passed on as options keyed by their position.
        """

        options: dict[str, Any] = dict(parsed.named)
        positional = list(parsed.positional)
        start = 0
        if options.get(TASK_OPTION) is not None:
            identifier = options.pop(TASK_OPTION)
        elif positional:
            identifier = positional.pop(0)
            start = 1
        else:
            identifier = self.default_task
        for index, value in enumerate(positional, start):
            options.setdefault(str(index), value)

        show_help = HELP_OPTION in options
        options.pop(HELP_OPTION, None)

        factory = self.lookup(identifier)
        task = factory() if factory is not None else None
        if not isinstance(task, Task):
            raise UnknownTaskError(identifier)

        task.identifier = identifier.lower()
        task.context = self.context
        task.set_options(options)
        if show_help:
            task.mode = ExecutionMode.SHOW_HELP
        logger.debug("Resolved task %s (%s)", task.identifier, task.mode.value)
        return ResolvedTask(task=task, options=options)

    def task_index(self) -> list[str]:
        """List every available task identifier, sorted."""

        identifiers = set(self._factories)
        for package in self.packages:
            module = _import_optional(package)
            if module is None:
                logger.warning("Task package %s cannot be imported", package)
                continue
            for path in getattr(module, "__path__", ()):
                identifiers.update(compile_task_list(list_files(Path(path)), "", self.separator))
        return sorted(identifiers)


def _import_optional(module_name: str) -> ModuleType | None:
    try:
        return importlib.import_module(module_name)
    except ModuleNotFoundError as error:
        # Only a missing task module means "no such task"; a task module
        # failing on its own imports is a real error.
        if error.name and (module_name == error.name or module_name.startswith(f"{error.name}.")):
            return None
        raise


def _task_from_module(module: ModuleType) -> TaskFactory | None:
    declared = getattr(module, "TASK", None)
    if declared is not None:
        return declared if callable(declared) else None
    candidates = [
        value
        for value in vars(module).values()
        if inspect.isclass(value)
        and issubclass(value, Task)
        and value.__module__ == module.__name__
        and not inspect.isabstract(value)
    ]
    return candidates[0] if len(candidates) == 1 else None
