"""Base class for minion tasks and their option contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

from minion.config import Settings
from minion.docblock import parse_docstring
from minion.domain import SiteContext, configure_domain
from minion.rendering import render
from minion.validation import Validation, ValidationResult


class ExecutionMode(str, Enum):
    """What the dispatcher does with a resolved task."""

    EXECUTE = "execute"
    SHOW_HELP = "show_help"


@dataclass(slots=True)
class TaskContext:
    """Process-level collaborators handed to a task after resolution."""

    program: str = "minion"
    settings: Settings = field(default_factory=Settings)
    task_index: Callable[[], list[str]] = list


class Task(ABC):
    """Interface that all minion tasks implement.

    Subclasses declare the options they accept in ``default_options`` and
    implement ``execute``. The class docstring is the task's help text;
    ``@tag text`` lines in it are shown as tags.
    """

    default_options: ClassVar[Mapping[str, Any]] = {}
    error_messages: ClassVar[Mapping[str, str]] = {}

    def __init__(self) -> None:
        self.identifier = ""
        self.mode = ExecutionMode.EXECUTE
        self.context = TaskContext()
        self.site: SiteContext | None = None
        self._options: dict[str, Any] = dict(self.default_options)
        self._accepted_options = frozenset(self.default_options)

    def __str__(self) -> str:
        return self.identifier or type(self).__name__

    @property
    def accepted_options(self) -> frozenset[str]:
        return self._accepted_options

    def set_options(self, options: Mapping[str, Any]) -> Task:
        """Overlay ``options`` on the current ones; supplied values win."""

        self._options.update(options)
        return self

    def get_options(self) -> dict[str, Any]:
        return dict(self._options)

    def build_validation(self, validation: Validation) -> Validation:
        """Add rules for validating options.

        Every supplied key must be one the task accepts. Override to add
        task-specific rules and call ``super()`` to keep this one.
        """

        for key in validation.data():
            validation.rule(key, self.valid_option, (":validation", ":field"))
        return validation

    def valid_option(self, validation: Validation, option: str) -> None:
        if option not in self._accepted_options:
            validation.error(option, "minion_option")

    def validate(self) -> ValidationResult:
        validation = self.build_validation(Validation(self.get_options()))
        return validation.result(self.error_messages)

    def help(self, params: Mapping[str, Any]) -> str:
        """Render help for this task from its docstring."""

        doc = parse_docstring(type(self))
        return render(
            "help/task",
            program=self.context.program,
            task=str(self),
            options=dict(self.default_options),
            description=doc.description,
            tags=doc.tags,
        )

    def set_domain_name(self, domain_name: str = "") -> SiteContext:
        """Configure the base URL this task builds links against.

        Falls back to ``MINION_DOMAIN_NAME``. Only the first call has an
        effect.
        """

        if self.site is None:
            self.site = configure_domain(domain_name, self.context.settings.domain_name)
        return self.site

    @abstractmethod
    def execute(self, params: dict[str, Any]) -> str | None:
        """Run the task with its validated options and return its output."""
