"""Runtime configuration for the task runner."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_TASK_PACKAGE = "minion.tasks"
DEFAULT_TASK_SEPARATOR = ":"


@dataclass(slots=True)
class TaskSettings:
    """Where tasks are looked up and how their identifiers are joined."""

    packages: tuple[str, ...] = (DEFAULT_TASK_PACKAGE,)
    separator: str = DEFAULT_TASK_SEPARATOR


@dataclass(slots=True)
class LoggingSettings:
    """Logging destination and verbosity."""

    level: str = "warning"
    log_file: Path | None = None
    show_traceback: bool = False


@dataclass(slots=True)
class Settings:
    """Application settings grouped by concern."""

    tasks: TaskSettings = field(default_factory=TaskSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    domain_name: str = ""

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from environment with defaults suitable for local use."""

        log_file = os.getenv("MINION_LOG_FILE", "").strip()
        return cls(
            tasks=TaskSettings(
                packages=_collect_packages(),
                separator=os.getenv("MINION_TASK_SEPARATOR", DEFAULT_TASK_SEPARATOR),
            ),
            logging=LoggingSettings(
                level=os.getenv("MINION_LOG_LEVEL", "warning").strip().lower() or "warning",
                log_file=Path(log_file) if log_file else None,
                show_traceback=_env_bool("MINION_TRACEBACK", default=False),
            ),
            domain_name=os.getenv("MINION_DOMAIN_NAME", "").strip(),
        )

    def validate(self) -> None:
        """Raise configuration error if task lookup settings are unusable."""

        separator = self.tasks.separator
        if not separator:
            raise ValueError("MINION_TASK_SEPARATOR must not be empty.")
        if "." in separator or any(char.isspace() for char in separator):
            raise ValueError(
                f"MINION_TASK_SEPARATOR must not contain dots or whitespace: {separator!r}",
            )
        if not self.tasks.packages:
            raise ValueError("At least one task package is required. Set MINION_TASK_PACKAGES.")


def _collect_packages() -> tuple[str, ...]:
    raw = os.getenv("MINION_TASK_PACKAGES")
    if raw is None:
        return (DEFAULT_TASK_PACKAGE,)
    packages: list[str] = []
    for part in raw.split(","):
        name = part.strip()
        if name and name not in packages:
            packages.append(name)
    return tuple(packages)


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"Invalid boolean value for {name}: {value!r}")
