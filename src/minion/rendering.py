"""Text views for help listings, task help and validation errors."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

HELP_LIST_TEMPLATE = """\
Minion is a cli tool for performing tasks

Usage

    {program} {{task}} [--option=value ...]

Where {{task}} is one of the following:

{tasks}

For more information on what a task does and usage details execute

    {program} {{task}} --help
"""

HELP_TASK_TEMPLATE = """\
Usage
=====

    {program} {task} {usage}

Options
=======

{options}

Details
=======

{description}
{tags}"""

VALIDATION_ERROR_TEMPLATE = """\
Parameter Errors for '{task}':
{errors}
"""


def _render_help_list(values: Mapping[str, Any]) -> str:
    tasks: Sequence[str] = values.get("tasks", ())
    listing = "\n".join(f"  * {task}" for task in tasks) or "  (no tasks found)"
    return HELP_LIST_TEMPLATE.format(program=values.get("program", "minion"), tasks=listing)


def _render_help_task(values: Mapping[str, Any]) -> str:
    options: Mapping[str, Any] = values.get("options", {})
    tags: Mapping[str, str] = values.get("tags", {})
    usage = " ".join(f"[--{name}=value]" for name in options) or "[--help]"
    option_lines = "\n".join(
        f"  --{name}" + ("" if default is None else f" (default: {default})")
        for name, default in options.items()
    )
    tag_lines = "".join(f"\n  {name}: {text}".rstrip() for name, text in tags.items())
    return HELP_TASK_TEMPLATE.format(
        program=values.get("program", "minion"),
        task=values["task"],
        usage=usage,
        options=option_lines or "  This task accepts no options.",
        description=values.get("description") or "No description available.",
        tags=f"{tag_lines}\n" if tag_lines else "",
    )


def _render_validation_errors(values: Mapping[str, Any]) -> str:
    errors: Mapping[str, str] = values.get("errors", {})
    lines = "\n".join(f"  --{field}: {message}" for field, message in errors.items())
    return VALIDATION_ERROR_TEMPLATE.format(task=values["task"], errors=lines)


VIEWS: dict[str, Callable[[Mapping[str, Any]], str]] = {
    "help/list": _render_help_list,
    "help/task": _render_help_task,
    "error/validation": _render_validation_errors,
}


def render(name: str, **values: Any) -> str:
    """Render the view registered under ``name``; unknown names raise ``KeyError``."""

    try:
        view = VIEWS[name]
    except KeyError:
        raise KeyError(f"Unknown view: {name}") from None
    return view(values)
