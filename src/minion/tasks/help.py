"""Help task to display general instructions and list all tasks."""

from __future__ import annotations

from typing import Any

from minion.rendering import render
from minion.task import Task


class Help(Task):
    """Lists every available task.

    Run a task with --help to see its options and details.
    """

    def execute(self, params: dict[str, Any]) -> str:
        return render(
            "help/list",
            program=self.context.program,
            tasks=self.context.task_index(),
        )
