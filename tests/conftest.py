"""Shared test fixtures."""

from __future__ import annotations

import importlib
import logging
import sys
import textwrap
from pathlib import Path

import pytest

SAMPLE_TASKS: dict[str, str] = {
    "__init__.py": "",
    "greet.py": '''
        from minion.task import Task


        class Greet(Task):
            """
            Greets someone by name.

            @author Jane
            @internal
            """

            default_options = {"name": "world", "shout": "no"}

            def execute(self, params):
                text = f"Hello, {params['name']}!"
                return text.upper() if params["shout"] == "yes" else text
    ''',
    "db/__init__.py": "",
    "db/migrate.py": '''
        from minion.task import Task
        from minion.validation import digit


        class Migrate(Task):
            """Runs schema migrations up to a version."""

            default_options = {"version": None}
            error_messages = {"digit": "{field} must be a migration number"}

            def build_validation(self, validation):
                validation = super().build_validation(validation)
                if validation.data().get("version") is not None:
                    validation.rule("version", digit)
                return validation

            def execute(self, params):
                return f"migrated to {params['version'] or 'latest'}"
    ''',
    "fail.py": '''
        from minion.task import Task


        class CodedError(Exception):
            def __init__(self, message, code):
                super().__init__(message)
                self.code = code


        class Fail(Task):
            default_options = {"code": "0"}

            def execute(self, params):
                raise CodedError("boom", int(params["code"]))
    ''',
    "plain.py": '''
        class NotATask:
            def execute(self, params):
                return "should never run"


        TASK = NotATask
    ''',
    "_private.py": "",
    "notes.txt": "not a task",
}


def _write_package(root: Path, name: str, files: dict[str, str]) -> None:
    for relative, content in files.items():
        path = root / name / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")


def _purge_modules(name: str) -> None:
    for module in list(sys.modules):
        if module == name or module.startswith(f"{name}."):
            del sys.modules[module]


@pytest.fixture()
def task_package(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Importable package ``sample_tasks`` with a handful of tasks on disk."""

    name = "sample_tasks"
    _write_package(tmp_path, name, SAMPLE_TASKS)
    monkeypatch.syspath_prepend(str(tmp_path))
    importlib.invalidate_caches()
    _purge_modules(name)
    yield name
    _purge_modules(name)


@pytest.fixture()
def make_package(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Factory writing extra task packages below ``tmp_path``."""

    created: list[str] = []
    monkeypatch.syspath_prepend(str(tmp_path))

    def _make(name: str, files: dict[str, str]) -> str:
        _write_package(tmp_path, name, {"__init__.py": "", **files})
        importlib.invalidate_caches()
        _purge_modules(name)
        created.append(name)
        return name

    yield _make
    for name in created:
        _purge_modules(name)


@pytest.fixture(autouse=True)
def _reset_minion_logger():
    yield
    logger = logging.getLogger("minion")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
