from __future__ import annotations

import allure
import pytest

from minion.arguments import parse
from minion.config import Settings, TaskSettings
from minion.dispatcher import Dispatcher, run
from minion.exceptions import TaskRuntimeError
from minion.registry import TaskRegistry
from minion.task import Task

pytestmark = [
    allure.epic("Task Runner"),
    allure.feature("Dispatch"),
]


class Recorder(Task):
    """Records that it ran."""

    default_options = {"level": "1"}

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[dict] = []

    def execute(self, params):
        self.calls.append(params)
        return None


def _settings(*packages: str) -> Settings:
    return Settings(tasks=TaskSettings(packages=packages))


def _resolve(package: str, *args: str) -> Task:
    return TaskRegistry([package]).resolve(parse(["minion", *args])).task


def test_execute_passes_merged_options_to_body() -> None:
    task = Recorder().set_options({"level": "3"})

    result = Dispatcher().dispatch(task)

    assert result.exit_code == 0
    assert result.output == ""
    assert task.calls == [{"level": "3"}]


def test_unknown_option_is_rejected_and_body_not_run() -> None:
    task = Recorder().set_options({"bogus": "x"})

    result = Dispatcher().dispatch(task)

    assert result.exit_code == 1
    assert "--bogus: bogus is not a valid option for this task" in result.output
    assert task.calls == []
    assert task.accepted_options == frozenset({"level"})


def test_help_mode_skips_validation(task_package: str) -> None:
    task = _resolve(task_package, "greet", "--bogus", "--help")

    result = Dispatcher().dispatch(task)

    assert result.exit_code == 0
    assert "Greets someone by name." in result.output
    assert "author: Jane" in result.output
    assert "--name (default: world)" in result.output
    assert "minion greet [--name=value] [--shout=value]" in result.output


def test_task_specific_rule_uses_task_messages(task_package: str) -> None:
    task = _resolve(task_package, "db:migrate", "--version=latest")

    result = Dispatcher().dispatch(task)

    assert result.exit_code == 1
    assert "--version: version must be a migration number" in result.output


def test_body_errors_are_wrapped_with_code(task_package: str) -> None:
    task = _resolve(task_package, "fail", "--code=3")

    with pytest.raises(TaskRuntimeError) as caught:
        Dispatcher().dispatch(task)

    assert caught.value.code == 3
    assert caught.value.message == "boom"
    assert type(caught.value.__cause__).__name__ == "CodedError"


def test_run_prints_task_output(task_package: str, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = run(["minion", "greet", "--name=Ann", "--shout=yes"], settings=_settings(task_package))

    assert exit_code == 0
    assert capsys.readouterr().out == "HELLO, ANN!\n"


def test_run_lists_tasks_by_default(task_package: str, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = run(["minion"], settings=_settings(task_package, "minion.tasks"))

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "  * db:migrate\n  * fail\n  * greet\n  * help\n  * plain\n" in out
    assert "minion {task} --help" in out


def test_run_unknown_task_exits_non_zero(task_package: str, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = run(["minion", "nope"], settings=_settings(task_package))

    assert exit_code == 1
    assert capsys.readouterr().out == "ERROR: Task 'nope' is not a valid minion task\n"


def test_run_task_error_with_zero_code_exits_one(
    task_package: str,
    capsys: pytest.CaptureFixture[str],
) -> None:
    exit_code = run(["minion", "fail"], settings=_settings(task_package))

    assert exit_code == 1
    assert "CodedError [ 0 ]: boom" in capsys.readouterr().out


def test_run_task_error_keeps_non_zero_code(task_package: str) -> None:
    assert run(["minion", "fail", "--code=7"], settings=_settings(task_package)) == 7


def test_run_validation_failure_exits_one(task_package: str, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = run(["minion", "greet", "--bogus=1"], settings=_settings(task_package))

    assert exit_code == 1
    assert "Parameter Errors for 'greet':" in capsys.readouterr().out


def test_run_uses_given_registry(capsys: pytest.CaptureFixture[str]) -> None:
    registry = TaskRegistry()
    registry.register("record", Recorder)

    assert run(["minion", "record", "--help"], settings=_settings(), registry=registry) == 0
    assert "Records that it ran." in capsys.readouterr().out


def test_run_lists_tasks_when_only_a_custom_package_is_configured(
    task_package: str,
    capsys: pytest.CaptureFixture[str],
) -> None:
    exit_code = run(["minion"], settings=_settings(task_package))

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "  * greet\n" in out
    assert "  * help\n" in out


def test_run_with_given_registry_lists_its_tasks_under_program_name(
    task_package: str,
    capsys: pytest.CaptureFixture[str],
) -> None:
    registry = TaskRegistry([task_package])

    assert run(["/usr/local/bin/runner"], settings=_settings(), registry=registry) == 0

    out = capsys.readouterr().out
    assert "(no tasks found)" not in out
    assert "  * greet\n" in out
    assert "runner {task} --help" in out
