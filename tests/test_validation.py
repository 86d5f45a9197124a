from __future__ import annotations

import allure

from minion.validation import Validation, digit, not_empty, one_of

pytestmark = [
    allure.epic("Task Runner"),
    allure.feature("Option Validation"),
]


def test_rule_returning_false_records_error_named_after_callback() -> None:
    validation = Validation({"count": "abc"}).rule("count", digit)

    assert validation.check() is False
    assert validation.errors() == {"count": "count must be a whole number"}


def test_passing_rules_yield_valid_result() -> None:
    validation = Validation({"count": "12", "mode": "fast"})
    validation.rule("count", digit).rule("mode", one_of, (":value", "fast", "slow"))

    result = validation.result()

    assert result.is_valid is True
    assert result.errors == {}


def test_rule_params_are_rendered_into_messages() -> None:
    validation = Validation({"mode": "turbo"}).rule("mode", one_of, (":value", "fast", "slow"))

    assert validation.result().errors == {"mode": "mode must be one of: fast, slow"}


def test_context_callback_reports_through_error() -> None:
    seen: list[tuple[object, str]] = []

    def only_known(validation: Validation, field: str) -> None:
        seen.append((validation, field))
        validation.error(field, "minion_option")

    validation = Validation({"bogus": None})
    validation.rule("bogus", only_known, (":validation", ":field"))

    assert validation.check() is False
    assert seen == [(validation, "bogus")]
    assert validation.errors() == {"bogus": "bogus is not a valid option for this task"}


def test_first_error_per_field_wins_and_stops_rules() -> None:
    calls: list[str] = []

    def tracked(value: object) -> bool:
        calls.append("tracked")
        return False

    validation = Validation({"name": ""}).rule("name", not_empty).rule("name", tracked)

    assert validation.errors() == {}
    assert validation.check() is False
    assert validation.errors() == {"name": "name must not be empty"}
    assert calls == []


def test_custom_messages_override_catalogue_and_unknown_kinds_fall_back() -> None:
    def odd(value: str) -> bool:
        return int(value) % 2 == 1

    validation = Validation({"n": "2", "count": "x"}).rule("n", odd).rule("count", digit)
    validation.check()

    assert validation.errors({"digit": "{field}={value} is not numeric"}) == {
        "n": "n: odd",
        "count": "count=x is not numeric",
    }


def test_check_can_be_repeated() -> None:
    validation = Validation({"count": "x"}).rule("count", digit)
    assert validation.check() is False
    assert validation.check() is False
    assert list(validation.errors()) == ["count"]


def test_data_returns_a_copy() -> None:
    validation = Validation({"a": "1"})
    validation.data()["a"] = "2"
    assert validation.data() == {"a": "1"}
