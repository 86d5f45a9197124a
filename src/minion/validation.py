"""Rule-based validation of option mappings."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

DEFAULT_MESSAGES: dict[str, str] = {
    "minion_option": "{field} is not a valid option for this task",
    "not_empty": "{field} must not be empty",
    "digit": "{field} must be a whole number",
    "one_of": "{field} must be one of: {params}",
}

PLACEHOLDERS = (":validation", ":field", ":value", ":data")


@dataclass(slots=True)
class Rule:
    """One callback bound to a field, with placeholder-aware params."""

    field: str
    callback: Callable[..., Any]
    params: tuple[Any, ...] = (":value",)

    @property
    def name(self) -> str:
        return getattr(self.callback, "__name__", "rule")


@dataclass(slots=True)
class FieldError:
    """Error kind recorded for a single field."""

    kind: str
    params: tuple[Any, ...] = ()


@dataclass(slots=True)
class ValidationResult:
    """Outcome of checking a mapping against its rules."""

    is_valid: bool
    errors: dict[str, str] = field(default_factory=dict)


class Validation:
    """Collects rules for a data mapping and evaluates them on ``check``.

    A callback that returns ``False`` records an error named after the
    callback. Callbacks may instead report through ``error`` themselves,
    which is how context-aware rules (``:validation`` param) work. Each field
    keeps only its first error; later rules for that field are skipped.
    """

    def __init__(self, data: Mapping[str, Any]) -> None:
        self._data = dict(data)
        self._rules: list[Rule] = []
        self._errors: dict[str, FieldError] = {}

    def data(self) -> dict[str, Any]:
        return dict(self._data)

    def rule(
        self,
        field: str,
        callback: Callable[..., Any],
        params: Sequence[Any] = (":value",),
    ) -> Validation:
        self._rules.append(Rule(field=field, callback=callback, params=tuple(params)))
        return self

    def error(self, field: str, kind: str, params: Sequence[Any] = ()) -> Validation:
        self._errors.setdefault(field, FieldError(kind=kind, params=tuple(params)))
        return self

    def check(self) -> bool:
        self._errors = {}
        for rule in self._rules:
            if rule.field in self._errors:
                continue
            args = [self._bind(param, rule.field) for param in rule.params]
            if rule.callback(*args) is False:
                self.error(rule.field, rule.name, _plain_params(rule.params))
        return not self._errors

    def errors(self, messages: Mapping[str, str] | None = None) -> dict[str, str]:
        catalogue = {**DEFAULT_MESSAGES, **(messages or {})}
        rendered: dict[str, str] = {}
        for name, error in self._errors.items():
            template = catalogue.get(error.kind, "{field}: {kind}")
            rendered[name] = template.format(
                field=name,
                kind=error.kind,
                params=", ".join(str(param) for param in error.params),
                value=self._data.get(name),
            )
        return rendered

    def result(self, messages: Mapping[str, str] | None = None) -> ValidationResult:
        is_valid = self.check()
        return ValidationResult(is_valid=is_valid, errors={} if is_valid else self.errors(messages))

    def _bind(self, param: Any, field: str) -> Any:
        if param == ":validation":
            return self
        if param == ":field":
            return field
        if param == ":value":
            return self._data.get(field)
        if param == ":data":
            return self.data()
        return param


def not_empty(value: Any) -> bool:
    return value not in (None, "", [], {})


def digit(value: Any) -> bool:
    return isinstance(value, str) and value.isdigit()


def one_of(value: Any, *choices: Any) -> bool:
    return value in choices


def _plain_params(params: tuple[Any, ...]) -> tuple[Any, ...]:
    return tuple(param for param in params if param not in PLACEHOLDERS)
