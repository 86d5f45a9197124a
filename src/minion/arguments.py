"""Command-line argument reader.

Turns a raw argument vector into named ``--key[=value]`` options and
positional values. The first raw argument is the program itself and is
always skipped.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import PurePath

OPTION_PREFIX = "--"


@dataclass(slots=True)
class ParsedArguments:
    """Named options and positional values from one argument vector."""

    named: dict[str, str | None] = field(default_factory=dict)
    positional: list[str] = field(default_factory=list)
    program: str = "minion"


@dataclass(frozen=True, slots=True)
class OptionLookup:
    """Result of asking for a single named option.

    ``present`` separates "not supplied" from "supplied as a bare flag",
    both of which have ``value`` set to ``None``.
    """

    present: bool
    value: str | None = None


def parse(raw_args: Sequence[str]) -> ParsedArguments:
    parsed = ParsedArguments()
    if raw_args:
        parsed.program = PurePath(raw_args[0]).name or parsed.program
    for token in raw_args[1:]:
        if not token.startswith(OPTION_PREFIX):
            parsed.positional.append(token)
            continue

        name = token[len(OPTION_PREFIX) :]
        value: str | None = None
        if "=" in name:
            name, value = name.split("=", 1)
        # Last occurrence wins.
        parsed.named[name] = value
    return parsed


def get_one(parsed: ParsedArguments, key: str) -> OptionLookup:
    """Return one named option, telling a bare flag apart from an absent key."""

    if key in parsed.named:
        return OptionLookup(present=True, value=parsed.named[key])
    return OptionLookup(present=False)


def get_many(parsed: ParsedArguments, keys: Iterable[str]) -> dict[str, str | None]:
    """Return the subset of named options whose keys are in ``keys``.

    Keys that were not supplied are left out of the result.
    """

    wanted = set(keys)
    return {name: value for name, value in parsed.named.items() if name in wanted}
