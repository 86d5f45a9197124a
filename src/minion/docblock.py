"""Doc-comment parsing for task help.

A doc block is free text with optional ``@tag text`` lines. Tag lines are
pulled out into a mapping; everything else becomes the description.
"""

from __future__ import annotations

import inspect
import re
from dataclasses import dataclass, field

_LINE_DECORATION = re.compile(r"^\s*\*? ?")
_STAR_DECORATION = re.compile(r"^\s*\* ?")
_TAG_LINE = re.compile(r"^@(\S+)(?:\s*(.+))?$")


@dataclass(slots=True)
class DocBlock:
    """Description text and tags extracted from a doc block."""

    description: str = ""
    tags: dict[str, str] = field(default_factory=dict)


def parse_doccomment(comment: str, *, delimited: bool = True) -> DocBlock:
    """Split ``comment`` into description and tags.

    When ``delimited`` is true the first and last lines are the comment
    opener and closer (``/**`` and `` */``) and are dropped. Otherwise line
    indentation is kept. A repeated tag keeps its last value.
    """

    lines = comment.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    decoration = _LINE_DECORATION
    if delimited:
        lines = lines[1:-1]
    else:
        # Undelimited text keeps its indentation; only a ``*`` marker goes.
        decoration = _STAR_DECORATION

    tags: dict[str, str] = {}
    kept: list[str] = []
    for raw_line in lines:
        line = decoration.sub("", raw_line, count=1)
        match = _TAG_LINE.match(line)
        if match:
            tags[match.group(1)] = match.group(2) or ""
        else:
            kept.append(line)

    return DocBlock(description="\n".join(kept).strip(), tags=tags)


def parse_docstring(obj: object) -> DocBlock:
    """Parse the docstring defined on ``obj`` itself (no comment delimiters).

    Inherited docstrings are ignored so an undocumented task does not show
    its base class documentation.
    """

    doc = getattr(obj, "__doc__", None)
    return parse_doccomment(inspect.cleandoc(doc) if doc else "", delimited=False)
