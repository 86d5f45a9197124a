"""Directory listing and task index compilation."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path, PurePath
from typing import Any

MODULE_SUFFIX = ".py"

TaskTree = Mapping[str, Any]


def list_files(directory: Path) -> dict[str, dict | None]:
    """Return the tree of task modules below ``directory``.

    Branches map to nested dicts, module files map to ``None``. Package
    markers, private modules and branches without any modules are skipped.
    Entries are sorted by name.
    """

    tree: dict[str, dict | None] = {}
    if not directory.is_dir():
        return tree
    for entry in sorted(directory.iterdir(), key=lambda path: path.name):
        if entry.name.startswith(("_", ".")):
            continue
        if entry.is_dir():
            subtree = list_files(entry)
            if subtree:
                tree[entry.name] = subtree
        elif entry.suffix == MODULE_SUFFIX:
            tree[entry.name] = None
    return tree


def compile_task_list(tree: TaskTree, prefix: str = "", separator: str = ":") -> list[str]:
    """Flatten ``tree`` into lower-cased task identifiers joined by ``separator``.

    Order follows the traversal order of ``tree``.
    """

    output: list[str] = []
    for key, subtree in tree.items():
        name = PurePath(key).name
        if isinstance(subtree, Mapping):
            # Empty branches contribute nothing.
            output.extend(compile_task_list(subtree, f"{prefix}{name}{separator}", separator))
        else:
            output.append(f"{prefix}{_strip_suffix(name)}".lower())
    return output


def _strip_suffix(name: str) -> str:
    stem, dot, _ = name.rpartition(".")
    return stem if dot else name
