"""Session configuration for a tree view."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any

from jsontree import constants as tree_constants


@dataclass(slots=True)
class ViewSettings:
    """Read-only inputs consulted by the collapse, windowing and action policies.

    `collapsed` may be None, a bool, a depth number or a predicate
    `(node, depth, key_or_index, default) -> bool | None`. `editable` may be a
    bool or a dict granting "add"/"edit"/"delete" individually.
    """

    collapsed: Any = None
    size_threshold: int = tree_constants.SIZE_THRESHOLD_DEFAULT
    large_sequence_threshold: int = tree_constants.LARGE_SEQUENCE_THRESHOLD_DEFAULT
    chunk_size: int = tree_constants.CHUNK_SIZE_DEFAULT
    ignore_large_sequences: bool = False
    editable: Any = True
    enable_clipboard: bool = True
    display_size: Any = None
    copy_indent: Any = tree_constants.COPY_INDENT_DEFAULT

    def updated(self, **changes: Any) -> "ViewSettings":
        unknown = set(changes) - setting_names()
        if unknown:
            raise TypeError(f"unknown view settings: {sorted(unknown)}")
        return replace(self, **changes)


def setting_names() -> set[str]:
    return {f.name for f in fields(ViewSettings)}


# Changing these invalidates every computed fold flag.
FOLD_SETTINGS = frozenset({"collapsed", "size_threshold"})


def setting_changed(old: Any, new: Any) -> bool:
    # 0 == False and 1 == True, but as collapse specs they mean different things.
    return type(old) is not type(new) or old != new


def fold_settings_changed(before: ViewSettings, after: ViewSettings) -> bool:
    return any(setting_changed(getattr(before, name), getattr(after, name)) for name in FOLD_SETTINGS)
