"""Structured runtime state buckets and event records for a tree viewing session."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

from jsontree import constants as tree_constants


class EditVerdict(enum.Enum):
    """Result an edit validator hands back to the mutation protocol."""

    ACCEPT = "accept"
    REJECT = "reject"


@dataclass(frozen=True, slots=True)
class MutationEvent:
    """One add/edit/delete notification; built per call and never stored."""

    op: str
    key_or_index: Any
    depth: int
    root: Any
    parent_kind: str | None
    value: Any = None
    old_value: Any = None
    new_value: Any = None


@dataclass(frozen=True, slots=True)
class CollapseEvent:
    """Fold toggle notification, emitted before the fold flag flips."""

    is_collapsing: bool
    node: Any
    key_or_index: Any
    depth: int
    path: tuple[Any, ...] = ()


@dataclass(frozen=True, slots=True)
class NodeOptions:
    """Per-node customization; None on a field means no opinion."""

    collapsed: bool | None = None
    add: bool | None = None
    edit: bool | None = None
    delete: bool | None = None
    copy: bool | None = None


@dataclass(frozen=True, slots=True)
class TreeRow:
    """One visible row of the flattened tree walk."""

    path: tuple[Any, ...]
    key_or_index: Any
    depth: int
    kind: str
    value: Any
    parent_kind: str | None
    size: int | None
    collapsed: bool
    show_size: bool = False
    window: Any = None
    mode: str = tree_constants.MODE_VIEWING
    actions: frozenset[str] = frozenset()
    level: int = tree_constants.ROOT_DEPTH

    @property
    def is_window(self) -> bool:
        return self.window is not None


@dataclass(slots=True)
class FoldState:
    """Fold flags keyed by path tuple."""

    flags: dict[tuple[Any, ...], bool] = field(default_factory=dict)


@dataclass(slots=True)
class InteractionState:
    """Add/delete interaction modes keyed by path tuple."""

    modes: dict[tuple[Any, ...], str] = field(default_factory=dict)


@dataclass(slots=True)
class ViewState:
    """Top-level grouped state container for one root value."""

    fold: FoldState = field(default_factory=FoldState)
    interaction: InteractionState = field(default_factory=InteractionState)
    revision: int = 0

    def has_fold(self, path: tuple[Any, ...]) -> bool:
        return path in self.fold.flags

    def get_fold(self, path: tuple[Any, ...], default: Any = None) -> Any:
        return self.fold.flags.get(path, default)

    def set_fold(self, path: tuple[Any, ...], folded: bool) -> None:
        self.fold.flags[path] = bool(folded)

    def clear_folds(self) -> None:
        self.fold.flags.clear()

    def mode_for(self, path: tuple[Any, ...]) -> str:
        return self.interaction.modes.get(path, tree_constants.MODE_VIEWING)

    def set_mode(self, path: tuple[Any, ...], mode: str) -> None:
        if mode == tree_constants.MODE_VIEWING:
            self.interaction.modes.pop(path, None)
            return
        self.interaction.modes[path] = mode

    def bump_revision(self) -> int:
        self.revision += 1
        return self.revision

    def reset(self) -> None:
        self.fold.flags.clear()
        self.interaction.modes.clear()
