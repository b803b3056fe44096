"""Windowing of oversized sequences into fixed-size chunks.

Windows are derived from the live sequence length on every call. Nothing here
caches, so inserting or deleting elements reflows window boundaries on the
next read.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from jsontree import constants as tree_constants


@dataclass(frozen=True, slots=True)
class SequenceWindow:
    """Non-owning [start, stop) view over a sequence, possibly grouping child windows."""

    start: int
    stop: int
    children: tuple["SequenceWindow", ...] = ()

    def __len__(self) -> int:
        return self.stop - self.start

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def absolute_index(self, relative: int) -> int:
        index = self.start + int(relative)
        if not self.start <= index < self.stop:
            raise IndexError(f"index {relative} outside window [{self.start}, {self.stop})")
        return index

    def items(self, sequence: Any) -> list[Any]:
        return list(sequence[self.start:self.stop])

    def indexed_items(self, sequence: Any) -> list[tuple[int, Any]]:
        stop = min(self.stop, len(sequence))
        return [(idx, sequence[idx]) for idx in range(self.start, stop)]

    def path_token(self) -> tuple[str, int, int]:
        return (tree_constants.CHUNK_PATH_TAG, self.start, self.stop)

    def label(self) -> str:
        return f"[{self.start} ... {self.stop - 1}]"


def is_window_token(token: Any) -> bool:
    return isinstance(token, tuple) and len(token) == 3 and token[0] == tree_constants.CHUNK_PATH_TAG


def needs_windowing(sequence: Any, threshold: Any, ignore_large: bool = False) -> bool:
    if ignore_large or not isinstance(sequence, list):
        return False
    return len(sequence) > int(threshold)


def _group(windows: list[SequenceWindow], chunk_size: int) -> list[SequenceWindow]:
    grouped = []
    for pos in range(0, len(windows), chunk_size):
        members = tuple(windows[pos:pos + chunk_size])
        grouped.append(SequenceWindow(members[0].start, members[-1].stop, members))
    return grouped


def build_windows(length: Any, threshold: Any, chunk_size: Any) -> list[SequenceWindow]:
    """Top-level windows for a sequence of `length`; empty when no windowing applies."""
    total = int(length)
    limit = int(threshold)
    size = int(chunk_size)
    if size <= 0:
        raise ValueError(f"chunk size must be positive, got {size}")
    if total <= limit:
        return []
    windows = [SequenceWindow(start, min(start + size, total)) for start in range(0, total, size)]
    # Chunks of chunks until the top level fits under the threshold again.
    while len(windows) > limit and len(windows) > 1:
        regrouped = _group(windows, size)
        if len(regrouped) == len(windows):
            break
        windows = regrouped
    return windows


def windows_for_sequence(owner: Any, sequence: Any) -> list[SequenceWindow]:
    settings = owner.settings
    if not needs_windowing(sequence, settings.large_sequence_threshold, settings.ignore_large_sequences):
        return []
    return build_windows(len(sequence), settings.large_sequence_threshold, settings.chunk_size)


def find_window(windows: Any, token: Any) -> SequenceWindow | None:
    for window in windows or ():
        if window.path_token() == tuple(token):
            return window
    return None


def leaf_windows(windows: Any) -> list[SequenceWindow]:
    leaves = []
    stack = list(reversed(list(windows or ())))
    while stack:
        window = stack.pop()
        if window.is_leaf:
            leaves.append(window)
        else:
            stack.extend(reversed(window.children))
    return leaves
