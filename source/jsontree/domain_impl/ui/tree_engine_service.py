"""Shared tree engine helpers: fold state, window resolution and the row walk."""

from typing import Any
from jsontree import constants as tree_constants
from jsontree.domain_impl.json import json_path_service
from jsontree.domain_impl.json import json_value_core
from jsontree.domain_impl.ui import tree_chunk_service
from jsontree.domain_impl.ui import tree_policy_service
from jsontree.exceptions import PathLookupError
from jsontree.view_state import CollapseEvent, NodeOptions, TreeRow
import logging
_LOG = logging.getLogger(__name__)


def resolve_target(owner: Any, path: Any) -> tuple[Any, Any, Any, Any]:
    """Resolve a path that may contain window tokens.

    Returns (node, key_or_index, parent_kind, window). For window paths the node
    is the window's element slice and key_or_index its absolute start index.
    """
    use_path = json_path_service.normalize_path(path)
    node = owner.root
    parent_kind = None
    key_or_index = None
    window = None
    windows: Any = None
    sequence: Any = None
    for step, token in enumerate(use_path):
        if tree_chunk_service.is_window_token(token):
            if windows is None:
                if not isinstance(node, list):
                    raise PathLookupError(use_path, f"window token on non-sequence at step {step}")
                sequence = node
                windows = tree_chunk_service.windows_for_sequence(owner, sequence)
            window = tree_chunk_service.find_window(windows, token)
            if window is None:
                raise PathLookupError(use_path, f"stale window {token!r}")
            windows = window.children
            node = window.items(sequence)
            key_or_index = window.start
            parent_kind = tree_constants.NODE_SEQUENCE
            continue
        if window is not None:
            # Element paths carry absolute indices, so step back onto the sequence.
            if not isinstance(token, int) or not window.start <= token < window.stop:
                raise PathLookupError(use_path, f"index {token!r} outside window")
            node = sequence
            window = None
            windows = None
        parent_kind = json_value_core.classify(node)
        if parent_kind == tree_constants.NODE_PRIMITIVE:
            raise PathLookupError(use_path, f"primitive reached at step {step}")
        try:
            node = json_path_service.get_value(node, (token,))
        except PathLookupError as exc:
            raise PathLookupError(use_path, exc.reason) from exc
        key_or_index = token
        sequence = None
        windows = None
    return node, key_or_index, parent_kind, window


def data_path(path: Any) -> tuple[Any, ...]:
    """Strip window tokens, leaving the path into the value graph."""
    return tuple(
        token for token in json_path_service.normalize_path(path) if not tree_chunk_service.is_window_token(token)
    )


def node_options(owner: Any, node: Any, depth: int, key_or_index: Any) -> NodeOptions:
    return tree_policy_service.resolve_node_options(getattr(owner, "customize_node", None), node, depth, key_or_index)


def options_for_path(owner: Any, path: Any) -> NodeOptions:
    node, key_or_index, _kind, _window = resolve_target(owner, path)
    return node_options(owner, node, json_path_service.depth_for_path(path), key_or_index)


def compute_fold(owner: Any, path: Any, node: Any, depth: int, key_or_index: Any, options: Any = None) -> bool:
    settings = owner.settings
    if options is None:
        options = node_options(owner, node, depth, key_or_index)
    override = tree_policy_service.resolve_collapse_override(owner, path, options)
    return tree_policy_service.should_collapse(
        node,
        depth,
        key_or_index,
        settings.collapsed,
        settings.size_threshold,
        override,
    )


def fold_for(owner: Any, path: Any, node: Any, depth: int, key_or_index: Any, options: Any = None) -> bool:
    use_path = json_path_service.normalize_path(path)
    state = owner.state
    if state.has_fold(use_path):
        return bool(state.get_fold(use_path))
    if not json_value_core.is_container(node):
        return False
    folded = compute_fold(owner, use_path, node, depth, key_or_index, options)
    state.set_fold(use_path, folded)
    return folded


def is_collapsed(owner: Any, path: Any) -> bool:
    use_path = json_path_service.normalize_path(path)
    node, key_or_index, _kind, _window = resolve_target(owner, use_path)
    return fold_for(owner, use_path, node, json_path_service.depth_for_path(use_path), key_or_index)


def set_fold(owner: Any, path: Any, folded: bool) -> bool:
    """Set a fold flag, notifying on_collapse before the flag changes."""
    use_path = json_path_service.normalize_path(path)
    node, key_or_index, _kind, _window = resolve_target(owner, use_path)
    if not json_value_core.is_container(node):
        return False
    depth = json_path_service.depth_for_path(use_path)
    current = fold_for(owner, use_path, node, depth, key_or_index)
    target = bool(folded)
    if current == target:
        return current
    _notify_collapse(owner, use_path, node, depth, key_or_index, target)
    owner.state.set_fold(use_path, target)
    return target


def _notify_collapse(owner: Any, path: tuple, node: Any, depth: int, key_or_index: Any, folded: bool) -> None:
    callback = getattr(owner, "on_collapse", None)
    if callable(callback):
        callback(CollapseEvent(
            is_collapsing=folded,
            node=node,
            key_or_index=key_or_index,
            depth=depth,
            path=path,
        ))


def toggle_fold(owner: Any, path: Any) -> bool:
    return set_fold(owner, path, not is_collapsed(owner, path))


def reset_folds(owner: Any) -> None:
    """Recompute every cached fold flag from the current settings.

    Flags that flip are announced through on_collapse before they change.
    Paths that no longer resolve are dropped.
    """
    state = owner.state
    previous = dict(state.fold.flags)
    _LOG.debug("fold state reset (%d entries)", len(previous))
    for path, was_folded in previous.items():
        try:
            node, key_or_index, _kind, _window = resolve_target(owner, path)
        except PathLookupError as exc:
            _LOG.debug('expected_error', exc_info=exc)
            state.fold.flags.pop(path, None)
            continue
        if not json_value_core.is_container(node):
            state.fold.flags.pop(path, None)
            continue
        depth = json_path_service.depth_for_path(path)
        folded = compute_fold(owner, path, node, depth, key_or_index)
        if folded != was_folded:
            _notify_collapse(owner, path, node, depth, key_or_index, folded)
        state.set_fold(path, folded)


def _shift_keyed_paths(bucket: dict, parent_path: tuple, index: int) -> None:
    size = len(parent_path)
    moved = {}
    for path in list(bucket.keys()):
        if len(path) <= size or path[:size] != parent_path:
            continue
        token = path[size]
        if not isinstance(token, int) or isinstance(token, bool) or token < index:
            continue
        value = bucket.pop(path)
        if token == index:
            continue
        moved[parent_path + (token - 1,) + path[size + 1:]] = value
    bucket.update(moved)


def forget_after_delete(owner: Any, path: Any, parent_kind: Any) -> None:
    """Drop state of a deleted node and slide later sequence siblings down one slot."""
    use_path = json_path_service.normalize_path(path)
    state = owner.state
    if not use_path:
        state.reset()
        return
    parent_path = use_path[:-1]
    key = use_path[-1]
    if parent_kind == tree_constants.NODE_SEQUENCE and isinstance(key, int):
        _shift_keyed_paths(state.fold.flags, parent_path, key)
        _shift_keyed_paths(state.interaction.modes, parent_path, key)
        return
    size = len(use_path)
    for bucket in (state.fold.flags, state.interaction.modes):
        for stale in [p for p in bucket if p[:size] == use_path]:
            bucket.pop(stale, None)


def _row_for(
    owner: Any,
    path: tuple,
    node: Any,
    key_or_index: Any,
    parent_kind: Any,
    window: Any,
    level: int,
) -> TreeRow:
    settings = owner.settings
    depth = json_path_service.depth_for_path(path)
    kind = json_value_core.classify(node)
    options = node_options(owner, node, depth, key_or_index)
    folded = fold_for(owner, path, node, depth, key_or_index, options)
    size = json_value_core.node_size(node)
    actions = tree_policy_service.allowed_actions(owner, node, options, is_root=not path)
    if window is not None:
        # Windows are derived views: copy is the only action they offer.
        actions = frozenset(a for a in actions if a == tree_constants.ACTION_COPY)
        mode = tree_constants.MODE_VIEWING
    else:
        mode = owner.state.mode_for(path)
    show_size = kind != tree_constants.NODE_PRIMITIVE and tree_policy_service.should_display_size(
        settings.display_size, depth, folded
    )
    return TreeRow(
        path=path,
        key_or_index=key_or_index,
        depth=depth,
        kind=kind,
        value=node,
        parent_kind=parent_kind,
        size=size,
        collapsed=folded,
        show_size=show_size,
        window=window,
        mode=mode,
        actions=actions,
        level=level,
    )


def _child_entries(owner: Any, path: tuple, node: Any, window: Any, sequence: Any) -> list[tuple]:
    """Children of an expanded row as (path, node, key, parent_kind, window, sequence) tuples."""
    entries = []
    if window is not None:
        if window.children:
            for child in window.children:
                entries.append((path + (child.path_token(),), child.items(sequence), child.start,
                                tree_constants.NODE_SEQUENCE, child, sequence))
            return entries
        base = data_path(path)
        for idx, item in window.indexed_items(sequence):
            entries.append((base + (idx,), item, idx, tree_constants.NODE_SEQUENCE, None, None))
        return entries
    if isinstance(node, dict):
        for key, value in node.items():
            entries.append((path + (key,), value, key, tree_constants.NODE_MAPPING, None, None))
        return entries
    if isinstance(node, list):
        windows = tree_chunk_service.windows_for_sequence(owner, node)
        if windows:
            for child in windows:
                entries.append((path + (child.path_token(),), child.items(node), child.start,
                                tree_constants.NODE_SEQUENCE, child, node))
            return entries
        for idx, value in enumerate(node):
            entries.append((path + (idx,), value, idx, tree_constants.NODE_SEQUENCE, None, None))
    return entries


def iter_rows(owner: Any) -> Any:
    """Yield visible rows depth-first; collapsed containers yield no children."""
    stack = [((), owner.root, None, None, None, None, tree_constants.ROOT_DEPTH)]
    while stack:
        path, node, key_or_index, parent_kind, window, sequence, level = stack.pop()
        row = _row_for(owner, path, node, key_or_index, parent_kind, window, level)
        yield row
        if row.collapsed or row.kind == tree_constants.NODE_PRIMITIVE:
            continue
        children = _child_entries(owner, path, node, window, sequence)
        stack.extend(entry + (level + 1,) for entry in reversed(children))


def outline_lines(owner: Any, indent: str = "  ") -> list[str]:
    """Plain-text outline of the visible rows, used by the CLI host."""
    lines = []
    for row in iter_rows(owner):
        pad = indent * (row.level - tree_constants.ROOT_DEPTH)
        if row.window is not None:
            label = row.window.label()
        elif row.key_or_index is None:
            label = "<root>"
        elif isinstance(row.key_or_index, int):
            label = f"[{row.key_or_index}]"
        else:
            label = str(row.key_or_index)
        if row.kind == tree_constants.NODE_PRIMITIVE:
            lines.append(f"{pad}{label}: {_primitive_text(row.value)}")
            continue
        opener, closer = ("{", "}") if row.kind == tree_constants.NODE_MAPPING else ("[", "]")
        badge = f" {row.size} items" if row.show_size else ""
        if row.collapsed:
            lines.append(f"{pad}{label}: {opener}...{closer}{badge}")
        else:
            lines.append(f"{pad}{label}: {opener}{badge}")
    return lines


def _primitive_text(value: Any) -> str:
    if value is json_value_core.ABSENT:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return repr(value)
    return str(value)
