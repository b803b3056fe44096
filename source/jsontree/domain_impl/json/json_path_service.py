"""JSON path get/set helpers."""
from typing import Any
from jsontree import constants as tree_constants
from jsontree.domain_impl.json import json_value_core
from jsontree.exceptions import PathLookupError


def normalize_path(path: Any) -> tuple[Any, ...]:
    if path is None:
        return ()
    if isinstance(path, (str, int)):
        return (path,)
    return tuple(path)


def get_value(root_value: Any, path: Any) -> Any:
    """Resolve nested value from root by path keys/indexes."""
    use_path = normalize_path(path)
    value = root_value
    for depth, key in enumerate(use_path):
        if isinstance(value, dict):
            if key not in value:
                raise PathLookupError(use_path, f"missing key {key!r} at step {depth}")
            value = value[key]
        elif isinstance(value, list):
            # bool keys would silently index 0/1.
            if not isinstance(key, int) or isinstance(key, bool) or not 0 <= key < len(value):
                raise PathLookupError(use_path, f"bad index {key!r} at step {depth}")
            value = value[key]
        else:
            raise PathLookupError(use_path, f"primitive reached at step {depth}")
    return value


def set_value(root_value: Any, path: Any, new_value: Any) -> Any:
    """Set nested value by path and return updated root value."""
    use_path = normalize_path(path)
    if not use_path:
        return new_value
    parent = get_value(root_value, use_path[:-1])
    key = use_path[-1]
    if isinstance(parent, list):
        if not isinstance(key, int) or isinstance(key, bool) or not 0 <= key < len(parent):
            raise PathLookupError(use_path, f"bad index {key!r}")
    elif not isinstance(parent, dict):
        raise PathLookupError(use_path, "parent is not a container")
    parent[key] = new_value
    return root_value


def locate(root_value: Any, path: Any) -> tuple[Any, Any, str | None]:
    """Return the (parent, key_or_index, parent_kind) locator for a path."""
    use_path = normalize_path(path)
    if not use_path:
        return None, None, None
    parent = get_value(root_value, use_path[:-1])
    kind = json_value_core.classify(parent)
    if kind == tree_constants.NODE_PRIMITIVE:
        raise PathLookupError(use_path, "parent is not a container")
    return parent, use_path[-1], kind


def depth_for_path(path: Any) -> int:
    return tree_constants.ROOT_DEPTH + len(normalize_path(path))


def format_path_for_display(path: Any) -> Any:
    parts = []
    for token in normalize_path(path):
        if isinstance(token, int):
            parts.append(f"[{token}]")
        else:
            if parts:
                parts.append(".")
            parts.append(str(token))
    return "".join(parts) if parts else "<root>"


def parse_display_path(text: Any) -> tuple[Any, ...]:
    """Inverse of format_path_for_display for dotted keys and [index] tokens."""
    source = str(text or "").strip()
    if not source or source == "<root>":
        return ()
    parts: list[Any] = []
    buf = ""
    idx = 0
    while idx < len(source):
        ch = source[idx]
        if ch == ".":
            if buf:
                parts.append(buf)
            buf = ""
        elif ch == "[":
            if buf:
                parts.append(buf)
            buf = ""
            end = source.find("]", idx)
            if end < 0:
                raise ValueError(f"unclosed index in path: {source!r}")
            parts.append(int(source[idx + 1:end]))
            idx = end
        else:
            buf += ch
        idx += 1
    if buf:
        parts.append(buf)
    return tuple(parts)
