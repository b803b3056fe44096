"""Collapse, action and size-badge policy for tree nodes.

Every function here is a pure decision; fold flags themselves live in the
session's ViewState and are managed by tree_engine_service.
"""
import math
from typing import Any
from jsontree import constants as tree_constants
from jsontree.domain_impl.json import json_value_core
from jsontree.exceptions import CollapseSpecError
from jsontree.view_state import NodeOptions


def _exceeds_size_threshold(node: Any, size_threshold: Any) -> bool:
    size = json_value_core.node_size(node)
    if size is None:
        return False
    return size > int(size_threshold)


def validate_collapse_spec(collapsed: Any) -> Any:
    """Raise CollapseSpecError for specs that cannot be evaluated."""
    if collapsed is None or isinstance(collapsed, bool) or callable(collapsed):
        return collapsed
    if isinstance(collapsed, (int, float)):
        if not math.isfinite(collapsed):
            raise CollapseSpecError(f"collapse depth must be finite, got {collapsed!r}")
        return collapsed
    raise CollapseSpecError(f"unsupported collapse specification: {collapsed!r}")


def should_collapse(
    node: Any,
    depth: int,
    key_or_index: Any,
    collapsed: Any,
    size_threshold: Any,
    override: Any = None,
) -> bool:
    # First applicable rule wins: override, bool spec, depth spec, predicate, size.
    if override is not None:
        return bool(override)
    validate_collapse_spec(collapsed)
    match collapsed:
        case bool():
            return collapsed
        case int() | float():
            return depth >= collapsed
    default = _exceeds_size_threshold(node, size_threshold)
    if callable(collapsed):
        result = collapsed(node, depth, key_or_index, default)
        if isinstance(result, bool):
            return result
    return default


def resolve_node_options(customize_node: Any, node: Any, depth: int, key_or_index: Any) -> NodeOptions:
    if not callable(customize_node):
        return NodeOptions()
    options = customize_node(node, depth, key_or_index)
    if options is None:
        return NodeOptions()
    if isinstance(options, NodeOptions):
        return options
    if isinstance(options, dict):
        fields = {name: options.get(name) for name in ("collapsed", "add", "edit", "delete", "copy")}
        return NodeOptions(**fields)
    raise TypeError(f"customize_node must return NodeOptions, dict or None, got {type(options).__name__}")


def resolve_collapse_override(owner: Any, path: Any, options: NodeOptions) -> Any:
    # Explicit per-path overrides beat customize_node options.
    overrides = getattr(owner, "collapse_overrides", None) or {}
    if isinstance(overrides, dict) and path in overrides and overrides[path] is not None:
        return bool(overrides[path])
    return options.collapsed


def _editable_grants(editable: Any, action: str) -> bool:
    if isinstance(editable, bool):
        return editable
    if isinstance(editable, dict):
        return editable.get(action) is True
    return False


def is_action_allowed(editable: Any, options: Any, action: str, enable_clipboard: bool = True) -> bool:
    use_options = options if isinstance(options, NodeOptions) else NodeOptions()
    match action:
        case tree_constants.ACTION_COPY:
            granted = bool(enable_clipboard)
            node_flag = use_options.copy
        case tree_constants.ACTION_ADD | tree_constants.ACTION_EDIT | tree_constants.ACTION_DELETE:
            granted = _editable_grants(editable, action)
            node_flag = getattr(use_options, action)
        case _:
            return False
    if not granted:
        return False
    return node_flag is None or bool(node_flag)


def allowed_actions(owner: Any, node: Any, options: NodeOptions, is_root: bool) -> frozenset[str]:
    editable = getattr(owner.settings, "editable", False)
    enable_clipboard = getattr(owner.settings, "enable_clipboard", True)
    kind = json_value_core.classify(node)
    actions = set()
    if is_action_allowed(editable, options, tree_constants.ACTION_EDIT):
        actions.add(tree_constants.ACTION_EDIT)
    if is_action_allowed(editable, options, tree_constants.ACTION_DELETE):
        actions.add(tree_constants.ACTION_DELETE)
    if kind != tree_constants.NODE_PRIMITIVE and is_action_allowed(editable, options, tree_constants.ACTION_ADD):
        actions.add(tree_constants.ACTION_ADD)
    if node is not json_value_core.ABSENT and is_action_allowed(
        editable, options, tree_constants.ACTION_COPY, enable_clipboard
    ):
        actions.add(tree_constants.ACTION_COPY)
    if is_root and node is json_value_core.ABSENT:
        actions.discard(tree_constants.ACTION_DELETE)
    return frozenset(actions)


def should_display_size(display_size: Any, depth: int, collapsed: bool) -> bool:
    if isinstance(display_size, bool):
        return display_size
    if isinstance(display_size, (int, float)):
        return depth > display_size
    match display_size:
        case "collapsed":
            return bool(collapsed)
        case "expanded":
            return not collapsed
    return False
