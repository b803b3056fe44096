"""Edit/add/delete protocol applied in place to the shared value graph.

Edits of the root are validated before the root is replaced. Nested edits are
written first and rolled back when the validator rejects them, so `old_value`
is the pre-mutation value in both cases. Every committed mutation fires its
specific callback (add/delete) followed by `on_change`.
"""
from typing import Any
from jsontree import constants as tree_constants
from jsontree.domain_impl.json import json_path_service
from jsontree.domain_impl.json import json_value_core
from jsontree.domain_impl.ui import tree_engine_service
from jsontree.domain_impl.ui import tree_policy_service
from jsontree.view_state import EditVerdict, MutationEvent
import logging
_LOG = logging.getLogger(__name__)


def is_rejection(result: Any) -> bool:
    # None and any other value mean "no objection".
    return result is EditVerdict.REJECT or result is False


def _notify(callback: Any, event: MutationEvent) -> None:
    if callable(callback):
        callback(event)


def force_refresh(owner: Any) -> None:
    owner.state.bump_revision()
    callback = getattr(owner, "on_refresh", None)
    if callable(callback):
        callback()


def _action_allowed(owner: Any, path: Any, action: str) -> bool:
    options = tree_engine_service.options_for_path(owner, path)
    settings = owner.settings
    return tree_policy_service.is_action_allowed(settings.editable, options, action, settings.enable_clipboard)


def _edit_root(owner: Any, new_value: Any) -> bool:
    old_value = owner.root
    validator = getattr(owner, "on_edit", None)
    if callable(validator):
        verdict = validator(MutationEvent(
            op=tree_constants.OP_EDIT,
            key_or_index=None,
            depth=tree_constants.ROOT_DEPTH,
            root=old_value,
            parent_kind=None,
            old_value=old_value,
            new_value=new_value,
        ))
        if is_rejection(verdict):
            _LOG.debug("root edit rejected by validator")
            force_refresh(owner)
            return False
    owner._replace_root_value(new_value)
    _notify(getattr(owner, "on_change", None), MutationEvent(
        op=tree_constants.OP_EDIT,
        key_or_index=None,
        depth=tree_constants.ROOT_DEPTH,
        root=owner.root,
        parent_kind=None,
        old_value=old_value,
        new_value=new_value,
    ))
    force_refresh(owner)
    return True


def edit_value(owner: Any, path: Any, new_value: Any) -> bool:
    """Write new_value at path; return False when denied or rejected."""
    use_path = json_path_service.normalize_path(path)
    if not _action_allowed(owner, use_path, tree_constants.ACTION_EDIT):
        _LOG.debug("edit denied at %s", json_path_service.format_path_for_display(use_path))
        return False
    if not use_path:
        return _edit_root(owner, new_value)

    _parent, key, parent_kind = json_path_service.locate(owner.root, use_path)
    old_value = json_path_service.get_value(owner.root, use_path)
    depth = json_path_service.depth_for_path(use_path[:-1])
    owner._set_value(use_path, new_value)
    validator = getattr(owner, "on_edit", None)
    if callable(validator):
        event = MutationEvent(
            op=tree_constants.OP_EDIT,
            key_or_index=key,
            depth=depth,
            root=owner.root,
            parent_kind=parent_kind,
            old_value=old_value,
            new_value=new_value,
        )
        try:
            verdict = validator(event)
        except Exception:
            owner._set_value(use_path, old_value)
            raise
        if is_rejection(verdict):
            owner._set_value(use_path, old_value)
            _LOG.debug("edit rejected at %s", json_path_service.format_path_for_display(use_path))
            force_refresh(owner)
            return False

    _LOG.debug("edit committed at %s", json_path_service.format_path_for_display(use_path))
    _notify(getattr(owner, "on_change", None), MutationEvent(
        op=tree_constants.OP_EDIT,
        key_or_index=key,
        depth=depth,
        root=owner.root,
        parent_kind=parent_kind,
        old_value=old_value,
        new_value=new_value,
    ))
    force_refresh(owner)
    return True


def delete_value(owner: Any, path: Any) -> bool:
    """Remove the node at path; the root is cleared to ABSENT instead."""
    use_path = json_path_service.normalize_path(path)
    if not use_path and owner.root is json_value_core.ABSENT:
        return False
    if not _action_allowed(owner, use_path, tree_constants.ACTION_DELETE):
        _LOG.debug("delete denied at %s", json_path_service.format_path_for_display(use_path))
        return False

    if not use_path:
        removed = owner.root
        key = None
        parent_kind = None
        depth = tree_constants.ROOT_DEPTH
        owner._replace_root_value(json_value_core.ABSENT)
    else:
        parent, key, parent_kind = json_path_service.locate(owner.root, use_path)
        removed = json_path_service.get_value(owner.root, use_path)
        depth = json_path_service.depth_for_path(use_path[:-1])
        if parent_kind == tree_constants.NODE_SEQUENCE:
            parent.pop(key)
        else:
            del parent[key]
    tree_engine_service.forget_after_delete(owner, use_path, parent_kind)
    _LOG.debug("delete committed at %s", json_path_service.format_path_for_display(use_path))

    event = MutationEvent(
        op=tree_constants.OP_DELETE,
        key_or_index=key,
        depth=depth,
        root=owner.root,
        parent_kind=parent_kind,
        value=removed,
    )
    _notify(getattr(owner, "on_delete", None), event)
    _notify(getattr(owner, "on_change", None), event)
    force_refresh(owner)
    return True


def add_entry(owner: Any, path: Any, key: Any = None) -> bool:
    """Add a null placeholder under the container at path.

    Mappings need a non-empty key (an existing key is overwritten); sequences
    append and ignore `key`. Missing keys and primitive targets are no-ops.
    """
    use_path = json_path_service.normalize_path(path)
    node = json_path_service.get_value(owner.root, use_path)
    kind = json_value_core.classify(node)
    if kind == tree_constants.NODE_PRIMITIVE:
        _LOG.debug("add ignored on primitive at %s", json_path_service.format_path_for_display(use_path))
        return False
    if not _action_allowed(owner, use_path, tree_constants.ACTION_ADD):
        _LOG.debug("add denied at %s", json_path_service.format_path_for_display(use_path))
        return False

    if kind == tree_constants.NODE_MAPPING:
        name = "" if key is None else str(key)
        if not name:
            _LOG.debug("add ignored: empty key at %s", json_path_service.format_path_for_display(use_path))
            return False
        node[name] = None
        key_or_index = name
    else:
        node.append(None)
        key_or_index = len(node) - 1
    _LOG.debug("add committed at %s -> %r", json_path_service.format_path_for_display(use_path), key_or_index)

    event = MutationEvent(
        op=tree_constants.OP_ADD,
        key_or_index=key_or_index,
        depth=json_path_service.depth_for_path(use_path),
        root=owner.root,
        parent_kind=kind,
    )
    _notify(getattr(owner, "on_add", None), event)
    _notify(getattr(owner, "on_change", None), event)
    force_refresh(owner)
    return True


# --- Interaction modes: viewing <-> adding, viewing <-> deleting ---

def begin_add(owner: Any, path: Any) -> str:
    """Enter adding mode; sequences append right away and stay in viewing."""
    use_path = json_path_service.normalize_path(path)
    node = json_path_service.get_value(owner.root, use_path)
    state = owner.state
    match json_value_core.classify(node):
        case tree_constants.NODE_MAPPING:
            state.set_mode(use_path, tree_constants.MODE_ADDING)
        case tree_constants.NODE_SEQUENCE:
            state.set_mode(use_path, tree_constants.MODE_VIEWING)
            add_entry(owner, use_path)
    return state.mode_for(use_path)


def begin_delete(owner: Any, path: Any) -> str:
    use_path = json_path_service.normalize_path(path)
    json_path_service.get_value(owner.root, use_path)
    owner.state.set_mode(use_path, tree_constants.MODE_DELETING)
    return owner.state.mode_for(use_path)


def cancel(owner: Any, path: Any) -> str:
    use_path = json_path_service.normalize_path(path)
    owner.state.set_mode(use_path, tree_constants.MODE_VIEWING)
    return tree_constants.MODE_VIEWING


def confirm(owner: Any, path: Any, key: Any = None) -> bool:
    """Apply the pending add/delete for path and return to viewing."""
    use_path = json_path_service.normalize_path(path)
    state = owner.state
    mode = state.mode_for(use_path)
    state.set_mode(use_path, tree_constants.MODE_VIEWING)
    match mode:
        case tree_constants.MODE_ADDING:
            return add_entry(owner, use_path, key)
        case tree_constants.MODE_DELETING:
            return delete_value(owner, use_path)
    return False
