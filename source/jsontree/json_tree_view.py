"""Viewing session over one shared JSON-compatible root value."""

from typing import Any
from jsontree.domain_impl.json import json_copy_service
from jsontree.domain_impl.json import json_mutation_service
from jsontree.domain_impl.json import json_path_service
from jsontree.domain_impl.json import json_value_core
from jsontree.domain_impl.support import clipboard_service
from jsontree.domain_impl.ui import tree_chunk_service
from jsontree.domain_impl.ui import tree_engine_service
from jsontree.domain_impl.ui import tree_policy_service
from jsontree.view_settings import ViewSettings, fold_settings_changed
from jsontree.view_state import ViewState
import logging
_LOG = logging.getLogger(__name__)


class JsonTreeView:
    """Owner object threaded through the tree services.

    Holds the root value, the session settings, host callbacks and the fold /
    interaction state. Hosts read `root` after every mutation; the value graph
    below the root is mutated in place.
    """

    def __init__(
        self,
        root: Any = json_value_core.ABSENT,
        *,
        settings: Any = None,
        collapse_overrides: Any = None,
        customize_node: Any = None,
        customize_copy: Any = None,
        on_collapse: Any = None,
        on_edit: Any = None,
        on_delete: Any = None,
        on_add: Any = None,
        on_change: Any = None,
        on_refresh: Any = None,
        **setting_changes: Any,
    ):
        base = settings if isinstance(settings, ViewSettings) else ViewSettings()
        self.settings = base.updated(**setting_changes) if setting_changes else base
        tree_policy_service.validate_collapse_spec(self.settings.collapsed)
        self.state = ViewState()
        self._root = root
        self.collapse_overrides = {
            json_path_service.normalize_path(path): flag for path, flag in dict(collapse_overrides or {}).items()
        }
        self.customize_node = customize_node
        self.customize_copy = customize_copy
        self.on_collapse = on_collapse
        self.on_edit = on_edit
        self.on_delete = on_delete
        self.on_add = on_add
        self.on_change = on_change
        self.on_refresh = on_refresh

    # --- root handle ---

    @property
    def root(self):
        return self._root

    @property
    def revision(self):
        return self.state.revision

    def set_root(self, value):
        """Swap in a new root and drop every fold/editing flag tied to the old one."""
        self._root = value
        self.state.reset()
        self.state.bump_revision()
        _LOG.debug("root replaced (%s)", json_value_core.value_type_name(value))

    def _replace_root_value(self, value):
        # Root edits/deletes keep fold state; set_root() is the host-side swap.
        self._root = value

    def _get_value(self, path):
        return json_path_service.get_value(self._root, path)

    def _set_value(self, path, new_value):
        use_path = json_path_service.normalize_path(path)
        if not use_path:
            self._root = new_value
            return
        json_path_service.set_value(self._root, use_path, new_value)

    def get_value(self, path=()):
        return self._get_value(path)

    # --- configuration ---

    def configure(self, **changes):
        """Apply setting changes; collapse settings recompute every fold flag."""
        before = self.settings
        tree_policy_service.validate_collapse_spec(changes.get("collapsed", before.collapsed))
        self.settings = before.updated(**changes)
        if fold_settings_changed(before, self.settings):
            tree_engine_service.reset_folds(self)
        self.state.bump_revision()
        return self.settings

    def set_collapse_override(self, path, collapsed):
        use_path = json_path_service.normalize_path(path)
        if collapsed is None:
            self.collapse_overrides.pop(use_path, None)
        else:
            self.collapse_overrides[use_path] = bool(collapsed)
        # Drop the cached flag so the override is picked up on the next read.
        self.state.fold.flags.pop(use_path, None)

    # --- classification / folding ---

    def kind_of(self, path=()):
        return json_value_core.classify(self._get_value(path))

    def size_of(self, path=()):
        return json_value_core.node_size(self._get_value(path))

    def is_collapsed(self, path=()):
        return tree_engine_service.is_collapsed(self, path)

    def set_collapsed(self, path, collapsed):
        return tree_engine_service.set_fold(self, path, collapsed)

    def toggle(self, path=()):
        return tree_engine_service.toggle_fold(self, path)

    def windows(self, path=()):
        return tree_chunk_service.windows_for_sequence(self, self._get_value(path))

    def rows(self):
        return tree_engine_service.iter_rows(self)

    def outline(self, indent="  "):
        return "\n".join(tree_engine_service.outline_lines(self, indent))

    # --- mutation protocol ---

    def edit(self, path, new_value):
        return json_mutation_service.edit_value(self, path, new_value)

    def edit_text(self, path, text):
        """Edit from user-typed text, coerced against the current value."""
        old_value = self._get_value(path)
        return self.edit(path, json_value_core.parse_edit_text(text, old_value))

    def delete(self, path):
        return json_mutation_service.delete_value(self, path)

    def add(self, path=(), key=None):
        return json_mutation_service.add_entry(self, path, key)

    def begin_add(self, path=()):
        return json_mutation_service.begin_add(self, path)

    def begin_delete(self, path=()):
        return json_mutation_service.begin_delete(self, path)

    def cancel(self, path=()):
        return json_mutation_service.cancel(self, path)

    def confirm(self, path=(), key=None):
        return json_mutation_service.confirm(self, path, key)

    def mode_of(self, path=()):
        return self.state.mode_for(json_path_service.normalize_path(path))

    # --- copy ---

    def copy_text(self, path=()):
        node, _key, _kind, _window = tree_engine_service.resolve_target(self, path)
        return json_copy_service.serialize_for_copy(node, self.customize_copy, self.settings.copy_indent)

    def copy_to_clipboard(self, path, clipboard):
        """Copy the node at path onto a Tk-style clipboard owner; return success bool."""
        if not self.settings.enable_clipboard:
            return False
        options = tree_engine_service.options_for_path(self, path)
        if options.copy is False:
            return False
        node, _key, _kind, _window = tree_engine_service.resolve_target(self, path)
        return clipboard_service.copy_node_to_clipboard(
            node,
            clipboard,
            self.customize_copy,
            self.settings.copy_indent,
        )
