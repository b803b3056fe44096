"""Collapsible, editable tree engine for JSON-compatible values."""

from jsontree.constants import APP_VERSION as __version__
from jsontree.domain_impl.json.json_copy_service import serialize_for_copy
from jsontree.domain_impl.json.json_value_core import ABSENT, classify, node_size
from jsontree.domain_impl.ui.tree_chunk_service import SequenceWindow, build_windows
from jsontree.domain_impl.ui.tree_policy_service import should_collapse
from jsontree.exceptions import AppError, CollapseSpecError, PathLookupError
from jsontree.json_tree_view import JsonTreeView
from jsontree.view_settings import ViewSettings
from jsontree.view_state import CollapseEvent, EditVerdict, MutationEvent, NodeOptions, TreeRow

__all__ = [
    "ABSENT",
    "AppError",
    "CollapseEvent",
    "CollapseSpecError",
    "EditVerdict",
    "JsonTreeView",
    "MutationEvent",
    "NodeOptions",
    "PathLookupError",
    "SequenceWindow",
    "TreeRow",
    "ViewSettings",
    "build_windows",
    "classify",
    "node_size",
    "serialize_for_copy",
    "should_collapse",
    "__version__",
]
