"""Clipboard helpers for Tk-style host clipboard objects."""
from typing import Any
from jsontree.domain_impl.json import json_copy_service
from jsontree.exceptions import EXPECTED_ERRORS
import logging
_LOG = logging.getLogger(__name__)


def copy_text_to_clipboard(payload: Any, root: Any, expected_errors: Any = EXPECTED_ERRORS) -> Any:
    """Copy non-empty text payload into root clipboard; return success bool."""
    text = str(payload or "")
    if not text.strip():
        return False
    if root is None:
        return False
    try:
        root.clipboard_clear()
        root.clipboard_append(text)
        idle = getattr(root, "update_idletasks", None)
        if callable(idle):
            idle()
        return True
    except expected_errors as exc:
        _LOG.debug('expected_error', exc_info=exc)
        return False


def copy_node_to_clipboard(node: Any, root: Any, customizer: Any = None, indent: Any = 2) -> Any:
    """Serialize node for copy and place it on the host clipboard."""
    text = json_copy_service.serialize_for_copy(node, customizer, indent)
    return copy_text_to_clipboard(text, root)
