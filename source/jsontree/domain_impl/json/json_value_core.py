"""Value classification and edit-text coercion for tree nodes."""

import json
from typing import Any
from jsontree import constants as tree_constants
from jsontree.exceptions import EXPECTED_ERRORS
import logging
_LOG = logging.getLogger(__name__)


class _AbsentType:
    """Marker for a value that is not there (a deleted root)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "ABSENT"

    def __bool__(self):
        return False

    def __reduce__(self):
        return (_AbsentType, ())


ABSENT = _AbsentType()


def is_container(node: Any) -> bool:
    return isinstance(node, (dict, list))


def classify(node: Any) -> str:
    """Return the node kind; anything that is not a dict or list is a primitive."""
    if isinstance(node, dict):
        return tree_constants.NODE_MAPPING
    if isinstance(node, list):
        return tree_constants.NODE_SEQUENCE
    return tree_constants.NODE_PRIMITIVE


def node_size(node: Any) -> int | None:
    if isinstance(node, (dict, list)):
        return len(node)
    return None


def value_type_name(node: Any) -> str:
    if node is ABSENT:
        return "undefined"
    if node is None:
        return "null"
    # bool before int: bool is an int subclass.
    if isinstance(node, bool):
        return "boolean"
    if isinstance(node, int):
        return "integer"
    if isinstance(node, float):
        return "float"
    if isinstance(node, str):
        return "string"
    if isinstance(node, dict):
        return "object"
    if isinstance(node, list):
        return "array"
    return "opaque"


def _strip_wrapping_quotes(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in ("'", '"'):
        return text[1:-1]
    return text


def parse_edit_text(text: Any, old_value: Any = None) -> Any:
    """Turn user-typed edit text into the value to write.

    JSON text wins. Otherwise a string slot keeps the raw text with one pair of
    wrapping quotes removed, and any other slot keeps the stripped text.
    """
    raw = str(text if text is not None else "")
    try:
        return json.loads(raw)
    except EXPECTED_ERRORS as exc:
        _LOG.debug('expected_error', exc_info=exc)
    stripped = raw.strip()
    if isinstance(old_value, str):
        return _strip_wrapping_quotes(stripped)
    return stripped
