"""Copy-text serialization for tree nodes."""

import json
from typing import Any
from jsontree import constants as tree_constants
from jsontree.domain_impl.json import json_value_core
from jsontree.exceptions import EXPECTED_ERRORS
import logging
_LOG = logging.getLogger(__name__)


class _CopyEncoder(json.JSONEncoder):
    """JSON encoder that renders non-JSON values as text instead of failing."""

    def default(self, o):
        if o is json_value_core.ABSENT:
            return "undefined"
        if isinstance(o, (set, frozenset)):
            return list(o)
        if isinstance(o, bytes):
            return o.decode("utf-8", errors="replace")
        return str(o)


def serialize_for_copy(node: Any, customizer: Any = None, indent: Any = tree_constants.COPY_INDENT_DEFAULT) -> str:
    """Build clipboard text for a node; never mutates the node."""
    value = customizer(node) if callable(customizer) else node
    # Bare strings copy without JSON quotes.
    if isinstance(value, str):
        return value
    if value is json_value_core.ABSENT:
        return "undefined"
    try:
        return json.dumps(value, cls=_CopyEncoder, indent=indent, ensure_ascii=False)
    except EXPECTED_ERRORS as exc:
        _LOG.debug('expected_error', exc_info=exc)
        return f"{type(exc).__name__}: {exc}"
