"""Load/save the JSON-serializable part of ViewSettings."""

import gzip
import json
import os
from typing import Any
from jsontree import constants as tree_constants
from jsontree.exceptions import EXPECTED_ERRORS
from jsontree.view_settings import ViewSettings
import logging
_LOG = logging.getLogger(__name__)


def _positive_int(value: Any, low: int = 0, high: int = 1_000_000) -> Any:
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    if low <= value <= high:
        return value
    return None


def _bool_token(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(int(value))
    if isinstance(value, str):
        token = value.strip().lower()
        if token in ("1", "true", "yes", "on"):
            return True
        if token in ("0", "false", "no", "off"):
            return False
    return None


def _collapsed_value(value: Any) -> Any:
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value if value >= 0 else None
    return None


def _editable_value(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, dict):
        return {name: bool(value.get(name)) for name in tree_constants.EDIT_ACTIONS if name in value}
    return None


def _display_size_value(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().lower() in tree_constants.DISPLAY_SIZE_MODES:
        return value.strip().lower()
    return None


def settings_from_mapping(data: Any, base: Any = None) -> ViewSettings:
    """Apply validated fields from a decoded settings mapping; bad fields keep defaults."""
    settings = base if isinstance(base, ViewSettings) else ViewSettings()
    if not isinstance(data, dict):
        return settings
    changes = {}
    if "collapsed" in data:
        collapsed = _collapsed_value(data.get("collapsed"))
        if collapsed is not None or data.get("collapsed") is None:
            changes["collapsed"] = collapsed
    for name in ("size_threshold", "large_sequence_threshold"):
        number = _positive_int(data.get(name))
        if number is not None:
            changes[name] = number
    chunk = _positive_int(data.get("chunk_size"), low=1)
    if chunk is not None:
        changes["chunk_size"] = chunk
    for name in ("ignore_large_sequences", "enable_clipboard"):
        flag = _bool_token(data.get(name))
        if flag is not None:
            changes[name] = flag
    editable = _editable_value(data.get("editable"))
    if editable is not None:
        changes["editable"] = editable
    display_size = _display_size_value(data.get("display_size"))
    if display_size is not None:
        changes["display_size"] = display_size
    indent = _positive_int(data.get("copy_indent"), high=16)
    if indent is not None:
        changes["copy_indent"] = indent
    return settings.updated(**changes)


def load_view_settings(path: Any, base: Any = None) -> ViewSettings:
    """Load settings from a UTF-8 JSON file; missing or unreadable files yield defaults."""
    settings = base if isinstance(base, ViewSettings) else ViewSettings()
    use_path = str(path or "")
    if not use_path or not os.path.isfile(use_path):
        return settings
    try:
        with open(use_path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except EXPECTED_ERRORS as exc:
        _LOG.debug('expected_error', exc_info=exc)
        return settings
    return settings_from_mapping(data, settings)


def settings_to_mapping(settings: ViewSettings) -> dict[str, Any]:
    collapsed = settings.collapsed
    if callable(collapsed) or not (collapsed is None or isinstance(collapsed, (bool, int))):
        # Predicates cannot be persisted.
        collapsed = None
    return {
        "collapsed": collapsed,
        "size_threshold": int(settings.size_threshold),
        "large_sequence_threshold": int(settings.large_sequence_threshold),
        "chunk_size": int(settings.chunk_size),
        "ignore_large_sequences": bool(settings.ignore_large_sequences),
        "editable": settings.editable if isinstance(settings.editable, (bool, dict)) else False,
        "enable_clipboard": bool(settings.enable_clipboard),
        "display_size": settings.display_size,
        "copy_indent": settings.copy_indent,
    }


def save_view_settings(path: Any, settings: ViewSettings) -> bool:
    """Write settings JSON; return False when the file cannot be written."""
    try:
        payload = json.dumps(settings_to_mapping(settings), ensure_ascii=False, indent=2)
        with open(str(path), "w", encoding="utf-8") as fh:
            fh.write(payload)
        return True
    except EXPECTED_ERRORS as exc:
        _LOG.debug('expected_error', exc_info=exc)
        return False


def load_document(path: Any) -> Any:
    """Load JSON-compatible document data from .json or gzip .json.gz path."""
    use_path = str(path or "")
    if use_path.lower().endswith(".gz"):
        with gzip.open(use_path, "rb") as handle:
            raw = handle.read().decode("utf-8")
        return json.loads(raw)
    with open(use_path, "r", encoding="utf-8") as handle:
        return json.load(handle)
