"""
Unit tests for value classification and edit-text coercion
"""

import datetime
import re

import pytest

from jsontree import ABSENT, classify, node_size
from jsontree.domain_impl.json.json_value_core import parse_edit_text, value_type_name


class TestClassify:
    """Every node maps to exactly one kind"""

    def test_containers(self):
        assert classify({}) == "object"
        assert classify({"a": 1}) == "object"
        assert classify([]) == "array"
        assert classify([1, [2]]) == "array"

    @pytest.mark.parametrize(
        "value",
        [
            None,
            True,
            0,
            1.5,
            "text",
            ABSENT,
            (1, 2),
            {1, 2},
            b"raw",
            datetime.datetime(2024, 1, 1),
            re.compile("x+"),
            len,
            object(),
        ],
    )
    def test_everything_else_is_primitive(self, value):
        assert classify(value) == "primitive"

    def test_size(self):
        assert node_size({"a": 1, "b": 2}) == 2
        assert node_size([1, 2, 3]) == 3
        assert node_size([]) == 0
        assert node_size("abc") is None
        assert node_size(None) is None


def test_value_type_names():
    assert value_type_name(ABSENT) == "undefined"
    assert value_type_name(None) == "null"
    assert value_type_name(False) == "boolean"
    assert value_type_name(3) == "integer"
    assert value_type_name(3.0) == "float"
    assert value_type_name("s") == "string"
    assert value_type_name({}) == "object"
    assert value_type_name([]) == "array"
    assert value_type_name(object()) == "opaque"


def test_absent_is_falsy_singleton():
    assert not ABSENT
    assert repr(ABSENT) == "ABSENT"
    assert type(ABSENT)() is ABSENT


class TestParseEditText:
    """User-typed text becomes a JSON value where possible"""

    def test_json_text(self):
        assert parse_edit_text("42") == 42
        assert parse_edit_text('"hi"') == "hi"
        assert parse_edit_text("null") is None
        assert parse_edit_text('{"a": [1]}') == {"a": [1]}

    def test_string_slot_keeps_raw_text(self):
        assert parse_edit_text("hello world", "old") == "hello world"
        assert parse_edit_text("'quoted'", "old") == "quoted"

    def test_non_string_slot_keeps_stripped_text(self):
        assert parse_edit_text("  abc ", 5) == "abc"
        assert parse_edit_text("", 5) == ""
