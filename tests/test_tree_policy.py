"""
Unit tests for collapse, action and size-badge policy
"""

import math

import pytest

from jsontree import CollapseSpecError, NodeOptions, should_collapse
from jsontree.domain_impl.ui.tree_policy_service import (
    is_action_allowed,
    resolve_node_options,
    should_display_size,
    validate_collapse_spec,
)


SAMPLE = {"a": [1, 2, 3], "b": "x"}


class TestShouldCollapse:
    """Resolution order: override, bool, depth, predicate, size threshold"""

    def test_depth_spec_collapses_root(self):
        assert should_collapse(SAMPLE, 1, None, 1, 20, None) is True

    def test_depth_spec_compares_with_ge(self):
        assert should_collapse(SAMPLE, 1, None, 2, 20) is False
        assert should_collapse(SAMPLE["a"], 2, "a", 2, 20) is True
        assert should_collapse(SAMPLE["a"], 3, "a", 2, 20) is True

    def test_override_beats_bool_spec(self):
        assert should_collapse(SAMPLE, 1, None, True, 20, False) is False
        assert should_collapse(SAMPLE, 1, None, False, 20, True) is True

    def test_bool_spec_ignores_size(self):
        big = list(range(50))
        assert should_collapse(big, 1, None, False, 20) is False
        assert should_collapse([], 1, None, True, 20) is True

    def test_size_threshold_without_spec(self):
        assert should_collapse(list(range(21)), 1, None, None, 20) is True
        assert should_collapse(list(range(20)), 1, None, None, 20) is False
        assert should_collapse({str(i): i for i in range(3)}, 1, None, None, 2) is True

    def test_primitives_never_collapse_by_size(self):
        assert should_collapse("x" * 500, 1, None, None, 0) is False

    def test_predicate_result_used(self):
        calls = []

        def predicate(node, depth, key_or_index, default):
            calls.append((depth, key_or_index, default))
            return key_or_index == "a"

        assert should_collapse(SAMPLE["a"], 2, "a", predicate, 20) is True
        assert should_collapse(SAMPLE, 1, None, predicate, 20) is False
        assert calls == [(2, "a", False), (1, None, False)]

    def test_predicate_without_opinion_falls_back_to_size(self):
        def predicate(node, depth, key_or_index, default):
            return None

        assert should_collapse(list(range(5)), 1, None, predicate, 4) is True
        assert should_collapse(list(range(4)), 1, None, predicate, 4) is False

    def test_predicate_errors_propagate(self):
        def predicate(node, depth, key_or_index, default):
            return 1 / 0

        with pytest.raises(ZeroDivisionError):
            should_collapse(SAMPLE, 1, None, predicate, 20)

    @pytest.mark.parametrize("spec", [math.nan, math.inf, -math.inf, "deep", [1]])
    def test_malformed_spec_raises(self, spec):
        with pytest.raises(CollapseSpecError):
            should_collapse(SAMPLE, 1, None, spec, 20)

    def test_override_skips_spec_validation(self):
        assert should_collapse(SAMPLE, 1, None, math.nan, 20, True) is True

    def test_validate_returns_spec(self):
        assert validate_collapse_spec(3) == 3
        assert validate_collapse_spec(None) is None


class TestActions:
    """Edit permissions combine the global editable flag with per-node options"""

    def test_editable_bool(self):
        assert is_action_allowed(True, None, "add") is True
        assert is_action_allowed(False, None, "edit") is False

    def test_editable_mapping(self):
        editable = {"edit": True}
        assert is_action_allowed(editable, None, "edit") is True
        assert is_action_allowed(editable, None, "add") is False
        assert is_action_allowed(editable, None, "delete") is False

    def test_node_options_can_only_deny(self):
        assert is_action_allowed(True, NodeOptions(delete=False), "delete") is False
        assert is_action_allowed(False, NodeOptions(delete=True), "delete") is False
        assert is_action_allowed(True, NodeOptions(delete=True), "delete") is True

    def test_copy_uses_clipboard_flag(self):
        assert is_action_allowed(False, None, "copy", enable_clipboard=True) is True
        assert is_action_allowed(True, None, "copy", enable_clipboard=False) is False
        assert is_action_allowed(True, NodeOptions(copy=False), "copy") is False

    def test_unknown_action(self):
        assert is_action_allowed(True, None, "rename") is False


class TestNodeOptions:
    """customize_node results are normalized to NodeOptions"""

    def test_none_and_missing_hook(self):
        assert resolve_node_options(None, {}, 1, None) == NodeOptions()
        assert resolve_node_options(lambda n, d, k: None, {}, 1, None) == NodeOptions()

    def test_dict_result(self):
        options = resolve_node_options(lambda n, d, k: {"collapsed": True, "edit": False}, {}, 1, None)
        assert options.collapsed is True
        assert options.edit is False
        assert options.add is None

    def test_bad_result_type(self):
        with pytest.raises(TypeError):
            resolve_node_options(lambda n, d, k: "yes", {}, 1, None)


def test_display_size_modes():
    assert should_display_size(True, 1, False) is True
    assert should_display_size(False, 5, True) is False
    assert should_display_size(2, 3, False) is True
    assert should_display_size(2, 2, False) is False
    assert should_display_size("collapsed", 1, True) is True
    assert should_display_size("collapsed", 1, False) is False
    assert should_display_size("expanded", 1, False) is True
    assert should_display_size(None, 1, True) is False
