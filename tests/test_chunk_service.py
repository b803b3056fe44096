"""
Unit tests for large-sequence windowing
"""

import math

import pytest

from jsontree import JsonTreeView, SequenceWindow, build_windows
from jsontree.domain_impl.ui.tree_chunk_service import find_window, leaf_windows, needs_windowing


def _sizes(windows):
    return [len(window) for window in windows]


def test_250_items_make_three_windows():
    windows = build_windows(250, 100, 100)
    assert _sizes(windows) == [100, 100, 50]
    assert [(w.start, w.stop) for w in windows] == [(0, 100), (100, 200), (200, 250)]
    assert windows[1].absolute_index(50) == 150


def test_no_windows_at_or_below_threshold():
    assert build_windows(100, 100, 100) == []
    assert build_windows(0, 100, 100) == []


@pytest.mark.parametrize("length,chunk", [(101, 100), (1000, 100), (257, 10), (31, 7)])
def test_leaves_cover_sequence_in_order(length, chunk):
    data = list(range(length))
    windows = build_windows(length, 30, chunk)
    leaves = leaf_windows(windows)
    assert len(leaves) == math.ceil(length / chunk)
    assert all(len(leaf) <= chunk for leaf in leaves)
    rebuilt = []
    for leaf in leaves:
        rebuilt.extend(leaf.items(data))
    assert rebuilt == data


def test_chunks_of_chunks():
    windows = build_windows(25_000, 100, 100)
    assert _sizes(windows) == [10_000, 10_000, 5_000]
    assert [len(w.children) for w in windows] == [100, 100, 50]
    assert windows[2].children[-1] == SequenceWindow(24_900, 25_000)
    assert len(leaf_windows(windows)) == 250


def test_absolute_index_bounds():
    window = SequenceWindow(100, 200)
    assert window.absolute_index(0) == 100
    assert window.absolute_index(99) == 199
    with pytest.raises(IndexError):
        window.absolute_index(100)


def test_bad_chunk_size():
    with pytest.raises(ValueError):
        build_windows(500, 100, 0)


def test_needs_windowing():
    assert needs_windowing(list(range(101)), 100) is True
    assert needs_windowing(list(range(101)), 100, ignore_large=True) is False
    assert needs_windowing({"a": 1}, 0) is False


def test_find_window_by_token():
    windows = build_windows(250, 100, 100)
    assert find_window(windows, ("__chunk__", 100, 200)) is windows[1]
    assert find_window(windows, ("__chunk__", 100, 150)) is None


class TestLiveReflow:
    """Windows follow the live sequence length"""

    def test_delete_and_append_reflow(self):
        data = list(range(250))
        view = JsonTreeView(data)
        assert _sizes(view.windows()) == [100, 100, 50]
        view.delete((0,))
        assert _sizes(view.windows()) == [100, 100, 49]
        for _ in range(52):
            view.add(())
        assert _sizes(view.windows()) == [100, 100, 100, 1]

    def test_shrinking_below_threshold_drops_windows(self):
        data = list(range(101))
        view = JsonTreeView(data)
        assert len(view.windows()) == 2
        view.delete((100,))
        assert view.windows() == []

    def test_opt_out(self):
        view = JsonTreeView(list(range(500)), ignore_large_sequences=True)
        assert view.windows() == []
