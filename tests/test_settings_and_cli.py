"""
Unit tests for settings persistence, document loading and the CLI
"""

import gzip
import json

import pytest

from jsontree import ViewSettings
from jsontree.__main__ import main
from jsontree.domain_impl.infra import settings_service
from jsontree.domain_impl.json.json_path_service import format_path_for_display, parse_display_path


class TestSettingsMapping:
    """Per-field validation; bad values keep the defaults"""

    def test_valid_fields_apply(self):
        settings = settings_service.settings_from_mapping({
            "collapsed": 2,
            "size_threshold": 5,
            "editable": {"add": 1},
            "display_size": " Collapsed ",
            "copy_indent": 4,
            "ignore_large_sequences": "yes",
        })
        assert settings.collapsed == 2
        assert settings.size_threshold == 5
        assert settings.editable == {"add": True}
        assert settings.display_size == "collapsed"
        assert settings.copy_indent == 4
        assert settings.ignore_large_sequences is True

    def test_invalid_fields_keep_defaults(self):
        defaults = ViewSettings()
        settings = settings_service.settings_from_mapping({
            "collapsed": "deep",
            "size_threshold": True,
            "chunk_size": 0,
            "copy_indent": 99,
            "editable": "sometimes",
        })
        assert settings == defaults

    def test_non_mapping_input(self):
        assert settings_service.settings_from_mapping([1, 2]) == ViewSettings()

    def test_predicate_is_not_persisted(self):
        settings = ViewSettings(collapsed=lambda *args: None)
        assert settings_service.settings_to_mapping(settings)["collapsed"] is None


class TestSettingsFiles:
    """Settings file load/save"""

    def test_missing_file(self, tmp_path):
        assert settings_service.load_view_settings(tmp_path / "nope.json") == ViewSettings()

    def test_unreadable_file(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        assert settings_service.load_view_settings(path) == ViewSettings()

    def test_save_then_load(self, tmp_path):
        path = tmp_path / "settings.json"
        settings = ViewSettings(collapsed=3, chunk_size=25, editable=False)
        assert settings_service.save_view_settings(path, settings) is True
        assert settings_service.load_view_settings(path) == settings

    def test_save_to_missing_dir(self, tmp_path):
        assert settings_service.save_view_settings(tmp_path / "no" / "such.json", ViewSettings()) is False


class TestDocuments:
    """JSON and gzip JSON documents"""

    def test_plain(self, tmp_path):
        path = tmp_path / "doc.json"
        path.write_text('{"a": 1}', encoding="utf-8")
        assert settings_service.load_document(path) == {"a": 1}

    def test_gzip(self, tmp_path):
        path = tmp_path / "doc.json.gz"
        with gzip.open(path, "wb") as handle:
            handle.write(json.dumps([1, 2]).encode("utf-8"))
        assert settings_service.load_document(path) == [1, 2]


class TestDisplayPaths:
    """Dotted display paths"""

    def test_format(self):
        assert format_path_for_display(()) == "<root>"
        assert format_path_for_display(("items", 3, "name")) == "items[3].name"

    def test_parse(self):
        assert parse_display_path("items[3].name") == ("items", 3, "name")
        assert parse_display_path("<root>") == ()
        assert parse_display_path("[0][1]") == (0, 1)

    def test_unclosed_index(self):
        with pytest.raises(ValueError):
            parse_display_path("items[3")


class TestCli:
    """python -m jsontree"""

    @pytest.fixture
    def document(self, tmp_path):
        path = tmp_path / "doc.json"
        path.write_text(json.dumps({"a": [1, 2], "b": "x"}), encoding="utf-8")
        return path

    def test_outline(self, document, capsys):
        assert main([str(document)]) == 0
        assert capsys.readouterr().out.splitlines() == [
            "<root>: {",
            "  a: [",
            "    [0]: 1",
            "    [1]: 2",
            "  b: 'x'",
        ]

    def test_collapsed_flag(self, document, capsys):
        assert main([str(document), "--collapsed", "1"]) == 0
        assert capsys.readouterr().out.strip() == "<root>: {...}"

    def test_settings_file(self, document, tmp_path, capsys):
        settings = tmp_path / "settings.json"
        settings.write_text(json.dumps({"collapsed": 2}), encoding="utf-8")
        assert main([str(document), "--settings", str(settings)]) == 0
        assert capsys.readouterr().out.splitlines() == ["<root>: {", "  a: [...]", "  b: 'x'"]

    def test_default_settings_file_in_cwd(self, document, tmp_path, monkeypatch, capsys):
        (tmp_path / "jsontree_settings.json").write_text(json.dumps({"collapsed": 1}), encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        assert main([str(document)]) == 0
        assert capsys.readouterr().out.strip() == "<root>: {...}"

    def test_copy(self, document, capsys):
        assert main([str(document), "--copy", "a[1]"]) == 0
        assert capsys.readouterr().out.strip() == "2"

    def test_copy_missing_path(self, document, capsys):
        assert main([str(document), "--copy", "zzz"]) == 1
        assert "ERROR" in capsys.readouterr().err

    def test_missing_document(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.json")]) == 2
        assert "failed to load" in capsys.readouterr().err

    def test_bad_collapsed_argument(self, document):
        with pytest.raises(SystemExit):
            main([str(document), "--collapsed", "sometimes"])
