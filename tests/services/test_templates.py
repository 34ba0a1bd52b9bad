"""Tests for the template resource store"""

import json
import logging

import pytest

from target_mcp.config import PACKAGE_TEMPLATES_DIR
from target_mcp.services.error_handler import InvalidTemplateURIError, TemplateNotFoundError
from target_mcp.services.templates import FALLBACK_TEMPLATES, TemplateStore, template_uri


@pytest.fixture
def templates_dir(tmp_path):
    (tmp_path / "html").mkdir()
    (tmp_path / "json").mkdir()
    (tmp_path / "html" / "modal.json").write_text(json.dumps({"name": "Modal"}), encoding="utf-8")
    (tmp_path / "html" / "banner.json").write_text(json.dumps({"name": "Banner"}), encoding="utf-8")
    (tmp_path / "html" / "notes.txt").write_text("ignored", encoding="utf-8")
    (tmp_path / "json" / "flags.json").write_text(json.dumps({"name": "Flags"}), encoding="utf-8")
    (tmp_path / "secret.json").write_text("{}", encoding="utf-8")
    return tmp_path


class TestTemplateStore:
    def test_load_lists_json_files_sorted(self, templates_dir):
        store = TemplateStore(templates_dir)

        templates = store.load()

        assert templates == {"html": ["banner", "modal"], "json": ["flags"]}
        assert store.total == 3

    def test_missing_kind_directory_is_empty(self, tmp_path):
        (tmp_path / "html").mkdir()
        store = TemplateStore(tmp_path)

        assert store.load() == {"html": [], "json": []}

    def test_unreadable_directory_uses_fallback(self, templates_dir, monkeypatch, caplog):
        from pathlib import Path

        def broken_iterdir(self):
            raise PermissionError("denied")

        monkeypatch.setattr(Path, "iterdir", broken_iterdir)
        store = TemplateStore(templates_dir)

        with caplog.at_level(logging.ERROR):
            templates = store.load()

        assert templates == FALLBACK_TEMPLATES
        assert "Using fallback template list" in caplog.text

    def test_list_resources(self, templates_dir):
        store = TemplateStore(templates_dir)
        store.load()

        resources = store.list_resources()

        assert [r["uri"] for r in resources] == [
            "template://html/banner",
            "template://html/modal",
            "template://json/flags",
        ]
        assert resources[0]["name"] == "HTML Template: banner"
        assert resources[2]["description"] == "Adobe Target JSON offer template"
        assert all(r["mimeType"] == "application/json" for r in resources)

    def test_read_returns_raw_text(self, templates_dir):
        store = TemplateStore(templates_dir)

        assert json.loads(store.read("template://json/flags")) == {"name": "Flags"}

    def test_read_invalid_uri(self, templates_dir):
        store = TemplateStore(templates_dir)

        for uri in ("https://example.com/x", "template://css/theme", "template://html/"):
            with pytest.raises(InvalidTemplateURIError):
                store.read(uri)

    def test_read_missing_template(self, templates_dir):
        store = TemplateStore(templates_dir)

        with pytest.raises(TemplateNotFoundError) as exc_info:
            store.read("template://html/does-not-exist")

        assert "template://html/does-not-exist" in str(exc_info.value)

    def test_read_rejects_path_traversal(self, templates_dir):
        store = TemplateStore(templates_dir)

        with pytest.raises(TemplateNotFoundError):
            store.read("template://html/../secret")

    def test_packaged_templates_are_valid_json(self):
        store = TemplateStore(PACKAGE_TEMPLATES_DIR)
        templates = store.load()

        assert "cta-button" in templates["html"]
        assert "feature-flags" in templates["json"]
        for kind, names in templates.items():
            for name in names:
                data = json.loads(store.read(template_uri(kind, name)))
                assert data["name"]
                assert "content" in data
