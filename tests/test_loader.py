"""Tests for loading site configuration documents from disk."""

from __future__ import annotations

import typing as typ

import pytest
from ruamel.yaml.error import YAMLError

from sitenav.config import (
    ConfigValidationError,
    SidebarChild,
    load_site_config,
    read_config_document,
)

if typ.TYPE_CHECKING:
    from pathlib import Path


def test_load_site_config_resolves_yaml(config_path: Path) -> None:
    """The sample YAML document resolves into the expected model."""
    site = load_site_config(config_path)

    assert site.metadata.title == "Little River"
    assert site.metadata.destination_directory == "dist"
    assert [entry.link for entry in site.nav] == ["/about/"]
    assert [group.title for group in site.sidebar] == [
        "Frontend",
        "Products",
        "About us",
    ], "expected sidebar groups in authored order"
    assert site.sidebar[0].children[1] == SidebarChild(
        "frontend/intersectionObserver.md", "IntersectionObserver in practice"
    )
    assert site.sidebar_depth == 2
    assert site.repo is not None
    assert site.repo.repo == "https://github.com/sunmaer/lamour"
    assert [ext.name for ext in site.markdown_extensions] == ["tables", "toc"]


def test_load_site_config_appends_extra_extensions(config_path: Path) -> None:
    site = load_site_config(config_path, extensions=["sane_lists"])

    assert site.markdown_extensions[-1].name == "sane_lists"


def test_json_documents_load(tmp_path: Path) -> None:
    """JSON is accepted because YAML 1.2 is a superset of it."""
    path = tmp_path / "config.json"
    path.write_text(
        '{"base": "/blog/", "title": "T", "themeConfig": {"sidebarDepth": 3}}',
        encoding="utf-8",
    )

    site = load_site_config(path)

    assert site.metadata.base == "/blog/"
    assert site.sidebar_depth == 3


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="not found"):
        load_site_config(tmp_path / "absent.yaml")


def test_empty_file_reports_required_fields(tmp_path: Path) -> None:
    """An empty document behaves like an empty mapping."""
    path = tmp_path / "config.yaml"
    path.write_text("", encoding="utf-8")

    assert read_config_document(path) == {}
    with pytest.raises(ConfigValidationError) as excinfo:
        load_site_config(path)

    assert excinfo.value.field_paths == ["base", "title"]


def test_top_level_list_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("- base\n- title\n", encoding="utf-8")

    with pytest.raises(ConfigValidationError) as excinfo:
        load_site_config(path)

    assert excinfo.value.field_paths == ["<document>"]


def test_malformed_yaml_propagates(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("base: [unterminated\n", encoding="utf-8")

    with pytest.raises(YAMLError):
        load_site_config(path)
