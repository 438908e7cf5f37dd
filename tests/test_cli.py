"""Tests for the ``sitenav`` command-line interface and JSON export."""

from __future__ import annotations

import typing as typ

import msgspec.json as msgspec_json
import pytest

from sitenav import cli
from sitenav.config import resolve
from sitenav.export import encode_site_model

if typ.TYPE_CHECKING:
    from pathlib import Path


def test_check_reports_success(
    config_path: Path, content_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.check(config=config_path, content_dir=content_dir)

    out = capsys.readouterr().out
    assert "ok (1 nav entries, 3 sidebar groups)" in out, f"unexpected output {out!r}"


def test_check_exits_with_every_violation(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(
        "base: ''\ntitle: T\nthemeConfig:\n  nav:\n    - {text: X, link: ''}\n",
        encoding="utf-8",
    )

    with pytest.raises(SystemExit) as excinfo:
        cli.check(config=path)

    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert "base: must be non-empty and start with /" in err
    assert "themeConfig.nav[0].link: must be a non-empty string" in err


def test_check_flags_missing_content(
    config_path: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    empty_docs = tmp_path / "docs"
    empty_docs.mkdir()

    with pytest.raises(SystemExit) as excinfo:
        cli.check(config=config_path, content_dir=empty_docs)

    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert "themeConfig.nav[0].link: does not resolve to a markdown page" in err
    assert "themeConfig.sidebar[2].path" in err


def test_check_reads_config_path_from_environment(
    config_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setenv("SITENAV_CONFIG", str(config_path))

    try:
        cli.app(["check"])
    except SystemExit as exc:  # newer cyclopts exits after the command returns
        assert exc.code in (None, 0), f"expected a clean exit, got {exc.code!r}"

    assert "ok" in capsys.readouterr().out


def test_show_prints_model_json(
    config_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.show(config=config_path)

    payload = msgspec_json.decode(capsys.readouterr().out.encode("utf-8"))
    assert payload["metadata"]["title"] == "Little River"
    assert payload["sidebar"][0]["children"][0] == [
        "frontend/standardPackage.md",
        "Publishing a standard package",
    ], "sidebar children should encode as [path, label] pairs"
    assert payload["head"][0]["attributes"] == {"rel": "icon", "href": "/favicon.ico"}
    assert payload["markdown_extensions"][1] == {
        "name": "toc",
        "options": {"permalink": True},
    }


def test_encode_site_model_compact_output() -> None:
    site = resolve({"base": "/", "title": "T"})

    encoded = encode_site_model(site, indent=0)

    assert b"\n" not in encoded
    assert msgspec_json.decode(encoded)["sidebar_depth"] == 1
