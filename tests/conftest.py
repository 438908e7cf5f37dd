"""Shared fixtures for sitenav tests."""

from __future__ import annotations

import typing as typ
from textwrap import dedent

import pytest

if typ.TYPE_CHECKING:
    from pathlib import Path

SAMPLE_CONFIG = dedent(
    """
    base: /
    title: Little River
    description: Notes from two writers
    dest: dist
    head:
      - [link, {rel: icon, href: /favicon.ico}]
    themeConfig:
      nav:
        - {text: About us, link: /about/}
      sidebarDepth: 2
      sidebar:
        - title: Frontend
          collapsable: false
          children:
            - [frontend/standardPackage.md, Publishing a standard package]
            - [frontend/intersectionObserver.md, IntersectionObserver in practice]
        - title: Products
          collapsable: false
          children:
            - [product/demo.md, Product reviews]
        - title: About us
          path: /about/
          collapsable: false
      lastUpdated: Last updated
      repo: https://github.com/sunmaer/lamour
      repoLabel: GitHub
    markdown:
      extensions:
        - tables
        - name: toc
          options: {permalink: true}
    """
).lstrip()


@pytest.fixture
def sample_config_text() -> str:
    """Return a complete site configuration document."""
    return SAMPLE_CONFIG


@pytest.fixture
def config_path(tmp_path: Path, sample_config_text: str) -> Path:
    """Write the sample configuration into a temporary ``.vuepress`` folder."""
    path = tmp_path / ".vuepress" / "config.yaml"
    path.parent.mkdir(parents=True)
    path.write_text(sample_config_text, encoding="utf-8")
    return path


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """Create markdown sources matching every link in the sample config."""
    for relative in (
        "README.md",
        "about/README.md",
        "frontend/standardPackage.md",
        "frontend/intersectionObserver.md",
        "product/demo.md",
    ):
        page = tmp_path / relative
        page.parent.mkdir(parents=True, exist_ok=True)
        page.write_text(f"# {relative}\n", encoding="utf-8")
    return tmp_path
