"""Check that navigation targets resolve to markdown sources on disk.

The content tree is the on-disk directory of markdown pages a site is built
from. Navigation entries and sidebar groups reference pages by route
(``/about/``), by source path (``frontend/intro.md``), or by extensionless
route (``/frontend/intro`` or ``/frontend/intro.html``); all three forms map
back to a single markdown file. External links are never checked.
"""

from __future__ import annotations

import posixpath
import typing as typ
from urllib.parse import urlsplit

from .config.models import ConfigValidationError, Violation
from .config.resolver import THEME_KEY

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config.models import SiteModel

INDEX_NAMES = ("README.md", "index.md")
IGNORED_DIRS = frozenset({".vuepress", "node_modules", ".git"})
MISSING_REASON = "does not resolve to a markdown page"


class ContentTree:
    """Index of the markdown pages under a source directory."""

    def __init__(self, root: Path, pages: typ.Iterable[str]) -> None:
        self.root = root
        self.pages = frozenset(pages)

    @classmethod
    def scan(cls, root: Path) -> ContentTree:
        """Collect every markdown page under ``root`` as a POSIX relative path."""
        if not root.is_dir():
            msg = f"Content directory '{root}' not found."
            raise FileNotFoundError(msg)
        pages: list[str] = []
        for path in root.rglob("*.md"):
            relative = path.relative_to(root)
            if IGNORED_DIRS.intersection(relative.parts[:-1]):
                continue
            pages.append(relative.as_posix())
        return cls(root, pages)

    def __contains__(self, link: object) -> bool:
        return isinstance(link, str) and self.resolve(link) is not None

    def __len__(self) -> int:
        return len(self.pages)

    def resolve(self, link: str) -> str | None:
        """Return the markdown page ``link`` points at, or None."""
        route = urlsplit(link).path
        if not route:
            return None
        target = posixpath.normpath(route.strip("/")) if route.strip("/") else ""
        if target in (".", ""):
            return self._index_page("")
        if route.endswith("/"):
            return self._index_page(target)
        for candidate in _page_candidates(target):
            if candidate in self.pages:
                return candidate
        return self._index_page(target)

    def _index_page(self, directory: str) -> str | None:
        for name in INDEX_NAMES:
            candidate = posixpath.join(directory, name) if directory else name
            if candidate in self.pages:
                return candidate
        return None


def _page_candidates(target: str) -> list[str]:
    if target.endswith(".md"):
        return [target]
    if target.endswith(".html"):
        return [f"{target[: -len('.html')]}.md"]
    return [f"{target}.md"]


def _is_checkable(link: str) -> bool:
    """Return True for site-local links that name a page.

    Links with a scheme or host leave the site, and fragment or query only
    links (``#top``) stay on the current page.
    """
    parts = urlsplit(link.strip())
    return not (parts.scheme or parts.netloc) and bool(parts.path)


def find_missing_content(model: SiteModel, tree: ContentTree) -> list[Violation]:
    """Return a violation for every internal link the tree cannot resolve."""
    violations: list[Violation] = []
    for index, entry in enumerate(model.nav):
        if entry.is_external or not _is_checkable(entry.link) or entry.link in tree:
            continue
        violations.append(Violation(f"{THEME_KEY}.nav[{index}].link", MISSING_REASON))
    for group_index, group in enumerate(model.sidebar):
        group_path = f"{THEME_KEY}.sidebar[{group_index}]"
        path = group.path
        if path is not None and _is_checkable(path) and path not in tree:
            violations.append(Violation(f"{group_path}.path", MISSING_REASON))
        for child_index, child in enumerate(group.children):
            if _is_checkable(child.path) and child.path not in tree:
                violations.append(
                    Violation(f"{group_path}.children[{child_index}]", MISSING_REASON)
                )
    return violations


def ensure_content_links(model: SiteModel, tree: ContentTree) -> None:
    """Raise :class:`ConfigValidationError` if any internal link is dangling."""
    violations = find_missing_content(model, tree)
    if violations:
        raise ConfigValidationError(violations)


__all__ = [
    "ContentTree",
    "ensure_content_links",
    "find_missing_content",
]
