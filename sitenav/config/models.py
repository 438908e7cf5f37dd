"""Typed, immutable dataclasses describing a resolved site structure."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from types import MappingProxyType
from urllib.parse import urlsplit


def _empty_mapping() -> typ.Mapping[str, typ.Any]:
    return MappingProxyType({})


@dc.dataclass(frozen=True, slots=True)
class Violation:
    """A single configuration problem located by its dotted field path."""

    field_path: str
    reason: str

    def __str__(self) -> str:
        return f"{self.field_path}: {self.reason}"


class ConfigValidationError(ValueError):
    """Raised when a site configuration document violates its schema.

    Every violation found during resolution is carried in ``violations`` so
    callers can report them together instead of fixing one at a time.
    """

    def __init__(self, violations: typ.Iterable[Violation]) -> None:
        self.violations: tuple[Violation, ...] = tuple(violations)
        count = len(self.violations)
        noun = "violation" if count == 1 else "violations"
        lines = [f"Invalid site configuration ({count} {noun}):"]
        lines.extend(f"  {violation}" for violation in self.violations)
        super().__init__("\n".join(lines))

    @property
    def field_paths(self) -> list[str]:
        """Return the field paths of every violation in report order."""
        return [violation.field_path for violation in self.violations]


class ResolverStateError(RuntimeError):
    """Raised when a resolver is used outside its permitted state."""


@dc.dataclass(frozen=True, slots=True)
class SiteMetadata:
    """Global descriptive fields applied to every page."""

    base: str
    title: str
    description: str = ""
    destination_directory: str = ".vuepress/dist"


@dc.dataclass(frozen=True, slots=True)
class HeadTag:
    """An element injected into the document head, such as an icon link."""

    tag_name: str
    attributes: typ.Mapping[str, str] = dc.field(default_factory=_empty_mapping)


@dc.dataclass(frozen=True, slots=True)
class NavEntry:
    """A top-level link in the primary navigation bar."""

    text: str
    link: str

    @property
    def is_external(self) -> bool:
        """Return True when the link carries a scheme or host of its own."""
        parts = urlsplit(self.link.strip())
        return bool(parts.scheme or parts.netloc)


class SidebarChild(typ.NamedTuple):
    """A ``(path, label)`` content link inside a sidebar group."""

    path: str
    label: str


@dc.dataclass(frozen=True, slots=True)
class SidebarGroup:
    """A titled, collapsible cluster of content links.

    Exactly one of ``children`` or ``path`` is populated; a group built from a
    ``path`` is a single-page shortcut and carries no children.
    """

    title: str
    collapsable: bool = True
    children: tuple[SidebarChild, ...] = ()
    path: str | None = None

    @property
    def is_shortcut(self) -> bool:
        """Return True when the group links straight to a single page."""
        return self.path is not None


@dc.dataclass(frozen=True, slots=True)
class RepoLink:
    """Source repository link shown in the navigation bar."""

    repo: str
    repo_label: str


@dc.dataclass(frozen=True, slots=True)
class MarkdownExtension:
    """A request for the rendering engine to load a markdown extension.

    Only the extension's name and options are recorded; the rendering engine
    looks up and invokes the implementation at render time.
    """

    name: str
    options: typ.Mapping[str, typ.Any] = dc.field(default_factory=_empty_mapping)


@dc.dataclass(frozen=True, slots=True)
class SiteModel:
    """The validated, read-only structure consumed by the build pipeline."""

    metadata: SiteMetadata
    head: tuple[HeadTag, ...] = ()
    nav: tuple[NavEntry, ...] = ()
    sidebar: tuple[SidebarGroup, ...] = ()
    repo: RepoLink | None = None
    last_updated_label: str = ""
    sidebar_depth: int = 1
    markdown_extensions: tuple[MarkdownExtension, ...] = ()


__all__ = [
    "ConfigValidationError",
    "HeadTag",
    "MarkdownExtension",
    "NavEntry",
    "RepoLink",
    "ResolverStateError",
    "SidebarChild",
    "SidebarGroup",
    "SiteMetadata",
    "SiteModel",
    "Violation",
]
