"""Resolve a raw site configuration document into an immutable SiteModel.

The resolver walks the loosely structured mapping produced by the YAML loader
(or built by hand in tests), records every structural problem it finds as a
:class:`~sitenav.config.models.Violation`, and only builds a
:class:`~sitenav.config.models.SiteModel` once the whole document is known to
be valid. Violations are reported in a fixed order: site metadata first, then
sidebar group shape, sidebar children, navigation links, and finally the
repository link and the remaining optional sections.

Examples
--------
>>> from sitenav.config.resolver import resolve
>>> site = resolve({"base": "/", "title": "Notes"})
>>> site.sidebar_depth, site.nav
(1, ())
>>> resolve({"base": "", "title": "Notes"})  # doctest: +SKIP
Traceback (most recent call last):
...
ConfigValidationError: Invalid site configuration (1 violation):
  base: must be non-empty and start with /
"""

from __future__ import annotations

import collections.abc as cabc
import enum
import typing as typ
from urllib.parse import urlsplit

from .helpers import (
    BASE_REASON,
    ViolationCollector,
    _freeze_mapping,
    _is_positive_int,
    _is_valid_base,
    _is_valid_url,
    _join_path,
    _non_empty_str,
    _optional_str,
)
from .models import (
    ConfigValidationError,
    HeadTag,
    MarkdownExtension,
    NavEntry,
    RepoLink,
    ResolverStateError,
    SidebarChild,
    SidebarGroup,
    SiteMetadata,
    SiteModel,
    Violation,
)

DOCUMENT_PATH = "<document>"
THEME_KEY = "themeConfig"
MARKDOWN_KEY = "markdown"
DEFAULT_DEST = ".vuepress/dist"
DEFAULT_LAST_UPDATED_LABEL = "Last Updated"
KNOWN_REPO_HOSTS: dict[str, str] = {
    "github.com": "GitHub",
    "gitlab.com": "GitLab",
    "bitbucket.org": "Bitbucket",
}

RawConfig = cabc.Mapping[str, typ.Any]


def resolve(
    raw: RawConfig, *, extensions: cabc.Iterable[MarkdownExtension] = ()
) -> SiteModel:
    """Validate ``raw`` and return the resolved :class:`SiteModel`.

    Parameters
    ----------
    raw : Mapping
        Configuration document with ``base``, ``title`` and the optional
        ``description``, ``dest``, ``head``, ``themeConfig`` and ``markdown``
        sections.
    extensions : Iterable[MarkdownExtension], optional
        Extension requests registered programmatically; they follow the
        requests declared in the document's ``markdown.extensions`` list.

    Returns
    -------
    SiteModel
        Immutable model preserving the authored order of every sequence.

    Raises
    ------
    ConfigValidationError
        If the document violates any structural rule. The error carries every
        violation found, not only the first.
    """
    if not isinstance(raw, cabc.Mapping):
        raise ConfigValidationError([Violation(DOCUMENT_PATH, "must be a mapping")])

    collector = ViolationCollector()
    metadata = _resolve_metadata(raw, collector)
    theme = _section(raw, THEME_KEY, collector)
    markdown = _section(raw, MARKDOWN_KEY, collector)
    sidebar_path = _join_path(THEME_KEY, "sidebar")
    sidebar_raw = _sequence(theme, "sidebar", sidebar_path, collector)
    _check_group_shapes(sidebar_raw, sidebar_path, collector)
    sidebar = _resolve_sidebar(sidebar_raw, sidebar_path, collector)
    nav = _resolve_nav(
        _sequence(theme, "nav", _join_path(THEME_KEY, "nav"), collector),
        _join_path(THEME_KEY, "nav"),
        collector,
    )
    repo = _resolve_repo(theme, collector)
    head = _resolve_head(_sequence(raw, "head", "head", collector), collector)
    sidebar_depth = _resolve_sidebar_depth(theme, collector)
    last_updated = _resolve_last_updated(theme, collector)
    requested = _resolve_extensions(markdown, collector)
    registered = _resolve_registered(extensions, collector)

    if collector:
        raise ConfigValidationError(collector.violations)

    return SiteModel(
        metadata=typ.cast("SiteMetadata", metadata),
        head=head,
        nav=nav,
        sidebar=sidebar,
        repo=repo,
        last_updated_label=last_updated,
        sidebar_depth=sidebar_depth,
        markdown_extensions=(*requested, *registered),
    )


class ResolverState(enum.Enum):
    """Lifecycle of a :class:`ConfigResolver`."""

    UNRESOLVED = "unresolved"
    RESOLVED = "resolved"


class ConfigResolver:
    """Hold a raw document until it is resolved exactly once.

    The resolver starts ``UNRESOLVED`` holding the raw document and any
    markdown extension requests registered against it. :meth:`resolve` moves
    it to ``RESOLVED``; that state is terminal and later calls return the
    same model instance.
    """

    def __init__(self, raw: RawConfig) -> None:
        self._raw = raw
        self._extensions: list[MarkdownExtension] = []
        self._model: SiteModel | None = None

    @property
    def state(self) -> ResolverState:
        """Return the current lifecycle state."""
        if self._model is None:
            return ResolverState.UNRESOLVED
        return ResolverState.RESOLVED

    @property
    def model(self) -> SiteModel:
        """Return the resolved model, raising if :meth:`resolve` has not run."""
        if self._model is None:
            msg = "Site configuration has not been resolved yet."
            raise ResolverStateError(msg)
        return self._model

    @property
    def extensions(self) -> tuple[MarkdownExtension, ...]:
        """Return the extension requests registered so far."""
        return tuple(self._extensions)

    def register_markdown_extension(
        self, extension: MarkdownExtension | str, /, **options: typ.Any
    ) -> MarkdownExtension:
        """Record a markdown extension request for the rendering engine.

        Parameters
        ----------
        extension : MarkdownExtension or str
            A prepared request, or the extension name to request.
        **options
            Extension options; only accepted together with a name.

        Returns
        -------
        MarkdownExtension
            The recorded request. Nothing is imported or invoked here.

        Raises
        ------
        ResolverStateError
            If the configuration has already been resolved.
        ValueError
            If the name is empty, or options accompany a prepared request.
        """
        if self._model is not None:
            msg = "Cannot register markdown extensions after resolution."
            raise ResolverStateError(msg)
        match extension:
            case MarkdownExtension(name=name, options=prepared):
                if options:
                    msg = "Options must be set on the MarkdownExtension itself."
                    raise ValueError(msg)
                if not _non_empty_str(name):
                    msg = "Markdown extension name must be a non-empty string."
                    raise ValueError(msg)
                if not isinstance(prepared, cabc.Mapping):
                    msg = "Markdown extension options must be a mapping."
                    raise ValueError(msg)
                request = MarkdownExtension(name.strip(), _freeze_mapping(prepared))
            case str() as name if name.strip():
                request = MarkdownExtension(name.strip(), _freeze_mapping(options))
            case _:
                msg = "Markdown extension name must be a non-empty string."
                raise ValueError(msg)
        self._extensions.append(request)
        return request

    def resolve(self) -> SiteModel:
        """Resolve the held document, caching the result.

        Raises
        ------
        ConfigValidationError
            If the document is invalid; the resolver stays ``UNRESOLVED``.
        """
        if self._model is None:
            self._model = resolve(self._raw, extensions=self._extensions)
        return self._model


def _section(
    raw: RawConfig, key: str, collector: ViolationCollector
) -> cabc.Mapping[str, typ.Any]:
    """Return the nested mapping at ``key``, or an empty one when absent."""
    value = raw.get(key)
    if value is None:
        return {}
    if not isinstance(value, cabc.Mapping):
        collector.add(key, "must be a mapping")
        return {}
    return value


def _sequence(
    parent: cabc.Mapping[str, typ.Any],
    key: str,
    field_path: str,
    collector: ViolationCollector,
) -> list[typ.Any]:
    """Return the list at ``key``, or an empty list when absent."""
    value = parent.get(key)
    if value is None:
        return []
    if not isinstance(value, list | tuple):
        collector.add(field_path, "must be a list")
        return []
    return list(value)


def _resolve_metadata(
    raw: RawConfig, collector: ViolationCollector
) -> SiteMetadata | None:
    base = raw.get("base")
    title = raw.get("title")
    if not _is_valid_base(base):
        collector.add("base", BASE_REASON)
    if not _non_empty_str(title):
        collector.add("title", "must be a non-empty string")
    for key in ("description", "dest"):
        value = raw.get(key)
        if value is not None and not isinstance(value, str):
            collector.add(key, "must be a string")
    if not (_is_valid_base(base) and _non_empty_str(title)):
        return None
    return SiteMetadata(
        base=str(base),
        title=str(title),
        description=_optional_str(raw.get("description")),
        destination_directory=_optional_str(raw.get("dest"), DEFAULT_DEST),
    )


def _check_group_shapes(
    groups: list[typ.Any], field_path: str, collector: ViolationCollector
) -> None:
    """Check that every group is a titled mapping with one of children/path."""
    for index, group in enumerate(groups):
        group_path = _join_path(field_path, index)
        if not isinstance(group, cabc.Mapping):
            collector.add(group_path, "must be a mapping")
            continue
        has_children = group.get("children") is not None
        has_path = group.get("path") is not None
        if has_children == has_path:
            collector.add(group_path, "must define exactly one of 'children' or 'path'")
        if not _non_empty_str(group.get("title")):
            collector.add(_join_path(group_path, "title"), "must be a non-empty string")
        collapsable = group.get("collapsable", True)
        if not isinstance(collapsable, bool):
            collector.add(_join_path(group_path, "collapsable"), "must be a boolean")
        if has_path and not _non_empty_str(group.get("path")):
            collector.add(_join_path(group_path, "path"), "must be a non-empty string")


def _resolve_sidebar(
    groups: list[typ.Any], field_path: str, collector: ViolationCollector
) -> tuple[SidebarGroup, ...]:
    resolved: list[SidebarGroup] = []
    for index, group in enumerate(groups):
        if not isinstance(group, cabc.Mapping):
            continue
        group_path = _join_path(field_path, index)
        children = _resolve_children(
            group.get("children"), _join_path(group_path, "children"), collector
        )
        path = group.get("path")
        resolved.append(
            SidebarGroup(
                title=_optional_str(group.get("title")),
                collapsable=group.get("collapsable", True) is not False,
                children=children,
                path=None if path is None else str(path),
            )
        )
    return tuple(resolved)


def _resolve_children(
    entries: object, field_path: str, collector: ViolationCollector
) -> tuple[SidebarChild, ...]:
    """Build ``(path, label)`` children, recording malformed entries."""
    if entries is None:
        return ()
    if not isinstance(entries, list | tuple):
        collector.add(field_path, "must be a list of [path, label] pairs")
        return ()
    children: list[SidebarChild] = []
    for index, entry in enumerate(entries):
        entry_path = _join_path(field_path, index)
        match entry:
            case [path, label]:
                pass
            case _:
                collector.add(entry_path, "must be a [path, label] pair")
                continue
        if not _non_empty_str(path):
            collector.add(_join_path(entry_path, 0), "path must be a non-empty string")
            continue
        if not isinstance(label, str):
            collector.add(_join_path(entry_path, 1), "label must be a string")
            continue
        children.append(SidebarChild(str(path), label))
    return tuple(children)


def _resolve_nav(
    entries: list[typ.Any], field_path: str, collector: ViolationCollector
) -> tuple[NavEntry, ...]:
    nav: list[NavEntry] = []
    for index, entry in enumerate(entries):
        entry_path = _join_path(field_path, index)
        if not isinstance(entry, cabc.Mapping):
            collector.add(entry_path, "must be a mapping with 'text' and 'link'")
            continue
        link = entry.get("link")
        if not _non_empty_str(link):
            collector.add(_join_path(entry_path, "link"), "must be a non-empty string")
            continue
        text = entry.get("text", "")
        if not isinstance(text, str):
            collector.add(_join_path(entry_path, "text"), "must be a string")
            continue
        nav.append(NavEntry(text=text, link=str(link)))
    return tuple(nav)


def _resolve_repo(
    theme: cabc.Mapping[str, typ.Any], collector: ViolationCollector
) -> RepoLink | None:
    repo = theme.get("repo")
    if repo is None:
        return None
    if not _is_valid_url(repo):
        collector.add(_join_path(THEME_KEY, "repo"), "must be an absolute http(s) URL")
        return None
    url = str(repo).strip()
    label = theme.get("repoLabel")
    if label is None:
        label = _infer_repo_label(url)
    elif not _non_empty_str(label):
        collector.add(_join_path(THEME_KEY, "repoLabel"), "must be a non-empty string")
        return None
    return RepoLink(repo=url, repo_label=str(label))


def _infer_repo_label(url: str) -> str:
    """Name the hosting service for well-known hosts, else ``Source``."""
    host = (urlsplit(url).hostname or "").lower()
    for known, label in KNOWN_REPO_HOSTS.items():
        if host == known or host.endswith(f".{known}"):
            return label
    return "Source"


def _resolve_head(
    entries: list[typ.Any], collector: ViolationCollector
) -> tuple[HeadTag, ...]:
    tags: list[HeadTag] = []
    for index, entry in enumerate(entries):
        entry_path = _join_path("head", index)
        match entry:
            case [tag_name, cabc.Mapping() as attributes] if _non_empty_str(tag_name):
                invalid = [
                    key
                    for key, value in attributes.items()
                    if not (isinstance(key, str) and isinstance(value, str))
                ]
                for key in invalid:
                    collector.add(
                        _join_path(entry_path, str(key)),
                        "attribute value must be a string",
                    )
                if not invalid:
                    tags.append(
                        HeadTag(tag_name=str(tag_name), attributes=_freeze_mapping(attributes))
                    )
            case _:
                collector.add(entry_path, "must be a [tagName, attributes] pair")
    return tuple(tags)


def _resolve_sidebar_depth(
    theme: cabc.Mapping[str, typ.Any], collector: ViolationCollector
) -> int:
    depth = theme.get("sidebarDepth", 1)
    if not _is_positive_int(depth):
        collector.add(_join_path(THEME_KEY, "sidebarDepth"), "must be a positive integer")
        return 1
    return int(depth)


def _resolve_last_updated(
    theme: cabc.Mapping[str, typ.Any], collector: ViolationCollector
) -> str:
    value = theme.get("lastUpdated")
    match value:
        case None | False:
            return ""
        case True:
            return DEFAULT_LAST_UPDATED_LABEL
        case str():
            return value
        case _:
            collector.add(
                _join_path(THEME_KEY, "lastUpdated"), "must be a string or boolean"
            )
            return ""


def _resolve_extensions(
    markdown: cabc.Mapping[str, typ.Any], collector: ViolationCollector
) -> list[MarkdownExtension]:
    field_path = _join_path(MARKDOWN_KEY, "extensions")
    requests: list[MarkdownExtension] = []
    for index, entry in enumerate(
        _sequence(markdown, "extensions", field_path, collector)
    ):
        entry_path = _join_path(field_path, index)
        match entry:
            case str() as name if name.strip():
                requests.append(MarkdownExtension(name.strip()))
            case {"name": str() as name, **rest} if name.strip():
                options = rest.get("options")
                if options is None:
                    options = {}
                if not isinstance(options, cabc.Mapping):
                    collector.add(_join_path(entry_path, "options"), "must be a mapping")
                    continue
                requests.append(MarkdownExtension(name.strip(), _freeze_mapping(options)))
            case _:
                collector.add(entry_path, "must be a name or a mapping with 'name'")
    return requests


def _resolve_registered(
    extensions: cabc.Iterable[MarkdownExtension], collector: ViolationCollector
) -> list[MarkdownExtension]:
    requests: list[MarkdownExtension] = []
    for index, extension in enumerate(extensions):
        entry_path = _join_path("extensions", index)
        if not _non_empty_str(extension.name):
            collector.add(entry_path, "name must be a non-empty string")
            continue
        if not isinstance(extension.options, cabc.Mapping):
            collector.add(_join_path(entry_path, "options"), "must be a mapping")
            continue
        requests.append(
            MarkdownExtension(extension.name.strip(), _freeze_mapping(extension.options))
        )
    return requests


__all__ = [
    "ConfigResolver",
    "RawConfig",
    "ResolverState",
    "resolve",
]
