"""Load, validate, and resolve declarative site configuration.

This subpackage parses the site's configuration document (site metadata, head
tags, navigation bar, sidebar groups, repository link, and markdown extension
requests), checks every structural rule up front, and produces an immutable
:class:`SiteModel` that a rendering pipeline can read without re-validating.
The primary entry points are :func:`load_site_config` for files on disk and
:func:`resolve` (or :class:`ConfigResolver`) for documents already in memory.

Examples
--------
>>> from sitenav.config import resolve
>>> site = resolve({"base": "/", "title": "Notes"})
>>> site.metadata.description
''
>>> from pathlib import Path
>>> from sitenav.config import load_site_config
>>> site = load_site_config(Path(".vuepress/config.yaml"))  # doctest: +SKIP
"""

from .loader import load_site_config, read_config_document
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
from .resolver import ConfigResolver, RawConfig, ResolverState, resolve

__all__ = [
    "ConfigResolver",
    "ConfigValidationError",
    "HeadTag",
    "MarkdownExtension",
    "NavEntry",
    "RawConfig",
    "RepoLink",
    "ResolverState",
    "ResolverStateError",
    "SidebarChild",
    "SidebarGroup",
    "SiteMetadata",
    "SiteModel",
    "Violation",
    "load_site_config",
    "read_config_document",
    "resolve",
]
