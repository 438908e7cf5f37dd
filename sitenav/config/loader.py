"""Load site configuration YAML and resolve it into a SiteModel."""

from __future__ import annotations

import typing as typ

from ruamel.yaml import YAML

from .models import ConfigValidationError, Violation
from .resolver import DOCUMENT_PATH, ConfigResolver

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from .models import MarkdownExtension, SiteModel


def read_config_document(path: Path) -> dict[str, typ.Any]:
    """Read the raw configuration mapping stored at ``path``.

    JSON documents load as well, since YAML 1.2 is a superset of JSON.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    ConfigValidationError
        If the top-level structure is not a mapping.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle)
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigValidationError([Violation(DOCUMENT_PATH, "must be a mapping")])
    return dict(loaded)


def load_site_config(
    path: Path, *, extensions: cabc.Iterable[MarkdownExtension | str] = ()
) -> SiteModel:
    """Load and resolve the site configuration stored at ``path``.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML (or JSON) site description, for example
        ``.vuepress/config.yaml``.
    extensions : Iterable[MarkdownExtension or str], optional
        Markdown extension requests to record alongside those declared in
        the document.

    Returns
    -------
    SiteModel
        The validated, immutable site structure.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    ConfigValidationError
        If the document is not a mapping or violates the site schema.

    Examples
    --------
    >>> from pathlib import Path
    >>> from sitenav.config import load_site_config
    >>> site = load_site_config(Path(".vuepress/config.yaml"))  # doctest: +SKIP
    >>> [entry.link for entry in site.nav]  # doctest: +SKIP
    ['/about/']
    """
    resolver = ConfigResolver(read_config_document(path))
    for extension in extensions:
        resolver.register_markdown_extension(extension)
    return resolver.resolve()


__all__ = ["load_site_config", "read_config_document"]
