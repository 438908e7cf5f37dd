"""Hand recorded markdown extension requests to Python-Markdown.

A :class:`~sitenav.config.models.MarkdownExtension` only names an extension
and its options. This module is the point where those requests meet the
rendering engine: names are passed to :class:`markdown.Markdown`, which looks
up and loads the implementation (built-in short names such as ``"tables"``,
dotted module paths, or ``module:Class`` references).
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from markdown import Markdown

if typ.TYPE_CHECKING:
    from .config.models import MarkdownExtension, SiteModel


class MarkdownExtensionError(RuntimeError):
    """Raised when the rendering engine cannot load a requested extension."""


def extension_arguments(
    requests: cabc.Iterable[MarkdownExtension],
) -> tuple[list[str], dict[str, dict[str, typ.Any]]]:
    """Translate requests into Markdown's ``extensions``/``extension_configs``.

    Later requests for the same extension replace earlier options.
    """
    names: list[str] = []
    configs: dict[str, dict[str, typ.Any]] = {}
    for request in requests:
        if request.name not in names:
            names.append(request.name)
        if request.options:
            configs[request.name] = _thaw(request.options)
    return names, configs


def build_markdown(requests: cabc.Iterable[MarkdownExtension]) -> Markdown:
    """Return a Markdown instance with every requested extension loaded.

    Raises
    ------
    MarkdownExtensionError
        If an extension cannot be imported or rejects its options.
    """
    names, configs = extension_arguments(requests)
    try:
        return Markdown(extensions=names, extension_configs=configs)
    except (ImportError, AttributeError, KeyError, TypeError) as exc:
        msg = f"Unable to load markdown extensions {names!r}: {exc}"
        raise MarkdownExtensionError(msg) from exc


def render_markdown(model: SiteModel, text: str) -> str:
    """Render ``text`` to HTML using the site's requested extensions."""
    return build_markdown(model.markdown_extensions).convert(text)


def _thaw(value: typ.Any) -> typ.Any:
    match value:
        case cabc.Mapping():
            return {key: _thaw(item) for key, item in value.items()}
        case tuple():
            return [_thaw(item) for item in value]
        case _:
            return value


__all__ = [
    "MarkdownExtensionError",
    "build_markdown",
    "extension_arguments",
    "render_markdown",
]
