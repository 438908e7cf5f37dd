"""Cyclopts CLI entrypoint for checking and inspecting site configuration.

The ``sitenav`` console script resolves the site configuration document the
same way a build would, so configuration mistakes surface before a build
starts. ``sitenav check`` prints every violation (optionally including
navigation targets missing from the content directory) and exits non-zero;
``sitenav show`` prints the resolved model as JSON for other tooling.

Examples
--------
Validate the default configuration and its content links:

>>> from sitenav.cli import app
>>> app(["check", "--content-dir", "docs"])  # doctest: +SKIP

Dump the resolved model:

>>> app(["show", "--config", "docs/.vuepress/config.yaml"])  # doctest: +SKIP
"""

from __future__ import annotations

import sys
import typing as typ
from pathlib import Path

from cyclopts import App, Parameter

from ._constants import CONFIG_ENV_VAR, CONTENT_DIR_ENV_VAR, DEFAULT_CONFIG_PATH
from .config import ConfigValidationError, load_site_config
from .content import ContentTree, find_missing_content
from .export import encode_site_model

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config import SiteModel, Violation

app = App(name="sitenav", help="Validate and inspect static-site configuration.")


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _report(config: Path, violations: cabc.Iterable[Violation]) -> None:
    for violation in violations:
        print(f"{_format_path(config)}: {violation}", file=sys.stderr)


def _load_or_exit(config: Path) -> SiteModel:
    try:
        return load_site_config(config)
    except ConfigValidationError as exc:
        _report(config, exc.violations)
        raise SystemExit(1) from exc


@app.command(help="Resolve the site configuration and report every violation.")
def check(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var=CONFIG_ENV_VAR)
    ] = DEFAULT_CONFIG_PATH,
    content_dir: typ.Annotated[
        Path | None,
        Parameter(
            help="Markdown source directory used to check navigation targets",
            env_var=CONTENT_DIR_ENV_VAR,
        ),
    ] = None,
) -> None:
    """Validate the configuration and, optionally, its content links.

    Parameters
    ----------
    config : Path, optional
        Path to the configuration document (overridable via
        ``SITENAV_CONFIG``).
    content_dir : Path or None, optional
        Directory of markdown sources. When given, navigation links and
        sidebar paths must resolve to pages inside it.

    Raises
    ------
    SystemExit
        With status 1 when any violation is found.
    FileNotFoundError
        If the configuration file or content directory does not exist.
    """
    model = _load_or_exit(config)
    if content_dir is not None:
        missing = find_missing_content(model, ContentTree.scan(content_dir))
        if missing:
            _report(config, missing)
            raise SystemExit(1)
    print(
        f"{_format_path(config)}: ok "
        f"({len(model.nav)} nav entries, {len(model.sidebar)} sidebar groups)"
    )


@app.command(help="Print the resolved site model as JSON.")
def show(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var=CONFIG_ENV_VAR)
    ] = DEFAULT_CONFIG_PATH,
) -> None:
    """Print the resolved model as indented JSON on stdout."""
    model = _load_or_exit(config)
    print(encode_site_model(model).decode("utf-8"))


def main() -> None:
    """Invoke the Cyclopts application behind the ``sitenav`` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
