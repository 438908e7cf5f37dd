"""Resolve declarative static-site configuration into a validated model.

This package loads a site description (metadata, head tags, navigation bar,
sidebar groups, repository link, and markdown extension requests), reports
every structural problem at once, and exposes the result as an immutable
``SiteModel`` for rendering pipelines. The ``sitenav`` console script wraps
the same resolution for use in CI.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from sitenav import main
>>> main()  # doctest: +SKIP
>>> from sitenav import app
>>> app(["show", "--config", "site.yaml"])  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
