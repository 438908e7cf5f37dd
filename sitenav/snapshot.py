"""Process-wide read-only access to the current site model.

Long-lived hosts (a watch or serve loop) keep a :class:`SiteModelSnapshot`
and read the model through :meth:`SiteModelSnapshot.current`. Reloading never
touches the model readers already hold: a complete replacement is resolved
from disk first and only then swapped in as the new reference. A reload that
fails leaves the previous model in place.

Examples
--------
>>> from pathlib import Path
>>> from sitenav.snapshot import SiteModelSnapshot
>>> snapshot = SiteModelSnapshot.from_path(Path(".vuepress/config.yaml"))  # doctest: +SKIP
>>> snapshot.current().metadata.title  # doctest: +SKIP
'Notes'
>>> snapshot.refresh_if_changed()  # doctest: +SKIP
False
"""

from __future__ import annotations

import logging
import threading
import typing as typ

from .config import load_site_config

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from .config import MarkdownExtension, SiteModel

logger = logging.getLogger(__name__)


class SiteModelSnapshot:
    """Hold the current :class:`SiteModel` and swap it atomically on reload."""

    def __init__(
        self,
        path: Path,
        model: SiteModel,
        *,
        extensions: cabc.Iterable[MarkdownExtension | str] = (),
    ) -> None:
        self.path = path
        self._extensions = tuple(extensions)
        self._model = model
        self._mtime_ns = self._stat_mtime()
        self._write_lock = threading.Lock()
        self.generation = 0

    @classmethod
    def from_path(
        cls, path: Path, *, extensions: cabc.Iterable[MarkdownExtension | str] = ()
    ) -> SiteModelSnapshot:
        """Resolve the configuration at ``path`` and wrap it in a snapshot."""
        requests = tuple(extensions)
        model = load_site_config(path, extensions=requests)
        return cls(path, model, extensions=requests)

    def current(self) -> SiteModel:
        """Return the model readers should use right now."""
        return self._model

    def reload(self) -> SiteModel:
        """Resolve the configuration file again and publish the new model.

        Raises
        ------
        FileNotFoundError
            If the configuration file has been removed.
        ConfigValidationError
            If the edited document is invalid. The previous model stays
            current.
        """
        with self._write_lock:
            mtime_ns = self._stat_mtime()
            try:
                model = load_site_config(self.path, extensions=self._extensions)
            except Exception:
                logger.warning(
                    "Keeping previous site model; reload of %s failed", self.path
                )
                raise
            self._model = model
            self._mtime_ns = mtime_ns
            self.generation += 1
        logger.info("Reloaded site model from %s (generation %d)", self.path, self.generation)
        return model

    def refresh_if_changed(self) -> bool:
        """Reload when the file's modification time differs from the last load.

        Returns
        -------
        bool
            True when a new model was published.
        """
        if self._stat_mtime() == self._mtime_ns:
            return False
        self.reload()
        return True

    def _stat_mtime(self) -> int | None:
        try:
            return self.path.stat().st_mtime_ns
        except FileNotFoundError:
            return None


__all__ = ["SiteModelSnapshot"]
