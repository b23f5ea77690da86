"""Persisted slug -> checksum cache.

The cache is the only state that spans runs.  It is loaded once at the
start of a run and saved once at the end.  A missing or corrupt cache
file is never an error: it is reset to an empty mapping and the run
simply republishes everything.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from langshake.core.fileio import encode_json, write_atomic
from langshake.core.hasher import is_checksum

logger = logging.getLogger(__name__)


class CacheWriteError(RuntimeError):
    """Raised when the cache file cannot be persisted."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to write cache {path}: {reason}")
        self.path = path


class ChecksumCache:
    """JSON-file backed mapping of slug to last-published checksum.

    Parameters
    ----------
    path:
        Location of the cache file.  Parent directories are created on
        first write.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    # ------------------------------------------------------------------
    # Load
    # ------------------------------------------------------------------

    def load(self) -> dict[str, str]:
        """Return the persisted mapping, or ``{}`` if absent or invalid.

        Never raises.  An absent file is materialized as ``{}``; an
        invalid one is overwritten with ``{}``.
        """
        if not self._path.exists():
            logger.debug("Cache %s not found, starting empty", self._path)
            self._reset()
            return {}

        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("Cache %s is unreadable (%s), resetting", self._path, exc)
            self._reset()
            return {}

        if not self._is_valid(data):
            logger.warning("Cache %s is not a slug->checksum mapping, resetting", self._path)
            self._reset()
            return {}

        logger.debug("Loaded %d cache entries from %s", len(data), self._path)
        return dict(data)

    @staticmethod
    def _is_valid(data: object) -> bool:
        return isinstance(data, dict) and all(
            isinstance(slug, str) and is_checksum(checksum)
            for slug, checksum in data.items()
        )

    def _reset(self) -> None:
        try:
            self.save({})
        except CacheWriteError as exc:
            logger.warning("%s", exc)

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------

    def save(self, mapping: dict[str, str]) -> None:
        """Persist the full mapping, replacing any prior state.

        The file is written to a temporary sibling and moved into place
        so a crash never leaves a half-written cache behind.
        """
        try:
            write_atomic(self._path, encode_json(mapping, indent=2, sort_keys=True))
        except OSError as exc:
            raise CacheWriteError(self._path, str(exc)) from exc
        logger.debug("Saved %d cache entries to %s", len(mapping), self._path)
