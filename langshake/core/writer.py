"""Idempotent artifact writer.

Layout: {destination_dir}/{slug}.json

Each document is the artifact's content records followed by a trailing
``{"checksum": "<hex>"}`` record.  A write is skipped only when the cache
already holds the same checksum *and* the output file still exists, so a
deleted output is always regenerated.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import MutableMapping
from contextlib import nullcontext
from pathlib import Path
from typing import Any

from langshake.core.fileio import encode_json, write_atomic
from langshake.core.hasher import attach_checksum, compute_checksum
from langshake.models.artifacts import WriteResult

logger = logging.getLogger(__name__)


class WriteFailure(RuntimeError):
    """Raised when an artifact cannot be written to its destination."""

    def __init__(self, slug: str, path: Path | None, reason: str) -> None:
        where = f" to {path}" if path is not None else ""
        super().__init__(f"Failed to write '{slug}'{where}: {reason}")
        self.slug = slug
        self.path = path


class ArtifactWriter:
    """Writes artifacts under a destination directory, skipping unchanged ones.

    The writer holds no cache of its own; the caller passes the mapping
    into every call and owns its persistence.

    Parameters
    ----------
    destination_dir:
        Directory receiving ``<slug>.json`` files.  Created on first write.
    """

    def __init__(self, destination_dir: Path | str) -> None:
        self._base = Path(destination_dir)

    @property
    def destination_dir(self) -> Path:
        return self._base

    def path_for(self, slug: str) -> Path:
        """Return the output path for *slug*, rejecting unsafe slugs."""
        if not slug or slug in (".", "..") or "/" in slug or "\\" in slug:
            raise WriteFailure(slug, None, "slug must be a single non-empty path segment")
        return self._base / f"{slug}.json"

    def write(
        self,
        slug: str,
        artifact: Any,
        cache: MutableMapping[str, str],
        *,
        force: bool = False,
        lock: threading.Lock | None = None,
    ) -> WriteResult:
        """Write *artifact* under *slug* unless it is unchanged.

        Parameters
        ----------
        cache:
            The run's slug -> checksum mapping.  Updated only after the
            file write succeeds.
        force:
            Write even if the cache and the file say nothing changed.
        lock:
            Guards cache reads and writes when several workers share the
            mapping.

        Raises
        ------
        MalformedArtifactError
            If the artifact cannot be canonicalized.
        WriteFailure
            If the destination cannot be written.  The cache is untouched.
        """
        guard = lock if lock is not None else nullcontext()
        checksum = compute_checksum(artifact)
        path = self.path_for(slug)

        with guard:
            cached = cache.get(slug)

        if not force and cached == checksum and path.exists():
            logger.debug("Skipped %s (unchanged, %s)", slug, checksum[:12])
            return WriteResult(slug=slug, written=False, checksum=checksum, path=path)

        document = attach_checksum(artifact, checksum)
        try:
            payload = encode_json(document, indent=2, ensure_ascii=False)
        except ValueError as exc:
            raise WriteFailure(slug, path, f"cannot encode as UTF-8: {exc}") from exc
        try:
            write_atomic(path, payload)
        except OSError as exc:
            raise WriteFailure(slug, path, str(exc)) from exc

        with guard:
            cache[slug] = checksum

        logger.debug("Wrote %s to %s (%s)", slug, path, checksum[:12])
        return WriteResult(slug=slug, written=True, checksum=checksum, path=path)


def write_artifact(
    destination_dir: Path | str,
    slug: str,
    artifact: Any,
    cache: MutableMapping[str, str],
) -> WriteResult:
    """Convenience wrapper: write one artifact with a throwaway writer."""
    return ArtifactWriter(destination_dir).write(slug, artifact, cache)
