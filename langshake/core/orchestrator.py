"""Publish orchestrator: one run from source artifacts to llm.json.

The Publisher wires the ChecksumCache, ArtifactWriter, Merkle index
builder and index publisher into a single run:

1. load the cache once
2. write or skip every ``(slug, records)`` pair
3. save the cache once
4. build the Merkle index over every published module
5. publish the verification document

Per-artifact failures are counted and the run continues.  A failure to
publish the index is fatal and propagates.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any

from langshake.core.cache import CacheWriteError, ChecksumCache
from langshake.core.hasher import MalformedArtifactError
from langshake.core.index_publisher import publish_index
from langshake.core.merkle import build_merkle_index
from langshake.core.writer import ArtifactWriter, WriteFailure
from langshake.models.artifacts import Module, WriteResult
from langshake.models.config import PipelineConfig
from langshake.models.index import SiteMetadata
from langshake.models.reports import ArtifactError, RunSummary

logger = logging.getLogger(__name__)


class Publisher:
    """Runs the publish pipeline for one destination.

    Parameters
    ----------
    config:
        Run configuration.  Uses defaults if not provided.
    cache:
        Cache persistence.  Defaults to a ChecksumCache at
        ``config.cache_path``.
    """

    def __init__(
        self,
        config: PipelineConfig | None = None,
        cache: ChecksumCache | None = None,
    ) -> None:
        self.config = config or PipelineConfig()
        self.cache = cache or ChecksumCache(self.config.cache_path)
        self.writer = ArtifactWriter(self.config.out_dir)

    def public_path(self, path: Path) -> str:
        """Path of a published file relative to the public root, POSIX style."""
        return Path(os.path.relpath(path, self.config.resolved_public_root)).as_posix()

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    def run(
        self,
        artifacts: Iterable[tuple[str, Any]],
        site: SiteMetadata,
        llm_context: dict[str, Any] | None = None,
    ) -> RunSummary:
        """Publish *artifacts* and the verification document.

        Raises
        ------
        IndexPublishFailure
            If the verification document cannot be written.
        """
        state = self.cache.load()
        lock = threading.Lock()

        processed = written = skipped = empty = 0
        errors: list[ArtifactError] = []
        modules: list[Module] = []
        pending: list[tuple[str, Any]] = []
        seen: set[str] = set()

        for slug, records in artifacts:
            processed += 1
            if slug in seen:
                logger.error("Duplicate slug '%s', keeping the first artifact", slug)
                errors.append(ArtifactError(slug=slug, kind="duplicate", message="duplicate slug"))
                continue
            seen.add(slug)
            if not records:
                logger.debug("No content records for %s", slug)
                empty += 1
                continue
            if self.config.dry_run:
                logger.info("[dry run] would write %s.json", slug)
                skipped += 1
                continue
            pending.append((slug, records))

        for slug, outcome in self._write_all(pending, state, lock):
            if isinstance(outcome, WriteResult):
                modules.append(Module(public_path=self.public_path(outcome.path), checksum=outcome.checksum))
                if outcome.written:
                    written += 1
                else:
                    skipped += 1
            else:
                errors.append(outcome)

        cache_error: str | None = None
        if not self.config.dry_run:
            try:
                self.cache.save(state)
            except CacheWriteError as exc:
                logger.error("%s", exc)
                cache_error = str(exc)

        index = build_merkle_index(modules)
        index_path: Path | None = None
        if not self.config.dry_run:
            publish_index(
                self.config.llm_path,
                index.ordered_paths,
                index.merkle_root,
                site,
                llm_context,
                version=self.config.index_version,
            )
            index_path = self.config.llm_path
        else:
            logger.info("[dry run] would build LLM index at %s", self.config.llm_path)

        logger.info(
            "Run complete: %d processed, %d written, %d skipped, %d errors",
            processed, written, skipped, len(errors),
        )
        return RunSummary(
            processed=processed,
            written=written,
            skipped=skipped,
            empty=empty,
            errors=errors,
            modules=modules,
            index=index,
            index_path=index_path,
            cache_error=cache_error,
            dry_run=self.config.dry_run,
        )

    # ------------------------------------------------------------------
    # Per-artifact work
    # ------------------------------------------------------------------

    def _write_one(
        self, slug: str, records: Any, state: dict[str, str], lock: threading.Lock
    ) -> WriteResult | ArtifactError:
        try:
            return self.writer.write(slug, records, state, force=self.config.force, lock=lock)
        except MalformedArtifactError as exc:
            logger.error("Malformed artifact '%s': %s", slug, exc)
            return ArtifactError(slug=slug, kind="malformed", message=str(exc))
        except WriteFailure as exc:
            logger.error("%s", exc)
            return ArtifactError(slug=slug, kind="write", message=str(exc))

    def _write_all(
        self, pending: list[tuple[str, Any]], state: dict[str, str], lock: threading.Lock
    ) -> list[tuple[str, WriteResult | ArtifactError]]:
        """Write every pending artifact, in input order of results.

        All futures settle before this returns, so the Merkle index is
        always built over the complete module set.
        """
        if self.config.workers <= 1 or len(pending) <= 1:
            return [(slug, self._write_one(slug, records, state, lock)) for slug, records in pending]

        with ThreadPoolExecutor(max_workers=self.config.workers) as pool:
            futures = [
                (slug, pool.submit(self._write_one, slug, records, state, lock))
                for slug, records in pending
            ]
            return [(slug, future.result()) for slug, future in futures]
