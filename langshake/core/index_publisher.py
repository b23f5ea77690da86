"""Verification document publisher.

Writes ``.well-known/llm.json``: site metadata, the canonically ordered
module list, an optional passthrough context, and the Merkle root.  The
document fully replaces whatever was at the destination before.  A run
is not complete until this write succeeds.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from langshake.core.fileio import encode_json, write_atomic
from langshake.models.index import (
    INDEX_VERSION,
    SiteMetadata,
    Verification,
    VerificationDocument,
)

logger = logging.getLogger(__name__)


class IndexPublishFailure(RuntimeError):
    """Raised when the verification document cannot be written."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to build LLM index at {path}: {reason}")
        self.path = path


def build_document(
    ordered_paths: Sequence[str],
    merkle_root: str,
    site: SiteMetadata,
    llm_context: dict[str, Any] | None = None,
    *,
    today: date | None = None,
    version: str = INDEX_VERSION,
) -> VerificationDocument:
    """Assemble a VerificationDocument without touching the filesystem."""
    return VerificationDocument(
        version=version,
        site=site,
        modules=list(ordered_paths),
        llm_context=llm_context,
        verification=Verification(
            merkle_root=merkle_root,
            last_verified=today or datetime.now(timezone.utc).date(),
        ),
    )


def publish_index(
    destination_path: Path | str,
    ordered_paths: Sequence[str],
    merkle_root: str,
    site: SiteMetadata,
    llm_context: dict[str, Any] | None = None,
    *,
    today: date | None = None,
    version: str = INDEX_VERSION,
) -> VerificationDocument:
    """Build the verification document and write it to *destination_path*.

    Parent directories are created as needed.

    Raises
    ------
    IndexPublishFailure
        On any I/O or encoding error.  Fatal to the run.
    """
    path = Path(destination_path)
    document = build_document(
        ordered_paths, merkle_root, site, llm_context, today=today, version=version
    )
    try:
        payload = encode_json(document.to_json_dict(), indent=2, ensure_ascii=False)
        write_atomic(path, payload)
    except (OSError, ValueError) as exc:
        raise IndexPublishFailure(path, str(exc)) from exc

    logger.info(
        "Published index %s (%d modules, root %s)",
        path,
        len(document.modules),
        merkle_root[:12] or "<empty>",
    )
    return document


def read_index(path: Path | str) -> VerificationDocument:
    """Load and validate a published verification document.

    Raises ``ValueError`` if the file is not a valid document.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return VerificationDocument.model_validate(data)
    except (UnicodeDecodeError, json.JSONDecodeError, ValidationError) as exc:
        raise ValueError(f"Invalid verification document {path}: {exc}") from exc
