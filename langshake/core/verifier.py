"""Offline verification of a published index.

For every module listed in ``llm.json`` the artifact document is read,
its trailing checksum split off and recomputed from the content.  The
recorded checksums are then reduced to a Merkle root and compared with
the one the index claims.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from langshake.core.hasher import compute_checksum, split_checksum
from langshake.core.index_publisher import read_index
from langshake.core.merkle import merkle_root
from langshake.models.reports import ModuleCheck, VerificationReport

logger = logging.getLogger(__name__)


def check_module(public_root: Path, public_path: str) -> ModuleCheck:
    """Recompute one module's checksum and compare it with the recorded one."""
    path = public_root / public_path
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
        records, recorded = split_checksum(document)
        computed = compute_checksum(records)
    except (OSError, ValueError) as exc:
        # JSONDecodeError, UnicodeDecodeError and MalformedArtifactError are ValueErrors.
        return ModuleCheck(public_path=public_path, ok=False, reason=str(exc))

    if computed != recorded:
        return ModuleCheck(
            public_path=public_path,
            ok=False,
            recorded_checksum=recorded,
            computed_checksum=computed,
            reason="checksum mismatch",
        )
    return ModuleCheck(
        public_path=public_path,
        ok=True,
        recorded_checksum=recorded,
        computed_checksum=computed,
    )


def verify_index(index_path: Path | str, public_root: Path | str | None = None) -> VerificationReport:
    """Verify every module of a published index and its Merkle root.

    *public_root* defaults to the directory above ``.well-known``.

    Raises ``ValueError`` if the index itself cannot be read.
    """
    index_path = Path(index_path)
    root_dir = Path(public_root) if public_root is not None else index_path.parent.parent
    document = read_index(index_path)

    checks = [check_module(root_dir, p) for p in document.modules]
    # Leaves are taken in published order; a reordered list fails the root check.
    # An unreadable module contributes an empty leaf.
    computed_root = merkle_root(
        [c.computed_checksum or c.recorded_checksum or "" for c in checks]
    )

    report = VerificationReport(
        index_path=index_path,
        expected_root=document.verification.merkle_root,
        computed_root=computed_root,
        modules=checks,
    )
    if report.valid:
        logger.info("Index %s verified (%d modules)", index_path, len(checks))
    else:
        logger.warning("Index %s failed verification", index_path)
    return report
