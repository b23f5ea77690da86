"""Canonical hashing helpers for artifact checksums and Merkle leaves.

Checksums are computed over canonical JSON (sorted keys, compact
separators, ASCII) so that two artifacts holding the same data in a
different key order hash identically.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping, Sequence
from typing import Any

CHECKSUM_FIELD = "checksum"


class MalformedArtifactError(ValueError):
    """Raised when an artifact cannot be canonicalized or serialized."""


def canonical_json_bytes(obj: Any) -> bytes:
    """Produce canonical JSON bytes: deterministic, sorted, compact.

    - sorted keys
    - no whitespace separators (",", ":")
    - ensure_ascii=True
    - UTF-8 encoding
    """
    return json.dumps(
        obj, sort_keys=True, separators=(",", ":"), ensure_ascii=True
    ).encode("utf-8")


def sha256_hex(data: bytes) -> str:
    """Return the SHA-256 hex digest of raw bytes."""
    return hashlib.sha256(data).hexdigest()


def as_records(artifact: Any) -> list[dict[str, Any]]:
    """Normalize an artifact to a list of content records.

    A single mapping becomes a one-record list.  Anything that is not a
    mapping or a sequence of mappings is malformed.
    """
    if isinstance(artifact, Mapping):
        return [dict(artifact)]
    if isinstance(artifact, Sequence) and not isinstance(artifact, (str, bytes)):
        records: list[dict[str, Any]] = []
        for i, record in enumerate(artifact):
            if not isinstance(record, Mapping):
                raise MalformedArtifactError(
                    f"Record {i} is {type(record).__name__}, expected a mapping"
                )
            records.append(dict(record))
        return records
    raise MalformedArtifactError(
        f"Artifact must be a mapping or a sequence of mappings, "
        f"got {type(artifact).__name__}"
    )


def strip_checksum(records: Sequence[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Return copies of *records* without their top-level checksum field.

    Every record is kept; one that held nothing but a checksum becomes
    ``{}``.  Use :func:`split_checksum` to remove a trailing sentinel.
    """
    return [{k: v for k, v in record.items() if k != CHECKSUM_FIELD} for record in records]


def compute_checksum(artifact: Any) -> str:
    """SHA-256 of an artifact's canonical form, excluding any checksum field.

    ``compute_checksum(a) == compute_checksum(split_checksum(attach_checksum(a, h))[0])``
    holds for every artifact, so a checksum never covers itself.
    """
    records = strip_checksum(as_records(artifact))
    try:
        payload = canonical_json_bytes(records)
    except (TypeError, ValueError) as exc:
        raise MalformedArtifactError(f"Artifact is not JSON-serializable: {exc}") from exc
    return sha256_hex(payload)


def attach_checksum(artifact: Any, checksum: str) -> list[dict[str, Any]]:
    """Build the published document: content records plus a checksum sentinel.

    Returns a new list; the input artifact is never mutated.
    """
    return [*strip_checksum(as_records(artifact)), {CHECKSUM_FIELD: checksum}]


def split_checksum(document: Any) -> tuple[list[dict[str, Any]], str]:
    """Inverse of :func:`attach_checksum` for verifiers.

    Returns ``(records, recorded_checksum)``.  Raises
    ``MalformedArtifactError`` if the document does not end with a
    checksum sentinel.
    """
    records = as_records(document)
    if not records or set(records[-1]) != {CHECKSUM_FIELD}:
        raise MalformedArtifactError("Document has no trailing checksum record")
    recorded = records[-1][CHECKSUM_FIELD]
    if not isinstance(recorded, str):
        raise MalformedArtifactError("Checksum record does not hold a string")
    return records[:-1], recorded


def is_checksum(value: Any) -> bool:
    """Whether *value* looks like a 64-character lowercase hex digest."""
    return (
        isinstance(value, str)
        and len(value) == 64
        and all(c in "0123456789abcdef" for c in value)
    )
