"""Published artifact models, all frozen."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class Module(BaseModel):
    """A reference to a successfully published artifact.

    Used as a Merkle leaf (via ``checksum``) and as a verification
    document entry (via ``public_path``).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    public_path: str = Field(alias="publicPath")
    checksum: str


class WriteResult(BaseModel):
    """Outcome of a single ``ArtifactWriter.write`` call."""

    model_config = ConfigDict(frozen=True)

    slug: str
    written: bool
    checksum: str
    path: Path


class MerkleIndex(BaseModel):
    """Canonically ordered module paths and the Merkle root over them.

    ``ordered_paths`` follows the same order as the tree leaves so a
    verifier can rebuild the root from the published list.
    """

    model_config = ConfigDict(frozen=True)

    ordered_paths: list[str] = []
    ordered_checksums: list[str] = []
    merkle_root: str = ""
