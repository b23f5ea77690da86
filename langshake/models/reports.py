"""Run and verification report models."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict

from langshake.models.artifacts import MerkleIndex, Module


class ArtifactError(BaseModel):
    """One per-artifact failure recorded during a run."""

    model_config = ConfigDict(frozen=True)

    slug: str
    kind: str  # "malformed" | "write" | "duplicate"
    message: str


class RunSummary(BaseModel):
    """What a publish run did.  Never persisted."""

    model_config = ConfigDict(frozen=True)

    processed: int = 0
    written: int = 0
    skipped: int = 0
    empty: int = 0
    errors: list[ArtifactError] = []
    modules: list[Module] = []
    index: MerkleIndex = MerkleIndex()
    index_path: Path | None = None
    cache_error: str | None = None
    dry_run: bool = False

    @property
    def error_count(self) -> int:
        return len(self.errors)


class ModuleCheck(BaseModel):
    """Verification outcome for one published module."""

    model_config = ConfigDict(frozen=True)

    public_path: str
    ok: bool
    recorded_checksum: str = ""
    computed_checksum: str = ""
    reason: str = ""


class VerificationReport(BaseModel):
    """Outcome of re-checking a published verification document."""

    model_config = ConfigDict(frozen=True)

    index_path: Path
    expected_root: str
    computed_root: str
    modules: list[ModuleCheck] = []

    @property
    def root_matches(self) -> bool:
        return self.expected_root == self.computed_root

    @property
    def valid(self) -> bool:
        return self.root_matches and all(m.ok for m in self.modules)
