"""Langshake data models: all Pydantic v2, all frozen (immutable)."""

from langshake.models.artifacts import MerkleIndex, Module, WriteResult
from langshake.models.config import PipelineConfig
from langshake.models.index import SiteMetadata, Verification, VerificationDocument
from langshake.models.reports import (
    ArtifactError,
    ModuleCheck,
    RunSummary,
    VerificationReport,
)

__all__ = [
    # artifacts
    "Module",
    "WriteResult",
    "MerkleIndex",
    # index
    "SiteMetadata",
    "Verification",
    "VerificationDocument",
    # reports
    "ArtifactError",
    "RunSummary",
    "ModuleCheck",
    "VerificationReport",
    # config
    "PipelineConfig",
]
