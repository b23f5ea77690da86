"""Verification document (``.well-known/llm.json``) models."""

from __future__ import annotations

from datetime import date
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

INDEX_VERSION = "1.0"


class SiteMetadata(BaseModel):
    """Site-level description published at the top of the index."""

    model_config = ConfigDict(frozen=True)

    name: str = "My Site"
    description: str = "A site using Langshake"
    language: str = "en"


class Verification(BaseModel):
    """Verification block: strategy, Merkle root and the date it was computed."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    strategy: Literal["merkle"] = "merkle"
    merkle_root: str = Field(default="", alias="merkleRoot")
    last_verified: date = Field(alias="lastVerified")


class VerificationDocument(BaseModel):
    """The published index a third party uses to check the module set.

    ``modules`` lists public paths in canonical Merkle leaf order.
    ``llm_context`` is passed through verbatim and omitted when absent.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    version: str = INDEX_VERSION
    site: SiteMetadata = SiteMetadata()
    modules: list[str] = []
    llm_context: dict[str, Any] | None = None
    verification: Verification

    def to_json_dict(self) -> dict[str, Any]:
        """Serialize with the published key names, dropping absent context."""
        data = self.model_dump(mode="json", by_alias=True)
        if data.get("llm_context") is None:
            data.pop("llm_context", None)
        return data
