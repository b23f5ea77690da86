"""Per-run pipeline configuration."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from langshake.models.index import INDEX_VERSION


class PipelineConfig(BaseModel):
    """Paths and switches for one publish run.

    ``public_root`` is the directory that public module paths are made
    relative to; it defaults to the parent of ``out_dir``.
    """

    model_config = ConfigDict(frozen=True)

    input_dir: Path = Path("out")
    out_dir: Path = Path("public/langshake")
    llm_path: Path = Path("public/.well-known/llm.json")
    public_root: Path | None = None
    cache_path: Path = Path(".langshake-cache.json")
    force: bool = False
    dry_run: bool = False
    workers: int = Field(default=1, ge=1)
    index_version: str = INDEX_VERSION

    @property
    def resolved_public_root(self) -> Path:
        return self.public_root if self.public_root is not None else self.out_dir.parent
