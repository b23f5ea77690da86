"""Shared test fixtures for Langshake."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from langshake.core.cache import ChecksumCache
from langshake.core.writer import ArtifactWriter
from langshake.models.config import PipelineConfig
from langshake.models.index import SiteMetadata


@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    """Provide a temporary directory for test artifacts."""
    return tmp_path


@pytest.fixture
def cache_file(tmp_dir: Path) -> Path:
    return tmp_dir / "langshake-cache.json"


@pytest.fixture
def checksum_cache(cache_file: Path) -> ChecksumCache:
    """Provide a ChecksumCache backed by a temp file."""
    return ChecksumCache(cache_file)


@pytest.fixture
def out_dir(tmp_dir: Path) -> Path:
    return tmp_dir / "public" / "langshake"


@pytest.fixture
def writer(out_dir: Path) -> ArtifactWriter:
    """Provide an ArtifactWriter targeting a temp output directory."""
    return ArtifactWriter(out_dir)


@pytest.fixture
def site() -> SiteMetadata:
    return SiteMetadata(
        name="Test Site",
        description="A test site for Langshake.",
        language="en",
    )


@pytest.fixture
def pipeline_config(tmp_dir: Path) -> PipelineConfig:
    """Provide a PipelineConfig rooted in the temp directory."""
    return PipelineConfig(
        input_dir=tmp_dir / "site",
        out_dir=tmp_dir / "public" / "langshake",
        llm_path=tmp_dir / "public" / ".well-known" / "llm.json",
        cache_path=tmp_dir / "langshake-cache.json",
    )


# ---------------------------------------------------------------------------
# HTML page factory
# ---------------------------------------------------------------------------


def _page(title: str, json_ld: str = "", lang: str = "en", description: str = "") -> str:
    meta = f'<meta name="description" content="{description}">' if description else ""
    script = f'<script type="application/ld+json">{json_ld}</script>' if json_ld else ""
    return (
        f'<!DOCTYPE html><html lang="{lang}"><head><title>{title}</title>'
        f"{meta}{script}</head><body><h1>{title}</h1></body></html>"
    )


@pytest.fixture
def make_page(tmp_dir: Path) -> Callable[..., Path]:
    """Factory fixture: write an HTML page under ``tmp_dir/site``."""

    def _factory(
        relpath: str,
        title: str = "Page",
        json_ld: str = "",
        **kwargs: str,
    ) -> Path:
        path = tmp_dir / "site" / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(_page(title, json_ld, **kwargs), encoding="utf-8")
        return path

    return _factory
