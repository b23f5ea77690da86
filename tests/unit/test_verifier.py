"""Tests for offline verification of a published index."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from langshake.core.orchestrator import Publisher
from langshake.core.verifier import check_module, verify_index
from langshake.models.config import PipelineConfig
from langshake.models.index import SiteMetadata

ARTIFACTS = [
    ("about", [{"@type": "AboutPage", "name": "About Us"}]),
    ("contact", [{"@type": "ContactPage", "name": "Contact"}]),
    ("blog", [{"@type": "Blog", "name": "Blog"}, {"@type": "BlogPosting", "headline": "Hi"}]),
]


@pytest.fixture
def published(pipeline_config: PipelineConfig, site: SiteMetadata) -> PipelineConfig:
    Publisher(config=pipeline_config).run(ARTIFACTS, site)
    return pipeline_config


class TestVerifyIndex:
    def test_valid(self, published: PipelineConfig):
        report = verify_index(published.llm_path)
        assert report.valid is True
        assert report.root_matches is True
        assert len(report.modules) == 3

    def test_tampered_module(self, published: PipelineConfig):
        path = published.out_dir / "about.json"
        data = json.loads(path.read_text())
        data[0]["name"] = "Tampered"
        path.write_text(json.dumps(data))

        report = verify_index(published.llm_path)
        assert report.valid is False
        bad = [m for m in report.modules if not m.ok]
        assert [m.public_path for m in bad] == ["langshake/about.json"]
        assert bad[0].reason == "checksum mismatch"

    def test_missing_module(self, published: PipelineConfig):
        (published.out_dir / "contact.json").unlink()
        report = verify_index(published.llm_path)
        assert report.valid is False

    def test_undecodable_module_reported(self, published: PipelineConfig):
        (published.out_dir / "about.json").write_bytes(b"\xff\xfe[garbage")
        report = verify_index(published.llm_path)
        assert report.valid is False
        bad = [m.public_path for m in report.modules if not m.ok]
        assert bad == ["langshake/about.json"]
        assert report.root_matches is False

    def test_tampered_root(self, published: PipelineConfig):
        data = json.loads(published.llm_path.read_text())
        data["verification"]["merkleRoot"] = "0" * 64
        published.llm_path.write_text(json.dumps(data))
        report = verify_index(published.llm_path)
        assert report.root_matches is False
        assert all(m.ok for m in report.modules)

    def test_reordered_module_list(self, published: PipelineConfig):
        data = json.loads(published.llm_path.read_text())
        data["modules"] = list(reversed(data["modules"]))
        published.llm_path.write_text(json.dumps(data))
        assert verify_index(published.llm_path).root_matches is False

    def test_explicit_public_root(self, published: PipelineConfig):
        report = verify_index(published.llm_path, published.out_dir.parent)
        assert report.valid is True

    def test_empty_index(self, pipeline_config: PipelineConfig, site: SiteMetadata):
        Publisher(config=pipeline_config).run([], site)
        report = verify_index(pipeline_config.llm_path)
        assert report.valid is True
        assert report.expected_root == ""


class TestCheckModule:
    def test_document_without_checksum(self, tmp_dir: Path):
        (tmp_dir / "x.json").write_text(json.dumps([{"@type": "Thing"}]))
        check = check_module(tmp_dir, "x.json")
        assert check.ok is False
