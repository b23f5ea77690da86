"""Tests for page discovery, JSON-LD extraction, site metadata and LLM context."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

from langshake.models.index import SiteMetadata
from langshake.sources.context import load_llm_context
from langshake.sources.pages import (
    extract_json_ld,
    iter_page_artifacts,
    scan_pages,
    slug_for,
)
from langshake.sources.site_metadata import (
    extract_site_metadata,
    metadata_from_html,
    metadata_from_schemas,
)

ABOUT_LD = json.dumps({"@context": "http://schema.org", "@type": "AboutPage", "name": "About Us"})


class TestScanPages:
    def test_missing_directory(self, tmp_dir: Path):
        assert scan_pages(tmp_dir / "nope") == []

    def test_finds_html_recursively(self, make_page: Callable[..., Path], tmp_dir: Path):
        make_page("about.html")
        make_page("blog/post.html")
        (tmp_dir / "site" / "notes.txt").write_text("ignored")
        found = scan_pages(tmp_dir / "site")
        assert [p.relative_to(tmp_dir / "site").as_posix() for p in found] == [
            "about.html",
            "blog/post.html",
        ]


class TestExtractJsonLd:
    def test_single_block(self):
        html = f'<html><head><script type="application/ld+json">{ABOUT_LD}</script></head></html>'
        records = extract_json_ld(html)
        assert records == [json.loads(ABOUT_LD)]

    def test_multiple_blocks_and_arrays(self):
        html = (
            '<script type="application/ld+json">{"@type": "Article"}</script>'
            '<script type="application/ld+json">[{"@type": "Product"}, 3, {"@type": "Offer"}]</script>'
        )
        types = [r["@type"] for r in extract_json_ld(html)]
        assert types == ["Article", "Product", "Offer"]

    def test_invalid_block_skipped(self):
        html = (
            '<script type="application/ld+json">{not json</script>'
            '<script type="application/ld+json">{"@type": "Article"}</script>'
        )
        assert extract_json_ld(html) == [{"@type": "Article"}]

    def test_other_scripts_ignored(self):
        html = '<script>var x = {"@type": "Article"};</script>'
        assert extract_json_ld(html) == []


class TestSlugs:
    def test_stem(self):
        assert slug_for(Path("/x/site/about.html")) == "about"

    def test_relative_path(self):
        assert slug_for(Path("/x/site/blog/post.html"), Path("/x/site")) == "blog-post"

    def test_iter_page_artifacts(self, make_page: Callable[..., Path], tmp_dir: Path):
        make_page("about.html", json_ld=ABOUT_LD)
        make_page("empty.html")
        pairs = dict(iter_page_artifacts(scan_pages(tmp_dir / "site"), tmp_dir / "site"))
        assert pairs["about"][0]["@type"] == "AboutPage"
        assert pairs["empty"] == []


class TestSiteMetadata:
    def test_prefers_website(self):
        schemas = [
            {"@type": "Organization", "name": "Org", "description": "o", "inLanguage": "de"},
            {"@type": "WebSite", "name": "Site", "description": "s", "inLanguage": "en"},
        ]
        assert metadata_from_schemas(schemas) == {"name": "Site", "description": "s", "language": "en"}

    def test_language_fallback_key(self):
        meta = metadata_from_schemas([{"@type": "Person", "name": "P", "description": "d", "language": "fr"}])
        assert meta["language"] == "fr"

    def test_from_html(self):
        html = '<html lang="nl"><head><title>T</title><meta name="description" content="D"></head></html>'
        assert metadata_from_html(html) == {"name": "T", "description": "D", "language": "nl"}

    def test_json_ld_wins(self, make_page: Callable[..., Path]):
        ld = json.dumps({"@type": "WebSite", "name": "LD", "description": "From LD", "inLanguage": "en"})
        page = make_page("index.html", title="HTML", json_ld=ld, description="From HTML")
        assert extract_site_metadata([page]) == SiteMetadata(name="LD", description="From LD", language="en")

    def test_html_fallback(self, make_page: Callable[..., Path]):
        page = make_page("index.html", title="HTML", lang="es", description="From HTML")
        assert extract_site_metadata([page]) == SiteMetadata(name="HTML", description="From HTML", language="es")

    def test_defaults(self, make_page: Callable[..., Path]):
        page = make_page("index.html", title="Only a title")
        assert extract_site_metadata([page]) == SiteMetadata()
        assert extract_site_metadata([]) == SiteMetadata(
            name="My Site", description="A site using Langshake", language="en"
        )


class TestLlmContext:
    def test_absent(self, tmp_dir: Path):
        assert load_llm_context(tmp_dir / "llm_context.json") is None
        assert load_llm_context(None) is None

    def test_object(self, tmp_dir: Path):
        path = tmp_dir / "llm_context.json"
        path.write_text(json.dumps({"summary": "s"}))
        assert load_llm_context(path) == {"summary": "s"}

    def test_invalid(self, tmp_dir: Path):
        path = tmp_dir / "llm_context.json"
        path.write_text("[1, 2]")
        assert load_llm_context(path) is None
        path.write_text("{broken")
        assert load_llm_context(path) is None
