"""Content sources outside the core: HTML pages, site metadata, LLM context."""

from langshake.sources.context import load_llm_context
from langshake.sources.pages import extract_json_ld, iter_page_artifacts, scan_pages
from langshake.sources.site_metadata import extract_site_metadata

__all__ = [
    "extract_json_ld",
    "extract_site_metadata",
    "iter_page_artifacts",
    "load_llm_context",
    "scan_pages",
]
