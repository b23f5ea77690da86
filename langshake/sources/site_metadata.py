"""Site metadata inference for the verification document."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from typing import Any

from bs4 import BeautifulSoup

from langshake.models.index import SiteMetadata
from langshake.sources.pages import generate_schema

logger = logging.getLogger(__name__)

# Preferred JSON-LD types, most specific first.
_SITE_TYPES = ("WebSite", "Organization", "Person")


def _partial() -> dict[str, str | None]:
    return {"name": None, "description": None, "language": None}


def metadata_from_schemas(schemas: Iterable[dict[str, Any]]) -> dict[str, str | None]:
    """Pick name/description/language from the best site-level schema."""
    schemas = list(schemas)
    for site_type in _SITE_TYPES:
        match = next((s for s in schemas if s.get("@type") == site_type), None)
        if match is not None:
            return {
                "name": match.get("name") or None,
                "description": match.get("description") or None,
                "language": match.get("inLanguage") or match.get("language") or None,
            }
    return _partial()


def metadata_from_html(html: str) -> dict[str, str | None]:
    """Pick name/description/language from <title>, meta description and <html lang>."""
    soup = BeautifulSoup(html, "html.parser")
    title = soup.title.get_text(strip=True) if soup.title else ""
    meta = soup.find("meta", attrs={"name": "description"})
    html_tag = soup.find("html")
    return {
        "name": title or None,
        "description": (meta.get("content") if meta else None) or None,
        "language": (html_tag.get("lang") if html_tag else None) or None,
    }


def _complete(meta: dict[str, str | None]) -> bool:
    return all(isinstance(meta.get(k), str) and meta.get(k) for k in ("name", "description", "language"))


def extract_site_metadata(
    files: Sequence[Path],
    schema_reader: Callable[[Path], list[dict[str, Any]]] = generate_schema,
) -> SiteMetadata:
    """Infer site metadata from pages.

    Tries every page's JSON-LD first, then the first page's HTML head,
    then falls back to defaults.  Only a complete triple is accepted.
    """
    for path in files:
        try:
            meta = metadata_from_schemas(schema_reader(path))
        except OSError as exc:
            logger.debug("Skipping %s for site metadata: %s", path, exc)
            continue
        if _complete(meta):
            return SiteMetadata(**meta)

    if files:
        try:
            meta = metadata_from_html(Path(files[0]).read_text(encoding="utf-8", errors="replace"))
        except OSError as exc:
            logger.debug("Could not read %s for site metadata: %s", files[0], exc)
        else:
            if _complete(meta):
                return SiteMetadata(**meta)

    logger.info("No complete site metadata found, using defaults")
    return SiteMetadata()
