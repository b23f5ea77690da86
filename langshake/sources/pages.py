"""HTML page discovery and JSON-LD extraction.

Pages are discovered recursively (``**/*.html``) and every
``<script type="application/ld+json">`` block is parsed into content
records.  The records are opaque to the rest of the pipeline.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

JSON_LD_TYPE = "application/ld+json"


def scan_pages(input_dir: Path | str) -> list[Path]:
    """Return every ``.html`` file under *input_dir*, sorted.

    A missing or unreadable directory yields an empty list.
    """
    root = Path(input_dir)
    if not root.is_dir():
        logger.debug("Input directory %s does not exist", root)
        return []
    try:
        return sorted(p for p in root.rglob("*.html") if p.is_file())
    except OSError as exc:
        logger.warning("Could not scan %s: %s", root, exc)
        return []


def extract_json_ld(html: str) -> list[dict[str, Any]]:
    """Parse all JSON-LD blocks in *html* into a flat list of records.

    Top-level arrays are flattened; non-object entries and blocks that are
    not valid JSON are logged and skipped.
    """
    soup = BeautifulSoup(html, "html.parser")
    records: list[dict[str, Any]] = []
    for script in soup.find_all("script", attrs={"type": JSON_LD_TYPE}):
        text = script.string or script.get_text()
        if not text or not text.strip():
            continue
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            logger.warning("Skipping invalid JSON-LD block: %s", exc)
            continue
        items = data if isinstance(data, list) else [data]
        for item in items:
            if isinstance(item, dict):
                records.append(item)
            else:
                logger.debug("Skipping non-object JSON-LD entry: %r", item)
    return records


def generate_schema(path: Path | str) -> list[dict[str, Any]]:
    """Read an HTML file and return its JSON-LD records."""
    return extract_json_ld(Path(path).read_text(encoding="utf-8", errors="replace"))


def slug_for(path: Path, input_dir: Path | None = None) -> str:
    """Derive a slug from a page path.

    With *input_dir*, the relative path without suffix is used and its
    segments are joined with ``-`` (``blog/post.html`` -> ``blog-post``).
    Otherwise the file stem is used.
    """
    if input_dir is not None:
        try:
            rel = path.relative_to(input_dir).with_suffix("")
        except ValueError:
            return path.stem
        return "-".join(rel.parts)
    return path.stem


def iter_page_artifacts(
    files: Iterable[Path], input_dir: Path | None = None
) -> Iterator[tuple[str, list[dict[str, Any]]]]:
    """Yield ``(slug, records)`` for each page.

    Pages that cannot be read are logged and skipped.  Pages without
    JSON-LD yield an empty record list so callers can count them.
    """
    for path in files:
        try:
            records = generate_schema(path)
        except OSError as exc:
            logger.error("Could not read %s: %s", path, exc)
            continue
        yield slug_for(path, input_dir), records
