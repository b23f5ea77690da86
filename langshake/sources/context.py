"""Optional LLM context passed through into the verification document."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_CONTEXT_PATH = Path("llm_context.json")


def load_llm_context(path: Path | str | None = DEFAULT_CONTEXT_PATH) -> dict[str, Any] | None:
    """Load a JSON object from *path*, or ``None`` if absent or invalid."""
    if path is None:
        return None
    path = Path(path)
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable LLM context %s: %s", path, exc)
        return None
    if not isinstance(data, dict):
        logger.warning("Ignoring LLM context %s: expected a JSON object", path)
        return None
    return data
