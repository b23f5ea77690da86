"""Environment settings and the persisted project config file.

Two layers:

- ``LangshakeSettings``: process-level settings from ``LANGSHAKE_*``
  environment variables or a ``.env`` file (pydantic-settings).
- ``ProjectConfig``: the options last used for this project, stored in
  ``langshake.config.json`` so that later runs need no arguments.
  Command-line values always win over the file.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from langshake.models.index import INDEX_VERSION, SiteMetadata

logger = logging.getLogger(__name__)


class LangshakeSettings(BaseSettings):
    """Environment-driven settings.

    Examples
    --------
    Override via environment::

        export LANGSHAKE_LOG_LEVEL=DEBUG
        export LANGSHAKE_CACHE_PATH=/data/langshake-cache.json
        export LANGSHAKE_WORKERS=4
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="LANGSHAKE_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"
    debug: bool = False

    cache_path: Path = Path(".langshake-cache.json")
    config_path: Path = Path("langshake.config.json")

    workers: int = 1
    index_version: str = INDEX_VERSION


# ---------------------------------------------------------------------------
# Project config file
# ---------------------------------------------------------------------------

PERSISTED_OPTIONS = ("input", "out", "llm", "build", "force", "dry_run", "verbose")


class ProjectConfig(BaseModel):
    """Contents of ``langshake.config.json``."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    input: str | None = None
    out: str | None = None
    llm: str | None = None
    build: str | None = None
    force: bool | None = None
    dry_run: bool | None = None
    verbose: bool | None = None
    site: SiteMetadata | None = None
    llm_context_path: str | None = None


def load_project_config(path: Path | str) -> ProjectConfig:
    """Read the project config file; missing or invalid files give defaults."""
    path = Path(path)
    if not path.exists():
        return ProjectConfig()
    try:
        return ProjectConfig.model_validate(json.loads(path.read_text(encoding="utf-8")))
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", path, exc)
        return ProjectConfig()


def save_project_config(path: Path | str, config: ProjectConfig) -> bool:
    """Write the project config file.  Returns False (and logs) on failure."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(config.model_dump(mode="json", exclude_none=True), indent=2) + "\n",
            encoding="utf-8",
        )
    except OSError as exc:
        logger.warning("Could not save config file %s: %s", path, exc)
        return False
    return True


def merge_options(config: ProjectConfig, overrides: dict[str, Any]) -> ProjectConfig:
    """Overlay command-line *overrides* on *config*.

    Only persisted option names are taken from *overrides*; ``None`` means
    "not given" and keeps the file value.
    """
    update = {
        key: value
        for key, value in overrides.items()
        if key in PERSISTED_OPTIONS and value is not None
    }
    return config.model_copy(update=update)


# Module-level singleton, import as `from langshake.config import settings`
settings = LangshakeSettings()
