"""Main Typer application: imports and registers all CLI commands.

Entry point: ``langshake`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import logging
from typing import Optional

import typer
from rich.logging import RichHandler

from langshake.cli.commands.publish import publish_cmd
from langshake.cli.commands.verify import verify_cmd
from langshake.config import settings

app = typer.Typer(
    name="langshake",
    help="Langshake: publish Merkle-verified JSON-LD modules for LLM consumption.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="publish", help="Extract JSON-LD and publish modules plus llm.json.")(publish_cmd)
app.command(name="verify", help="Verify a published llm.json against its modules.")(verify_cmd)


@app.callback()
def main_callback(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level (default: LANGSHAKE_LOG_LEVEL or INFO)."
    ),
) -> None:
    """Configure logging before any command runs."""
    level = (log_level or ("DEBUG" if settings.debug else settings.log_level)).upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
