"""``langshake publish``: extract JSON-LD, publish modules and llm.json.

Options not given on the command line are taken from
``langshake.config.json``; the merged options are written back so the
next run needs no arguments.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel

from langshake.config import (
    load_project_config,
    merge_options,
    save_project_config,
    settings,
)
from langshake.core.index_publisher import IndexPublishFailure
from langshake.core.orchestrator import Publisher
from langshake.models.config import PipelineConfig
from langshake.models.reports import RunSummary
from langshake.sources.context import DEFAULT_CONTEXT_PATH, load_llm_context
from langshake.sources.pages import iter_page_artifacts, scan_pages
from langshake.sources.site_metadata import extract_site_metadata

console = Console()
logger = logging.getLogger(__name__)


def _run_build(command: str) -> None:
    console.print(f"[blue]Running build command:[/blue] {command}")
    result = subprocess.run(command, shell=True)
    if result.returncode != 0:
        console.print(
            f"[bold red]Build command failed with exit code {result.returncode}. Aborting.[/bold red]"
        )
        raise typer.Exit(code=result.returncode or 1)
    console.print("[green]Build completed successfully.[/green]")


def _print_summary(summary: RunSummary, pages: int) -> None:
    lines = [
        f"[bold]Files processed:[/bold]  {pages}",
        f"[bold]JSON-LD written:[/bold]  {summary.written}",
        f"[bold]Skipped:[/bold]          {summary.skipped}",
        f"[bold]No JSON-LD:[/bold]       {summary.empty}",
        f"[bold]Merkle root:[/bold]      {summary.index.merkle_root or '[dim]<empty>[/dim]'}",
    ]
    if summary.index_path is not None:
        lines.append(f"[bold]Index:[/bold]            {summary.index_path}")
    if summary.errors:
        lines.append(f"[red][bold]Errors:[/bold]           {summary.error_count}[/red]")
        for err in summary.errors:
            lines.append(f"  [red]- {err.slug}: {err.message}[/red]")
    if summary.cache_error:
        lines.append(f"[yellow]Cache not saved: {summary.cache_error}[/yellow]")

    console.print(
        Panel(
            "\n".join(lines),
            title="[bold]Summary[/bold]" + (" [blue](dry run)[/blue]" if summary.dry_run else ""),
            border_style="red" if summary.errors else "green",
            padding=(1, 2),
        )
    )


def publish_cmd(
    input_dir: Optional[str] = typer.Option(
        None, "--input", "-i", help="Input directory of built HTML pages."
    ),
    out_dir: Optional[str] = typer.Option(
        None, "--out", "-o", help="Output directory for JSON-LD modules."
    ),
    llm_path: Optional[str] = typer.Option(
        None, "--llm", help="Path to .well-known/llm.json."
    ),
    public_root: Optional[Path] = typer.Option(
        None, "--public-root", help="Directory module paths are relative to (default: parent of --out)."
    ),
    build: Optional[str] = typer.Option(
        None, "--build", help='Build command to run first (e.g. "npm run build").'
    ),
    force: Optional[bool] = typer.Option(
        None, "--force/--no-force", help="Rewrite every module even if unchanged."
    ),
    dry_run: Optional[bool] = typer.Option(
        None, "--dry-run/--no-dry-run", help="Show what would be done without writing files."
    ),
    verbose: Optional[bool] = typer.Option(
        None, "--verbose/--quiet", help="Enable verbose output."
    ),
    workers: Optional[int] = typer.Option(
        None, "--workers", "-w", min=1, help="Parallel write workers."
    ),
    context: Optional[Path] = typer.Option(
        None, "--context", help="JSON file passed through as llm_context."
    ),
) -> None:
    """Publish JSON-LD modules and the Merkle-verified llm.json index."""
    config_path = settings.config_path
    project = load_project_config(config_path)
    options = merge_options(
        project,
        {
            "input": input_dir,
            "out": out_dir,
            "llm": llm_path,
            "build": build,
            "force": force,
            "dry_run": dry_run,
            "verbose": verbose,
        },
    )

    if options.verbose:
        logging.getLogger("langshake").setLevel(logging.DEBUG)

    console.print("[bold green]Langshake[/bold green]")
    console.print("[cyan]Using options:[/cyan]")
    for key, value in options.model_dump(exclude_none=True, exclude={"site"}).items():
        console.print(f"  {key}: {value}")

    if options.build:
        _run_build(options.build)
    else:
        console.print("[yellow]No build command specified. Output may be stale.[/yellow]")

    if not (options.input and options.out and options.llm):
        console.print(
            "[bold red]Missing required options: --input, --out, --llm. "
            "Please specify them on first run.[/bold red]"
        )
        raise typer.Exit(code=1)

    site = options.site
    files = scan_pages(options.input)
    if site is None:
        site = extract_site_metadata(files)
        options = options.model_copy(update={"site": site})
    save_project_config(config_path, options)

    if not files:
        console.print("[yellow]No supported files found in input directory. Nothing to process.[/yellow]")
        raise typer.Exit(code=0)
    logger.debug("Found %d files to process", len(files))

    context_path = context or (
        Path(options.llm_context_path) if options.llm_context_path else DEFAULT_CONTEXT_PATH
    )
    llm_context = load_llm_context(context_path)

    pipeline = PipelineConfig(
        input_dir=Path(options.input),
        out_dir=Path(options.out),
        llm_path=Path(options.llm),
        public_root=public_root,
        cache_path=settings.cache_path,
        force=bool(options.force),
        dry_run=bool(options.dry_run),
        workers=workers or settings.workers,
        index_version=settings.index_version,
    )
    publisher = Publisher(config=pipeline)

    try:
        summary = publisher.run(
            iter_page_artifacts(files, pipeline.input_dir), site, llm_context
        )
    except IndexPublishFailure as exc:
        console.print(f"[bold red]Error building LLM index:[/bold red] {exc}")
        raise typer.Exit(code=1)

    _print_summary(summary, len(files))
    console.print("[green]Done.[/green]")
