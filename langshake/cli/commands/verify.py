"""``langshake verify INDEX``: recheck a published llm.json.

Recomputes every listed module's checksum and the Merkle root, and exits
non-zero if anything does not match.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from langshake.core.verifier import verify_index

console = Console()


def verify_cmd(
    index_path: Path = typer.Argument(
        ...,
        help="Path to the published .well-known/llm.json.",
    ),
    public_root: Optional[Path] = typer.Option(
        None,
        "--public-root",
        help="Directory module paths are relative to (default: parent of .well-known).",
    ),
) -> None:
    """Verify module checksums and the Merkle root of a published index."""
    if not index_path.exists():
        console.print(f"[bold red]Index not found:[/bold red] {index_path}")
        raise typer.Exit(code=1)

    try:
        report = verify_index(index_path, public_root)
    except ValueError as exc:
        console.print(f"[bold red]Invalid index:[/bold red] {exc}")
        raise typer.Exit(code=1)

    table = Table(title="Modules")
    table.add_column("Path", style="cyan")
    table.add_column("Checksum")
    table.add_column("OK", justify="center")
    for check in report.modules:
        status = "[green]Yes[/green]" if check.ok else f"[red]No[/red] [dim]{check.reason}[/dim]"
        table.add_row(check.public_path, (check.recorded_checksum or "-")[:16], status)
    console.print(table)

    root_status = "[green]match[/green]" if report.root_matches else "[bold red]MISMATCH[/bold red]"
    console.print(f"[bold]Merkle root:[/bold] {report.expected_root or '<empty>'} ({root_status})")

    if not report.valid:
        console.print("[bold red]Verification failed.[/bold red]")
        raise typer.Exit(code=1)
    console.print("[bold green]Verification passed.[/bold green]")
