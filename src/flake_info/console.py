"""Shared Rich consoles for flake-info CLI output."""

from __future__ import annotations

from typing import Iterable

from rich.console import Console
from rich.table import Table

from flake_info.models.source import Source

console = Console()
err_console = Console(stderr=True)


def success(message: str, console: Console = err_console) -> None:
    """Print a success message in green."""
    console.print(f"[green]{message}[/green]")


def sources_table(sources: Iterable[Source], title: str | None = None) -> Table:
    """Build a table with one row per source: type, origin and flake reference."""
    table = Table(title=title)
    table.add_column("Type", style="cyan", no_wrap=True)
    table.add_column("Origin")
    table.add_column("Flake reference", style="green", overflow="fold")

    for source in sources:
        if source.type == "git":
            origin = source.url
        elif source.type == "nixpkgs":
            origin = f"nixos-{source.channel}"
        else:
            origin = f"{source.owner}/{source.repo}"
        table.add_row(source.type, origin, source.to_flake_ref())

    return table
