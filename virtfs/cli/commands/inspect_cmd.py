"""``virtfs inspect FILE`` — show a file as a virtual resource.

Builds a Resource through the local adapter, materializes its content to
report the size, and prints path, name, stat type, timestamps and the
source modification flag.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from virtfs.adapters.local import resource_from_file
from virtfs.core.errors import ResourceError

console = Console()


def inspect_cmd(
    file: Path = typer.Argument(..., help="File to inspect."),
    virtual_path: str = typer.Option(
        None,
        "--virtual-path",
        "-p",
        help="Virtual path to expose the file under (default: /<name>).",
    ),
    collection: Optional[list[str]] = typer.Option(
        None,
        "--collection",
        "-c",
        help="Collection name that located the resource (repeatable, outermost first).",
    ),
) -> None:
    """Show a file as a virtual resource."""
    try:
        resource = resource_from_file(file, virtual_path)
        for name in collection or []:
            resource.push_collection(name)
        kind = resource.content_kind
        size = asyncio.run(resource.get_size())
    except (ResourceError, OSError) as e:
        console.print(
            f"[bold red]Cannot inspect {escape(str(file))}:[/bold red] {escape(str(e))}"
        )
        raise typer.Exit(code=1)

    stat_info = resource.stat_info
    source = resource.source

    table = Table(title=f"Resource {escape(resource.path)}", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Path", escape(resource.path))
    table.add_row("Name", escape(resource.name))
    table.add_row("Type", stat_info.kind.value)
    table.add_row("Content", kind.value)
    table.add_row("Size", f"{size} bytes")
    table.add_row("Last modified", stat_info.mtime.isoformat())
    table.add_row(
        "Source modified",
        "[yellow]Yes[/yellow]" if source is not None and source.modified else "[green]No[/green]",
    )
    if resource.collections:
        table.add_row("Collections", escape(" > ".join(resource.collections)))

    console.print(table)
