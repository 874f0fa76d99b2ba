"""``virtfs copy SRC DEST`` — copy a file through a resource clone.

The source file is opened lazily through a stream factory, cloned, and the
clone's content is written to DEST.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from virtfs.adapters.local import resource_from_file, write_resource
from virtfs.core.errors import ResourceError

console = Console()


async def _copy(src: Path, dest: Path, virtual_path: str | None) -> int:
    resource = resource_from_file(src, virtual_path)
    clone = await resource.clone()
    await write_resource(clone, dest)
    return await clone.get_size()


def copy_cmd(
    src: Path = typer.Argument(..., help="File to copy."),
    dest: Path = typer.Argument(..., help="Destination file."),
    virtual_path: str = typer.Option(
        None,
        "--virtual-path",
        "-p",
        help="Virtual path to expose the file under (default: /<name>).",
    ),
) -> None:
    """Copy a file through a virtual resource clone."""
    try:
        size = asyncio.run(_copy(src, dest, virtual_path))
    except (ResourceError, OSError) as e:
        console.print(f"[bold red]Copy failed:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1)
    console.print(
        f"[green]Copied[/green] {escape(str(src))} -> {escape(str(dest))} "
        f"[dim]({size} bytes)[/dim]"
    )
