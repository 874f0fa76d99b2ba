"""``virtfs tree FILE`` — print the provenance tree of a resource."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from virtfs.adapters.local import resource_from_file
from virtfs.core.errors import ResourceError

console = Console()


def _add_branches(node: Tree, branches: dict[str, dict]) -> None:
    for label, children in branches.items():
        _add_branches(node.add(escape(label)), children)


def tree_cmd(
    file: Path = typer.Argument(..., help="File to trace."),
    collection: Optional[list[str]] = typer.Option(
        None,
        "--collection",
        "-c",
        help="Collection name that located the resource (repeatable, outermost first).",
    ),
    virtual_path: str = typer.Option(
        None,
        "--virtual-path",
        "-p",
        help="Virtual path to expose the file under (default: /<name>).",
    ),
) -> None:
    """Print the provenance tree, innermost collection first."""
    try:
        resource = resource_from_file(file, virtual_path)
    except (ResourceError, OSError) as e:
        console.print(
            f"[bold red]Cannot trace {escape(str(file))}:[/bold red] {escape(str(e))}"
        )
        raise typer.Exit(code=1)

    for name in collection or []:
        resource.push_collection(name)

    ((path, branches),) = resource.get_path_tree().items()
    root = Tree(f"[bold]{escape(path)}[/bold]")
    _add_branches(root, branches)
    console.print(root)
