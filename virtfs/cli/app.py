"""Main Typer application — imports and registers all CLI commands.

Entry point: ``virtfs`` (configured via pyproject.toml project.scripts).
"""

from __future__ import annotations

import typer

from virtfs.cli.commands.copy_cmd import copy_cmd
from virtfs.cli.commands.inspect_cmd import inspect_cmd
from virtfs.cli.commands.tree_cmd import tree_cmd
from virtfs.logsetup import configure_logging

app = typer.Typer(
    name="virtfs",
    help="virtfs: inspect and copy files as virtual resources.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging."
    ),
) -> None:
    """Configure logging before any command runs."""
    configure_logging("DEBUG" if verbose else None)


# Register subcommands
app.command(name="inspect", help="Show a file as a virtual resource.")(inspect_cmd)
app.command(name="tree", help="Print the provenance tree of a resource.")(tree_cmd)
app.command(name="copy", help="Copy a file through a resource clone.")(copy_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
