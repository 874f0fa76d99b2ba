"""virtfs CLI — Typer-based command-line interface.

Provides the ``virtfs`` command with subcommands for inspecting files as
virtual resources, printing their provenance tree, and copying them
through a resource clone.

All output uses Rich for formatted terminal display.
"""
