"""buildlog CLI — Typer-based command-line interface.

Provides the ``buildlog`` command with subcommands for running a simulated
build through the console writer and for inspecting log levels.

All output uses Rich for formatted terminal display.
"""
