"""Langshake CLI: Typer-based command-line interface.

Provides the ``langshake`` command with ``publish`` and ``verify``
subcommands.  All output uses Rich for formatted terminal display.
"""
