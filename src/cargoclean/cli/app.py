# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands and shared services."""

from __future__ import annotations

import typer

from .commands import register_commands

app = typer.Typer(
    help="Recursively run 'cargo clean' in all subdirectories containing Cargo.toml files.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
    pretty_exceptions_enable=False,
)
register_commands(app)


def main() -> None:
    """Run the CLI application."""

    app()


__all__ = ["app", "main"]
