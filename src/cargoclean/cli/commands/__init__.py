# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command registration for the CLI application."""

from __future__ import annotations

import typer

from .clean import register as register_clean


def register_commands(app: typer.Typer) -> None:
    """Register every CLI command on ``app``.

    Args:
        app: Typer application receiving the commands.
    """

    register_clean(app)


__all__ = ["register_commands"]
