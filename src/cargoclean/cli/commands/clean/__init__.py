# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Clean CLI command package."""

from __future__ import annotations

import typer

from .command import main

__all__ = ["register"]


def register(app: typer.Typer) -> None:
    """Register the clean command on the provided Typer application.

    Args:
        app: Typer application receiving the command.
    """

    app.command(name="clean")(main)
