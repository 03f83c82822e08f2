# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Progress and status lines in four severities, plus section headers.

Every message is printed as :class:`rich.text.Text`, so manifest section
names such as ``[workspace]`` are never mistaken for Rich markup.
"""

from __future__ import annotations

from enum import Enum

from rich.rule import Rule
from rich.text import Text

from .console import detect_tty, get_console_manager


class Severity(Enum):
    """Severity of a status line: its emoji marker and its colour."""

    INFO = ("ℹ️ ", "cyan")
    SUCCESS = ("✅ ", "green")
    WARNING = ("⚠️ ", "yellow")
    ERROR = ("❌ ", "red")

    @property
    def marker(self) -> str:
        return self.value[0]

    @property
    def style(self) -> str:
        return self.value[1]


def emoji(symbol: str, enable: bool) -> str:
    """Return ``symbol`` when emoji output is enabled, otherwise ``""``."""

    return symbol if enable else ""


def log(severity: Severity, msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Print ``msg`` as a single status line of ``severity``.

    Args:
        severity: Severity deciding the marker and colour.
        msg: Message text, printed verbatim.
        use_emoji: Prefix the line with the severity's emoji marker.
        use_color: Force colour on or off; ``None`` follows TTY detection.
    """

    colored = detect_tty() if use_color is None else use_color
    line = Text(emoji(severity.marker, use_emoji) + msg)
    if colored:
        line.stylize(severity.style)
    get_console_manager().get(color=colored, emoji=use_emoji).print(line)


def section(title: str, *, use_color: bool) -> None:
    """Print a header separating ``title``'s block from earlier output."""

    console = get_console_manager().get(color=use_color, emoji=True)
    if not (use_color and detect_tty()):
        console.print(Text(f"\n=== {title} ==="))
        return
    console.print()
    console.print(Rule(title))


def info(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Print a progress message."""

    log(Severity.INFO, msg, use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Print a success message."""

    log(Severity.SUCCESS, msg, use_emoji=use_emoji, use_color=use_color)


def warn(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Print a warning; the run continues."""

    log(Severity.WARNING, msg, use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Print an error for a project or for the whole run."""

    log(Severity.ERROR, msg, use_emoji=use_emoji, use_color=use_color)


__all__ = [
    "Severity",
    "emoji",
    "fail",
    "info",
    "log",
    "ok",
    "section",
    "warn",
]
