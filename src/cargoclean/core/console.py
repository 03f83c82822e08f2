# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Rich consoles shared by every log helper."""

from __future__ import annotations

import sys
from functools import lru_cache

from rich.console import Console


def detect_tty() -> bool:
    """Return ``True`` when stdout is attached to a terminal."""

    isatty = getattr(sys.stdout, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except ValueError:
        # stdout already closed
        return False


class RichConsoleManager:
    """Hand out one :class:`Console` per combination of colour, emoji and TTY state.

    Consoles never hold on to a stream; Rich resolves ``sys.stdout`` at print
    time, so redirected output (pytest capture, ``CliRunner``) is honoured
    once :meth:`clear` drops consoles built for a different TTY state.
    """

    def __init__(self) -> None:
        self._consoles: dict[tuple[bool, bool, bool], Console] = {}

    def get(self, *, color: bool, emoji: bool) -> Console:
        """Return the console for the ``color`` and ``emoji`` preferences.

        Colour is only emitted when stdout is a terminal, whatever ``color``
        requests.
        """

        tty = detect_tty()
        key = (color, emoji, tty)
        console = self._consoles.get(key)
        if console is None:
            styled = color and tty
            console = Console(
                color_system="auto" if styled else None,
                force_terminal=tty,
                no_color=not styled,
                emoji=emoji,
                highlight=False,
                soft_wrap=True,
            )
            self._consoles[key] = console
        return console

    def clear(self) -> None:
        """Forget every console handed out so far."""

        self._consoles.clear()


@lru_cache(maxsize=1)
def get_console_manager() -> RichConsoleManager:
    """Return the process-wide :class:`RichConsoleManager`."""

    return RichConsoleManager()


__all__ = [
    "RichConsoleManager",
    "detect_tty",
    "get_console_manager",
]
