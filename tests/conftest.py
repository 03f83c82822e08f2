# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import shutil
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from subprocess import CompletedProcess

import pytest

from cargoclean.core.console import get_console_manager


@dataclass
class FakeCargo:
    """Scripted stand-in for ``cargo`` recording every invocation.

    Responses are keyed by working directory and flag tuple; unscripted calls
    succeed. A successful call deletes ``target`` in the working directory the
    way ``cargo clean`` would.
    """

    responses: dict[tuple[Path, tuple[str, ...]], tuple[int, str]] = field(default_factory=dict)
    failing_dirs: dict[Path, str] = field(default_factory=dict)
    calls: list[tuple[tuple[str, ...], Path | None]] = field(default_factory=list)

    def respond(self, directory: Path, *flags: str, returncode: int, output: str = "") -> None:
        self.responses[(directory, tuple(flags))] = (returncode, output)

    def fail_in(self, directory: Path, output: str = "error: could not clean") -> None:
        """Make every invocation inside ``directory`` fail with ``output``."""

        self.failing_dirs[directory] = output

    def flags_for(self, directory: Path) -> list[tuple[str, ...]]:
        return [args[2:] for args, cwd in self.calls if cwd == directory]

    def __call__(self, args: Sequence[str], cwd: Path | None) -> CompletedProcess[str]:
        command = tuple(args)
        self.calls.append((command, cwd))
        assert cwd is not None
        flags = command[2:]
        returncode, output = self.responses.get((cwd, flags), (0, ""))
        if (cwd, flags) not in self.responses and cwd in self.failing_dirs:
            returncode, output = 101, self.failing_dirs[cwd]
        if returncode == 0:
            shutil.rmtree(cwd / "target", ignore_errors=True)
        return CompletedProcess(list(command), returncode, stdout=output, stderr="")


class CargoTree:
    """Build Cargo project layouts beneath a temporary root."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def package(self, relative: str, name: str | None = None, *, artifacts: bool = False) -> Path:
        directory = self.root / relative
        directory.mkdir(parents=True, exist_ok=True)
        crate = name or directory.name.replace("-", "_")
        (directory / "Cargo.toml").write_text(
            f'[package]\nname = "{crate}"\nversion = "0.1.0"\nedition = "2021"\n',
            encoding="utf-8",
        )
        if artifacts:
            self.artifacts(relative)
        return directory

    def workspace(self, relative: str, members: Iterable[str], *, artifacts: bool = False) -> Path:
        directory = self.root / relative
        directory.mkdir(parents=True, exist_ok=True)
        entries = "".join(f'    "{member}",\n' for member in members)
        (directory / "Cargo.toml").write_text(f"[workspace]\nmembers = [\n{entries}]\n", encoding="utf-8")
        if artifacts:
            self.artifacts(relative)
        return directory

    def manifest(self, relative: str, content: str) -> Path:
        directory = self.root / relative
        directory.mkdir(parents=True, exist_ok=True)
        (directory / "Cargo.toml").write_text(content, encoding="utf-8")
        return directory

    def artifacts(self, relative: str) -> Path:
        target = self.root / relative / "target" / "debug"
        target.mkdir(parents=True, exist_ok=True)
        (target / "build-artifact").write_text("fake build artifact", encoding="utf-8")
        return target.parent


@pytest.fixture(autouse=True)
def _fresh_consoles() -> Iterable[None]:
    """Drop cached Rich consoles so each test observes its own captured streams."""

    get_console_manager().clear()
    yield
    get_console_manager().clear()


@pytest.fixture
def fake_cargo() -> FakeCargo:
    """Return a fresh scripted cargo runner."""

    return FakeCargo()


@pytest.fixture
def cargo_tree(tmp_path: Path) -> CargoTree:
    """Return a builder rooted at the resolved ``tmp_path``."""

    return CargoTree(tmp_path.resolve())
