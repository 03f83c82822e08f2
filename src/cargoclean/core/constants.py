# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core Cargo layout constants."""

from __future__ import annotations

from typing import Final

CARGO_EXECUTABLE: Final[str] = "cargo"
CARGO_MANIFEST: Final[str] = "Cargo.toml"
ARTIFACT_DIR_NAME: Final[str] = "target"

PACKAGE_SECTION: Final[str] = "package"
WORKSPACE_SECTION: Final[str] = "workspace"

CONFIG_FILE_NAME: Final[str] = ".cargo-clean.toml"

ALWAYS_EXCLUDE_DIRS: Final[frozenset[str]] = frozenset({".git", ARTIFACT_DIR_NAME})

MEMBER_SCAN_LINES: Final[int] = 20

TIMEOUT_EXIT_STATUS: Final[int] = 124
MISSING_EXECUTABLE_EXIT_STATUS: Final[int] = 127

__all__ = [
    "ALWAYS_EXCLUDE_DIRS",
    "ARTIFACT_DIR_NAME",
    "CARGO_EXECUTABLE",
    "CARGO_MANIFEST",
    "CONFIG_FILE_NAME",
    "MEMBER_SCAN_LINES",
    "MISSING_EXECUTABLE_EXIT_STATUS",
    "PACKAGE_SECTION",
    "TIMEOUT_EXIT_STATUS",
    "WORKSPACE_SECTION",
]
