# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and loaders for the cleaning orchestrator."""

from __future__ import annotations

from ..errors import ConfigError
from .loader import ConfigLoader, TomlConfigSource
from .models import CleanConfig

__all__ = [
    "CleanConfig",
    "ConfigError",
    "ConfigLoader",
    "TomlConfigSource",
]
