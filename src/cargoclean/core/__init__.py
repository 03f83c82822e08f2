# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared runtime primitives: constants, console output and process execution."""

from __future__ import annotations
