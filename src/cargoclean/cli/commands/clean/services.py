# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Helper services for the clean CLI."""

from __future__ import annotations

from ....cleaner import ProjectCleaner, SubprocessRunner
from ....config import CleanConfig, ConfigError, ConfigLoader
from ....results import RunSummary
from ...shared import CLIError, CLILogger
from .models import CleanCLIOptions


def load_clean_config(options: CleanCLIOptions, *, logger: CLILogger) -> CleanConfig:
    """Return the resolved cleaning configuration for ``options``.

    Args:
        options: Parsed CLI options.
        logger: Logger used for emitting user-facing messages when
            configuration loading fails.

    Returns:
        CleanConfig: Defaults merged with the configuration file and CLI flags.

    Raises:
        CLIError: If the configuration is invalid.
    """

    try:
        loader = ConfigLoader.for_root(options.root, config_path=options.config_path)
        config = loader.load(options.overrides())
    except ConfigError as exc:
        logger.fail(f"Configuration invalid: {exc}")
        raise CLIError(str(exc)) from exc
    source = loader.source.describe() if loader.source is not None else "defaults"
    logger.debug(f"config={source!r} cargo={config.cargo} timeout={config.timeout}")
    return config


def build_cleaner(config: CleanConfig, *, use_emoji: bool) -> ProjectCleaner:
    """Return the project cleaner used by the CLI.

    Args:
        config: Resolved cleaning configuration.
        use_emoji: Whether log output includes emoji markers.

    Returns:
        ProjectCleaner: Cleaner executing cargo through a subprocess runner.
    """

    runner = SubprocessRunner(timeout=config.timeout)
    return ProjectCleaner(config=config, runner=runner, use_emoji=use_emoji)


def emit_run_summary(summary: RunSummary, *, logger: CLILogger) -> None:
    """Render the end-of-run summary.

    Args:
        summary: Aggregated counters from the tree walk.
        logger: Logger used to emit messages.
    """

    logger.section("SUMMARY")
    logger.ok(f"Successfully cleaned: {summary.cleaned_count} projects")
    if summary.skipped:
        logger.info(f"Skipped {len(summary.skipped)} workspace members handled by their workspace")
    if summary.failed_count:
        logger.fail(f"Failed to clean: {summary.failed_count} projects")
        for result in summary.failures:
            logger.debug(f"failed={result.directory} message={result.message!r}")
        return
    logger.ok("All Cargo projects cleaned successfully!")


__all__ = ["build_cleaner", "emit_run_summary", "load_clean_config"]
