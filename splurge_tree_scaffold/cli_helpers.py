"""CLI helper functions for the tree scaffolding tool.

This module contains utility functions used by the CLI commands,
separated from the main CLI module for better organization.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import glob
import logging
import os
from typing import Any

from .context import ContextManager, ScaffoldConfig
from .events import EventBus
from .exceptions import ConfigurationError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging_with_level(log_level: str) -> None:
    """Set up logging with a specific level."""
    numeric_level = getattr(logging, log_level.upper(), logging.WARNING)
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    logging.getLogger().setLevel(numeric_level)


def resolve_log_level(info: bool, debug: bool, config_log_level: str | None = None) -> str:
    """Pick the effective log level.

    ``--debug`` wins over ``--info``; without either flag the level from a
    configuration file is used, and the CLI is quiet (``WARNING``) otherwise.
    """
    if debug:
        return "DEBUG"
    if info:
        return "INFO"
    return (config_log_level or "WARNING").upper()


def create_event_bus() -> EventBus:
    """Create the event bus for the application."""
    return EventBus()


def expand_source_files(patterns: list[str]) -> tuple[list[str], list[str]]:
    """Expand glob patterns into a de-duplicated list of files.

    Arguments without glob characters are kept as-is so that a missing file
    is reported as a failure for that file.

    Returns:
        ``(files, warnings)`` where ``warnings`` lists patterns that matched
        nothing.
    """
    files: list[str] = []
    warnings: list[str] = []

    for pattern in patterns:
        if not glob.has_magic(pattern):
            files.append(pattern)
            continue

        matched = sorted(path for path in glob.glob(pattern, recursive=True) if os.path.isfile(path))
        if not matched:
            warnings.append(f"No files matched pattern '{pattern}'")
        files.extend(matched)

    seen: set[str] = set()
    unique_files = []
    for file_path in files:
        if file_path not in seen:
            seen.add(file_path)
            unique_files.append(file_path)

    return unique_files, warnings


def load_base_config(config_file: str | None) -> ScaffoldConfig:
    """Load the configuration file, or return the defaults when there is none.

    Raises:
        ConfigurationError: If the file cannot be loaded.
    """
    if config_file is None:
        return ScaffoldConfig()

    result = ContextManager.load_config_from_file(config_file)
    if not result.is_success() or result.data is None:
        raise ConfigurationError(f"Error loading configuration file: {result.error}", "config_file")
    return result.data


def create_config(base_config: ScaffoldConfig, **overrides: Any) -> ScaffoldConfig:
    """Apply the CLI options that were given on top of ``base_config``.

    ``None`` values mean the option was not passed and leave the base value
    in place.

    Raises:
        ConfigurationError: If the resulting configuration is invalid.
    """
    config_kwargs = {key: value for key, value in overrides.items() if value is not None}
    config = base_config.with_override(**config_kwargs)
    config.validate()
    return config
