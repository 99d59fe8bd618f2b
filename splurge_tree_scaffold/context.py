"""Pipeline context and scaffold configuration helpers.

This module defines immutable dataclasses used to carry configuration and
execution context through the scaffolding pipeline. ``ScaffoldConfig``
holds the translation and output options; ``PipelineContext`` bundles
the per-file paths, the active configuration and a run id. Loading a
configuration from YAML is handled by ``ContextManager``.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import dataclasses
import logging
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .config_validation import validate_scaffold_config
from .exceptions import ConfigurationError
from .result import Result

DEFAULT_SOLIDITY_VERSION = "0.8.0"
DEFAULT_INDENTATION = 2
DEFAULT_OUTPUT_EXTENSION = ".t.sol"


@dataclass(frozen=True)
class ScaffoldConfig:
    """Scaffolding behavior configuration.

    The translation core only reads ``solidity_version``, ``indent``,
    ``emit_vm_skip`` and ``skip_modifiers``; the remaining fields drive the
    file, formatter and batch layers around it.
    """

    # Translation settings
    solidity_version: str = DEFAULT_SOLIDITY_VERSION
    """Version string placed in the ``pragma solidity`` header"""
    indent: int = DEFAULT_INDENTATION
    """Width of one indentation unit in the emitted code (1-16)"""
    emit_vm_skip: bool = False
    """Append ``vm.skip(true);`` as the last line of every test function"""
    skip_modifiers: bool = False
    """Never promote conditions to modifiers; fold every condition into names"""

    # Output settings
    write_files: bool = False
    force_write: bool = False
    output_extension: str = DEFAULT_OUTPUT_EXTENSION

    # Formatter settings
    format_output: bool = True
    formatter_command: list[str] = field(default_factory=lambda: ["forge", "fmt", "--raw", "-"])
    formatter_timeout: float = 30.0

    # Processing settings
    max_concurrent_files: int = 1
    log_level: str = "INFO"

    def with_override(self, **kwargs: Any) -> "ScaffoldConfig":
        """Return a new ``ScaffoldConfig`` with the given fields replaced."""
        return dataclasses.replace(self, **kwargs)

    def validate(self) -> None:
        """Validate the configuration.

        Raises:
            ConfigurationError: If a field holds a value of the wrong type or
                outside its range.
        """
        validate_scaffold_config(self.to_dict())

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "ScaffoldConfig":
        """Create a validated config from a dictionary.

        Unknown keys are ignored so configuration files can carry settings
        for other tools. Values are coerced the way pydantic coerces them,
        so ``indent: "4"`` becomes ``4``.

        Raises:
            ConfigurationError: If the resulting configuration is invalid.
        """
        validated = validate_scaffold_config(config_dict)
        return cls(**validated.model_dump())

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)


@dataclass(frozen=True)
class PipelineContext:
    """Immutable context object passed through the scaffolding pipeline.

    The context bundles the tree file and its derived output path, the
    active :class:`ScaffoldConfig` and a ``run_id`` for log correlation.
    Nothing in it is shared between files.
    """

    source_file: str
    target_file: str
    config: ScaffoldConfig
    run_id: str

    @classmethod
    def create(
        cls,
        source_file: str,
        target_file: str | None = None,
        config: ScaffoldConfig | None = None,
        run_id: str | None = None,
    ) -> "PipelineContext":
        """Construct a ``PipelineContext`` from call-site information.

        Args:
            source_file: Path to the ``.tree`` file.
            target_file: Optional output path. When omitted it is derived from
                ``source_file`` by replacing its suffix with
                ``config.output_extension``.
            config: Optional configuration; defaults to ``ScaffoldConfig()``.
            run_id: Optional run identifier; a UUID is generated if omitted.
        """
        if not config:
            config = ScaffoldConfig()

        if not target_file:
            target_file = str(derive_target_path(source_file, config.output_extension))

        if not run_id:
            run_id = str(uuid.uuid4())

        return cls(source_file=source_file, target_file=target_file, config=config, run_id=run_id)

    def __str__(self) -> str:
        return f"PipelineContext(source={self.source_file}, target={self.target_file}, run_id={self.run_id[:8]}...)"


def derive_target_path(source_file: str | Path, output_extension: str = DEFAULT_OUTPUT_EXTENSION) -> Path:
    """Return the generated-file path for a tree file.

    ``foo.tree`` becomes ``foo.t.sol``; a file without a suffix simply gets
    ``output_extension`` appended.
    """
    return Path(source_file).with_suffix(output_extension)


class ContextManager:
    """Helpers for loading and validating scaffold configuration.

    Methods return ``Result`` instances so callers can react to failures in
    a structured way.
    """

    @staticmethod
    def load_config_from_file(config_file: str) -> Result[ScaffoldConfig]:
        """Load a ``ScaffoldConfig`` from a YAML file.

        Args:
            config_file: Path to the YAML configuration file.

        Returns:
            A ``Result`` containing the configuration or the reason it could
            not be loaded.
        """
        import yaml

        try:
            with open(config_file, encoding="utf-8") as f:
                config_data = yaml.safe_load(f)
        except FileNotFoundError:
            return Result.failure(
                FileNotFoundError(f"Configuration file not found: {config_file}"), {"config_file": config_file}
            )
        except (OSError, yaml.YAMLError) as e:
            return Result.failure(ConfigurationError(f"Error loading configuration: {e}"), {"config_file": config_file})

        if config_data is None:
            config_data = {}
        if not isinstance(config_data, dict):
            return Result.failure(
                ConfigurationError("Configuration file must contain a mapping"), {"config_file": config_file}
            )

        try:
            config = ScaffoldConfig.from_dict(config_data)
        except ConfigurationError as e:
            return Result.failure(e, {"config_file": config_file})

        logging.getLogger(__name__).debug(f"Loaded configuration from {config_file}")
        return Result.success(config)
