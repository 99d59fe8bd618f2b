"""Configuration validation using pydantic schemas.

``ValidatedScaffoldConfig`` mirrors the fields of
:class:`~splurge_tree_scaffold.context.ScaffoldConfig` and checks both the
type and the range of every value, so a configuration file holding
``indent: two`` is reported instead of failing somewhere in the emitter.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ConfigurationError

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ValidatedScaffoldConfig(BaseModel):
    """Validated version of ScaffoldConfig with runtime validation."""

    model_config = ConfigDict(extra="ignore")

    # Translation settings
    solidity_version: str = Field(default="0.8.0", description="Version in the pragma solidity line")
    indent: int = Field(default=2, ge=1, le=16, description="Indentation width of the generated code")
    emit_vm_skip: bool = Field(default=False, description="Whether to add vm.skip(true); to every test")
    skip_modifiers: bool = Field(default=False, description="Whether to fold every condition into test names")

    # Output settings
    write_files: bool = Field(default=False, description="Whether to write output files instead of printing")
    force_write: bool = Field(default=False, description="Whether to overwrite existing output files")
    output_extension: str = Field(default=".t.sol", description="Suffix of generated files")

    # Formatter settings
    format_output: bool = Field(default=True, description="Whether to run the external formatter")
    formatter_command: list[str] = Field(
        default_factory=lambda: ["forge", "fmt", "--raw", "-"], description="Formatter command line"
    )
    formatter_timeout: float = Field(default=30.0, gt=0, description="Formatter timeout in seconds")

    # Processing settings
    max_concurrent_files: int = Field(default=1, ge=1, description="Maximum concurrent file processing")
    log_level: str = Field(default="INFO", description="Default logging level")

    @field_validator("solidity_version")
    @classmethod
    def validate_solidity_version(cls, v: str) -> str:
        version = v.strip()
        if not version:
            raise ValueError("solidity_version cannot be empty. Use a version such as '0.8.0' or '^0.8.20'.")
        if any(ch in version for ch in ";\n\r"):
            raise ValueError(f"solidity_version must fit on the pragma line, got {v!r}")
        return version

    @field_validator("output_extension")
    @classmethod
    def validate_output_extension(cls, v: str) -> str:
        if not v.startswith(".") or len(v) < 2:
            raise ValueError(f"output_extension must start with '.', got {v!r}. Example: '.t.sol'.")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        upper_v = v.upper()
        if upper_v not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of: {', '.join(VALID_LOG_LEVELS)}, got '{v}'")
        return upper_v

    @field_validator("formatter_command")
    @classmethod
    def validate_formatter_command(cls, v: list[str], info: ValidationInfo) -> list[str]:
        if info.data.get("format_output", True) and not v:
            raise ValueError(
                "formatter_command cannot be empty when format_output is set. Example: [forge, fmt, --raw, -]"
            )
        return v


def validate_scaffold_config(config_dict: dict[str, Any]) -> ValidatedScaffoldConfig:
    """Validate configuration values.

    Unknown keys are ignored.

    Raises:
        ConfigurationError: Naming the first offending field.
    """
    try:
        return ValidatedScaffoldConfig.model_validate(config_dict)
    except PydanticValidationError as e:
        raise _to_configuration_error(e) from e


def _to_configuration_error(error: PydanticValidationError) -> ConfigurationError:
    first = error.errors()[0]
    field = ".".join(str(part) for part in first["loc"])
    message = first["msg"].removeprefix("Value error, ")
    if field:
        return ConfigurationError(f"Invalid configuration for {field}: {message}", field)
    return ConfigurationError(f"Invalid configuration: {message}")
