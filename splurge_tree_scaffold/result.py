"""Result type for functional error handling.

Pipeline steps never raise across their boundary; they return an
immutable ``Result[T]`` that is a success, a success with warnings, or an
error. Warnings are how recoverable problems (a formatter that is not
installed, an output file that already exists) travel to the CLI.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class ResultStatus(Enum):
    """Enumerates possible statuses for a ``Result``."""

    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Result(Generic[T]):
    """Immutable outcome of a pipeline operation.

    A ``WARNING`` result still carries usable data; only ``ERROR`` results
    abort the pipeline for the current file.
    """

    status: ResultStatus
    data: T | None = None
    error: Exception | None = None
    warnings: list[str] | None = None
    metadata: dict[str, Any] | None = None

    def __post_init__(self) -> None:
        if self.status == ResultStatus.ERROR:
            if self.error is None:
                raise ValueError("Error results need an error")
            if self.data is not None:
                raise ValueError("Error results cannot have data")
        elif self.error is not None:
            raise ValueError(f"{self.status.value.capitalize()} results cannot have errors")
        if self.warnings is None:
            object.__setattr__(self, "warnings", [])
        if self.metadata is None:
            object.__setattr__(self, "metadata", {})

    @classmethod
    def success(cls, data: T, metadata: dict[str, Any] | None = None) -> "Result[T]":
        """Create a successful result."""
        return cls(status=ResultStatus.SUCCESS, data=data, metadata=metadata or {})

    @classmethod
    def failure(cls, error: Exception, metadata: dict[str, Any] | None = None) -> "Result[T]":
        """Create an error result wrapping ``error``."""
        return cls(status=ResultStatus.ERROR, error=error, metadata=metadata or {})

    @classmethod
    def warning(cls, data: T, warnings: list[str], metadata: dict[str, Any] | None = None) -> "Result[T]":
        """Create a result that produced ``data`` but raised ``warnings``."""
        return cls(status=ResultStatus.WARNING, data=data, warnings=warnings, metadata=metadata or {})

    def is_success(self) -> bool:
        """Return True when the result is a plain success."""
        return self.status == ResultStatus.SUCCESS

    def is_error(self) -> bool:
        return self.status == ResultStatus.ERROR

    def is_warning(self) -> bool:
        return self.status == ResultStatus.WARNING

    def unwrap_or(self, default_value: T) -> T:
        """Return the data of a success or warning, ``default_value`` otherwise."""
        if self.is_error() or self.data is None:
            return default_value
        return self.data

    def __str__(self) -> str:
        if self.is_error():
            return f"Result(error, error={self.error})"
        if self.is_warning():
            return f"Result(warning, data={self.data}, warnings={self.warnings})"
        return f"Result(success, data={self.data})"
