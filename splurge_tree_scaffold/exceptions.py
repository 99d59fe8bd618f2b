"""Custom exception classes for the tree scaffolding tool.

This module defines the exception hierarchy used by the translation
pipeline. Each exception carries an optional ``details`` mapping that
contains structured context (for example the offending source line) to
help callers diagnose failures programmatically.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from typing import Any


class ScaffoldError(Exception):
    """Base exception for scaffolding-related errors.

    Args:
        message: Human-readable error message.
        details: Optional mapping with structured diagnostic data.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ParseError(ScaffoldError):
    """Raised when a tree file is structurally invalid.

    Args:
        message: Error message describing the parse failure.
        kind: Short identifier for the kind of structural problem.
        line: Optional 1-based line number where the error occurred.
        column: Optional 0-based column where the error occurred.
    """

    kind = "parse"

    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        details: dict[str, Any] = {"kind": self.kind}
        if line is not None:
            details["line"] = line
        if column is not None:
            details["column"] = column
        super().__init__(message, details)
        self.line = line
        self.column = column

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"{self.message} (line {self.line})"


class UnexpectedTokenError(ParseError):
    """Raised when a line does not follow the tree-drawing grammar."""

    kind = "unexpected_token"


class InconsistentIndentationError(ParseError):
    """Raised when a line dedents to a column that no open node uses."""

    kind = "inconsistent_indentation"


class MultipleRootsError(ParseError):
    """Raised when more than one line sits at the root column."""

    kind = "multiple_roots"


class EmptyInputError(ParseError):
    """Raised when the input holds no tree at all."""

    kind = "empty_input"

    def __init__(self, message: str = "The tree is empty"):
        super().__init__(message)


class ClassificationError(ScaffoldError):
    """Raised when a node cannot be given a kind.

    Args:
        message: Description of the classification failure.
        line: Source line of the offending node.
        text: Raw text of the offending node.
    """

    def __init__(self, message: str, line: int, text: str | None = None):
        details: dict[str, Any] = {"line": line}
        if text is not None:
            details["text"] = text
        super().__init__(message, details)
        self.line = line

    def __str__(self) -> str:
        return f"{self.message} (line {self.line})"


class BuildError(ScaffoldError):
    """Raised when the classified tree cannot be folded into a HIR.

    Args:
        message: Description of the build failure.
        line: Source line of the offending node.
        identifier: Optional identifier involved in the failure.
    """

    kind = "build"

    def __init__(self, message: str, line: int, identifier: str | None = None):
        details: dict[str, Any] = {"kind": self.kind, "line": line}
        if identifier is not None:
            details["identifier"] = identifier
        super().__init__(message, details)
        self.line = line
        self.identifier = identifier

    def __str__(self) -> str:
        return f"{self.message} (line {self.line})"


class MalformedConditionError(BuildError):
    """Raised when a condition has no phrase after its keyword."""

    kind = "malformed_condition"


class NoActionsForConditionError(BuildError):
    """Raised when a condition subtree resolves to zero actions."""

    kind = "no_actions_for_condition"


class IdentifierCollisionError(BuildError):
    """Raised when two generated functions share an identifier."""

    kind = "identifier_collision"


class EmitterError(ScaffoldError):
    """Raised when rendering a HIR fails.

    Emitting has no user-facing failure path; seeing this exception means
    the builder produced a HIR it should not have.
    """


class ValidationError(ScaffoldError):
    """Raised when input or configuration validation fails.

    Args:
        message: Description of the validation failure.
        validation_type: Identifier for the kind of validation performed.
        field: Optional field name that failed validation.
    """

    def __init__(self, message: str, validation_type: str, field: str | None = None):
        details: dict[str, Any] = {"validation_type": validation_type}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ConfigurationError(ScaffoldError):
    """Raised when the scaffold configuration is invalid.

    Args:
        message: Human readable description of the configuration problem.
        config_key: Optional configuration key that caused the error.
    """

    def __init__(self, message: str, config_key: str | None = None):
        details: dict[str, Any] = {}
        if config_key:
            details["config_key"] = config_key
        super().__init__(message, details)


class CheckFailedError(ScaffoldError):
    """Raised when an existing generated file is out of sync with its tree.

    Args:
        message: Description of the mismatch.
        target_file: The generated file that was compared.
        diff: Unified diff between the existing and the expected contents.
    """

    def __init__(self, message: str, target_file: str, diff: str | None = None):
        details: dict[str, Any] = {"target_file": target_file}
        if diff is not None:
            details["diff"] = diff
        super().__init__(message, details)
        self.target_file = target_file
        self.diff = diff


class BatchScaffoldError(ScaffoldError):
    """Aggregate of per-file failures from a multi-file run.

    Args:
        failures: Mapping of source file path to the exception it raised.
    """

    def __init__(self, failures: dict[str, Exception]):
        super().__init__(f"Could not scaffold {len(failures)} files", {"failed_files": list(failures)})
        self.failures = failures
