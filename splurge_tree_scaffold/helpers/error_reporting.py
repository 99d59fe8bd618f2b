"""Structured error reporting for per-file failures.

An :class:`ErrorReporter` logs an error together with where it happened
and what the user can try next. It keeps no state between reports, so one
reporter can be shared by every file of a batch.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import logging
from dataclasses import dataclass

_LEVELS = {"ERROR": logging.ERROR, "WARNING": logging.WARNING}


@dataclass(frozen=True)
class ErrorContext:
    """Where an error happened."""

    component: str
    """The component that failed (e.g. 'scaffold_orchestrator')"""

    operation: str
    """The operation being performed (e.g. 'read_source_file')"""

    source_file: str | None = None
    line_number: int | None = None


@dataclass(frozen=True)
class ErrorDetails:
    """A reported error with its context and suggested fixes."""

    error: Exception
    context: ErrorContext
    severity: str = "ERROR"
    suggestions: tuple[str, ...] = ()

    def format_message(self) -> str:
        message_parts = [f"[{self.context.component}] {self.context.operation} failed"]

        if self.context.source_file:
            message_parts.append(f" in {self.context.source_file}")
        if self.context.line_number:
            message_parts.append(f" at line {self.context.line_number}")

        message_parts.append(f": {self.error}")

        if self.suggestions:
            message_parts.append(f" Suggestions: {'; '.join(self.suggestions)}")

        return "".join(message_parts)


class ErrorReporter:
    """Logs errors with their context and suggested fixes."""

    def __init__(self, logger_name: str = "splurge_tree_scaffold") -> None:
        self.logger = logging.getLogger(logger_name)

    def report_error(
        self,
        error: Exception,
        context: ErrorContext,
        severity: str = "ERROR",
        suggestions: list[str] | None = None,
    ) -> ErrorDetails:
        """Log ``error`` at the level named by ``severity`` (``INFO`` for unknown names)."""
        details = ErrorDetails(error=error, context=context, severity=severity, suggestions=tuple(suggestions or []))
        self.logger.log(_LEVELS.get(severity, logging.INFO), details.format_message())
        return details
