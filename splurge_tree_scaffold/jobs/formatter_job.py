"""Formatter job for generated Solidity code.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import logging
from typing import Any

from ..context import PipelineContext
from ..events import EventBus
from ..pipeline import Job, Task
from ..result import Result
from ..steps import FormatCodeStep


class FormatterJob(Job[str, str]):
    """Run the external formatter over emitted code.

    Formatter problems never fail the job; they come back as warnings with
    the unformatted code as data.
    """

    def __init__(self, event_bus: EventBus):
        """Initialize the formatter job.

        Args:
            event_bus: Event bus used for publishing pipeline events.
        """
        super().__init__("formatter", [self._create_formatting_task(event_bus)], event_bus)
        self._logger = logging.getLogger(f"{__name__}.{self.name}")

    def _create_formatting_task(self, event_bus: EventBus) -> Task[Any, Any]:
        steps: list[Any] = [FormatCodeStep("format_code", event_bus)]
        return Task("formatting", steps, event_bus)

    def execute(self, context: PipelineContext, initial_input: Any = None) -> Result[str]:
        """Run the formatter job.

        Args:
            context: Pipeline execution context with the formatter settings.
            initial_input: Code emitted by the translator job.

        Returns:
            A :class:`Result` with the formatted code, or a warning result
            with the original code when formatting was not possible.
        """
        self._logger.debug(f"Starting formatting job for {context.source_file}")

        result = super().execute(context, initial_input)

        if result.is_warning():
            self._logger.info(f"Formatting skipped for {context.source_file}: {'; '.join(result.warnings or [])}")
        elif result.is_success():
            self._logger.debug(f"Formatting job completed for {context.source_file}")

        return result
