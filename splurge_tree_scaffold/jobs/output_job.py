"""Output jobs: write generated files or check them against the tree.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import logging
from typing import Any

from ..context import PipelineContext
from ..events import EventBus
from ..pipeline import Job, Task
from ..result import Result
from ..steps import CompareOutputStep, WriteOutputStep


class OutputJob(Job[str, str]):
    """Write generated Solidity files to the filesystem.

    When ``write_files`` is off the job only hands the code back in its
    result metadata so the CLI can print it.
    """

    def __init__(self, event_bus: EventBus):
        super().__init__("output", [self._create_output_task(event_bus)], event_bus)
        self._logger = logging.getLogger(f"{__name__}.{self.name}")

    def _create_output_task(self, event_bus: EventBus) -> Task[Any, Any]:
        steps: list[Any] = [WriteOutputStep("write_output", event_bus)]
        return Task("output", steps, event_bus)

    def execute(self, context: PipelineContext, initial_input: Any = None) -> Result[str]:
        """Run the output job.

        Args:
            context: Pipeline execution context containing ``target_file``
                and the output settings.
            initial_input: Formatted code from the formatter job.

        Returns:
            A :class:`Result` holding the target path.
        """
        self._logger.debug(f"Starting output job for {context.target_file}")

        result = super().execute(context, initial_input)

        if result.is_error():
            self._logger.error(f"Output job failed for {context.target_file}: {result.error}")
        elif result.metadata and result.metadata.get("written"):
            self._logger.info(f"Wrote {context.target_file}")
        elif result.is_warning():
            self._logger.warning(f"Skipped {context.target_file}: the file already exists")

        return result


class CheckJob(Job[str, str]):
    """Compare generated code with the existing output file."""

    def __init__(self, event_bus: EventBus):
        super().__init__("check", [self._create_check_task(event_bus)], event_bus)
        self._logger = logging.getLogger(f"{__name__}.{self.name}")

    def _create_check_task(self, event_bus: EventBus) -> Task[Any, Any]:
        steps: list[Any] = [CompareOutputStep("compare_output", event_bus)]
        return Task("check", steps, event_bus)

    def execute(self, context: PipelineContext, initial_input: Any = None) -> Result[str]:
        result = super().execute(context, initial_input)

        if result.is_error():
            self._logger.info(f"Check failed for {context.target_file}: {result.error}")
        else:
            self._logger.debug(f"{context.target_file} matches {context.source_file}")

        return result
