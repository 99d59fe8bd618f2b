"""Translator job: tree text to emitted Solidity code.

The job runs two tasks. The ``parse`` task scans, parses and classifies
the tree; the ``generate`` task folds it into the HIR and renders it.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import logging
from typing import Any

from ..context import PipelineContext
from ..events import EventBus
from ..pipeline import Job, Task
from ..result import Result
from ..steps import BuildHirStep, ClassifyTreeStep, EmitCodeStep, ParseTreeStep


class TranslatorJob(Job[str, str]):
    """Translate the contents of a tree file into unformatted Solidity."""

    def __init__(self, event_bus: EventBus):
        super().__init__(
            "translator",
            [self._create_parse_task(event_bus), self._create_generate_task(event_bus)],
            event_bus,
        )
        self._logger = logging.getLogger(f"{__name__}.{self.name}")

    def _create_parse_task(self, event_bus: EventBus) -> Task[Any, Any]:
        steps: list[Any] = [
            ParseTreeStep("parse_tree", event_bus),
            ClassifyTreeStep("classify_tree", event_bus),
        ]
        return Task("parse", steps, event_bus)

    def _create_generate_task(self, event_bus: EventBus) -> Task[Any, Any]:
        steps: list[Any] = [
            BuildHirStep("build_hir", event_bus),
            EmitCodeStep("emit_code", event_bus),
        ]
        return Task("generate", steps, event_bus)

    def execute(self, context: PipelineContext, initial_input: Any = None) -> Result[str]:
        """Run the translator job.

        Args:
            context: Pipeline execution context.
            initial_input: Text of the tree file.

        Returns:
            A :class:`Result` with the emitted code, or the first parse,
            classification or build error.
        """
        self._logger.info(f"Starting translation of {context.source_file}")

        result = super().execute(context, initial_input)

        if result.is_error():
            self._logger.error(f"Translation failed for {context.source_file}: {result.error}")
        else:
            self._logger.info(f"Translation completed for {context.source_file}")

        return result
