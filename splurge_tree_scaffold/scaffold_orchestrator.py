"""Orchestrator that runs the scaffolding pipeline for one tree file.

This module wires the translator, formatter and output jobs into
pipelines. ``scaffold_file`` writes (or returns) the generated Solidity
file; ``check_file`` regenerates it and compares it with the file on disk.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import logging
import time
from typing import Any

from .context import PipelineContext, ScaffoldConfig
from .events import ErrorEvent, EventBus, LoggingSubscriber
from .helpers.error_reporting import ErrorContext, ErrorReporter
from .helpers.path_utils import PathValidationError, suggest_path_fixes, validate_source_path
from .jobs import CheckJob, FormatterJob, OutputJob, TranslatorJob
from .pipeline import Pipeline
from .result import Result


class ScaffoldOrchestrator:
    """Runs per-file scaffolding and check pipelines.

    The jobs hold no per-file state, so one orchestrator can serve many
    files, including from several threads at once.
    """

    def __init__(self, event_bus: EventBus | None = None) -> None:
        """Initialize the orchestrator.

        Args:
            event_bus: Optional external event bus to use. If None, creates a new one.
        """
        self.event_bus = event_bus or EventBus()
        self.logger_subscriber = LoggingSubscriber(self.event_bus)
        self._logger = logging.getLogger(__name__)
        self.error_reporter = ErrorReporter(__name__)

        self.translator_job = TranslatorJob(self.event_bus)
        self.formatter_job = FormatterJob(self.event_bus)
        self.output_job = OutputJob(self.event_bus)
        self.check_job = CheckJob(self.event_bus)

        self._logger.debug("Scaffold orchestrator initialized")

    def scaffold_file(self, source_file: str, config: ScaffoldConfig | None = None) -> Result[str]:
        """Generate the Solidity test file for ``source_file``.

        Args:
            source_file: Path to the ``.tree`` file.
            config: Optional ``ScaffoldConfig`` to control behavior.

        Returns:
            ``Result`` holding the target path. Its metadata carries the
            ``generated_code`` and whether the file was ``written``; an
            existing target that was left alone makes it a warning.
        """
        pipeline: Pipeline[str, str] = Pipeline(
            "scaffold", [self.translator_job, self.formatter_job, self.output_job], self.event_bus
        )
        return self._run(pipeline, source_file, config)

    def check_file(self, source_file: str, config: ScaffoldConfig | None = None) -> Result[str]:
        """Check that the generated file for ``source_file`` is up to date.

        Returns:
            ``Result`` holding the target path, or a failure holding a
            :class:`CheckFailedError` when the target is missing or differs.
        """
        pipeline: Pipeline[str, str] = Pipeline(
            "check", [self.translator_job, self.formatter_job, self.check_job], self.event_bus
        )
        return self._run(pipeline, source_file, config)

    def _run(self, pipeline: Pipeline[str, str], source_file: str, config: ScaffoldConfig | None) -> Result[str]:
        if config is None:
            config = ScaffoldConfig()

        try:
            validated_source = validate_source_path(source_file)
        except PathValidationError as e:
            return Result.failure(e, {"source_file": source_file})

        context = PipelineContext.create(source_file=str(validated_source), config=config)

        read_result = self._read_source(context)
        if read_result.is_error():
            return read_result

        source_text = read_result.unwrap_or("")
        self._logger.debug(f"Read {len(source_text)} characters from {source_file}")
        result = pipeline.execute(context, source_text)

        if result.is_error():
            self._publish_error(context, result)
        return result

    def _read_source(self, context: PipelineContext) -> Result[str]:
        try:
            with open(context.source_file, encoding="utf-8") as f:
                return Result.success(f.read())
        except (OSError, UnicodeDecodeError) as e:
            self.error_reporter.report_error(
                e,
                ErrorContext(
                    component="scaffold_orchestrator", operation="read_source_file", source_file=context.source_file
                ),
                suggestions=suggest_path_fixes(e, context.source_file),
            )
            return Result.failure(e, {"source_file": context.source_file})

    def _publish_error(self, context: PipelineContext, result: Result[Any]) -> None:
        error = result.error or RuntimeError("Unknown error")
        component = (result.metadata or {}).get("failed_job", "pipeline")
        self.event_bus.publish(
            ErrorEvent(
                timestamp=time.time(),
                run_id=context.run_id,
                context=context,
                error=error,
                error_type=type(error).__name__,
                component=component,
            )
        )
