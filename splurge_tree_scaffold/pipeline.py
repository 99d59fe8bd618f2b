"""Pipeline architecture for functional composition.

This module provides the ``Step``, ``Task``, ``Job`` and ``Pipeline``
abstractions the scaffolder is built from. A step is one pure phase
(scan/parse, classify, build, emit, format, write); tasks thread data
through steps, jobs group tasks, and the pipeline runs jobs for a single
tree file. Every level short-circuits on the first error and merges the
warnings of the levels below it.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from .context import PipelineContext
from .events import (
    EventBus,
    JobCompletedEvent,
    JobStartedEvent,
    PipelineCompletedEvent,
    PipelineStartedEvent,
    StepCompletedEvent,
    StepStartedEvent,
)
from .result import Result

T = TypeVar("T")
R = TypeVar("R")


def _merge_results(results: list[Result[Any]]) -> Result[Any]:
    """Collapse the results of one level into the result of its parent."""
    all_warnings: list[str] = []
    for result in results:
        if result.warnings:
            all_warnings.extend(result.warnings)

    final_result = results[-1]
    if all_warnings:
        return Result.warning(final_result.data, all_warnings, final_result.metadata)
    return Result.success(final_result.data, final_result.metadata)


class Step(ABC, Generic[T, R]):
    """Atomic operation with a single responsibility.

    A ``Step`` transforms input of type ``T`` into output of type ``R``.
    Concrete steps implement ``execute``; callers use ``run``, which
    publishes start/completion events and converts exceptions into error
    results.
    """

    def __init__(self, name: str, event_bus: EventBus) -> None:
        self.name = name
        self.event_bus = event_bus
        self._logger = logging.getLogger(f"{__name__}.{name}")

    @abstractmethod
    def execute(self, context: PipelineContext, input_data: T) -> Result[R]:
        """Pure transformation function to implement in subclasses.

        Args:
            context: Pipeline execution context.
            input_data: Output of the previous step.

        Returns:
            ``Result`` containing transformed data or an error.
        """

    def run(self, context: PipelineContext, input_data: T) -> Result[R]:
        """Execute the step with event publishing and error handling.

        Args:
            context: Pipeline execution context.
            input_data: Input data for transformation.

        Returns:
            ``Result`` containing transformed data or an error.
        """
        self.event_bus.publish(
            StepStartedEvent(
                timestamp=time.time(),
                run_id=context.run_id,
                context=context,
                step_name=self.name,
                step_type=self.__class__.__name__,
            )
        )
        start_time = time.time()

        try:
            self._logger.debug(f"Starting step: {self.name}")
            result = self.execute(context, input_data)
            self._logger.debug(f"Completed step: {self.name} ({result.status.value})")
        except Exception as e:
            self._logger.error(f"Exception in step {self.name}: {e}", exc_info=True)
            result = Result.failure(e, {"step": self.name, "context": context.run_id})

        self.event_bus.publish(
            StepCompletedEvent(
                timestamp=time.time(),
                run_id=context.run_id,
                context=context,
                step_name=self.name,
                step_type=self.__class__.__name__,
                result=result,
                duration_ms=(time.time() - start_time) * 1000,
            )
        )

        return result


class Task(Generic[T, R]):
    """Collection of related steps executed sequentially.

    The output of each step is the input of the next; a step that returns
    an error aborts the task.
    """

    def __init__(self, name: str, steps: list[Step[Any, Any]], event_bus: EventBus) -> None:
        self.name = name
        self.steps = steps
        self.event_bus = event_bus
        self._logger = logging.getLogger(f"{__name__}.{name}")

    def execute(self, context: PipelineContext, input_data: T) -> Result[R]:
        """Execute the configured steps in sequence.

        Args:
            context: Pipeline execution context.
            input_data: Input data for the first step.

        Returns:
            ``Result`` of the last step with the warnings of every step, or
            the first error encountered.
        """
        self._logger.debug(f"Starting task: {self.name} with {len(self.steps)} steps")

        current_data: Any = input_data
        step_results: list[Result[Any]] = []

        for i, step in enumerate(self.steps):
            result = step.run(context, current_data)

            if result.is_error():
                self._logger.debug(f"Step {step.name} failed, aborting task {self.name}")
                error = result.error or RuntimeError(f"Task {self.name} failed at step {step.name}")
                return Result.failure(
                    error,
                    {
                        **(result.metadata or {}),
                        "task": self.name,
                        "failed_step": step.name,
                        "step_index": i,
                        "context": context.run_id,
                    },
                )

            step_results.append(result)
            if result.data is not None:
                current_data = result.data

        if not step_results:
            return Result.success(input_data)
        return _merge_results(step_results)


class Job(Generic[T, R]):
    """High-level processing unit composed of tasks."""

    def __init__(self, name: str, tasks: list[Task[Any, Any]], event_bus: EventBus) -> None:
        self.name = name
        self.tasks = tasks
        self.event_bus = event_bus
        self._logger = logging.getLogger(f"{__name__}.{name}")

    def execute(self, context: PipelineContext, initial_input: Any = None) -> Result[R]:
        """Execute all tasks, threading data from one task to the next.

        Args:
            context: Pipeline execution context.
            initial_input: Input for the first task.

        Returns:
            ``Result`` of the last task with merged warnings, or the first
            error encountered.
        """
        self.event_bus.publish(
            JobStartedEvent(
                timestamp=time.time(),
                run_id=context.run_id,
                context=context,
                job_name=self.name,
                job_type=self.__class__.__name__,
                task_count=len(self.tasks),
            )
        )
        self._logger.debug(f"Starting job: {self.name} with {len(self.tasks)} tasks")
        start_time = time.time()

        current_input = initial_input
        task_results: list[Result[Any]] = []
        final: Result[Any] | None = None

        for i, task in enumerate(self.tasks):
            result = task.execute(context, current_input)

            if result.is_error():
                self._logger.debug(f"Task {task.name} failed, aborting job {self.name}")
                error = result.error or RuntimeError(f"Job {self.name} failed at task {task.name}")
                final = Result.failure(
                    error,
                    {
                        **(result.metadata or {}),
                        "job": self.name,
                        "failed_task": task.name,
                        "task_index": i,
                        "context": context.run_id,
                    },
                )
                break

            task_results.append(result)
            if result.data is not None:
                current_input = result.data

        if final is None:
            final = _merge_results(task_results) if task_results else Result.success(initial_input)

        self.event_bus.publish(
            JobCompletedEvent(
                timestamp=time.time(),
                run_id=context.run_id,
                context=context,
                job_name=self.name,
                job_type=self.__class__.__name__,
                final_result=final,
                duration_ms=(time.time() - start_time) * 1000,
            )
        )
        return final


class Pipeline(Generic[T, R]):
    """Runs jobs in order for a single tree file.

    Data flows from each job into the next; metadata returned by earlier
    jobs is accumulated so later consumers (the CLI) can see, for example,
    the emitted code next to the path it was written to.
    """

    def __init__(self, name: str, jobs: list[Job[Any, Any]], event_bus: EventBus) -> None:
        self.name = name
        self.jobs = jobs
        self.event_bus = event_bus
        self._logger = logging.getLogger(f"{__name__}.{name}")

    def execute(self, context: PipelineContext, initial_input: Any = None) -> Result[R]:
        """Execute all jobs in the pipeline in order.

        Args:
            context: Pipeline execution context.
            initial_input: Input for the first job.

        Returns:
            ``Result`` of the last job with merged warnings and metadata, or
            the first error encountered.
        """
        self.event_bus.publish(PipelineStartedEvent(timestamp=time.time(), run_id=context.run_id, context=context))
        start_time = time.time()
        self._logger.debug(f"Starting pipeline: {self.name} with {len(self.jobs)} jobs")

        current_input = initial_input
        job_results: list[Result[Any]] = []
        metadata: dict[str, Any] = {}
        final: Result[Any] | None = None

        for i, job in enumerate(self.jobs):
            result = job.execute(context, current_input)

            if result.is_error():
                self._logger.debug(f"Job {job.name} failed, aborting pipeline {self.name}")
                error = result.error or RuntimeError(f"Pipeline {self.name} failed at job {job.name}")
                final = Result.failure(
                    error,
                    {
                        **metadata,
                        **(result.metadata or {}),
                        "pipeline": self.name,
                        "failed_job": job.name,
                        "job_index": i,
                    },
                )
                break

            job_results.append(result)
            metadata.update(result.metadata or {})
            if result.data is not None:
                current_input = result.data

        if final is None:
            merged = _merge_results(job_results) if job_results else Result.success(initial_input)
            if merged.is_warning():
                final = Result.warning(merged.data, merged.warnings or [], metadata)
            else:
                final = Result.success(merged.data, metadata)

        self.event_bus.publish(
            PipelineCompletedEvent(
                timestamp=time.time(),
                run_id=context.run_id,
                context=context,
                final_result=final,
                duration_ms=(time.time() - start_time) * 1000,
            )
        )
        return final
