"""Event system for pipeline observability.

This module provides a small, thread-safe publish/subscribe mechanism and
the event dataclasses published while a tree file moves through the
pipeline. The ``LoggingSubscriber`` turns those events into log records.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import logging
import threading
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from .context import PipelineContext
from .result import Result

T = TypeVar("T")
EventHandler = Callable[[Any], None]


@dataclass(frozen=True)
class BaseEvent:
    """Base event class that carries common event metadata."""

    timestamp: float
    run_id: str

    def __post_init__(self) -> None:
        if self.timestamp < 0:
            raise ValueError("Timestamp cannot be negative")


@dataclass(frozen=True)
class PipelineStartedEvent(BaseEvent):
    """Event fired when pipeline execution starts."""

    context: PipelineContext


@dataclass(frozen=True)
class PipelineCompletedEvent(BaseEvent):
    """Event fired when pipeline execution completes."""

    context: PipelineContext
    final_result: Result[Any]
    duration_ms: float


@dataclass(frozen=True)
class StepStartedEvent(BaseEvent):
    """Event fired when a step starts execution."""

    context: PipelineContext
    step_name: str
    step_type: str


@dataclass(frozen=True)
class StepCompletedEvent(BaseEvent):
    """Event fired when a step completes execution."""

    context: PipelineContext
    step_name: str
    step_type: str
    result: Result[Any]
    duration_ms: float


@dataclass(frozen=True)
class JobStartedEvent(BaseEvent):
    """Event fired when a job starts execution."""

    context: PipelineContext
    job_name: str
    job_type: str
    task_count: int


@dataclass(frozen=True)
class JobCompletedEvent(BaseEvent):
    """Event fired when a job completes execution."""

    context: PipelineContext
    job_name: str
    job_type: str
    final_result: Result[Any]
    duration_ms: float


@dataclass(frozen=True)
class ErrorEvent(BaseEvent):
    """Event fired when translating a file fails."""

    context: PipelineContext
    error: Exception
    error_type: str
    component: str


class EventBus:
    """Thread-safe event publication and subscription system.

    Handlers are invoked outside the internal lock so a slow handler never
    blocks publishers running on other threads.
    """

    def __init__(self) -> None:
        self._subscribers: dict[type, list[EventHandler]] = defaultdict(list)
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def subscribe(self, event_type: type[T], handler: Callable[[T], None]) -> None:
        """Register a handler for events of a specific type."""
        with self._lock:
            self._subscribers[event_type].append(handler)
            self._logger.debug(f"Subscribed handler {handler} to {event_type.__name__}")

    def unsubscribe(self, event_type: type[T], handler: Callable[[T], None]) -> None:
        """Remove a previously registered handler for an event type."""
        with self._lock:
            if event_type in self._subscribers and handler in self._subscribers[event_type]:
                self._subscribers[event_type].remove(handler)
                self._logger.debug(f"Unsubscribed handler {handler} from {event_type.__name__}")

    def get_subscriber_count(self, event_type: type[T]) -> int:
        with self._lock:
            return len(self._subscribers.get(event_type, []))

    def publish(self, event: Any) -> None:
        """Publish an event to all subscribers of its concrete type.

        Errors raised by handlers are logged and do not interrupt delivery
        to the remaining handlers.
        """
        event_type = type(event)

        with self._lock:
            handlers = self._subscribers.get(event_type, []).copy()

        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                self._logger.error(f"Event handler error for {event_type.__name__}: {e}", exc_info=True)


class LoggingSubscriber:
    """Logs the lifecycle of every tree file.

    Pipelines and errors are logged at info and error level; jobs and steps
    only show up with ``--debug``.
    """

    def __init__(self, event_bus: EventBus):
        self.event_bus = event_bus
        self._logger = logging.getLogger(f"{__name__}.LoggingSubscriber")
        self._handlers: dict[type, EventHandler] = {
            PipelineStartedEvent: self._on_pipeline_started,
            PipelineCompletedEvent: self._on_pipeline_completed,
            JobStartedEvent: self._on_job_started,
            JobCompletedEvent: self._on_job_completed,
            StepStartedEvent: self._on_step_started,
            StepCompletedEvent: self._on_step_completed,
            ErrorEvent: self._on_error,
        }
        for event_type, handler in self._handlers.items():
            self.event_bus.subscribe(event_type, handler)

    def unsubscribe_all(self) -> None:
        """Remove the logging handlers from the event bus."""
        for event_type, handler in self._handlers.items():
            self.event_bus.unsubscribe(event_type, handler)

    def _on_pipeline_started(self, event: PipelineStartedEvent) -> None:
        self._logger.info(
            f"Pipeline started: {event.context.source_file} -> {event.context.target_file} (run_id: {event.run_id})"
        )

    def _on_pipeline_completed(self, event: PipelineCompletedEvent) -> None:
        status = event.final_result.status.value.upper()
        self._logger.info(f"Pipeline completed in {event.duration_ms:.2f}ms: {status}")

    def _on_job_started(self, event: JobStartedEvent) -> None:
        self._logger.debug(f"Job started: {event.job_name} ({event.task_count} tasks)")

    def _on_job_completed(self, event: JobCompletedEvent) -> None:
        status = event.final_result.status.value.upper()
        self._logger.debug(f"Job completed in {event.duration_ms:.2f}ms: {event.job_name} ({status})")

    def _on_step_started(self, event: StepStartedEvent) -> None:
        self._logger.debug(f"Step started: {event.step_name} ({event.step_type})")

    def _on_step_completed(self, event: StepCompletedEvent) -> None:
        status = event.result.status.value.upper()
        self._logger.debug(f"Step completed in {event.duration_ms:.2f}ms: {event.step_name} ({status})")

    def _on_error(self, event: ErrorEvent) -> None:
        self._logger.error(f"Error in {event.component} for {event.context.source_file}: {event.error}")
