"""Programmatic API for splurge_tree_scaffold.

``scaffold`` and ``check`` process any number of tree files. Every file is
attempted; failures are collected into one :class:`BatchScaffoldError`
rather than stopping at the first bad file.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from .context import ScaffoldConfig
from .events import EventBus
from .exceptions import BatchScaffoldError
from .result import Result
from .scaffold_orchestrator import ScaffoldOrchestrator

_logger = logging.getLogger(__name__)

FileRunner = Callable[[str, ScaffoldConfig], Result[str]]


def scaffold(
    source_files: Iterable[str] | str, config: ScaffoldConfig | None = None, event_bus: EventBus | None = None
) -> Result[list[str]]:
    """Scaffold one or more tree files.

    Args:
        source_files: Iterable of tree file paths (or a single path string).
        config: Optional ``ScaffoldConfig`` to control behavior.
        event_bus: Optional event bus for lifecycle events.

    Returns:
        ``Result`` with the target paths of the processed files. The
        metadata maps each target path to its ``generated_code``. Skipped
        targets and formatter problems make the result a warning; any
        failed file makes it a failure holding a :class:`BatchScaffoldError`.
    """
    orchestrator = ScaffoldOrchestrator(event_bus)
    try:
        return _run_batch(_as_list(source_files), config or ScaffoldConfig(), orchestrator.scaffold_file)
    finally:
        orchestrator.logger_subscriber.unsubscribe_all()


def check(
    source_files: Iterable[str] | str, config: ScaffoldConfig | None = None, event_bus: EventBus | None = None
) -> Result[list[str]]:
    """Check that the generated files of one or more trees are up to date.

    Returns:
        ``Result`` with the checked target paths, or a failure holding a
        :class:`BatchScaffoldError` whose ``failures`` carry a
        :class:`CheckFailedError` (with its diff) per stale file.
    """
    orchestrator = ScaffoldOrchestrator(event_bus)
    try:
        return _run_batch(_as_list(source_files), config or ScaffoldConfig(), orchestrator.check_file)
    finally:
        orchestrator.logger_subscriber.unsubscribe_all()


def _as_list(source_files: Iterable[str] | str) -> list[str]:
    if isinstance(source_files, str):
        return [source_files]
    return list(source_files)


def _run_batch(files: list[str], config: ScaffoldConfig, runner: FileRunner) -> Result[list[str]]:
    if config.max_concurrent_files > 1 and len(files) > 1:
        with ThreadPoolExecutor(max_workers=config.max_concurrent_files) as executor:
            results = list(executor.map(lambda path: runner(path, config), files))
    else:
        results = [runner(path, config) for path in files]

    processed: list[str] = []
    generated: dict[str, str] = {}
    warnings: list[str] = []
    failures: dict[str, Exception] = {}

    for source_file, result in zip(files, results, strict=True):
        if result.is_error():
            failures[source_file] = result.error or RuntimeError(f"Could not scaffold {source_file}")
            continue

        target = str(result.data)
        processed.append(target)
        file_metadata: dict[str, Any] = result.metadata or {}
        if "generated_code" in file_metadata:
            generated[target] = file_metadata["generated_code"]
        warnings.extend(result.warnings or [])

    metadata = {"generated_code": generated, "processed": processed}
    if failures:
        _logger.error(f"{len(failures)} of {len(files)} files failed")
        return Result.failure(BatchScaffoldError(failures), metadata={**metadata, "warnings": warnings})
    if warnings:
        return Result.warning(processed, warnings, metadata=metadata)
    return Result.success(processed, metadata=metadata)
