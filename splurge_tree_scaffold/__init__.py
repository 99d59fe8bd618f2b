"""splurge_tree_scaffold package.

This initializer is intentionally lightweight to avoid importing
submodules at package import time. Package-level names such as
``ScaffoldOrchestrator`` or ``translate`` are resolved lazily on first
access.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

__version__ = "2025.1.0"
__author__ = "Jim Schilling"
__description__ = "Solidity test scaffolding from .tree specifications"

# Public API names. Submodules are imported lazily when accessed.
__all__ = [
    "main",
    "ScaffoldOrchestrator",
    "PipelineContext",
    "ScaffoldConfig",
    "Result",
    "ResultStatus",
    "EventBus",
    "LoggingSubscriber",
    "Step",
    "Task",
    "Job",
    "Pipeline",
    "Emitter",
    "HirBuilder",
    "scaffold",
    "translate",
    # Exceptions
    "ScaffoldError",
    "ParseError",
    "ClassificationError",
    "BuildError",
    "EmitterError",
    "ConfigurationError",
    "CheckFailedError",
    "BatchScaffoldError",
]


def __getattr__(name: str):
    """Lazily import submodules/attributes on demand to avoid circular imports."""
    import importlib

    mapping = {
        "main": "splurge_tree_scaffold.main",
        "cli": "splurge_tree_scaffold.cli",
        "ScaffoldOrchestrator": "splurge_tree_scaffold.scaffold_orchestrator",
        "PipelineContext": "splurge_tree_scaffold.context",
        "ScaffoldConfig": "splurge_tree_scaffold.context",
        "EventBus": "splurge_tree_scaffold.events",
        "LoggingSubscriber": "splurge_tree_scaffold.events",
        "Result": "splurge_tree_scaffold.result",
        "ResultStatus": "splurge_tree_scaffold.result",
        "Job": "splurge_tree_scaffold.pipeline",
        "Pipeline": "splurge_tree_scaffold.pipeline",
        "Task": "splurge_tree_scaffold.pipeline",
        "Step": "splurge_tree_scaffold.pipeline",
        "Emitter": "splurge_tree_scaffold.generators",
        "HirBuilder": "splurge_tree_scaffold.generators",
        "scaffold": "splurge_tree_scaffold.generators",
        "translate": "splurge_tree_scaffold.generators",
        # Exceptions
        "ScaffoldError": "splurge_tree_scaffold.exceptions",
        "ParseError": "splurge_tree_scaffold.exceptions",
        "ClassificationError": "splurge_tree_scaffold.exceptions",
        "BuildError": "splurge_tree_scaffold.exceptions",
        "EmitterError": "splurge_tree_scaffold.exceptions",
        "ConfigurationError": "splurge_tree_scaffold.exceptions",
        "CheckFailedError": "splurge_tree_scaffold.exceptions",
        "BatchScaffoldError": "splurge_tree_scaffold.exceptions",
    }

    if name not in mapping:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    module = importlib.import_module(mapping[name])

    if name in {"main", "cli"}:
        return module

    return getattr(module, name)


def __dir__():
    return sorted(list(globals().keys()) + __all__)
