"""Step modules for individual pipeline operations.

Each step performs one phase of turning a ``.tree`` file into a Solidity
test file.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from .format_steps import FormatCodeStep
from .hir_steps import BuildHirStep, EmitCodeStep
from .output_steps import CompareOutputStep, WriteOutputStep
from .parse_steps import ClassifyTreeStep, ParseTreeStep

__all__ = [
    "ParseTreeStep",
    "ClassifyTreeStep",
    "BuildHirStep",
    "EmitCodeStep",
    "FormatCodeStep",
    "WriteOutputStep",
    "CompareOutputStep",
]
