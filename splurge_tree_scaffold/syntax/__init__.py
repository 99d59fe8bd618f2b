"""Front end for ``.tree`` files: scanner, parser and classifier.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from .classifier import ClassifiedTree, classify
from .nodes import Action, Condition, ConditionKeyword, Description, NodeKind, RawNode, RootKind, SyntaxTree
from .parser import parse
from .scanner import LineToken, scan

__all__ = [
    "Action",
    "ClassifiedTree",
    "Condition",
    "ConditionKeyword",
    "Description",
    "LineToken",
    "NodeKind",
    "RawNode",
    "RootKind",
    "SyntaxTree",
    "classify",
    "parse",
    "scan",
]
