"""Parsing steps for the scaffolding pipeline.

``ParseTreeStep`` turns the text of a ``.tree`` file into a
:class:`SyntaxTree`; ``ClassifyTreeStep`` labels every node of that tree.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from ..context import PipelineContext
from ..exceptions import ClassificationError, ParseError
from ..pipeline import Step
from ..result import Result
from ..syntax import ClassifiedTree, SyntaxTree, classify, parse


class ParseTreeStep(Step[str, SyntaxTree]):
    """Parse tree text into a :class:`SyntaxTree`."""

    def execute(self, context: PipelineContext, source_text: str) -> Result[SyntaxTree]:
        """Parse ``source_text``.

        Returns:
            A success :class:`Result` with the parsed tree, or a failure
            holding the :class:`ParseError` and the offending line.
        """
        try:
            tree = parse(source_text)
        except ParseError as e:
            return Result.failure(e, {"source_file": context.source_file, **e.details})
        return Result.success(tree, {"node_count": len(tree)})


class ClassifyTreeStep(Step[SyntaxTree, ClassifiedTree]):
    """Assign a condition, action or description kind to every node."""

    def execute(self, context: PipelineContext, tree: SyntaxTree) -> Result[ClassifiedTree]:
        try:
            classified = classify(tree)
        except ClassificationError as e:
            return Result.failure(e, {"source_file": context.source_file, **e.details})
        return Result.success(classified)
