"""HIR steps: build the HIR from a classified tree and render it.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from ..context import PipelineContext
from ..exceptions import BuildError, EmitterError
from ..generators import Emitter, HirBuilder
from ..hir import Root
from ..pipeline import Step
from ..result import Result
from ..syntax import ClassifiedTree


class BuildHirStep(Step[ClassifiedTree, Root]):
    """Fold a classified tree into modifiers and test functions.

    Reads ``skip_modifiers`` and ``emit_vm_skip`` from the context
    configuration.
    """

    def execute(self, context: PipelineContext, tree: ClassifiedTree) -> Result[Root]:
        """Build the HIR for ``tree``.

        Returns:
            A success :class:`Result` with the HIR root, or a failure holding
            the :class:`BuildError` raised by the builder.
        """
        try:
            root = HirBuilder(context.config).build(tree)
        except BuildError as e:
            return Result.failure(e, {"source_file": context.source_file, **e.details})

        contract = root.contract
        return Result.success(
            root,
            {
                "contract": contract.identifier,
                "modifier_count": len(contract.modifiers()),
                "test_count": len(contract.tests()),
            },
        )


class EmitCodeStep(Step[Root, str]):
    """Render the HIR as Solidity source text."""

    def execute(self, context: PipelineContext, root: Root) -> Result[str]:
        try:
            code = Emitter(context.config).emit(root)
        except EmitterError as e:
            return Result.failure(e, {"source_file": context.source_file})
        return Result.success(code, {"emitted_lines": len(code.splitlines())})
