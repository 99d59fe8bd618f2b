"""Solidity emitter for the HIR.

The emitter renders every HIR node type, so ``emit`` is defined for any
``Hir`` value. Layout is fixed apart from the indentation width and the
Solidity version, both taken from :class:`ScaffoldConfig`.

Example output for a test with modifiers::

    function test_WhenTheAssetIsAContract()
      external
      whenNotStuffCalled
    {
      // it should create the child
    }

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from typing import assert_never

from ..context import ScaffoldConfig
from ..exceptions import EmitterError
from ..hir import Comment, ContractDefinition, FunctionDefinition, Hir, Root, Statement, StatementType
from .hir_builder import translate

LICENSE_HEADER = "// SPDX-License-Identifier: UNLICENSED"
DESCRIPTION_INDENT = "   "


class Emitter:
    """Renders HIR nodes as Solidity source text."""

    def __init__(self, config: ScaffoldConfig | None = None) -> None:
        config = config or ScaffoldConfig()
        self.indent = config.indent
        self.solidity_version = config.solidity_version

    def emit(self, hir: Hir) -> str:
        """Render ``hir``.

        A ``Root`` yields a complete source file without a trailing newline;
        other nodes yield the lines they would contribute to one.

        Raises:
            EmitterError: If rendering fails. This only happens for a HIR
                that was not produced by the builder.
        """
        try:
            return "\n".join(self._emit_lines(hir))
        except EmitterError:
            raise
        except Exception as e:
            raise EmitterError(f"Failed to emit {type(hir).__name__}: {e}") from e

    def _emit_lines(self, hir: Hir) -> list[str]:
        if isinstance(hir, Root):
            return self._emit_root(hir)
        elif isinstance(hir, ContractDefinition):
            return self._emit_contract(hir)
        elif isinstance(hir, FunctionDefinition):
            return self._emit_function(hir)
        elif isinstance(hir, Comment):
            return [self._emit_comment(hir)]
        elif isinstance(hir, Statement):
            return [self._emit_statement(hir)]
        else:
            assert_never(hir)

    @property
    def _fn_indentation(self) -> str:
        return " " * self.indent

    @property
    def _body_indentation(self) -> str:
        return " " * (self.indent * 2)

    def _emit_root(self, root: Root) -> list[str]:
        return [
            LICENSE_HEADER,
            f"pragma solidity {self.solidity_version};",
            "",
            *self._emit_contract(root.contract),
        ]

    def _emit_contract(self, contract: ContractDefinition) -> list[str]:
        if not contract.children:
            return [f"contract {contract.identifier} {{}}"]

        lines = [f"contract {contract.identifier} {{"]
        for i, function in enumerate(contract.children):
            if i:
                lines.append("")
            lines.extend(self._emit_function(function))
        lines.append("}")
        return lines

    def _emit_function(self, function: FunctionDefinition) -> list[str]:
        if function.is_modifier():
            return [
                f"{self._fn_indentation}modifier {function.identifier}() {{",
                f"{self._body_indentation}_;",
                f"{self._fn_indentation}}}",
            ]

        if function.modifiers:
            lines = [
                f"{self._fn_indentation}function {function.identifier}()",
                f"{self._body_indentation}external",
                *(f"{self._body_indentation}{modifier}" for modifier in function.modifiers),
                f"{self._fn_indentation}{{",
            ]
        else:
            lines = [f"{self._fn_indentation}function {function.identifier}() external {{"]

        for child in function.children:
            if isinstance(child, Comment):
                lines.append(self._emit_comment(child))
            else:
                lines.append(self._emit_statement(child))

        lines.append(f"{self._fn_indentation}}}")
        return lines

    def _emit_comment(self, comment: Comment) -> str:
        return f"{self._body_indentation}// {DESCRIPTION_INDENT * comment.depth}{comment.lexeme}"

    def _emit_statement(self, statement: Statement) -> str:
        match statement.type:
            case StatementType.VM_SKIP:
                return f"{self._body_indentation}vm.skip(true);"
            case _:
                assert_never(statement.type)


def scaffold(text: str, config: ScaffoldConfig | None = None) -> str:
    """Translate the contents of a tree file into Solidity source."""
    config = config or ScaffoldConfig()
    return Emitter(config).emit(translate(text, config))
