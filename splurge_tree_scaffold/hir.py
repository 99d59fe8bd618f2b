"""High-level intermediate representation of a generated test contract.

The HIR is what the builder produces and the emitter renders: a ``Root``
holding exactly one ``ContractDefinition``, whose functions are either
modifiers or tests. Test bodies contain ``Comment`` and ``Statement``
nodes. All nodes are frozen and hold tuples, so a built HIR cannot change.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from dataclasses import dataclass
from enum import Enum


class FunctionKind(Enum):
    """Kinds of functions a contract can declare."""

    MODIFIER = "modifier"
    TEST = "test"


class StatementType(Enum):
    """Statements the builder knows how to generate."""

    VM_SKIP = "vm_skip"
    """``vm.skip(true);``"""


@dataclass(frozen=True)
class Comment:
    """A comment line in a test body.

    ``depth`` is the distance from the action that owns the line; action
    lines have depth ``0`` and their descriptions ``1`` or more.
    """

    lexeme: str
    depth: int = 0

    def __post_init__(self) -> None:
        if self.depth < 0:
            raise ValueError("Comment depth cannot be negative")


@dataclass(frozen=True)
class Statement:
    """A generated statement in a test body."""

    type: StatementType


BodyItem = Comment | Statement


@dataclass(frozen=True)
class FunctionDefinition:
    """A modifier or a test function.

    Attributes:
        identifier: Sanitized function name.
        kind: Whether this is a modifier or a test.
        modifiers: Modifiers applied to a test, outermost first.
        children: Body of a test function.
    """

    identifier: str
    kind: FunctionKind
    modifiers: tuple[str, ...] = ()
    children: tuple[BodyItem, ...] = ()

    def __post_init__(self) -> None:
        if self.kind is FunctionKind.MODIFIER and (self.modifiers or self.children):
            raise ValueError(f"Modifier '{self.identifier}' cannot have modifiers or a body")

    def is_modifier(self) -> bool:
        return self.kind is FunctionKind.MODIFIER

    def is_test(self) -> bool:
        return self.kind is FunctionKind.TEST


@dataclass(frozen=True)
class ContractDefinition:
    """The contract that holds every generated function in declaration order."""

    identifier: str
    children: tuple[FunctionDefinition, ...] = ()

    def modifiers(self) -> list[FunctionDefinition]:
        return [function for function in self.children if function.is_modifier()]

    def tests(self) -> list[FunctionDefinition]:
        return [function for function in self.children if function.is_test()]


@dataclass(frozen=True)
class Root:
    """Top of the HIR; one root per tree file."""

    contract: ContractDefinition


Hir = Root | ContractDefinition | FunctionDefinition | Comment | Statement
