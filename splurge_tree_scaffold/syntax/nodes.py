"""Node types for parsed ``.tree`` files.

The parser stores nodes in a flat arena (``SyntaxTree.nodes``) and links
them by index, so a tree is a plain list with no reference cycles. The
classifier later assigns every node exactly one kind; the kinds form a
closed set of frozen dataclasses.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

ROOT_INDEX = 0


class ConditionKeyword(Enum):
    """Keywords that open a condition node."""

    WHEN = "when"
    GIVEN = "given"

    @property
    def folded(self) -> str:
        """Spelling used inside test function names (``When``)."""
        return self.value.capitalize()


@dataclass(frozen=True)
class RootKind:
    """The first line of a tree: the contract identifier."""

    identifier: str


@dataclass(frozen=True)
class Condition:
    """A ``when ...``/``given ...`` precondition."""

    keyword: ConditionKeyword
    phrase: str


@dataclass(frozen=True)
class Action:
    """An expected outcome, usually ``it should ...``."""

    phrase: str


@dataclass(frozen=True)
class Description:
    """Free text nested beneath an action."""

    phrase: str


NodeKind = Condition | Action | Description


@dataclass
class RawNode:
    """A single line of the tree before classification.

    Attributes:
        index: Position of the node in the arena.
        text: Node text with the drawing characters removed.
        depth: Distance from the root (the root has depth 0).
        line: 1-based source line number.
        column: Column of the node's connector; ``-1`` for the root.
        parent: Arena index of the parent, ``None`` for the root.
        children: Arena indices of the children in document order.
    """

    index: int
    text: str
    depth: int
    line: int
    column: int
    parent: int | None = None
    children: list[int] = field(default_factory=list)


class SyntaxTree:
    """Index-addressed arena of :class:`RawNode` objects.

    The root always lives at index ``0``; nodes are stored in document
    order, which is also pre-order.
    """

    def __init__(self, root_text: str, root_line: int) -> None:
        self.nodes: list[RawNode] = [RawNode(index=ROOT_INDEX, text=root_text, depth=0, line=root_line, column=-1)]

    @property
    def root(self) -> RawNode:
        return self.nodes[ROOT_INDEX]

    def add_child(self, parent: int, text: str, line: int, column: int) -> RawNode:
        """Append a node under ``parent`` and return it."""
        parent_node = self.nodes[parent]
        node = RawNode(
            index=len(self.nodes),
            text=text,
            depth=parent_node.depth + 1,
            line=line,
            column=column,
            parent=parent,
        )
        self.nodes.append(node)
        parent_node.children.append(node.index)
        return node

    def node(self, index: int) -> RawNode:
        return self.nodes[index]

    def children(self, index: int) -> list[RawNode]:
        return [self.nodes[child] for child in self.nodes[index].children]

    def descendants(self, index: int) -> Iterator[RawNode]:
        """Yield every node below ``index`` in pre-order."""
        for child in self.nodes[index].children:
            yield self.nodes[child]
            yield from self.descendants(child)

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[RawNode]:
        return iter(self.nodes)
