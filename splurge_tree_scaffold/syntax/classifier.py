"""Node classification.

Every non-root node is a condition, an action or a description. The
keyword test only looks at the first word of the node; everything else is
decided by the kind of the parent.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import re
from collections.abc import Iterator

from ..exceptions import ClassificationError
from .nodes import ROOT_INDEX, Action, Condition, ConditionKeyword, Description, NodeKind, RawNode, RootKind, SyntaxTree

_CONDITION = re.compile(r"^(?P<keyword>when|given)(?:\s+(?P<phrase>.*)|$)", re.IGNORECASE | re.DOTALL)


class ClassifiedTree:
    """A :class:`SyntaxTree` together with the kind of every node."""

    def __init__(self, tree: SyntaxTree, kinds: list[RootKind | NodeKind]) -> None:
        if len(kinds) != len(tree):
            raise ValueError("Every node needs exactly one kind")
        self.tree = tree
        self._kinds = kinds

    @property
    def root_kind(self) -> RootKind:
        kind = self._kinds[ROOT_INDEX]
        assert isinstance(kind, RootKind)
        return kind

    def kind(self, index: int) -> RootKind | NodeKind:
        return self._kinds[index]

    def node(self, index: int) -> RawNode:
        return self.tree.node(index)

    def children(self, index: int) -> list[RawNode]:
        return self.tree.children(index)

    def descendants(self, index: int) -> Iterator[RawNode]:
        return self.tree.descendants(index)

    def __len__(self) -> int:
        return len(self.tree)


def match_condition(text: str) -> Condition | None:
    """Return a :class:`Condition` when ``text`` starts with a condition keyword."""
    match = _CONDITION.match(text)
    if match is None:
        return None
    keyword = ConditionKeyword(match.group("keyword").lower())
    return Condition(keyword=keyword, phrase=(match.group("phrase") or "").strip())


def classify(tree: SyntaxTree) -> ClassifiedTree:
    """Assign a kind to every node of ``tree``.

    Raises:
        ClassificationError: If a condition keyword appears beneath an
            action or a description.
    """
    kinds: list[RootKind | NodeKind] = [RootKind(tree.root.text)]

    # The arena is in pre-order, so a parent is always classified first.
    for node in tree.nodes[1:]:
        assert node.parent is not None
        parent_kind = kinds[node.parent]
        condition = match_condition(node.text)

        if isinstance(parent_kind, RootKind | Condition):
            kinds.append(condition or Action(node.text))
        elif condition is not None:
            raise ClassificationError(
                f"Condition '{node.text}' cannot appear beneath an action or a description", node.line, node.text
            )
        else:
            kinds.append(Description(node.text))

    return ClassifiedTree(tree, kinds)
