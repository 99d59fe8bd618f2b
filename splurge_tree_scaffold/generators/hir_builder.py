"""Fold a classified tree into the HIR.

The builder walks the tree top-down. Each condition either becomes a
modifier that every test beneath it applies, or is folded into the names
of those tests. A condition is promoted to a modifier exactly when its
subtree produces more than one test; a single test simply carries the
condition in its name.

The direct actions of a condition form one test, declared right after the
condition's modifier and before the functions of nested conditions.
Actions directly under the root each become a test of their own.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import logging

from ..context import ScaffoldConfig
from ..exceptions import BuildError, IdentifierCollisionError, MalformedConditionError, NoActionsForConditionError
from ..helpers.naming import (
    NameSegment,
    action_test_identifier,
    build_test_identifier,
    is_revert_action,
    modifier_identifier,
    sanitize,
)
from ..hir import (
    BodyItem,
    Comment,
    ContractDefinition,
    FunctionDefinition,
    FunctionKind,
    Root,
    Statement,
    StatementType,
)
from ..syntax import ClassifiedTree, classify, parse
from ..syntax.nodes import ROOT_INDEX, Action, Condition, RawNode


class HirBuilder:
    """Builds one :class:`Root` from one :class:`ClassifiedTree`.

    A builder keeps per-tree state; create a new one for every tree.
    """

    def __init__(self, config: ScaffoldConfig | None = None) -> None:
        self.config = config or ScaffoldConfig()
        self._logger = logging.getLogger(__name__)
        self._tree: ClassifiedTree | None = None
        self._functions: list[FunctionDefinition] = []
        self._declared: dict[str, int] = {}
        self._test_counts: dict[int, int] = {}

    def build(self, tree: ClassifiedTree) -> Root:
        """Translate ``tree`` into a HIR.

        Raises:
            MalformedConditionError: If a condition has no phrase.
            NoActionsForConditionError: If a condition has no action
                anywhere beneath it.
            IdentifierCollisionError: If two functions end up with the same
                identifier.
        """
        if self._tree is not None:
            raise RuntimeError("HirBuilder instances build a single tree")
        self._tree = tree

        root = tree.node(ROOT_INDEX)
        contract_identifier = sanitize(tree.root_kind.identifier)
        if not contract_identifier:
            raise BuildError(f"'{root.text}' does not contain a valid contract identifier", root.line)

        for child in tree.children(ROOT_INDEX):
            kind = tree.kind(child.index)
            if isinstance(kind, Condition):
                self._visit_condition(child, modifiers=(), chain=())
            else:
                self._add_action_test(child)

        contract = ContractDefinition(identifier=contract_identifier, children=tuple(self._functions))
        self._logger.debug(
            f"Built contract {contract_identifier}: "
            f"{len(contract.modifiers())} modifiers, {len(contract.tests())} tests"
        )
        return Root(contract=contract)

    def _visit_condition(self, node: RawNode, modifiers: tuple[str, ...], chain: tuple[NameSegment, ...]) -> None:
        condition = self._condition(node)
        if not condition.phrase:
            raise MalformedConditionError(
                f"Condition '{node.text}' has no phrase after '{condition.keyword.value}'", node.line
            )

        test_count = self._count_tests(node)
        if test_count == 0:
            raise NoActionsForConditionError(f"Condition '{node.text}' has no actions", node.line)

        chain = chain + (NameSegment.from_condition(condition.keyword, condition.phrase),)
        child_chain = chain
        if test_count > 1 and not self.config.skip_modifiers:
            modifier = modifier_identifier(chain)
            self._declare(FunctionDefinition(identifier=modifier, kind=FunctionKind.MODIFIER), node.line)
            modifiers = modifiers + (modifier,)
            child_chain = ()

        actions, conditions = self._split_children(node)
        if actions:
            reverts = is_revert_action(actions[0].text)
            identifier = build_test_identifier(chain, reverts)
            self._add_test(identifier, actions, modifiers, node.line)

        for child in conditions:
            self._visit_condition(child, modifiers, child_chain)

    def _add_action_test(self, node: RawNode) -> None:
        self._add_test(action_test_identifier(node.text), [node], (), node.line)

    def _add_test(self, identifier: str, actions: list[RawNode], modifiers: tuple[str, ...], line: int) -> None:
        body: list[BodyItem] = []
        for action in actions:
            body.append(Comment(lexeme=action.text))
            body.extend(
                Comment(lexeme=description.text, depth=description.depth - action.depth)
                for description in self._require_tree().descendants(action.index)
            )
        if self.config.emit_vm_skip:
            body.append(Statement(type=StatementType.VM_SKIP))

        function = FunctionDefinition(
            identifier=identifier, kind=FunctionKind.TEST, modifiers=modifiers, children=tuple(body)
        )
        self._declare(function, line)

    def _declare(self, function: FunctionDefinition, line: int) -> None:
        previous = self._declared.get(function.identifier)
        if previous is not None:
            raise IdentifierCollisionError(
                f"'{function.identifier}' is already declared by line {previous}", line, function.identifier
            )
        self._declared[function.identifier] = line
        self._functions.append(function)

    def _count_tests(self, node: RawNode) -> int:
        """Number of tests the subtree of a condition produces."""
        cached = self._test_counts.get(node.index)
        if cached is not None:
            return cached

        actions, conditions = self._split_children(node)
        count = (1 if actions else 0) + sum(self._count_tests(child) for child in conditions)
        self._test_counts[node.index] = count
        return count

    def _split_children(self, node: RawNode) -> tuple[list[RawNode], list[RawNode]]:
        tree = self._require_tree()
        actions: list[RawNode] = []
        conditions: list[RawNode] = []
        for child in tree.children(node.index):
            kind = tree.kind(child.index)
            if isinstance(kind, Condition):
                conditions.append(child)
            elif isinstance(kind, Action):
                actions.append(child)
        return actions, conditions

    def _condition(self, node: RawNode) -> Condition:
        kind = self._require_tree().kind(node.index)
        assert isinstance(kind, Condition)
        return kind

    def _require_tree(self) -> ClassifiedTree:
        assert self._tree is not None
        return self._tree


def translate(text: str, config: ScaffoldConfig | None = None) -> Root:
    """Parse, classify and build the HIR for the contents of a tree file."""
    return HirBuilder(config).build(classify(parse(text)))
