"""Tests for folding classified trees into the HIR."""

import pytest

from splurge_tree_scaffold.context import ScaffoldConfig
from splurge_tree_scaffold.exceptions import (
    BuildError,
    IdentifierCollisionError,
    MalformedConditionError,
    NoActionsForConditionError,
)
from splurge_tree_scaffold.generators import HirBuilder, translate
from splurge_tree_scaffold.hir import Comment, FunctionDefinition, FunctionKind, Statement, StatementType
from splurge_tree_scaffold.syntax import classify, parse


def signatures(root):
    """(identifier, modifiers) for every function, in declaration order."""
    return [(function.identifier, function.modifiers) for function in root.contract.children]


def test_single_path_is_folded_into_the_name():
    root = translate("T\n└── when a\n   └── given b\n      └── when c\n         └── it should work")

    assert signatures(root) == [("test_WhenAGivenBWhenC", ())]
    assert root.contract.modifiers() == []


def test_branching_condition_becomes_modifier():
    root = translate("T\n└── when a\n   ├── it should x\n   └── when b\n      └── it should y")

    assert signatures(root) == [
        ("whenA", ()),
        ("test_WhenA", ("whenA",)),
        ("test_WhenB", ("whenA",)),
    ]


def test_nested_branching_conditions_each_become_modifiers():
    text = "T\n└── when a\n   └── given b\n      ├── when c\n      │  └── it should x\n      └── when d\n         └── it should y"

    root = translate(text)

    assert signatures(root) == [
        ("whenA", ()),
        ("givenB", ()),
        ("test_WhenC", ("whenA", "givenB")),
        ("test_WhenD", ("whenA", "givenB")),
    ]


def test_modifier_declared_before_first_use():
    text = "T\n└── when a\n   ├── when b\n   │  └── it should x\n   └── when c\n      ├── it should y\n      └── when d\n         └── it should z"

    root = translate(text)

    declared = set()
    for function in root.contract.children:
        assert set(function.modifiers) <= declared
        if function.is_modifier():
            declared.add(function.identifier)
    assert signatures(root) == [
        ("whenA", ()),
        ("test_WhenB", ("whenA",)),
        ("whenC", ()),
        ("test_WhenC", ("whenA", "whenC")),
        ("test_WhenD", ("whenA", "whenC")),
    ]


def test_skip_modifiers_folds_everything():
    text = "T\n└── when a\n   ├── it should x\n   └── when b\n      └── it should revert"

    root = translate(text, ScaffoldConfig(skip_modifiers=True))

    assert signatures(root) == [("test_WhenA", ()), ("test_RevertWhen_AWhenB", ())]


def test_test_body_comments():
    text = "T\n└── when a\n   ├── it should x\n   │  ├── detail\n   │  │  └── deeper\n   │  └── more\n   └── it should y"

    root = translate(text)

    (test,) = root.contract.tests()
    assert test.children == (
        Comment("it should x"),
        Comment("detail", 1),
        Comment("deeper", 2),
        Comment("more", 1),
        Comment("it should y"),
    )


@pytest.mark.parametrize(
    "action,identifier",
    [
        ("It Should Revert", "test_RevertWhen_A"),
        ("it should revert when paused", "test_RevertWhen_A"),
        ("it  should revert", "test_WhenA"),
        ("it should not revert", "test_WhenA"),
    ],
)
def test_revert_prefix_needs_exact_wording(action, identifier):
    root = translate(f"T\n└── when a\n   └── {action}")

    assert signatures(root) == [(identifier, ())]


def test_vm_skip_is_last_body_item():
    root = translate("T\n├── it should x\n└── when a\n   └── it should y", ScaffoldConfig(emit_vm_skip=True))

    for test in root.contract.tests():
        assert test.children[-1] == Statement(StatementType.VM_SKIP)
        assert test.children.count(Statement(StatementType.VM_SKIP)) == 1


def test_root_actions_with_descriptions():
    root = translate("T\n└── it should x\n   └── because")

    (test,) = root.contract.tests()
    assert test.identifier == "test_ShouldX"
    assert test.children == (Comment("it should x"), Comment("because", 1))


def test_contract_identifier_is_sanitized():
    assert translate("My-Contract.t\n└── it should work").contract.identifier == "My_Contractt"


def test_contract_identifier_cannot_be_empty():
    with pytest.raises(BuildError) as exc_info:
        translate("{}\n└── it should work")

    assert exc_info.value.line == 1


def test_empty_tree_yields_empty_contract():
    root = translate("T")

    assert root.contract.identifier == "T"
    assert root.contract.children == ()


class TestBuildFailures:
    def test_malformed_condition(self):
        with pytest.raises(MalformedConditionError) as exc_info:
            translate("T\n└── when\n   └── it should x")

        assert exc_info.value.line == 2
        assert exc_info.value.details["kind"] == "malformed_condition"

    def test_condition_without_actions(self):
        with pytest.raises(NoActionsForConditionError) as exc_info:
            translate("T\n├── it should x\n└── when a")

        assert exc_info.value.line == 3

    def test_nested_condition_without_actions(self):
        with pytest.raises(NoActionsForConditionError):
            translate("T\n└── when a\n   └── when b")

    def test_identifier_collision(self):
        with pytest.raises(IdentifierCollisionError) as exc_info:
            translate("T\n├── when a\n│  └── it should x\n└── when a\n   └── it should y")

        assert exc_info.value.line == 4
        assert exc_info.value.identifier == "test_WhenA"

    def test_collision_after_sanitizing(self):
        with pytest.raises(IdentifierCollisionError):
            translate("T\n├── when a-b\n│  └── it should x\n└── when a_b\n   └── it should y")

    def test_identifiers_are_case_sensitive(self):
        root = translate("T\n├── when ab\n│  └── it should x\n└── when aB\n   └── it should y")

        assert [test.identifier for test in root.contract.tests()] == ["test_WhenAb", "test_WhenAB"]


def test_builder_instances_are_single_use():
    builder = HirBuilder()
    tree = classify(parse("T\n└── it should x"))
    builder.build(tree)

    with pytest.raises(RuntimeError):
        builder.build(tree)


def test_modifiers_cannot_have_bodies():
    with pytest.raises(ValueError):
        FunctionDefinition("whenA", FunctionKind.MODIFIER, children=(Comment("x"),))


def test_comment_depth_cannot_be_negative():
    with pytest.raises(ValueError):
        Comment("x", -1)
