"""Tests for node classification."""

import pytest

from splurge_tree_scaffold.exceptions import ClassificationError
from splurge_tree_scaffold.syntax import (
    Action,
    Condition,
    ConditionKeyword,
    Description,
    RootKind,
    classify,
    parse,
)
from splurge_tree_scaffold.syntax.classifier import match_condition


def kinds(text):
    classified = classify(parse(text))
    return [classified.kind(i) for i in range(len(classified))]


def test_root_conditions_actions_and_descriptions():
    result = kinds("FileTest\n├── when a\n│  └── it should x\n│     └── some detail\n└── given b\n   └── it should y")

    assert result == [
        RootKind("FileTest"),
        Condition(ConditionKeyword.WHEN, "a"),
        Action("it should x"),
        Description("some detail"),
        Condition(ConditionKeyword.GIVEN, "b"),
        Action("it should y"),
    ]


def test_action_under_root():
    assert kinds("FileTest\n└── it should work")[1] == Action("it should work")


def test_nested_descriptions_stay_descriptions():
    result = kinds("T\n└── it should x\n   └── first\n      └── second")

    assert result[2:] == [Description("first"), Description("second")]


@pytest.mark.parametrize(
    "text,expected",
    [
        ("when a", Condition(ConditionKeyword.WHEN, "a")),
        ("WHEN the thing", Condition(ConditionKeyword.WHEN, "the thing")),
        ("Given   spaced   out", Condition(ConditionKeyword.GIVEN, "spaced   out")),
        ("when", Condition(ConditionKeyword.WHEN, "")),
        ("whenever it rains", None),
        ("it should be given", None),
        ("givenX", None),
    ],
)
def test_match_condition(text, expected):
    assert match_condition(text) == expected


def test_condition_under_action_is_rejected():
    with pytest.raises(ClassificationError) as exc_info:
        classify(parse("T\n└── when a\n   └── it should x\n      └── when b"))

    assert exc_info.value.line == 4
    assert exc_info.value.details["text"] == "when b"


def test_condition_under_description_is_rejected():
    with pytest.raises(ClassificationError):
        classify(parse("T\n└── it should x\n   └── detail\n      └── given y"))


def test_classified_tree_accessors():
    classified = classify(parse("T\n└── when a\n   └── it should x"))

    assert classified.root_kind == RootKind("T")
    assert classified.node(1).text == "when a"
    assert [node.text for node in classified.children(1)] == ["it should x"]
    assert [node.text for node in classified.descendants(0)] == ["when a", "it should x"]
    assert len(classified) == 3


def test_folded_keyword_spelling():
    assert ConditionKeyword.WHEN.folded == "When"
    assert ConditionKeyword.GIVEN.folded == "Given"
