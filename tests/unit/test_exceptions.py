"""Tests for the exception hierarchy."""

from splurge_tree_scaffold.exceptions import (
    BatchScaffoldError,
    BuildError,
    CheckFailedError,
    ClassificationError,
    ConfigurationError,
    EmptyInputError,
    IdentifierCollisionError,
    InconsistentIndentationError,
    MalformedConditionError,
    MultipleRootsError,
    NoActionsForConditionError,
    ParseError,
    ScaffoldError,
    UnexpectedTokenError,
    ValidationError,
)


def test_everything_is_a_scaffold_error():
    errors = [
        UnexpectedTokenError("x", 1, 0),
        InconsistentIndentationError("x", 2, 3),
        MultipleRootsError("x", 3, 0),
        EmptyInputError(),
        ClassificationError("x", 1),
        MalformedConditionError("x", 1),
        NoActionsForConditionError("x", 1),
        IdentifierCollisionError("x", 1, "test_A"),
        ConfigurationError("x"),
        ValidationError("x", "path"),
        CheckFailedError("x", "a.t.sol"),
        BatchScaffoldError({}),
    ]

    for error in errors:
        assert isinstance(error, ScaffoldError)


def test_parse_error_details():
    error = InconsistentIndentationError("misaligned", 4, 2)

    assert isinstance(error, ParseError)
    assert error.details == {"kind": "inconsistent_indentation", "line": 4, "column": 2}
    assert str(error) == "misaligned (line 4)"


def test_empty_input_has_no_line():
    error = EmptyInputError()

    assert error.line is None
    assert str(error) == "The tree is empty"
    assert error.details == {"kind": "empty_input"}


def test_build_error_details():
    error = IdentifierCollisionError("dup", 9, "test_WhenA")

    assert isinstance(error, BuildError)
    assert error.details == {"kind": "identifier_collision", "line": 9, "identifier": "test_WhenA"}
    assert str(error) == "dup (line 9)"


def test_classification_error_details():
    error = ClassificationError("bad", 3, "when x")

    assert error.details == {"line": 3, "text": "when x"}
    assert str(error) == "bad (line 3)"


def test_configuration_error_key():
    assert ConfigurationError("bad", "indent").details == {"config_key": "indent"}
    assert ConfigurationError("bad").details == {}


def test_check_failed_error():
    error = CheckFailedError("stale", "a.t.sol", "--- a\n+++ b\n")

    assert error.target_file == "a.t.sol"
    assert error.diff == "--- a\n+++ b\n"
    assert error.details["diff"] == "--- a\n+++ b\n"


def test_batch_error_message():
    failures = {"a.tree": ValueError("x"), "b.tree": ValueError("y")}
    error = BatchScaffoldError(failures)

    assert str(error) == "Could not scaffold 2 files"
    assert error.failures is failures
    assert error.details["failed_files"] == ["a.tree", "b.tree"]
