"""Tests for the Result system."""

import pytest

from splurge_tree_scaffold.result import Result, ResultStatus


def test_result_success():
    """Test successful result creation and access."""
    result = Result.success("code", {"emitted_lines": 3})

    assert result.is_success()
    assert not result.is_error()
    assert not result.is_warning()
    assert result.data == "code"
    assert result.error is None
    assert result.warnings == []
    assert result.metadata == {"emitted_lines": 3}


def test_result_error():
    error = ValueError("Test error")
    result = Result.failure(error)

    assert result.is_error()
    assert not result.is_success()
    assert result.data is None
    assert result.error is error
    assert result.metadata == {}


def test_result_warning():
    result = Result.warning("code", ["formatter missing"])

    assert result.is_warning()
    assert not result.is_success()
    assert result.data == "code"
    assert result.warnings == ["formatter missing"]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"status": ResultStatus.SUCCESS, "error": RuntimeError("x")},
        {"status": ResultStatus.WARNING, "data": "x", "error": RuntimeError("x")},
        {"status": ResultStatus.ERROR, "data": "x", "error": RuntimeError("x")},
        {"status": ResultStatus.ERROR},
    ],
)
def test_invalid_combinations_are_rejected(kwargs):
    with pytest.raises(ValueError):
        Result(**kwargs)


def test_unwrap_or():
    assert Result.success(1).unwrap_or(2) == 1
    assert Result.warning(1, ["w"]).unwrap_or(2) == 1
    assert Result.success(None).unwrap_or(2) == 2
    assert Result.failure(ValueError("boom")).unwrap_or(2) == 2


def test_str():
    assert str(Result.success(1)) == "Result(success, data=1)"
    assert "boom" in str(Result.failure(ValueError("boom")))
    assert "warnings=['w']" in str(Result.warning(1, ["w"]))
