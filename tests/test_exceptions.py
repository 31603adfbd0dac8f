"""Tests for custom exceptions."""

import pytest
from twotrack.exceptions import (
    AmbiguousResultError,
    ErrorType,
    ImpossibleError,
    NoThrowAllowedError,
    ResultError,
    UnwrapError,
)
from twotrack.result import ResultSync, safe_try_sync


def test_base_exception():
    """Test base ResultError."""
    error = ResultError(
        "Test error",
        error_type=ErrorType.AMBIGUOUS_RESULT,
        details={"status": "ok"},
    )

    assert error.message == "Test error"
    assert error.error_type == ErrorType.AMBIGUOUS_RESULT
    assert error.details["status"] == "ok"
    assert "ambiguous_result" in str(error)
    assert "Test error" in str(error)


def test_exception_to_dict():
    """Test exception serialization."""
    error = AmbiguousResultError("Both slots set", status="ok")
    error_dict = error.to_dict()

    assert error_dict["error_type"] == "ambiguous_result"
    assert error_dict["message"] == "Both slots set"
    assert error_dict["details"]["status"] == "ok"


def test_impossible_error():
    """Test ImpossibleError exception."""
    error = ImpossibleError("value is empty")

    assert isinstance(error, ResultError)
    assert error.error_type == ErrorType.IMPOSSIBLE
    assert error.details == {}
    assert str(error) == "[impossible] value is empty"


def test_no_throw_allowed_error_keeps_cause():
    """Test NoThrowAllowedError wraps the original exception."""
    cause = ValueError("side effect")
    error = NoThrowAllowedError("and_tee", cause)

    assert error.cause is cause
    assert error.__cause__ is cause
    assert error.combinator == "and_tee"
    assert error.error_type == ErrorType.NO_THROW_ALLOWED
    assert "move it to and_then" in error.message


def test_no_throw_allowed_error_suggests_or_else():
    """Test the error tee suggests the recovery combinator."""
    error = NoThrowAllowedError("or_tee", KeyError("k"))
    assert "move it to or_else" in str(error)


def test_unwrap_error():
    """Test UnwrapError carries the payload and is a RuntimeError."""
    payload = {"code": 404}
    error = UnwrapError(payload)

    assert isinstance(error, RuntimeError)
    assert isinstance(error, ResultError)
    assert error.error is payload
    assert error.error_type == ErrorType.UNWRAP_ERR
    assert "404" in str(error)


def test_exception_inheritance():
    """Test exception inheritance hierarchy."""
    assert issubclass(ImpossibleError, ResultError)
    assert issubclass(AmbiguousResultError, ResultError)
    assert issubclass(NoThrowAllowedError, ResultError)
    assert issubclass(UnwrapError, ResultError)
    assert issubclass(ResultError, Exception)


def test_exception_can_be_caught():
    """Test exceptions can be caught by their base class."""
    with pytest.raises(ResultError):
        raise AmbiguousResultError("both slots")


def test_contract_violation_as_err_payload():
    """Test a broken contract can be reported as plain data in an Err."""
    result = safe_try_sync(
        lambda: ResultSync("ok", ok=1, err="boom"),
        map_error=lambda exc: exc.to_dict() if isinstance(exc, ResultError) else exc,
    )

    assert result.is_err()
    assert result.err["error_type"] == "ambiguous_result"
    assert result.err["details"] == {"status": "ok"}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
