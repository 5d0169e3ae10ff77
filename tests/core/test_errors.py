"""Tests for error types and codes."""

import pytest

from nscover.core.errors import (
    ConfigError,
    ErrorCode,
    NscoverError,
    PipelineError,
    SolutionError,
    StoreError,
)


class TestErrorCode:
    """Error code value tests."""

    @pytest.mark.parametrize(
        ("code", "expected_range"),
        [
            (ErrorCode.CONFIG_PARSE_ERROR, 2000),
            (ErrorCode.SOLUTION_NOT_FOUND, 3000),
            (ErrorCode.PIPELINE_BUILD_FAILED, 4000),
            (ErrorCode.STORE_UNAVAILABLE, 5000),
            (ErrorCode.INTERNAL_ERROR, 9000),
        ],
    )
    def test_given_error_code_when_checked_then_in_correct_range(
        self, code: ErrorCode, expected_range: int
    ) -> None:
        """Error codes fall within their designated numeric range."""
        assert expected_range <= code.value < expected_range + 1000


class TestNscoverError:
    """Base error behavior tests."""

    def test_given_error_when_to_dict_then_serializes_all_fields(self) -> None:
        """Error serializes to dict with all required fields."""
        # Given
        error = NscoverError(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message="Test message",
            details={"key": "value"},
        )

        # When
        result = error.to_dict()

        # Then
        assert result == {
            "code": 2001,
            "error": "CONFIG_PARSE_ERROR",
            "message": "Test message",
            "details": {"key": "value"},
        }

    def test_str_includes_code_and_message(self) -> None:
        error = NscoverError(code=ErrorCode.INTERNAL_ERROR, message="boom")

        assert str(error) == "[9001] INTERNAL_ERROR: boom"

    def test_is_raisable(self) -> None:
        with pytest.raises(NscoverError) as exc_info:
            raise StoreError.unavailable("/tmp/x.sqlite", "disk full")

        assert exc_info.value.code == ErrorCode.STORE_UNAVAILABLE
        assert exc_info.value.details["path"] == "/tmp/x.sqlite"


class TestFactories:
    def test_config_parse_error(self) -> None:
        error = ConfigError.parse_error("/a/config.yaml", "bad indent")

        assert error.code == ErrorCode.CONFIG_PARSE_ERROR
        assert "/a/config.yaml" in error.message

    def test_solution_errors(self) -> None:
        assert SolutionError.not_found("x.sln").code == ErrorCode.SOLUTION_NOT_FOUND
        assert SolutionError.unsupported("x.txt").code == ErrorCode.SOLUTION_UNSUPPORTED
        assert SolutionError.not_loaded().code == ErrorCode.SOLUTION_NOT_LOADED
        assert SolutionError.project_not_found("App").details == {"project": "App"}

    def test_pipeline_errors_keep_outcome_message_verbatim(self) -> None:
        """The message is exactly the outcome string handed to callers."""
        error = PipelineError.build_failed("error CS1002: ; expected\n", 1)

        assert error.message == "error CS1002: ; expected\n"
        assert error.details["exit_code"] == 1
        assert PipelineError.no_projects("none").code == ErrorCode.PIPELINE_NO_PROJECTS
