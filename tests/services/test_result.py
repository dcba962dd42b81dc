"""Tests for ServiceResult and ServiceError."""

import json

import pytest
from pydantic import ValidationError

from shelfwise.domain.validation import ValidationError as DomainValidationError
from shelfwise.domain.validation import ValidationIssue, validation_error
from shelfwise.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="parse_path", data={"path": "/2024-09-21"})
        assert result.ok is True
        assert result.op == "parse_path"
        assert result.data == {"path": "/2024-09-21"}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_error_construction(self) -> None:
        error = ServiceError(code="DATE_NOT_HEAD", message="dates are roots")
        result = ServiceResult(ok=False, op="locate", error=error)
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "DATE_NOT_HEAD"

    def test_with_warnings(self) -> None:
        result = ServiceResult(ok=True, op="locate", warnings=["alias needs storage"])
        assert len(result.warnings) == 1

    def test_json_serialization(self) -> None:
        result = ServiceResult(
            ok=True,
            op="spaced",
            data={"ranks": ["000001"]},
            meta={"timezone": "UTC"},
        )
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["op"] == "spaced"
        assert parsed["data"]["ranks"] == ["000001"]
        assert parsed["meta"]["timezone"] == "UTC"

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="test")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]


class TestServiceError:
    def test_with_detail(self) -> None:
        error = ServiceError(
            code="AMBIGUOUS",
            message="'gro' matches 2 aliases",
            detail={"candidates": ["groceries", "grocerylist"]},
        )
        assert error.detail["candidates"] == ["groceries", "grocerylist"]

    def test_default_detail(self) -> None:
        error = ServiceError(code="NOT_FOUND", message="bad")
        assert error.detail == {}


class TestFromValidation:
    def test_first_issue_surfaces(self) -> None:
        error = DomainValidationError(
            kind="Locator",
            message="Locator is invalid",
            issues=(
                ValidationIssue(
                    message="dates are roots", code="date_not_head", path=(1, "value")
                ),
                ValidationIssue(
                    message="dates are roots", code="date_not_head", path=(2, "value")
                ),
            ),
        )
        service_error = ServiceError.from_validation(error)
        assert service_error.code == "DATE_NOT_HEAD"
        assert service_error.message == "dates are roots"
        assert service_error.detail["kind"] == "Locator"
        assert service_error.issue_paths == ["1.value", "2.value"]

    def test_rejected_result(self) -> None:
        error = validation_error("ItemRank", "rank must not end in 0", code="invalid_rank")
        result = ServiceResult.rejected("between", error, warnings=["reload siblings"])
        assert result.ok is False
        assert result.op == "between"
        assert result.warnings == ["reload siblings"]
        assert result.error is not None
        assert result.error.code == "INVALID_RANK"
        assert result.error.issue_paths == [""]

    def test_issue_paths_without_issues(self) -> None:
        assert ServiceError(code="UNKNOWN", message="x").issue_paths == []
