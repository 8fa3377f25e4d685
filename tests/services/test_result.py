"""Tests for ServiceResult and ServiceError."""

import pytest
from pydantic import ValidationError

from blogctl.services.result import ErrorCode, ServiceError, ServiceResult


class TestServiceResult:
    def test_success_defaults(self) -> None:
        result = ServiceResult(ok=True, op="generate_ids")
        assert result.data == {}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="generate_ids")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]

    def test_fail_shorthand(self) -> None:
        result = ServiceResult.fail(
            "create_content", ErrorCode.ALREADY_EXISTS, "exists", path="/x.mdx"
        )
        assert not result.ok
        assert result.error == ServiceError(
            code="ALREADY_EXISTS", message="exists", detail={"path": "/x.mdx"}
        )

    def test_fail_keeps_report_data(self) -> None:
        result = ServiceResult.fail(
            "validate_content",
            ErrorCode.VALIDATION_FAILED,
            "1 of 2 file(s) have front matter errors",
            data={"checked": 2},
            warnings=["w"],
        )
        assert result.data == {"checked": 2}
        assert result.warnings == ["w"]

    def test_json_dump(self) -> None:
        result = ServiceResult.fail("x", ErrorCode.READ_FAILED, "boom")
        dumped = result.model_dump(mode="json")
        assert dumped["error"]["code"] == "READ_FAILED"
        assert dumped["ok"] is False


def test_error_codes_are_strings() -> None:
    assert ErrorCode.MAPPINGS_MISSING == "MAPPINGS_MISSING"
    assert len(ErrorCode) == 9
