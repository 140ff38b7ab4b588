"""Tests for ValidationService."""

from __future__ import annotations

import pytest

from todoapp.services.registry import PolicyRegistry
from todoapp.services.validation import VALIDATION_KINDS, ValidationService


@pytest.fixture
def svc(registry: PolicyRegistry) -> ValidationService:
    return ValidationService(registry)


class TestKinds:
    def test_kinds(self) -> None:
        assert VALIDATION_KINDS == ("title", "description", "username", "todo-id", "user-id")

    def test_unknown_kind(self, svc: ValidationService) -> None:
        result = svc.validate("email", "a@b")
        assert not result.ok
        assert result.op == "validate_email"
        assert result.error is not None
        assert result.error.code == "UNKNOWN_KIND"
        assert result.error.detail["allowed"] == list(VALIDATION_KINDS)


class TestValidateTitle:
    def test_success_is_trimmed(self, svc: ValidationService) -> None:
        result = svc.validate("title", "  Buy milk ")
        assert result.ok
        assert result.op == "validate_title"
        assert result.data == {"kind": "title", "value": "Buy milk", "length": 8}

    def test_failure(self, svc: ValidationService) -> None:
        result = svc.validate("title", "   ")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "VALIDATION_FAILED"
        assert result.error.message == "Todo title must not be empty"
        assert result.error.detail == {"input": "   "}

    def test_none(self, svc: ValidationService) -> None:
        result = svc.validate("title", None)
        assert result.error is not None
        assert result.error.message == "Todo title is required"


class TestValidateDescription:
    def test_blank_is_absent(self, svc: ValidationService) -> None:
        result = svc.validate("description", "")
        assert result.ok
        assert result.data == {"kind": "description", "value": None, "has_value": False, "length": 0}

    def test_text(self, svc: ValidationService) -> None:
        result = svc.validate("description", " notes ")
        assert result.data["value"] == "notes"
        assert result.data["has_value"] is True

    def test_too_long(self, svc: ValidationService) -> None:
        result = svc.validate("description", "x" * 1001)
        assert result.error is not None
        assert "(actual: 1001)" in result.error.message


class TestValidateUserName:
    def test_success(self, svc: ValidationService) -> None:
        result = svc.validate("username", "山田太郎")
        assert result.ok
        assert result.op == "validate_username"
        assert result.data["length"] == 4

    def test_failure(self, svc: ValidationService) -> None:
        result = svc.validate("username", "_admin")
        assert result.error is not None
        assert result.error.message == "User name must not start with a hyphen or underscore"


class TestValidateIds:
    def test_todo_id_leading_zeros(self, svc: ValidationService) -> None:
        result = svc.validate("todo-id", "007")
        assert result.ok
        assert result.op == "validate_todo_id"
        assert result.data == {"kind": "todo-id", "value": 7}

    def test_todo_id_negative(self, svc: ValidationService) -> None:
        result = svc.validate("todo-id", "-5")
        assert result.error is not None
        assert "at least 1" in result.error.message

    def test_user_id_zero(self, svc: ValidationService) -> None:
        result = svc.validate("user-id", "0")
        assert result.op == "validate_user_id"
        assert result.error is not None
        assert "positive" in result.error.message

    def test_not_a_number(self, svc: ValidationService) -> None:
        result = svc.validate("user-id", "abc")
        assert result.error is not None
        assert result.error.code == "VALIDATION_FAILED"
