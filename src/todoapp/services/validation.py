"""ValidationService — run raw input through the value-object factories."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from todoapp.domain.content import TodoDescription, TodoTitle
from todoapp.domain.ids import TodoId, UserId
from todoapp.domain.result import Result
from todoapp.domain.users import UserName
from todoapp.services.base import BaseService
from todoapp.services.result import ServiceResult


def _text_payload(obj: TodoTitle | UserName) -> dict[str, Any]:
    return {"value": obj.value, "length": obj.length()}


def _description_payload(obj: TodoDescription) -> dict[str, Any]:
    return {"value": obj.value, "has_value": obj.has_value(), "length": obj.length()}


def _id_payload(obj: TodoId | UserId) -> dict[str, Any]:
    return {"value": obj.value}


# kind -> (factory, payload builder)
_VALIDATORS: dict[str, tuple[Callable[[Any], Result[Any]], Callable[[Any], dict[str, Any]]]] = {
    "title": (TodoTitle.of, _text_payload),
    "description": (TodoDescription.of, _description_payload),
    "username": (UserName.of, _text_payload),
    "todo-id": (TodoId.of, _id_payload),
    "user-id": (UserId.of, _id_payload),
}

VALIDATION_KINDS: tuple[str, ...] = tuple(_VALIDATORS)


class ValidationService(BaseService):
    """Validates raw user input against the domain's value-object rules."""

    def validate(self, kind: str, raw: str | None) -> ServiceResult:
        """Validate *raw* as a value of *kind* (see :data:`VALIDATION_KINDS`).

        On success ``data`` holds the normalized value; on failure the
        error carries the domain's validation message.
        """
        op = f"validate_{kind.replace('-', '_')}"
        entry = _VALIDATORS.get(kind)
        if entry is None:
            return ServiceResult.fail(
                op,
                "UNKNOWN_KIND",
                f"Unknown validation kind: {kind!r}",
                allowed=list(VALIDATION_KINDS),
            )

        factory, payload = entry
        result = factory(raw)
        if result.is_failure:
            return self._validation_failed(op, result, input=raw)
        return ServiceResult(ok=True, op=op, data={"kind": kind, **payload(result.value)})
