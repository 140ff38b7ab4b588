"""Domain error kinds and the precondition helper.

Two failure channels exist in the domain layer:

- Expected validation failures travel as :class:`~todoapp.domain.result.Result`
  values and are never raised.
- Contract violations (``None`` where a value is required, unknown enum codes,
  unwrapping a failed Result) are raised immediately.

:class:`DomainError` covers business-rule and state violations detected by
the entities.
"""

from __future__ import annotations

from typing import Any


class InvalidArgumentError(ValueError):
    """A caller passed an argument that violates an operation's contract."""


class UnwrapError(RuntimeError):
    """The value of a failed Result was requested."""


class DomainError(Exception):
    """Business rule or state violation inside the domain model."""

    def __init__(self, message: str) -> None:
        require(message, "Error message")
        if not message.strip():
            msg = "Error message must not be empty"
            raise InvalidArgumentError(msg)
        super().__init__(message)
        self.message = message

    @classmethod
    def business_rule_violation(cls, rule: str, details: str) -> DomainError:
        require(rule, "Rule name")
        require(details, "Details")
        return cls(f"Business rule violation [{rule}]: {details}")

    @classmethod
    def invalid_state(cls, state: str, operation: str) -> DomainError:
        require(state, "Current state")
        require(operation, "Operation")
        return cls(f"Invalid state [{state}] for operation [{operation}]")

    @classmethod
    def not_found(cls, entity: str, identifier: str) -> DomainError:
        require(entity, "Entity type")
        require(identifier, "Identifier")
        return cls(f"{entity} not found: {identifier}")

    @classmethod
    def duplicate(cls, entity: str, identifier: str) -> DomainError:
        require(entity, "Entity type")
        require(identifier, "Identifier")
        return cls(f"{entity} already exists: {identifier}")


def require(value: Any, name: str) -> None:
    """Raise :class:`InvalidArgumentError` if *value* is ``None``."""
    if value is None:
        msg = f"{name} must not be None"
        raise InvalidArgumentError(msg)
