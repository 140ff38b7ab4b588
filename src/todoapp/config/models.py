"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, todoapp.toml only contains
overrides. A status or role listed under ``[policy.*]`` replaces only its
own entry in the default rule table.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from todoapp.domain.errors import InvalidArgumentError
from todoapp.domain.lifecycle import TodoStatus
from todoapp.domain.permissions import Permission, UserRole


class PolicyConfig(BaseModel):
    """[policy] section.

    Example::

        [policy.transitions]
        COMPLETED = ["DELETED"]

        [policy.permissions]
        MODERATOR = ["READ_ALL_TODOS", "VIEW_AUDIT_LOGS"]
    """

    model_config = {"frozen": True}

    transitions: dict[str, list[str]] = Field(default_factory=dict)
    permissions: dict[str, list[str]] = Field(default_factory=dict)

    @field_validator("transitions")
    @classmethod
    def _known_statuses(cls, value: dict[str, list[str]]) -> dict[str, list[str]]:
        normalized: dict[str, list[str]] = {}
        for source, targets in value.items():
            try:
                key = TodoStatus.from_code(source).code
                normalized[key] = [TodoStatus.from_code(t).code for t in targets]
            except InvalidArgumentError as exc:
                raise ValueError(str(exc)) from exc
        return normalized

    @field_validator("permissions")
    @classmethod
    def _known_roles(cls, value: dict[str, list[str]]) -> dict[str, list[str]]:
        normalized: dict[str, list[str]] = {}
        for role, granted in value.items():
            try:
                key = UserRole.from_code(role).code
                normalized[key] = [Permission.from_name(p).value for p in granted]
            except InvalidArgumentError as exc:
                raise ValueError(str(exc)) from exc
        return normalized


class LoggingConfig(BaseModel):
    """[logging] section."""

    model_config = {"frozen": True}

    verbose: bool = False
    json_output: bool = False


class TodoConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    policy: PolicyConfig = Field(default_factory=PolicyConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
