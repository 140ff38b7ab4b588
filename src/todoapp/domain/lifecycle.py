"""Todo status lifecycle: the status enum and the transition policy.

The enum defines the closed set of statuses plus convenience predicates.
Which status may follow which lives in :class:`TodoStatusTransitionPolicy`,
a runtime-mutable rule table created once at process start.

INVARIANT: a self-transition (``from_ == to``) is always allowed.
INVARIANT: DELETED is terminal under the default rules.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from enum import StrEnum
from typing import Any

from todoapp.domain._table import RuleTable
from todoapp.domain.errors import InvalidArgumentError, require
from todoapp.domain.result import Result

logger = logging.getLogger(__name__)


class TodoStatus(StrEnum):
    """Lifecycle status of a todo item.

    Each member carries a stable ``code`` (also its value), a
    ``display_name`` and a ``description``.
    """

    TODO = ("TODO", "To do", "Newly created todo")
    IN_PROGRESS = ("IN_PROGRESS", "In progress", "Todo being worked on")
    COMPLETED = ("COMPLETED", "Completed", "Finished todo")
    DELETED = ("DELETED", "Deleted", "Logically deleted todo")

    display_name: str
    description: str

    def __new__(cls, code: str, display_name: str, description: str) -> TodoStatus:
        obj = str.__new__(cls, code)
        obj._value_ = code
        obj.display_name = display_name
        obj.description = description
        return obj

    @property
    def code(self) -> str:
        return self.value

    # --- Lookups ---

    @classmethod
    def from_code(cls, code: str) -> TodoStatus:
        """Look up a status by code, ignoring case and surrounding whitespace.

        Raises:
            InvalidArgumentError: If *code* is ``None`` or unknown.
        """
        require(code, "Code")
        normalized = code.strip().upper()
        for status in cls:
            if status.code == normalized:
                return status
        msg = f"Unknown status code: {code}"
        raise InvalidArgumentError(msg)

    @classmethod
    def from_name(cls, name: str) -> TodoStatus:
        """Look up a status by member name, ignoring case and surrounding whitespace."""
        require(name, "Name")
        try:
            return cls[name.strip().upper()]
        except KeyError:
            msg = f"Unknown status name: {name}"
            raise InvalidArgumentError(msg) from None

    @classmethod
    def parse_code(cls, code: str | None) -> Result[TodoStatus]:
        """Non-raising variant of :meth:`from_code` for untrusted input."""
        if code is None:
            return Result.failure("Status code must not be None")
        try:
            return Result.success(cls.from_code(code))
        except InvalidArgumentError:
            return Result.failure(f"Invalid status code: {code}")

    @classmethod
    def parse_name(cls, name: str | None) -> Result[TodoStatus]:
        if name is None:
            return Result.failure("Status name must not be None")
        try:
            return Result.success(cls.from_name(name))
        except InvalidArgumentError:
            return Result.failure(f"Invalid status name: {name}")

    def has_code(self, code: str) -> bool:
        require(code, "Code")
        return self.code == code.strip().upper()

    # --- Predicates ---

    def is_active(self) -> bool:
        return self is not TodoStatus.DELETED

    def is_completed(self) -> bool:
        return self is TodoStatus.COMPLETED

    def is_workable(self) -> bool:
        return self in (TodoStatus.TODO, TodoStatus.IN_PROGRESS)

    def is_deleted(self) -> bool:
        return self is TodoStatus.DELETED

    def is_in_progress(self) -> bool:
        return self is TodoStatus.IN_PROGRESS

    def is_any_of(self, *statuses: TodoStatus) -> bool:
        return self in statuses


# --- Default transition map ---

DEFAULT_TRANSITIONS: dict[TodoStatus, frozenset[TodoStatus]] = {
    TodoStatus.TODO: frozenset(
        {TodoStatus.IN_PROGRESS, TodoStatus.COMPLETED, TodoStatus.DELETED}
    ),
    TodoStatus.IN_PROGRESS: frozenset(
        {TodoStatus.TODO, TodoStatus.COMPLETED, TodoStatus.DELETED}
    ),
    TodoStatus.COMPLETED: frozenset(
        {TodoStatus.TODO, TodoStatus.IN_PROGRESS, TodoStatus.DELETED}
    ),
    TodoStatus.DELETED: frozenset(),
}

# Transitions that need explicit approval on top of the rule table.
APPROVAL_REQUIRED: frozenset[tuple[TodoStatus, TodoStatus]] = frozenset(
    {(TodoStatus.IN_PROGRESS, TodoStatus.COMPLETED)}
)


def _require_status(value: Any, name: str) -> None:
    require(value, name)
    if not isinstance(value, TodoStatus):
        msg = f"{name} must be a TodoStatus, got {type(value).__name__}"
        raise InvalidArgumentError(msg)


class TodoStatusTransitionPolicy:
    """Rule table deciding which status changes are legal.

    Created with the default rules unless a custom mapping is supplied, in
    which case the defaults are skipped entirely. A status missing from the
    table allows no transitions.
    """

    def __init__(self, rules: Mapping[TodoStatus, Iterable[TodoStatus]] | None = None) -> None:
        self._table: RuleTable[TodoStatus, TodoStatus] = RuleTable(
            DEFAULT_TRANSITIONS if rules is None else rules
        )

    def can_transition(self, from_: TodoStatus, to: TodoStatus) -> bool:
        _require_status(from_, "Current status")
        _require_status(to, "New status")
        if from_ is to:
            return True
        return self._table.contains(from_, to)

    def allowed_transitions(self, from_: TodoStatus) -> frozenset[TodoStatus]:
        _require_status(from_, "Current status")
        return self._table.get(from_)

    def rules(self) -> Mapping[TodoStatus, frozenset[TodoStatus]]:
        """Read-only snapshot of the full rule table."""
        return self._table.snapshot()

    def add_transition_rule(self, from_: TodoStatus, to: TodoStatus) -> None:
        _require_status(from_, "From status")
        _require_status(to, "To status")
        self._table.add(from_, to)
        logger.debug("Transition rule added: %s -> %s", from_, to)

    def remove_transition_rule(self, from_: TodoStatus, to: TodoStatus) -> None:
        _require_status(from_, "From status")
        _require_status(to, "To status")
        self._table.discard(from_, to)
        logger.debug("Transition rule removed: %s -> %s", from_, to)

    def can_transition_with_approval(
        self, from_: TodoStatus, to: TodoStatus, has_approval: bool
    ) -> bool:
        """Like :meth:`can_transition`, but gated edges also need *has_approval*."""
        if not self.can_transition(from_, to):
            return False
        if (from_, to) in APPROVAL_REQUIRED:
            return has_approval is True
        return True

    def can_emergency_transition(
        self, from_: TodoStatus, to: TodoStatus, is_emergency: bool
    ) -> bool:
        """In an emergency any move is legal unless the todo is already deleted."""
        if not is_emergency:
            return self.can_transition(from_, to)
        _require_status(from_, "Current status")
        _require_status(to, "New status")
        return from_ is not TodoStatus.DELETED
