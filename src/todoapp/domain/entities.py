"""Todo and User aggregates assembled from validated value objects.

Entities are frozen; every change returns an updated copy. Status changes
and authorization always consult the policies passed in by the caller, so
the same entity behaves correctly under customised rule tables.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Self

from pydantic import BaseModel, Field, InstanceOf

from todoapp.domain.content import TodoDescription, TodoTitle
from todoapp.domain.errors import DomainError, require
from todoapp.domain.ids import TodoId, UserId
from todoapp.domain.lifecycle import TodoStatus, TodoStatusTransitionPolicy
from todoapp.domain.permissions import Permission, UserPermissionPolicy, UserRole
from todoapp.domain.result import Result
from todoapp.domain.users import UserName


def _now() -> datetime:
    return datetime.now(UTC)


class Todo(BaseModel):
    """A todo item owned by a user.

    ``id`` stays ``None`` until the storage layer assigns one.
    """

    model_config = {"frozen": True}

    id: InstanceOf[TodoId] | None = None
    user_id: InstanceOf[UserId]
    title: InstanceOf[TodoTitle]
    description: InstanceOf[TodoDescription] = Field(default_factory=TodoDescription.empty)
    status: TodoStatus = TodoStatus.TODO
    due_date: datetime | None = None
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    @classmethod
    def new(
        cls,
        user_id: UserId,
        title: TodoTitle,
        description: TodoDescription | None = None,
        due_date: datetime | None = None,
    ) -> Self:
        require(user_id, "User id")
        require(title, "Title")
        return cls(
            user_id=user_id,
            title=title,
            description=description or TodoDescription.empty(),
            due_date=due_date,
        )

    def with_id(self, todo_id: TodoId) -> Self:
        require(todo_id, "Todo id")
        return self.model_copy(update={"id": todo_id})

    def change_status(
        self,
        new_status: TodoStatus,
        policy: TodoStatusTransitionPolicy,
        *,
        has_approval: bool = False,
        emergency: bool = False,
    ) -> Result[Self]:
        """Move to *new_status* if *policy* allows it.

        Emergency changes bypass the rule table (but never leave DELETED);
        otherwise approval-gated edges need *has_approval*.
        """
        require(new_status, "New status")
        require(policy, "Transition policy")
        if new_status is self.status:
            return Result.success(self)

        if emergency:
            allowed = policy.can_emergency_transition(self.status, new_status, True)
        else:
            allowed = policy.can_transition_with_approval(self.status, new_status, has_approval)

        if not allowed:
            reason = f"Cannot transition todo from {self.status} to {new_status}"
            if not emergency and policy.can_transition(self.status, new_status):
                reason += " without approval"
            return Result.failure(reason)
        return Result.success(self._touch(status=new_status))

    def rename(self, title: TodoTitle) -> Self:
        require(title, "Title")
        self._ensure_editable("rename")
        return self._touch(title=title)

    def describe(self, description: TodoDescription) -> Self:
        require(description, "Description")
        self._ensure_editable("describe")
        return self._touch(description=description)

    def reschedule(self, due_date: datetime | None) -> Self:
        self._ensure_editable("reschedule")
        return self._touch(due_date=due_date)

    def is_overdue(self, now: datetime | None = None) -> bool:
        """True if a workable todo is past its due date."""
        if self.due_date is None or not self.status.is_workable():
            return False
        return self.due_date < (now or _now())

    def _ensure_editable(self, operation: str) -> None:
        if self.status.is_deleted():
            raise DomainError.invalid_state(str(self.status), operation)

    def _touch(self, **changes: object) -> Self:
        return self.model_copy(update={**changes, "updated_at": _now()})


class User(BaseModel):
    """A user account and its role."""

    model_config = {"frozen": True}

    id: InstanceOf[UserId] | None = None
    name: InstanceOf[UserName]
    role: UserRole = UserRole.USER
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    @classmethod
    def new(cls, name: UserName, role: UserRole = UserRole.USER) -> Self:
        require(name, "User name")
        require(role, "Role")
        return cls(name=name, role=role)

    def with_id(self, user_id: UserId) -> Self:
        require(user_id, "User id")
        return self.model_copy(update={"id": user_id})

    # --- Authorization ---

    def can(self, permission: Permission, policy: UserPermissionPolicy) -> bool:
        require(policy, "Permission policy")
        return policy.has_permission(self.role, permission)

    def authorize(self, permission: Permission, policy: UserPermissionPolicy) -> None:
        """Raise :class:`DomainError` unless the user's role grants *permission*."""
        if not self.can(permission, policy):
            raise DomainError.business_rule_violation(
                "permission", f"role {self.role} lacks {permission}"
            )

    def owns(self, todo: Todo) -> bool:
        require(todo, "Todo")
        return self.id is not None and todo.user_id == self.id

    def can_view(self, todo: Todo, policy: UserPermissionPolicy) -> bool:
        return self._can_act_on(todo, policy, Permission.READ_OWN_TODO, Permission.READ_ALL_TODOS)

    def can_edit(self, todo: Todo, policy: UserPermissionPolicy) -> bool:
        return self._can_act_on(
            todo, policy, Permission.UPDATE_OWN_TODO, Permission.UPDATE_ALL_TODOS
        )

    def can_delete(self, todo: Todo, policy: UserPermissionPolicy) -> bool:
        return self._can_act_on(
            todo, policy, Permission.DELETE_OWN_TODO, Permission.DELETE_ALL_TODOS
        )

    def change_role(
        self, new_role: UserRole, actor: User, policy: UserPermissionPolicy
    ) -> Result[Self]:
        """Assign *new_role* on behalf of *actor*.

        The actor needs CHANGE_USER_ROLE and cannot hand out a role ranked
        above its own.
        """
        require(new_role, "New role")
        require(actor, "Actor")
        if not actor.can(Permission.CHANGE_USER_ROLE, policy):
            return Result.failure(f"Role {actor.role} is not allowed to change user roles")
        if new_role.has_higher_level_than(actor.role):
            return Result.failure(f"Role {actor.role} cannot grant the higher role {new_role}")
        if new_role is self.role:
            return Result.success(self)
        return Result.success(self.model_copy(update={"role": new_role, "updated_at": _now()}))

    def _can_act_on(
        self,
        todo: Todo,
        policy: UserPermissionPolicy,
        own: Permission,
        every: Permission,
    ) -> bool:
        if self.can(every, policy):
            return True
        return self.owns(todo) and self.can(own, policy)
