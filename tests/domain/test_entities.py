"""Tests for the Todo and User entities."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from pydantic import ValidationError

from todoapp.domain.content import TodoDescription, TodoTitle
from todoapp.domain.entities import Todo, User
from todoapp.domain.errors import DomainError
from todoapp.domain.ids import TodoId, UserId
from todoapp.domain.lifecycle import TodoStatus, TodoStatusTransitionPolicy
from todoapp.domain.permissions import Permission, UserPermissionPolicy, UserRole
from todoapp.domain.users import UserName


def _todo(status: TodoStatus = TodoStatus.TODO, owner: int = 1) -> Todo:
    todo = Todo.new(UserId(owner), TodoTitle.of("Write report").value)
    return todo.model_copy(update={"status": status})


def _user(role: UserRole = UserRole.USER, user_id: int | None = 1) -> User:
    user = User.new(UserName.of("taro").value, role)
    return user.with_id(UserId(user_id)) if user_id is not None else user


class TestTodo:
    def test_new_defaults(self) -> None:
        todo = Todo.new(UserId(1), TodoTitle.of("Task").value)
        assert todo.id is None
        assert todo.status is TodoStatus.TODO
        assert todo.description.has_value() is False
        assert todo.due_date is None

    def test_with_id(self) -> None:
        todo = _todo().with_id(TodoId(5))
        assert todo.id == TodoId(5)

    def test_frozen(self) -> None:
        with pytest.raises(ValidationError):
            _todo().status = TodoStatus.COMPLETED  # type: ignore[misc]

    def test_rejects_raw_values(self) -> None:
        with pytest.raises(ValidationError):
            Todo(user_id=1, title="Write report")  # type: ignore[arg-type]


class TestTodoStatusChange:
    def test_allowed(self, transition_policy: TodoStatusTransitionPolicy) -> None:
        result = _todo().change_status(TodoStatus.IN_PROGRESS, transition_policy)
        assert result.is_success
        assert result.value.status is TodoStatus.IN_PROGRESS

    def test_original_untouched(self, transition_policy: TodoStatusTransitionPolicy) -> None:
        todo = _todo()
        todo.change_status(TodoStatus.COMPLETED, transition_policy)
        assert todo.status is TodoStatus.TODO

    def test_same_status_is_noop(self, transition_policy: TodoStatusTransitionPolicy) -> None:
        todo = _todo(TodoStatus.DELETED)
        assert todo.change_status(TodoStatus.DELETED, transition_policy).value is todo

    def test_approval_required(self, transition_policy: TodoStatusTransitionPolicy) -> None:
        todo = _todo(TodoStatus.IN_PROGRESS)
        denied = todo.change_status(TodoStatus.COMPLETED, transition_policy)
        assert denied.error_message == (
            "Cannot transition todo from IN_PROGRESS to COMPLETED without approval"
        )
        approved = todo.change_status(TodoStatus.COMPLETED, transition_policy, has_approval=True)
        assert approved.value.status is TodoStatus.COMPLETED

    def test_deleted_is_terminal(self, transition_policy: TodoStatusTransitionPolicy) -> None:
        result = _todo(TodoStatus.DELETED).change_status(TodoStatus.TODO, transition_policy)
        assert result.error_message == "Cannot transition todo from DELETED to TODO"

    def test_emergency(self, transition_policy: TodoStatusTransitionPolicy) -> None:
        transition_policy.remove_transition_rule(TodoStatus.COMPLETED, TodoStatus.TODO)
        todo = _todo(TodoStatus.COMPLETED)
        assert todo.change_status(TodoStatus.TODO, transition_policy).is_failure
        forced = todo.change_status(TodoStatus.TODO, transition_policy, emergency=True)
        assert forced.value.status is TodoStatus.TODO

    def test_uses_given_policy(self) -> None:
        permissive = TodoStatusTransitionPolicy({TodoStatus.DELETED: [TodoStatus.TODO]})
        result = _todo(TodoStatus.DELETED).change_status(TodoStatus.TODO, permissive)
        assert result.is_success


class TestTodoEdits:
    def test_rename_updates_timestamp(self) -> None:
        todo = _todo()
        renamed = todo.rename(TodoTitle.of("New title").value)
        assert renamed.title.value == "New title"
        assert renamed.updated_at >= todo.updated_at

    def test_describe(self) -> None:
        todo = _todo().describe(TodoDescription.of("details").value)
        assert todo.description.value == "details"

    @pytest.mark.parametrize("operation", ["rename", "describe", "reschedule"])
    def test_deleted_todo_rejects_edits(self, operation: str) -> None:
        todo = _todo(TodoStatus.DELETED)
        args = {
            "rename": TodoTitle.of("x").value,
            "describe": TodoDescription.empty(),
            "reschedule": None,
        }
        with pytest.raises(DomainError, match=rf"Invalid state \[DELETED\] for operation \[{operation}\]"):
            getattr(todo, operation)(args[operation])

    def test_is_overdue(self) -> None:
        now = datetime(2024, 1, 10, tzinfo=UTC)
        todo = _todo().reschedule(now - timedelta(days=1))
        assert todo.is_overdue(now)
        assert not todo.reschedule(now + timedelta(days=1)).is_overdue(now)
        assert not _todo().is_overdue(now)

    def test_completed_is_never_overdue(self) -> None:
        now = datetime(2024, 1, 10, tzinfo=UTC)
        todo = _todo(TodoStatus.COMPLETED).reschedule(now - timedelta(days=3))
        assert not todo.is_overdue(now)


class TestUserAuthorization:
    def test_can(self, permission_policy: UserPermissionPolicy) -> None:
        assert _user().can(Permission.CREATE_TODO, permission_policy)
        assert not _user().can(Permission.DELETE_ALL_TODOS, permission_policy)

    def test_authorize_raises(self, permission_policy: UserPermissionPolicy) -> None:
        with pytest.raises(DomainError, match="Business rule violation \\[permission\\]"):
            _user().authorize(Permission.DELETE_USER, permission_policy)

    def test_authorize_passes(self, permission_policy: UserPermissionPolicy) -> None:
        _user(UserRole.ADMIN).authorize(Permission.DELETE_USER, permission_policy)

    def test_owner_access(self, permission_policy: UserPermissionPolicy) -> None:
        user = _user(user_id=1)
        own, other = _todo(owner=1), _todo(owner=2)
        assert user.owns(own)
        assert user.can_edit(own, permission_policy)
        assert not user.can_edit(other, permission_policy)
        assert not user.can_view(other, permission_policy)

    def test_unsaved_user_owns_nothing(self, permission_policy: UserPermissionPolicy) -> None:
        assert not _user(user_id=None).owns(_todo())

    def test_moderator_views_but_cannot_delete(
        self, permission_policy: UserPermissionPolicy
    ) -> None:
        mod = _user(UserRole.MODERATOR, user_id=9)
        other = _todo(owner=2)
        assert mod.can_view(other, permission_policy)
        assert not mod.can_delete(other, permission_policy)

    def test_admin_deletes_anything(self, permission_policy: UserPermissionPolicy) -> None:
        assert _user(UserRole.ADMIN, user_id=9).can_delete(_todo(owner=2), permission_policy)


class TestChangeRole:
    def test_admin_promotes_to_moderator(self, permission_policy: UserPermissionPolicy) -> None:
        result = _user().change_role(UserRole.MODERATOR, _user(UserRole.ADMIN, 2), permission_policy)
        assert result.value.role is UserRole.MODERATOR

    def test_actor_without_permission(self, permission_policy: UserPermissionPolicy) -> None:
        result = _user().change_role(
            UserRole.MODERATOR, _user(UserRole.MODERATOR, 2), permission_policy
        )
        assert result.error_message == "Role MODERATOR is not allowed to change user roles"

    def test_cannot_grant_higher_role(self, permission_policy: UserPermissionPolicy) -> None:
        result = _user().change_role(
            UserRole.SUPER_ADMIN, _user(UserRole.ADMIN, 2), permission_policy
        )
        assert result.error_message == "Role ADMIN cannot grant the higher role SUPER_ADMIN"

    def test_same_role_is_noop(self, permission_policy: UserPermissionPolicy) -> None:
        user = _user()
        assert user.change_role(UserRole.USER, _user(UserRole.ADMIN, 2), permission_policy).value is user
