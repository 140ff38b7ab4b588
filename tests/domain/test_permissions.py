"""Tests for roles, permissions and the permission policy."""

from __future__ import annotations

import pytest

from todoapp.domain.errors import InvalidArgumentError
from todoapp.domain.permissions import (
    ADMIN_PERMISSIONS,
    DEFAULT_ROLE_PERMISSIONS,
    MODERATOR_PERMISSIONS,
    USER_PERMISSIONS,
    Permission,
    UserPermissionPolicy,
    UserRole,
)

ROLES_BY_LEVEL = sorted(UserRole, key=lambda r: r.level)


class TestUserRole:
    def test_levels(self) -> None:
        assert [r.level for r in ROLES_BY_LEVEL] == [1, 5, 10, 99]
        assert ROLES_BY_LEVEL == [
            UserRole.USER,
            UserRole.MODERATOR,
            UserRole.ADMIN,
            UserRole.SUPER_ADMIN,
        ]

    @pytest.mark.parametrize("role", list(UserRole))
    def test_round_trips(self, role: UserRole) -> None:
        assert UserRole.from_code(role.code) is role
        assert UserRole.from_code(f" {role.code.lower()} ") is role
        assert UserRole.from_name(role.name.lower()) is role

    def test_unknown_code(self) -> None:
        with pytest.raises(InvalidArgumentError, match="Unknown role code: GUEST"):
            UserRole.from_code("GUEST")

    def test_parse(self) -> None:
        assert UserRole.parse_code("admin").value is UserRole.ADMIN
        assert UserRole.parse_code("root").error_message == "Invalid role code: root"
        assert UserRole.parse_name(None).is_failure

    def test_level_helpers(self) -> None:
        assert UserRole.ADMIN.has_level_or_higher(5)
        assert not UserRole.USER.has_level_or_higher(5)
        assert UserRole.SUPER_ADMIN.has_higher_level_than(UserRole.ADMIN)
        assert not UserRole.ADMIN.has_higher_level_than(UserRole.ADMIN)

    def test_has_code_and_any_of(self) -> None:
        assert UserRole.MODERATOR.has_code("moderator")
        assert UserRole.USER.is_any_of(UserRole.USER, UserRole.ADMIN)
        assert not UserRole.USER.is_any_of(UserRole.ADMIN)


class TestPermission:
    def test_count(self) -> None:
        assert len(Permission) == 18

    def test_descriptions(self) -> None:
        assert all(p.description for p in Permission)

    def test_from_name(self) -> None:
        assert Permission.from_name(" delete_all_todos ") is Permission.DELETE_ALL_TODOS

    def test_unknown(self) -> None:
        with pytest.raises(InvalidArgumentError, match="Unknown permission: FLY"):
            Permission.from_name("FLY")


class TestDefaultPermissions:
    def test_monotonic(self) -> None:
        sets = [DEFAULT_ROLE_PERMISSIONS[r] for r in ROLES_BY_LEVEL]
        for lower, higher in zip(sets, sets[1:]):
            assert lower <= higher

    def test_super_admin_has_everything(self) -> None:
        assert DEFAULT_ROLE_PERMISSIONS[UserRole.SUPER_ADMIN] == frozenset(Permission)

    def test_user_lacks_delete_all(self, permission_policy: UserPermissionPolicy) -> None:
        assert not permission_policy.has_permission(UserRole.USER, Permission.DELETE_ALL_TODOS)
        assert permission_policy.has_permission(UserRole.USER, Permission.DELETE_OWN_TODO)

    def test_moderator_extras(self) -> None:
        assert MODERATOR_PERMISSIONS - USER_PERMISSIONS == {
            Permission.READ_ALL_TODOS,
            Permission.READ_USER_LIST,
            Permission.VIEW_AUDIT_LOGS,
        }

    def test_admin_lacks_system_admin(self) -> None:
        assert Permission.SYSTEM_CONFIGURATION not in ADMIN_PERMISSIONS
        assert Permission.CHANGE_USER_ROLE in ADMIN_PERMISSIONS


class TestPolicyQueries:
    def test_permissions_of_role(self, permission_policy: UserPermissionPolicy) -> None:
        assert permission_policy.permissions(UserRole.USER) == USER_PERMISSIONS

    def test_roles_snapshot(self, permission_policy: UserPermissionPolicy) -> None:
        assert dict(permission_policy.roles()) == DEFAULT_ROLE_PERMISSIONS

    def test_type_checks(self, permission_policy: UserPermissionPolicy) -> None:
        with pytest.raises(InvalidArgumentError):
            permission_policy.has_permission("USER", Permission.CREATE_TODO)  # type: ignore[arg-type]
        with pytest.raises(InvalidArgumentError):
            permission_policy.has_permission(UserRole.USER, None)  # type: ignore[arg-type]


class TestPolicyMutation:
    def test_add_and_remove(self, permission_policy: UserPermissionPolicy) -> None:
        permission_policy.add_permission(UserRole.USER, Permission.EXPORT_DATA)
        assert permission_policy.has_permission(UserRole.USER, Permission.EXPORT_DATA)
        permission_policy.remove_permission(UserRole.USER, Permission.EXPORT_DATA)
        assert not permission_policy.has_permission(UserRole.USER, Permission.EXPORT_DATA)

    def test_clear_permissions(self, permission_policy: UserPermissionPolicy) -> None:
        permission_policy.clear_permissions(UserRole.MODERATOR)
        assert permission_policy.permissions(UserRole.MODERATOR) == frozenset()
        assert permission_policy.permissions(UserRole.USER) == USER_PERMISSIONS

    def test_add_role_replaces_set(self, permission_policy: UserPermissionPolicy) -> None:
        permission_policy.add_role(UserRole.ADMIN, [Permission.VIEW_SYSTEM_LOGS])
        assert permission_policy.permissions(UserRole.ADMIN) == {Permission.VIEW_SYSTEM_LOGS}

    def test_add_role_rejects_bad_members(self, permission_policy: UserPermissionPolicy) -> None:
        with pytest.raises(InvalidArgumentError):
            permission_policy.add_role(UserRole.ADMIN, ["EXPORT_DATA", None])  # type: ignore[list-item]
        assert permission_policy.permissions(UserRole.ADMIN) == ADMIN_PERMISSIONS

    def test_empty_policy(self) -> None:
        policy = UserPermissionPolicy({})
        assert not policy.has_permission(UserRole.SUPER_ADMIN, Permission.CREATE_TODO)
        policy.add_permission(UserRole.USER, Permission.CREATE_TODO)
        assert policy.has_permission(UserRole.USER, Permission.CREATE_TODO)
