"""Roles, fine-grained permissions, and the role -> permission policy.

Role levels exist only for coarse ordering ("is this role above that
one?"). Authorization decisions always go through
:class:`UserPermissionPolicy`.
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


class UserRole(StrEnum):
    """Role of a user account with a privilege ``level`` for ordering."""

    USER = ("USER", "User", "Regular user with self-service features", 1)
    MODERATOR = ("MODERATOR", "Moderator", "User with limited oversight features", 5)
    ADMIN = ("ADMIN", "Administrator", "User with system administration access", 10)
    SUPER_ADMIN = ("SUPER_ADMIN", "Super administrator", "User with access to everything", 99)

    display_name: str
    description: str
    level: int

    def __new__(cls, code: str, display_name: str, description: str, level: int) -> UserRole:
        obj = str.__new__(cls, code)
        obj._value_ = code
        obj.display_name = display_name
        obj.description = description
        obj.level = level
        return obj

    @property
    def code(self) -> str:
        return self.value

    @classmethod
    def from_code(cls, code: str) -> UserRole:
        """Look up a role by code, ignoring case and surrounding whitespace.

        Raises:
            InvalidArgumentError: If *code* is ``None`` or unknown.
        """
        require(code, "Code")
        normalized = code.strip().upper()
        for role in cls:
            if role.code == normalized:
                return role
        msg = f"Unknown role code: {code}"
        raise InvalidArgumentError(msg)

    @classmethod
    def from_name(cls, name: str) -> UserRole:
        require(name, "Name")
        try:
            return cls[name.strip().upper()]
        except KeyError:
            msg = f"Unknown role name: {name}"
            raise InvalidArgumentError(msg) from None

    @classmethod
    def parse_code(cls, code: str | None) -> Result[UserRole]:
        """Non-raising variant of :meth:`from_code` for untrusted input."""
        if code is None:
            return Result.failure("Role code must not be None")
        try:
            return Result.success(cls.from_code(code))
        except InvalidArgumentError:
            return Result.failure(f"Invalid role code: {code}")

    @classmethod
    def parse_name(cls, name: str | None) -> Result[UserRole]:
        if name is None:
            return Result.failure("Role name must not be None")
        try:
            return Result.success(cls.from_name(name))
        except InvalidArgumentError:
            return Result.failure(f"Invalid role name: {name}")

    def has_code(self, code: str) -> bool:
        require(code, "Code")
        return self.code == code.strip().upper()

    def has_level_or_higher(self, required_level: int) -> bool:
        return self.level >= required_level

    def has_higher_level_than(self, other: UserRole) -> bool:
        require(other, "Comparison target")
        return self.level > other.level

    def is_any_of(self, *roles: UserRole) -> bool:
        return self in roles


class Permission(StrEnum):
    """Atomic capability a role either grants or does not."""

    # Todos
    CREATE_TODO = ("CREATE_TODO", "Create todos")
    READ_OWN_TODO = ("READ_OWN_TODO", "View own todos")
    UPDATE_OWN_TODO = ("UPDATE_OWN_TODO", "Update own todos")
    DELETE_OWN_TODO = ("DELETE_OWN_TODO", "Delete own todos")
    READ_ALL_TODOS = ("READ_ALL_TODOS", "View all todos")
    UPDATE_ALL_TODOS = ("UPDATE_ALL_TODOS", "Update all todos")
    DELETE_ALL_TODOS = ("DELETE_ALL_TODOS", "Delete all todos")

    # User management
    CREATE_USER = ("CREATE_USER", "Create users")
    READ_USER_LIST = ("READ_USER_LIST", "View the user list")
    UPDATE_USER_PROFILE = ("UPDATE_USER_PROFILE", "Update user profiles")
    DELETE_USER = ("DELETE_USER", "Delete users")
    CHANGE_USER_ROLE = ("CHANGE_USER_ROLE", "Change user roles")

    # System administration
    SYSTEM_CONFIGURATION = ("SYSTEM_CONFIGURATION", "Change system settings")
    VIEW_SYSTEM_LOGS = ("VIEW_SYSTEM_LOGS", "View system logs")
    BACKUP_RESTORE = ("BACKUP_RESTORE", "Back up and restore")

    # Audit and reporting
    VIEW_AUDIT_LOGS = ("VIEW_AUDIT_LOGS", "View audit logs")
    GENERATE_REPORTS = ("GENERATE_REPORTS", "Generate reports")
    EXPORT_DATA = ("EXPORT_DATA", "Export data")

    description: str

    def __new__(cls, name: str, description: str) -> Permission:
        obj = str.__new__(cls, name)
        obj._value_ = name
        obj.description = description
        return obj

    @classmethod
    def from_name(cls, name: str) -> Permission:
        """Look up a permission by name, ignoring case and surrounding whitespace."""
        require(name, "Name")
        try:
            return cls[name.strip().upper()]
        except KeyError:
            msg = f"Unknown permission: {name}"
            raise InvalidArgumentError(msg) from None


# --- Default role -> permission map (each role extends the one below) ---

USER_PERMISSIONS: frozenset[Permission] = frozenset(
    {
        Permission.CREATE_TODO,
        Permission.READ_OWN_TODO,
        Permission.UPDATE_OWN_TODO,
        Permission.DELETE_OWN_TODO,
        Permission.UPDATE_USER_PROFILE,
    }
)

MODERATOR_PERMISSIONS: frozenset[Permission] = USER_PERMISSIONS | {
    Permission.READ_ALL_TODOS,
    Permission.READ_USER_LIST,
    Permission.VIEW_AUDIT_LOGS,
}

ADMIN_PERMISSIONS: frozenset[Permission] = MODERATOR_PERMISSIONS | {
    Permission.UPDATE_ALL_TODOS,
    Permission.DELETE_ALL_TODOS,
    Permission.CREATE_USER,
    Permission.DELETE_USER,
    Permission.CHANGE_USER_ROLE,
    Permission.GENERATE_REPORTS,
    Permission.EXPORT_DATA,
}

SUPER_ADMIN_PERMISSIONS: frozenset[Permission] = frozenset(Permission)

DEFAULT_ROLE_PERMISSIONS: dict[UserRole, frozenset[Permission]] = {
    UserRole.USER: USER_PERMISSIONS,
    UserRole.MODERATOR: MODERATOR_PERMISSIONS,
    UserRole.ADMIN: ADMIN_PERMISSIONS,
    UserRole.SUPER_ADMIN: SUPER_ADMIN_PERMISSIONS,
}


def _require_role(value: Any, name: str = "Role") -> None:
    require(value, name)
    if not isinstance(value, UserRole):
        msg = f"{name} must be a UserRole, got {type(value).__name__}"
        raise InvalidArgumentError(msg)


def _require_permission(value: Any) -> None:
    require(value, "Permission")
    if not isinstance(value, Permission):
        msg = f"Permission must be a Permission, got {type(value).__name__}"
        raise InvalidArgumentError(msg)


class UserPermissionPolicy:
    """Rule table mapping each role to the permissions it grants.

    An unregistered role grants nothing. Passing *role_permissions* skips
    the default initialization entirely.
    """

    def __init__(
        self, role_permissions: Mapping[UserRole, Iterable[Permission]] | None = None
    ) -> None:
        self._table: RuleTable[UserRole, Permission] = RuleTable(
            DEFAULT_ROLE_PERMISSIONS if role_permissions is None else role_permissions
        )

    def has_permission(self, role: UserRole, permission: Permission) -> bool:
        _require_role(role)
        _require_permission(permission)
        return self._table.contains(role, permission)

    def permissions(self, role: UserRole) -> frozenset[Permission]:
        _require_role(role)
        return self._table.get(role)

    def roles(self) -> Mapping[UserRole, frozenset[Permission]]:
        """Read-only snapshot of the full role table."""
        return self._table.snapshot()

    def add_permission(self, role: UserRole, permission: Permission) -> None:
        """Grant *permission* to *role*, registering the role if needed."""
        _require_role(role)
        _require_permission(permission)
        self._table.add(role, permission)
        logger.debug("Permission granted: %s += %s", role, permission)

    def remove_permission(self, role: UserRole, permission: Permission) -> None:
        _require_role(role)
        _require_permission(permission)
        self._table.discard(role, permission)
        logger.debug("Permission revoked: %s -= %s", role, permission)

    def clear_permissions(self, role: UserRole) -> None:
        """Drop *role* from the table, leaving it with no permissions."""
        _require_role(role)
        self._table.remove(role)
        logger.debug("Permissions cleared for %s", role)

    def add_role(self, role: UserRole, permissions: Iterable[Permission]) -> None:
        """Replace the whole permission set of *role*."""
        _require_role(role)
        require(permissions, "Permissions")
        granted = frozenset(permissions)
        for permission in granted:
            _require_permission(permission)
        self._table.replace(role, granted)
        logger.debug("Role registered: %s with %d permissions", role, len(granted))
