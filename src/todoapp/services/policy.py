"""PolicyService — query the transition and permission policies.

Status, role and permission arguments arrive as untrusted codes. Unknown
codes are reported as structured errors rather than raised.
"""

from __future__ import annotations

import logging
from typing import Any

from todoapp.domain.errors import InvalidArgumentError
from todoapp.domain.lifecycle import APPROVAL_REQUIRED, TodoStatus
from todoapp.domain.permissions import Permission, UserRole
from todoapp.services.base import BaseService
from todoapp.services.result import ServiceResult

logger = logging.getLogger(__name__)

# Canonical display order.
_STATUS_ORDER = list(TodoStatus)
_PERMISSION_ORDER = list(Permission)


def _sorted_statuses(statuses: frozenset[TodoStatus]) -> list[str]:
    return [s.code for s in _STATUS_ORDER if s in statuses]


def _sorted_permissions(permissions: frozenset[Permission]) -> list[str]:
    return [p.value for p in _PERMISSION_ORDER if p in permissions]


class PolicyService(BaseService):
    """Read-side operations over the shared policies."""

    # ------------------------------------------------------------------
    # Status transitions
    # ------------------------------------------------------------------

    def check_transition(
        self,
        from_code: str,
        to_code: str,
        *,
        approval: bool = False,
        emergency: bool = False,
    ) -> ServiceResult:
        """Decide whether a todo may move from *from_code* to *to_code*."""
        op = "check_transition"
        try:
            source = TodoStatus.from_code(from_code)
            target = TodoStatus.from_code(to_code)
        except InvalidArgumentError as exc:
            return ServiceResult.fail(op, "UNKNOWN_STATUS", str(exc))

        policy = self._registry.transitions
        if emergency:
            allowed = policy.can_emergency_transition(source, target, True)
            rule = "emergency"
        else:
            allowed = policy.can_transition_with_approval(source, target, approval)
            if source is target:
                rule = "self"
            elif (source, target) in APPROVAL_REQUIRED and policy.can_transition(source, target):
                rule = "approval"
            else:
                rule = "table"

        warnings: list[str] = []
        if rule == "approval" and not approval:
            warnings.append(f"{source} -> {target} requires approval")

        logger.debug("Transition %s -> %s (%s): %s", source, target, rule, allowed)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "from": source.code,
                "to": target.code,
                "allowed": allowed,
                "rule": rule,
                "approval": approval,
                "emergency": emergency,
            },
            warnings=warnings,
        )

    def list_transitions(self, from_code: str | None = None) -> ServiceResult:
        """List the allowed targets for one status, or the whole table."""
        op = "list_transitions"
        policy = self._registry.transitions
        if from_code is None:
            sources = _STATUS_ORDER
        else:
            try:
                sources = [TodoStatus.from_code(from_code)]
            except InvalidArgumentError as exc:
                return ServiceResult.fail(op, "UNKNOWN_STATUS", str(exc))

        items: list[dict[str, Any]] = []
        for status in sources:
            targets = policy.allowed_transitions(status)
            items.append(
                {
                    "from": status.code,
                    "label": status.display_name,
                    "to": _sorted_statuses(targets),
                    "terminal": not targets,
                }
            )
        return ServiceResult(ok=True, op=op, data={"items": items, "count": len(items)})

    # ------------------------------------------------------------------
    # Permissions
    # ------------------------------------------------------------------

    def check_permission(self, role_code: str, permission_name: str) -> ServiceResult:
        """Decide whether *role_code* grants *permission_name*."""
        op = "check_permission"
        try:
            role = UserRole.from_code(role_code)
        except InvalidArgumentError as exc:
            return ServiceResult.fail(op, "UNKNOWN_ROLE", str(exc))
        try:
            permission = Permission.from_name(permission_name)
        except InvalidArgumentError as exc:
            return ServiceResult.fail(op, "UNKNOWN_PERMISSION", str(exc))

        granted = self._registry.permissions.has_permission(role, permission)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "role": role.code,
                "permission": permission.value,
                "description": permission.description,
                "granted": granted,
            },
        )

    def list_permissions(self, role_code: str | None = None) -> ServiceResult:
        """List the permissions of one role, or of every role."""
        op = "list_permissions"
        policy = self._registry.permissions
        if role_code is None:
            roles = list(UserRole)
        else:
            try:
                roles = [UserRole.from_code(role_code)]
            except InvalidArgumentError as exc:
                return ServiceResult.fail(op, "UNKNOWN_ROLE", str(exc))

        items: list[dict[str, Any]] = [
            {
                "role": role.code,
                "label": role.display_name,
                "level": role.level,
                "permissions": _sorted_permissions(policy.permissions(role)),
            }
            for role in roles
        ]
        return ServiceResult(ok=True, op=op, data={"items": items, "count": len(items)})
