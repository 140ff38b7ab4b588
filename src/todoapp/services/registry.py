"""PolicyRegistry — the process-wide policy instances.

Both policies are created once at process start: the default rule tables,
then any ``[policy.*]`` overrides from configuration applied on top. After
that, trusted administrative code may keep mutating them in place.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from todoapp.domain.lifecycle import TodoStatus, TodoStatusTransitionPolicy
from todoapp.domain.permissions import Permission, UserPermissionPolicy, UserRole

if TYPE_CHECKING:
    from todoapp.config.models import PolicyConfig
    from todoapp.config.settings import TodoSettings

logger = logging.getLogger(__name__)


@dataclass
class PolicyRegistry:
    """Holds the transition and permission policies shared by all services."""

    transitions: TodoStatusTransitionPolicy = field(default_factory=TodoStatusTransitionPolicy)
    permissions: UserPermissionPolicy = field(default_factory=UserPermissionPolicy)

    @classmethod
    def from_config(cls, config: PolicyConfig) -> PolicyRegistry:
        """Build policies from defaults plus the sparse overrides in *config*."""
        registry = cls()
        for source, targets in config.transitions.items():
            status = TodoStatus.from_code(source)
            for target in registry.transitions.allowed_transitions(status):
                registry.transitions.remove_transition_rule(status, target)
            for target in targets:
                registry.transitions.add_transition_rule(status, TodoStatus.from_code(target))
        for role_code, granted in config.permissions.items():
            registry.permissions.add_role(
                UserRole.from_code(role_code),
                [Permission.from_name(name) for name in granted],
            )
        if config.transitions or config.permissions:
            logger.debug(
                "Policy overrides applied: %d statuses, %d roles",
                len(config.transitions),
                len(config.permissions),
            )
        return registry

    @classmethod
    def from_settings(cls, settings: TodoSettings) -> PolicyRegistry:
        return cls.from_config(settings.policy)
