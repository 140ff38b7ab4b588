"""BaseService — abstract foundation for all todoapp services.

Every service receives the :class:`PolicyRegistry` at construction time,
so all services in a process consult the same rule tables.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from todoapp.services.result import ServiceResult

if TYPE_CHECKING:
    from todoapp.domain.result import Result
    from todoapp.services.registry import PolicyRegistry

logger = logging.getLogger(__name__)


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class ValidationService(BaseService):
            def validate(self, kind: str, raw: str) -> ServiceResult:
                ...
    """

    def __init__(self, registry: PolicyRegistry) -> None:
        self._registry = registry

    @staticmethod
    def _validation_failed(op: str, result: Result[object], **detail: object) -> ServiceResult:
        """Convert a failed domain Result into a VALIDATION_FAILED ServiceResult."""
        message = result.error_message or "Validation failed"
        logger.debug("%s rejected input: %s", op, message)
        return ServiceResult.fail(op, "VALIDATION_FAILED", message, **detail)
