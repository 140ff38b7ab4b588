"""Identifier value objects for todos and users.

Both ids wrap a database-assigned signed 64-bit integer. They accept the
integer itself or its decimal string form (path parameters, form fields).

INVARIANT: TodoId >= 1, UserId > 0. Ids never change once created.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar, Self

from todoapp.domain.errors import InvalidArgumentError, require
from todoapp.domain.result import Result

INT64_MAX = 2**63 - 1
INT64_MIN = -(2**63)

_DECIMAL = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True, order=True)
class _SequentialId:
    """Shared parsing and comparison for integer ids."""

    value: int

    LABEL: ClassVar[str] = "Id"
    MIN_VALUE: ClassVar[int] = 1
    MAX_VALUE: ClassVar[int] = INT64_MAX

    @classmethod
    def _below_minimum(cls, value: int) -> str:
        return f"{cls.LABEL} value must be at least {cls.MIN_VALUE}, but was: {value}"

    @classmethod
    def of(cls, raw: int | str | None) -> Result[Self]:
        """Validate *raw* and wrap it.

        Integers are bound-checked directly. Strings are trimmed, parsed as
        base-10 and then bound-checked the same way.

        Raises:
            InvalidArgumentError: If *raw* is neither ``int`` nor ``str``.
        """
        if raw is None:
            return Result.failure(f"{cls.LABEL} must not be None")
        if isinstance(raw, str):
            return cls._parse(raw)
        if isinstance(raw, bool) or not isinstance(raw, int):
            msg = f"{cls.LABEL} must be an int or str, got {type(raw).__name__}"
            raise InvalidArgumentError(msg)
        if raw < cls.MIN_VALUE:
            return Result.failure(cls._below_minimum(raw))
        if raw > cls.MAX_VALUE:
            return Result.failure(
                f"{cls.LABEL} value must be at most {cls.MAX_VALUE}, but was: {raw}"
            )
        return Result.success(cls(raw))

    @classmethod
    def _parse(cls, raw: str) -> Result[Self]:
        text = raw.strip()
        if not text:
            return Result.failure(f"{cls.LABEL} string must not be empty")
        if _DECIMAL.fullmatch(text) is None:
            return Result.failure(f"{cls.LABEL} string must be a valid number: {raw!r}")
        number = int(text)
        if not INT64_MIN <= number <= INT64_MAX:
            # Out of 64-bit range is a parse failure, not a bound failure.
            return Result.failure(f"{cls.LABEL} string must be a valid number: {raw!r}")
        return cls.of(number)

    def is_same_as(self, other: Self) -> bool:
        require(other, "Comparison target")
        return self == other

    def is_greater_than(self, other: Self) -> bool:
        require(other, "Comparison target")
        return self.value > other.value

    def is_less_than(self, other: Self) -> bool:
        require(other, "Comparison target")
        return self.value < other.value

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, order=True)
class TodoId(_SequentialId):
    """Identifier of a todo item (``>= 1``)."""

    LABEL: ClassVar[str] = "TodoId"
    MIN_VALUE: ClassVar[int] = 1


@dataclass(frozen=True, order=True)
class UserId(_SequentialId):
    """Identifier of a user account (``> 0``)."""

    LABEL: ClassVar[str] = "UserId"
    MIN_VALUE: ClassVar[int] = 1

    @classmethod
    def _below_minimum(cls, value: int) -> str:
        return f"{cls.LABEL} value must be positive (greater than 0), but was: {value}"
