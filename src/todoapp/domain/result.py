"""Result — explicit success/failure container for recoverable errors.

INVARIANT: exactly one of value/error is populated. A success never holds
``None``; a failure always holds a non-blank message.

Validation failures flow through ``map``/``flat_map`` chains as values and
are never raised. Misuse of the container itself (``None`` arguments,
reading the value of a failure) raises immediately.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from todoapp.domain.errors import InvalidArgumentError, UnwrapError, require

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, eq=False, repr=False)
class Result(Generic[T]):
    """Success carrying a value, or failure carrying an error message.

    Construct via :meth:`success` and :meth:`failure` only.
    """

    _ok: bool
    _value: T | None = None
    _error: str | None = None

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def success(cls, value: T) -> Result[T]:
        if value is None:
            msg = "Success value must not be None"
            raise InvalidArgumentError(msg)
        return cls(True, value, None)

    @classmethod
    def failure(cls, message: str) -> Result[Any]:
        require(message, "Error message")
        if not message.strip():
            msg = "Error message must not be empty"
            raise InvalidArgumentError(msg)
        return cls(False, None, message)

    # ------------------------------------------------------------------
    # State probes and accessors
    # ------------------------------------------------------------------

    @property
    def is_success(self) -> bool:
        return self._ok

    @property
    def is_failure(self) -> bool:
        return not self._ok

    @property
    def value(self) -> T:
        """The success value.

        Raises:
            UnwrapError: If this is a failure.
        """
        if not self._ok:
            msg = f"Cannot get value from failure result: {self._error}"
            raise UnwrapError(msg)
        return self._value  # type: ignore[return-value]

    @property
    def value_optional(self) -> T | None:
        """The success value, or ``None`` for a failure."""
        return self._value if self._ok else None

    @property
    def error_message(self) -> str | None:
        """The failure message, or ``None`` for a success."""
        return None if self._ok else self._error

    # ------------------------------------------------------------------
    # Combinators
    # ------------------------------------------------------------------

    def map(self, fn: Callable[[T], U]) -> Result[U]:
        """Transform the success value with *fn*.

        A ``None`` return or an exception from *fn* turns into a failure.
        Failures pass through without calling *fn*.
        """
        require(fn, "Mapper function")
        if not self._ok:
            return Result.failure(self._error)  # type: ignore[arg-type]
        try:
            mapped = fn(self._value)  # type: ignore[arg-type]
        except Exception as exc:
            return Result.failure(f"Mapping failed: {exc}")
        if mapped is None:
            return Result.failure("Mapped value must not be null")
        return Result.success(mapped)

    def flat_map(self, fn: Callable[[T], Result[U]]) -> Result[U]:
        """Chain another Result-returning step onto a success."""
        require(fn, "Mapper function")
        if not self._ok:
            return Result.failure(self._error)  # type: ignore[arg-type]
        try:
            result = fn(self._value)  # type: ignore[arg-type]
        except Exception as exc:
            return Result.failure(f"FlatMapping failed: {exc}")
        if result is None:
            return Result.failure("Mapped result must not be null")
        if not isinstance(result, Result):
            return Result.failure(f"Mapped result must be a Result (got {type(result).__name__})")
        return result

    def on_success(self, action: Callable[[T], Any]) -> Result[T]:
        require(action, "Action")
        if self._ok:
            action(self._value)  # type: ignore[arg-type]
        return self

    def on_failure(self, action: Callable[[str], Any]) -> Result[T]:
        require(action, "Action")
        if not self._ok:
            action(self._error)  # type: ignore[arg-type]
        return self

    def or_else(self, default: T) -> T:
        require(default, "Default value")
        return self._value if self._ok else default  # type: ignore[return-value]

    def or_else_get(self, supplier: Callable[[], T]) -> T:
        require(supplier, "Default supplier")
        return self._value if self._ok else supplier()  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Value semantics
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Result):
            return NotImplemented
        if self._ok != other._ok:
            return False
        if self._ok:
            return bool(self._value == other._value)
        return self._error == other._error

    def __hash__(self) -> int:
        if self._ok:
            return hash((True, self._value))
        return hash((False, self._error))

    def __repr__(self) -> str:
        if self._ok:
            return f"Result.success({self._value!r})"
        return f"Result.failure({self._error!r})"
