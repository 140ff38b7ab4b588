"""Todo content value objects: title and description.

Validation order for every factory: presence, trim, length, characters.
Length failures report both the limit and the actual trimmed length.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from typing import ClassVar, Self

from todoapp.domain.errors import require
from todoapp.domain.result import Result

# Control characters allowed inside a title.
_ALLOWED_CONTROLS = frozenset("\t\n\r")


def _has_invalid_title_char(text: str) -> bool:
    """True if *text* holds a control char (other than tab/LF/CR) or an "other symbol"."""
    for ch in text:
        category = unicodedata.category(ch)
        if category == "Cc" and ch not in _ALLOWED_CONTROLS:
            return True
        if category == "So":
            return True
    return False


@dataclass(frozen=True)
class TodoTitle:
    """Title of a todo item, trimmed and 1 to 255 characters long."""

    value: str

    MIN_LENGTH: ClassVar[int] = 1
    MAX_LENGTH: ClassVar[int] = 255

    @classmethod
    def of(cls, raw: str | None) -> Result[Self]:
        if raw is None:
            return Result.failure("Todo title is required")

        normalized = raw.strip()
        if not normalized:
            return Result.failure("Todo title must not be empty")
        if len(normalized) < cls.MIN_LENGTH:
            return Result.failure(f"Todo title must be at least {cls.MIN_LENGTH} characters")
        if len(normalized) > cls.MAX_LENGTH:
            return Result.failure(
                f"Todo title must be at most {cls.MAX_LENGTH} characters "
                f"(actual: {len(normalized)})"
            )
        if _has_invalid_title_char(normalized):
            return Result.failure("Todo title contains invalid characters")

        return Result.success(cls(normalized))

    def length(self) -> int:
        return len(self.value)

    def contains(self, text: str) -> bool:
        """Case-insensitive substring match."""
        require(text, "Search text")
        return text.lower() in self.value.lower()

    def starts_with(self, prefix: str) -> bool:
        """Case-insensitive prefix match."""
        require(prefix, "Prefix")
        return self.value.lower().startswith(prefix.lower())

    def contains_all_keywords(self, *keywords: str | None) -> bool:
        """True if every non-``None`` keyword occurs in the title (AND search).

        No keywords at all matches everything.
        """
        lowered = self.value.lower()
        return all(kw.lower() in lowered for kw in keywords if kw is not None)

    def is_same_as(self, other: TodoTitle) -> bool:
        require(other, "Comparison target")
        return self == other

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TodoDescription:
    """Optional free-text description of a todo item.

    ``None`` or whitespace-only input means "no description".
    """

    text: str | None = None

    MAX_LENGTH: ClassVar[int] = 1000

    @classmethod
    def empty(cls) -> TodoDescription:
        return cls(None)

    @classmethod
    def of(cls, raw: str | None) -> Result[Self]:
        if raw is None or not raw.strip():
            return Result.success(cls(None))

        trimmed = raw.strip()
        if len(trimmed) > cls.MAX_LENGTH:
            return Result.failure(
                f"Todo description must be at most {cls.MAX_LENGTH} characters "
                f"(actual: {len(trimmed)})"
            )
        return Result.success(cls(trimmed))

    def has_value(self) -> bool:
        return bool(self.text)

    @property
    def value(self) -> str | None:
        """The description text, or ``None`` when absent."""
        return self.text if self.has_value() else None

    def value_or_default(self, default: str) -> str:
        require(default, "Default value")
        return self.text if self.text else default

    def length(self) -> int:
        return len(self.text) if self.text else 0

    def contains(self, text: str) -> bool:
        require(text, "Search text")
        if not self.text:
            return False
        return text.lower() in self.text.lower()

    def is_same_as(self, other: TodoDescription) -> bool:
        require(other, "Comparison target")
        return self == other

    def __str__(self) -> str:
        return self.text or ""
