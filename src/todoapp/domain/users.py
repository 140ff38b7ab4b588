"""User name value object."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar, Self

from todoapp.domain.errors import require
from todoapp.domain.result import Result

# ASCII alphanumerics, underscore, hyphen, plus the Hiragana, Katakana and
# Han scripts (iteration marks and half-width katakana included).
_VALID_NAME = re.compile(
    r"[a-zA-Z0-9_\-"
    r"\u3040-\u309f"  # Hiragana
    r"\u30a0-\u30ff"  # Katakana
    r"\u31f0-\u31ff"  # Katakana Phonetic Extensions
    r"\uff66-\uff9d"  # Half-width katakana
    r"\u2e80-\u2fdf"  # CJK and Kangxi radicals
    r"\u3005\u3007"  # ideographic iteration mark, ideographic zero
    r"\u3021-\u3029\u3038-\u303b"  # Hangzhou numerals
    r"\u3400-\u4dbf"  # CJK Unified Ideographs Extension A
    r"\u4e00-\u9fff"  # CJK Unified Ideographs
    r"\uf900-\ufaff"  # CJK Compatibility Ideographs
    r"\U00020000-\U0003134f"  # Supplementary ideographic planes
    r"]+"
)


@dataclass(frozen=True)
class UserName:
    """Display/login name of a user account (3 to 100 characters)."""

    value: str

    MIN_LENGTH: ClassVar[int] = 3
    MAX_LENGTH: ClassVar[int] = 100

    @classmethod
    def of(cls, raw: str | None) -> Result[Self]:
        if raw is None:
            return Result.failure("User name is required")

        trimmed = raw.strip()
        if not trimmed:
            return Result.failure("User name must not be empty")
        if len(trimmed) < cls.MIN_LENGTH:
            return Result.failure(
                f"User name must be at least {cls.MIN_LENGTH} characters "
                f"(actual: {len(trimmed)})"
            )
        if len(trimmed) > cls.MAX_LENGTH:
            return Result.failure(
                f"User name must be at most {cls.MAX_LENGTH} characters "
                f"(actual: {len(trimmed)})"
            )
        if _VALID_NAME.fullmatch(trimmed) is None:
            return Result.failure(
                "User name may only contain letters, digits, underscores, "
                "hyphens and Japanese characters"
            )
        if trimmed[0] in "-_":
            return Result.failure("User name must not start with a hyphen or underscore")

        return Result.success(cls(trimmed))

    def length(self) -> int:
        return len(self.value)

    def contains(self, text: str) -> bool:
        """Case-insensitive substring match."""
        require(text, "Search text")
        return text.lower() in self.value.lower()

    def is_same_as(self, other: UserName) -> bool:
        require(other, "Comparison target")
        return self == other

    def __str__(self) -> str:
        return self.value
