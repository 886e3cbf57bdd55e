from __future__ import annotations

from enum import Enum
from typing import Optional


class DependencyType(str, Enum):
    FINISH_TO_START = "FS"
    FINISH_TO_FINISH = "FF"
    START_TO_START = "SS"
    START_TO_FINISH = "SF"

    @classmethod
    def from_code(cls, value) -> Optional["DependencyType"]:
        """Exact lookup: ``"SS"`` is a member, ``"ss"`` and ``" SS "`` are not."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                return None
        return None

    @classmethod
    def coerce(cls, value) -> Optional["DependencyType"]:
        """Lenient lookup for user input: trims and upper-cases before matching."""
        if isinstance(value, str):
            value = value.strip().upper()
        return cls.from_code(value)


__all__ = ["DependencyType"]
