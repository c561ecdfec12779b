from enum import Enum


class LowercaseEnum(str, Enum):
    """String enum whose wire form is its lowercase name.

    Lookup is case-insensitive, so ``State("NORMAL")`` and ``State("normal")``
    both resolve.
    """

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return None

    def __str__(self) -> str:
        return self.value


class State(LowercaseEnum):
    """Controls which tests apply to a visitor (sent as ``s_mode``)."""

    NORMAL = "normal"
    STAGING = "staging"


class CookieType(LowercaseEnum):
    PERSISTED = "persisted"
    SESSION = "session"


__all__ = ["LowercaseEnum", "State", "CookieType"]
