"""Path and query string value types used to compose request URIs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple, Union
from urllib.parse import quote, urlencode

from .errors import ArgumentError

_PATH_SAFE = "/:@-._~!$&'()*+,;="


def _normalize_path(value: str) -> str:
    trimmed = (value or "").strip().strip("/")
    return f"/{trimmed}" if trimmed else ""


@dataclass(frozen=True)
class PathString:
    """
    Normalized relative path: a single leading slash, no trailing slash,
    empty string for the root.
    PathString("a/") + PathString("/b") == PathString("a/b")
    """

    value: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _normalize_path(self.value))

    def __add__(self, other: Union["PathString", str]) -> "PathString":
        other_value = other.value if isinstance(other, PathString) else other
        other_value = _normalize_path(other_value)
        if not self.value:
            return PathString(other_value)
        if not other_value:
            return self
        return PathString(self.value + other_value)

    def __bool__(self) -> bool:
        return bool(self.value)

    def __str__(self) -> str:
        return self.value

    def to_uri_component(self) -> str:
        return quote(self.value, safe=_PATH_SAFE)


def _render_value(value: Any) -> str:
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


@dataclass(frozen=True)
class QueryString:
    """Immutable, ordered set of query parameters; may be empty."""

    pairs: Tuple[Tuple[str, str], ...] = ()

    @classmethod
    def create(cls, name: str, value: Any) -> "QueryString":
        if not name:
            raise ArgumentError("name", "query parameter name must not be empty")
        return cls(((name, _render_value(value)),))

    @property
    def has_value(self) -> bool:
        return bool(self.pairs)

    def __add__(self, other: Optional["QueryString"]) -> "QueryString":
        if other is None:
            return self
        return QueryString(self.pairs + other.pairs)

    def __bool__(self) -> bool:
        return self.has_value

    def __str__(self) -> str:
        return self.to_uri_component()

    def to_uri_component(self) -> str:
        """Render as ``?a=1&b=2``; empty string when there are no parameters."""
        if not self.pairs:
            return ""
        return "?" + urlencode(self.pairs, quote_via=quote)


EMPTY_QUERY = QueryString()


class QueryStringBuilder:
    def __init__(self, qs: Optional[QueryString] = None):
        self._qs = qs if qs is not None else EMPTY_QUERY

    def add_parameter(self, name: str, value: Any) -> "QueryStringBuilder":
        """Append ``name=value``; a None value is skipped."""
        if not name:
            raise ArgumentError("name", "query parameter name must not be empty")
        if value is not None:
            self._qs = self._qs + QueryString.create(name, value)
        return self

    def build(self) -> QueryString:
        return self._qs

    @property
    def has_query(self) -> bool:
        return self._qs.has_value


__all__ = ["PathString", "QueryString", "QueryStringBuilder", "EMPTY_QUERY"]
