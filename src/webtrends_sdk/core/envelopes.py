"""Uniform request and response envelopes shared by every operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, Optional, TypeVar
from urllib.parse import urlsplit

from .primitives import PathString, QueryString

if TYPE_CHECKING:
    from ..models import Error

TData = TypeVar("TData")

# Status code for failures that never produced an HTTP response.
TRANSPORT_FAILURE_STATUS = 0


@dataclass(frozen=True)
class WebTrendsRequest(Generic[TData]):
    """
    A request to a WebTrends API resource.
    ``data`` is the optional JSON payload; requests without one send no body.
    """

    method: str
    resource: PathString
    data: Optional[TData] = None
    query: Optional[QueryString] = None
    user_agent: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", self.method.upper())
        if not isinstance(self.resource, PathString):
            object.__setattr__(self, "resource", PathString(self.resource))

    @property
    def has_data(self) -> bool:
        return self.data is not None


@dataclass(frozen=True)
class WebTrendsResponse(Generic[TData]):
    """
    Outcome of a WebTrends call.
    - ``method``/``uri`` are always those of the attempted request.
    - ``status_code`` is 0 when no HTTP response was obtained.
    - ``request_content``/``response_content`` are only set when capture is enabled.
    """

    method: str
    uri: str
    success: bool
    status_code: int
    data: Optional[TData] = None
    error: Optional["Error"] = None
    request_content: Optional[str] = None
    response_content: Optional[str] = None

    def __post_init__(self) -> None:
        if self.success and self.error is not None:
            raise ValueError("A successful response cannot carry an error.")

    @property
    def has_data(self) -> bool:
        return self.data is not None

    @property
    def path_and_query(self) -> str:
        parts = urlsplit(self.uri)
        return parts.path + (f"?{parts.query}" if parts.query else "")

    def describe(self) -> str:
        text = str(self.status_code)
        if self.has_data:
            text += f" ({_type_label(self.data)})"
        text += f": {self.method} {self.path_and_query}"
        if self.error is not None:
            text += f" - {self.error.error_message}"
        return text

    def __str__(self) -> str:
        return self.describe()


def _type_label(data: object) -> str:
    if isinstance(data, list):
        inner = type(data[0]).__name__ if data else "object"
        return f"{inner}[]"
    return type(data).__name__


__all__ = [
    "WebTrendsRequest",
    "WebTrendsResponse",
    "TRANSPORT_FAILURE_STATUS",
]
