"""Transport-agnostic building blocks: settings, errors, envelopes, primitives."""

from .config import (
    CONFIGURATION_SECTION,
    DEFAULT_OTS_BASE_URL,
    WebTrendsSettings,
    load_settings,
)
from .enums import CookieType, State
from .envelopes import TRANSPORT_FAILURE_STATUS, WebTrendsRequest, WebTrendsResponse
from .errors import ArgumentError, ConfigurationError, WebTrendsError
from .lazy import Lazy
from .logging import LogfmtFormatter, setup_logging
from .observability import log_event
from .primitives import EMPTY_QUERY, PathString, QueryString, QueryStringBuilder

__all__ = [
    # Settings
    "WebTrendsSettings",
    "load_settings",
    "DEFAULT_OTS_BASE_URL",
    "CONFIGURATION_SECTION",
    "State",
    "CookieType",
    # Errors
    "WebTrendsError",
    "ConfigurationError",
    "ArgumentError",
    # Envelopes
    "WebTrendsRequest",
    "WebTrendsResponse",
    "TRANSPORT_FAILURE_STATUS",
    # Primitives
    "PathString",
    "QueryString",
    "QueryStringBuilder",
    "EMPTY_QUERY",
    "Lazy",
    # Logging
    "setup_logging",
    "LogfmtFormatter",
    "log_event",
]
