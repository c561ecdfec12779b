"""webtrends_sdk package exports."""

from .api import ControlOperations, OtsOperations, WebTrendsApiClient
from .api.client import create_client_from_env
from .client import ApiClient, serialize_payload
from .core import (
    TRANSPORT_FAILURE_STATUS,
    ArgumentError,
    ConfigurationError,
    CookieType,
    PathString,
    QueryString,
    QueryStringBuilder,
    State,
    WebTrendsError,
    WebTrendsRequest,
    WebTrendsResponse,
    WebTrendsSettings,
    load_settings,
    setup_logging,
)
from .models import (
    Body,
    Cookie,
    Error,
    Factor,
    OtsRequest,
    OtsResponse,
    Parameters,
    Project,
    ProjectBody,
)

__all__ = [
    # Clients
    "WebTrendsApiClient",
    "ApiClient",
    "OtsOperations",
    "ControlOperations",
    "create_client_from_env",
    # Settings
    "WebTrendsSettings",
    "load_settings",
    "State",
    # Exceptions
    "WebTrendsError",
    "ConfigurationError",
    "ArgumentError",
    # Envelopes and primitives
    "WebTrendsRequest",
    "WebTrendsResponse",
    "TRANSPORT_FAILURE_STATUS",
    "PathString",
    "QueryString",
    "QueryStringBuilder",
    "serialize_payload",
    # Models
    "Project",
    "ProjectBody",
    "Body",
    "Factor",
    "Cookie",
    "CookieType",
    "Parameters",
    "Error",
    "OtsResponse",
    "OtsRequest",
    # Logging
    "setup_logging",
]
