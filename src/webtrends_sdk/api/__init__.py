from .client import WebTrendsApiClient, create_client_from_env
from .control import ControlOperations, build_query
from .ots import OTS_BASE_PATH, OtsOperations

__all__ = [
    "WebTrendsApiClient",
    "create_client_from_env",
    "OtsOperations",
    "ControlOperations",
    "build_query",
    "OTS_BASE_PATH",
]
