from typing import Iterable, Optional


class WebTrendsError(Exception):
    """Base error for failures raised (not returned) by the SDK."""


class ConfigurationError(WebTrendsError, ValueError):
    """Raised when required settings are missing, empty or malformed."""

    def __init__(self, missing: Iterable[str], message: Optional[str] = None):
        self.missing = tuple(missing)
        super().__init__(
            message
            or "WebTrends settings are missing required values: "
            + ", ".join(self.missing)
        )


class ArgumentError(WebTrendsError, ValueError):
    """Raised when an operation argument is invalid, before any network call."""

    def __init__(self, argument: str, message: str):
        self.argument = argument
        super().__init__(f"{argument}: {message}")


__all__ = ["WebTrendsError", "ConfigurationError", "ArgumentError"]
