from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

from dotenv import load_dotenv

from .enums import State
from .errors import ConfigurationError

DEFAULT_OTS_BASE_URL = "https://ots.webtrends-optimize.com"
CONFIGURATION_SECTION = "WebTrends"

REQUIRED_FIELDS = ("account_id", "ots_base_url", "key_token", "website_url")

# Structured configuration key -> settings field
_MAPPING_KEYS = {
    "AccountId": "account_id",
    "KeyToken": "key_token",
    "WebsiteUrl": "website_url",
    "OtsBaseUrl": "ots_base_url",
    "Debug": "debug",
    "Encrypted": "encrypted",
    "Track": "track",
    "CaptureRequestContent": "capture_request_content",
    "CaptureResponseContent": "capture_response_content",
    "State": "state",
}

_ENV_PREFIX = "WEBTRENDS_"

_TRUE = {"1", "true", "t", "yes", "y", "on"}
_FALSE = {"0", "false", "f", "no", "n", "off"}


def _parse_bool(raw: Any, default: bool) -> bool:
    """Parse a bool-ish value with a safe default."""
    if raw is None:
        return default
    if isinstance(raw, bool):
        return raw
    val = str(raw).strip().lower()
    if val in _TRUE:
        return True
    if val in _FALSE:
        return False
    return default


def _parse_state(raw: Any) -> State:
    if raw is None or raw == "":
        return State.NORMAL
    if isinstance(raw, State):
        return raw
    try:
        return State(str(raw))
    except ValueError as exc:
        raise ConfigurationError(
            ["state"], f"Unknown WebTrends state: {raw!r}"
        ) from exc


@dataclass(frozen=True)
class WebTrendsSettings:
    """Settings for the WebTrends OTS API."""

    account_id: str = ""
    key_token: str = ""
    website_url: str = ""
    ots_base_url: str = DEFAULT_OTS_BASE_URL
    debug: bool = False
    encrypted: bool = True
    track: bool = True
    capture_request_content: bool = False
    capture_response_content: bool = False
    state: State = State.NORMAL

    def validate(self) -> "WebTrendsSettings":
        """Raise ConfigurationError listing every missing required field."""
        missing = [
            name
            for name in REQUIRED_FIELDS
            if not (getattr(self, name) or "").strip()
        ]
        if missing:
            raise ConfigurationError(missing)
        return self

    @classmethod
    def from_mapping(
        cls, mapping: Mapping[str, Any], *, section: str = CONFIGURATION_SECTION
    ) -> "WebTrendsSettings":
        """
        Bind settings from structured configuration.
        Accepts either the section itself or a root mapping holding it.
        Unknown keys are ignored; binding does not validate.
        """
        source = mapping.get(section, mapping) if section else mapping
        if not isinstance(source, Mapping):
            source = {}

        values: dict[str, Any] = {}
        for key, name in _MAPPING_KEYS.items():
            if key in source:
                values[name] = source[key]
        return cls._coerce(values)

    @classmethod
    def from_env(cls, *, use_dotenv: bool = True) -> "WebTrendsSettings":
        """Load settings from WEBTRENDS_* environment variables (optional .env)."""
        if use_dotenv:
            load_dotenv()
        values: dict[str, Any] = {}
        for f in fields(cls):
            raw = os.getenv(_ENV_PREFIX + f.name.upper())
            if raw is not None and raw.strip() != "":
                values[f.name] = raw.strip()
        return cls._coerce(values)

    @classmethod
    def _coerce(cls, values: Mapping[str, Any]) -> "WebTrendsSettings":
        defaults = cls()
        kwargs: dict[str, Any] = {}
        for f in fields(cls):
            if f.name not in values:
                continue
            raw = values[f.name]
            if f.name == "state":
                kwargs[f.name] = _parse_state(raw)
            elif isinstance(getattr(defaults, f.name), bool):
                kwargs[f.name] = _parse_bool(raw, getattr(defaults, f.name))
            else:
                kwargs[f.name] = "" if raw is None else str(raw).strip()
        return cls(**kwargs)


def load_settings(
    mapping: Optional[Mapping[str, Any]] = None, *, use_dotenv: bool = True
) -> WebTrendsSettings:
    """Bind and validate settings from a mapping, or from the environment."""
    if mapping is not None:
        settings = WebTrendsSettings.from_mapping(mapping)
    else:
        settings = WebTrendsSettings.from_env(use_dotenv=use_dotenv)
    return settings.validate()


__all__ = [
    "WebTrendsSettings",
    "load_settings",
    "DEFAULT_OTS_BASE_URL",
    "CONFIGURATION_SECTION",
    "REQUIRED_FIELDS",
]
