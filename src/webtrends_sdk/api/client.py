from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import httpx

from ..client import ApiClient
from ..core.config import WebTrendsSettings, load_settings
from .ots import OTS_BASE_PATH, OtsOperations


class WebTrendsApiClient(ApiClient):
    """
    Entry point for the WebTrends API.

        async with WebTrendsApiClient(settings) as api:
            resp = await api.ots.control.get_project("my_alias")
            if resp.success:
                ...
    """

    def __init__(
        self,
        settings: WebTrendsSettings,
        *,
        http: Optional[httpx.AsyncClient] = None,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(settings, http=http, logger=logger)
        self._ots = self.defer(lambda c: OtsOperations(OTS_BASE_PATH, c))

    @property
    def ots(self) -> OtsOperations:
        return self._ots.value

    @classmethod
    def from_env(
        cls, *, use_dotenv: bool = True, **kwargs: Any
    ) -> "WebTrendsApiClient":
        return cls(load_settings(use_dotenv=use_dotenv), **kwargs)

    @classmethod
    def from_mapping(
        cls, mapping: Mapping[str, Any], **kwargs: Any
    ) -> "WebTrendsApiClient":
        return cls(load_settings(mapping), **kwargs)


def create_client_from_env(**kwargs: Any) -> WebTrendsApiClient:
    """Create a WebTrendsApiClient from WEBTRENDS_* environment variables."""
    return WebTrendsApiClient.from_env(**kwargs)


__all__ = ["WebTrendsApiClient", "create_client_from_env"]
