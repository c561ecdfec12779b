from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from ..core.config import WebTrendsSettings
from ..core.enums import State
from ..core.envelopes import WebTrendsRequest, WebTrendsResponse
from ..core.errors import ArgumentError
from ..core.primitives import PathString, QueryString, QueryStringBuilder
from ..models import OtsRequest, Project

if TYPE_CHECKING:
    from ..client import ApiClient


def build_query(settings: WebTrendsSettings) -> QueryString:
    """Query parameters shared by every control operation."""
    return (
        QueryStringBuilder()
        .add_parameter("debug", settings.debug)
        .add_parameter("_wt.encrypted", settings.encrypted)
        .add_parameter("_wt.track", settings.track)
        .add_parameter("keyToken", settings.key_token)
        .build()
    )


class ControlOperations:
    """Operations for ``/ots/api/rest-1.2/control``."""

    def __init__(self, path: PathString, client: "ApiClient"):
        self._path = path
        self._client = client

    @property
    def path(self) -> PathString:
        return self._path

    async def get_project(
        self,
        project_alias: str,
        *,
        website_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        state: Optional[State] = None,
    ) -> WebTrendsResponse[Project]:
        """
        Get a project by alias.
        HTTP POST /ots/api/rest-1.2/control/{accountId}-{alias}
        """
        if not project_alias:
            raise ArgumentError("project_alias", "must not be empty")

        settings = self._client.settings
        request = WebTrendsRequest(
            "POST",
            self._path + f"/{settings.account_id}-{project_alias}",
            data=self.create_ots_request(website_url, state),
            query=build_query(settings),
            user_agent=user_agent,
        )
        return await self._client.fetch_single(request, Project)

    async def get_projects(
        self,
        *,
        website_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        state: Optional[State] = None,
    ) -> WebTrendsResponse[List[Project]]:
        """
        Get every project for the account.
        HTTP POST /ots/api/rest-1.2/control/{accountId}
        """
        settings = self._client.settings
        request = WebTrendsRequest(
            "POST",
            self._path + f"/{settings.account_id}",
            data=self.create_ots_request(website_url, state),
            query=build_query(settings),
            user_agent=user_agent,
        )
        return await self._client.fetch_many(request, Project)

    def create_ots_request(
        self, website_url: Optional[str], state: Optional[State]
    ) -> OtsRequest:
        # Caller overrides win; settings supply the defaults.
        settings = self._client.settings
        return OtsRequest(
            url=website_url if website_url else settings.website_url,
            state=self._coerce_state(state) or settings.state,
        )

    @staticmethod
    def _coerce_state(state: Optional[State]) -> Optional[State]:
        if state is None:
            return None
        try:
            return State(state)
        except ValueError as exc:
            raise ArgumentError("state", f"unknown state: {state!r}") from exc


__all__ = ["ControlOperations", "build_query"]
