import json
import logging
import time
from enum import Enum
from functools import lru_cache
from typing import (
    Any,
    Callable,
    List,
    Mapping,
    Optional,
    Tuple,
    Type,
    TypeVar,
)
from urllib.parse import urlsplit

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from .core.config import WebTrendsSettings
from .core.envelopes import (
    TRANSPORT_FAILURE_STATUS,
    WebTrendsRequest,
    WebTrendsResponse,
)
from .core.errors import ArgumentError, ConfigurationError
from .core.lazy import Lazy
from .core.observability import endpoint_of, log_event
from .core.primitives import PathString
from .models import Error, OtsResponse

T = TypeVar("T", bound=OtsResponse)
F = TypeVar("F")

# (success, data, error) produced by a decode strategy
Outcome = Tuple[bool, Any, Optional[Error]]
Decoder = Callable[[httpx.Response], Outcome]


@lru_cache(maxsize=None)
def _list_adapter(model: Type[OtsResponse]) -> TypeAdapter:
    return TypeAdapter(List[model])  # type: ignore[valid-type]


def _json_default(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def serialize_payload(data: Any) -> bytes:
    """
    Encode a request payload as compact JSON.
    Enum values render lowercase and None fields are omitted.
    """
    if isinstance(data, BaseModel):
        return data.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")
    if isinstance(data, Mapping):
        data = {k: v for k, v in data.items() if v is not None}
    return json.dumps(data, default=_json_default, separators=(",", ":")).encode(
        "utf-8"
    )


class ApiClient:
    """
    Request/response pipeline for the WebTrends OTS API.
    - Builds HTTP requests from WebTrendsRequest envelopes
    - Never raises for remote outcomes: HTTP errors, API errors embedded in
      bodies and transport failures all come back as WebTrendsResponse
    - Task cancellation is not intercepted and propagates to the caller
    """

    def __init__(
        self,
        settings: WebTrendsSettings,
        *,
        http: Optional[httpx.AsyncClient] = None,
        logger: Optional[logging.Logger] = None,
    ):
        if settings is None:
            raise ArgumentError("settings", "must be provided")
        self._settings = settings.validate()

        base = urlsplit(settings.ots_base_url.strip())
        if not base.scheme or not base.netloc:
            raise ConfigurationError(
                ["ots_base_url"],
                f"ots_base_url must be an absolute URL: {settings.ots_base_url!r}",
            )
        self._origin = f"{base.scheme}://{base.netloc}"
        self._base_path = PathString(base.path)

        self.log = logger or logging.getLogger("webtrends_sdk.client")

        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(
            headers={"Accept": "application/json"},
        )

    @property
    def settings(self) -> WebTrendsSettings:
        return self._settings

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # --- Send and fetch ---

    async def send(self, request: WebTrendsRequest) -> WebTrendsResponse[None]:
        """Send ``request``; the response carries no data."""
        return await self._execute(request, self._decode_empty)

    async def fetch_single(
        self, request: WebTrendsRequest, model: Type[T]
    ) -> WebTrendsResponse[T]:
        """Send ``request`` and decode the body as a single ``model``."""
        return await self._execute(request, self._single_decoder(model))

    async def fetch_many(
        self, request: WebTrendsRequest, model: Type[T]
    ) -> WebTrendsResponse[List[T]]:
        """
        Send ``request`` and decode the body as a JSON array of ``model``.
        The embedded API error, if any, is read from the first element.
        """
        return await self._execute(request, self._many_decoder(model))

    async def _execute(
        self, request: WebTrendsRequest, decode: Decoder
    ) -> WebTrendsResponse:
        if request is None:
            raise ArgumentError("request", "must be provided")

        uri = self._unencoded_uri(request)
        request_content: Optional[str] = None
        http_resp: Optional[httpx.Response] = None
        start = time.perf_counter()

        try:
            uri = self.resolve_uri(request)
            http_req = self.build_http_request(request)
            request_content = self._capture_request_content(http_req)

            http_resp = await self.http.send(http_req)
            success, data, error = decode(http_resp)

            response = WebTrendsResponse(
                method=request.method,
                uri=uri,
                success=success,
                status_code=http_resp.status_code,
                data=data,
                error=error,
                request_content=request_content,
                response_content=self._capture_response_content(http_resp),
            )
        except Exception as exc:
            log_event(
                "ots_call",
                method=request.method,
                endpoint=endpoint_of(uri),
                status="exception",
                duration_ms=int((time.perf_counter() - start) * 1000),
                success=False,
                error_type=type(exc).__name__,
            )
            return WebTrendsResponse(
                method=request.method,
                uri=uri,
                success=False,
                status_code=TRANSPORT_FAILURE_STATUS,
                error=Error.from_exception(exc),
                request_content=request_content,
                response_content=self._capture_response_content(http_resp),
            )

        log_event(
            "ots_call",
            method=request.method,
            endpoint=endpoint_of(uri),
            status=response.status_code,
            duration_ms=int((time.perf_counter() - start) * 1000),
            success=response.success,
            error_code=(
                response.error.error_code if response.error is not None else None
            ),
        )
        return response

    # --- Preprocessing ---

    def resolve_uri(self, request: WebTrendsRequest) -> str:
        """Absolute URI: base URL + resource path + query string."""
        path = self._base_path + request.resource
        uri = self._origin + (path.to_uri_component() or "/")
        if request.query is not None:
            uri += request.query.to_uri_component()
        return uri

    def _unencoded_uri(self, request: WebTrendsRequest) -> str:
        # Stands in for the URI when encoding it fails; omits the query.
        return self._origin + ((self._base_path + request.resource).value or "/")

    def build_http_request(self, request: WebTrendsRequest) -> httpx.Request:
        headers = {}
        # Only override the transport's User-Agent when the caller supplies one.
        if request.user_agent:
            headers["User-Agent"] = request.user_agent

        content: Optional[bytes] = None
        if request.has_data:
            content = serialize_payload(request.data)
            headers["Content-Type"] = "application/json"

        return self.http.build_request(
            request.method,
            self.resolve_uri(request),
            headers=headers,
            content=content,
        )

    # --- Postprocessing ---

    def _decode_empty(self, resp: httpx.Response) -> Outcome:
        if resp.is_success:
            return True, None, None
        return False, None, self._read_error(resp)

    def _single_decoder(self, model: Type[T]) -> Decoder:
        def decode(resp: httpx.Response) -> Outcome:
            if not resp.is_success:
                return False, None, self._read_error(resp)

            data: Optional[T] = None
            if resp.content:
                try:
                    data = model.model_validate_json(resp.content)
                except ValidationError as exc:
                    self._log_decode_failure(resp, model, exc)

            error = data.embedded_error if data is not None else None
            return error is None, data, error

        return decode

    def _many_decoder(self, model: Type[T]) -> Decoder:
        def decode(resp: httpx.Response) -> Outcome:
            if not resp.is_success:
                return False, None, self._read_error(resp)

            data: List[T] = []
            if resp.content:
                try:
                    data = _list_adapter(model).validate_json(resp.content) or []
                except ValidationError as exc:
                    self._log_decode_failure(resp, model, exc)

            error = data[0].embedded_error if data else None
            return error is None, data, error

        return decode

    def _read_error(self, resp: httpx.Response) -> Optional[Error]:
        if not resp.content:
            return None
        try:
            return OtsResponse.model_validate_json(resp.content).embedded_error
        except ValidationError as exc:
            self._log_decode_failure(resp, OtsResponse, exc)
            return None

    def _log_decode_failure(
        self, resp: httpx.Response, model: type, exc: ValidationError
    ) -> None:
        self.log.debug(
            "ots.decode_failed",
            extra={
                "endpoint": resp.request.url.path,
                "status": resp.status_code,
                "error_type": type(exc).__name__,
                "model": model.__name__,
            },
        )

    def _capture_request_content(self, http_req: httpx.Request) -> Optional[str]:
        if not self._settings.capture_request_content or not http_req.content:
            return None
        return http_req.content.decode("utf-8", errors="replace")

    def _capture_response_content(
        self, http_resp: Optional[httpx.Response]
    ) -> Optional[str]:
        if not self._settings.capture_response_content or http_resp is None:
            return None
        if not http_resp.content:
            return None
        return http_resp.content.decode(http_resp.encoding or "utf-8", errors="replace")

    # --- Sub-resources ---

    def defer(self, factory: Callable[["ApiClient"], F]) -> Lazy[F]:
        """Wrap ``factory`` in an initialize-once cell bound to this client."""
        return Lazy(lambda: factory(self))


__all__ = ["ApiClient", "serialize_payload"]
