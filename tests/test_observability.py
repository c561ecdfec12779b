import logging

import httpx
import pytest
import respx
from httpx import Response
from webtrends_sdk.api import WebTrendsApiClient
from webtrends_sdk.core.config import WebTrendsSettings
from webtrends_sdk.core.logging import LogfmtFormatter, setup_logging
from webtrends_sdk.core.observability import endpoint_of, log_event

URL = "https://ots.example.com/ots/api/rest-1.2/control/1234-alias"


def _api() -> WebTrendsApiClient:
    return WebTrendsApiClient(
        WebTrendsSettings(
            account_id="1234",
            key_token="secret",
            website_url="https://www.example.com",
            ots_base_url="https://ots.example.com",
        )
    )


def test_endpoint_of_strips_query():
    endpoint = endpoint_of(URL + "?keyToken=secret")
    assert endpoint == "/ots/api/rest-1.2/control/1234-alias"


@pytest.mark.asyncio
@respx.mock
async def test_call_logged_on_success(caplog):
    caplog.set_level(logging.INFO, logger="webtrends_sdk.observability")
    respx.post(URL).mock(return_value=Response(200, json={"guid": "g"}))

    async with _api() as api:
        await api.ots.control.get_project("alias")

    record = next(r for r in caplog.records if r.getMessage() == "ots_call")
    assert record.method == "POST"
    assert record.endpoint == "/ots/api/rest-1.2/control/1234-alias"
    assert record.status == 200
    assert record.success is True
    assert record.duration_ms >= 0
    assert "secret" not in caplog.text


@pytest.mark.asyncio
@respx.mock
async def test_call_logged_on_transport_failure(caplog):
    caplog.set_level(logging.INFO, logger="webtrends_sdk.observability")
    respx.post(URL).mock(side_effect=httpx.ConnectTimeout("boom"))

    async with _api() as api:
        resp = await api.ots.control.get_project("alias")

    assert resp.status_code == 0
    record = next(r for r in caplog.records if r.getMessage() == "ots_call")
    assert record.status == "exception"
    assert record.error_type == "ConnectTimeout"
    assert record.success is False


@pytest.mark.asyncio
@respx.mock
async def test_api_error_code_logged(caplog):
    caplog.set_level(logging.INFO, logger="webtrends_sdk.observability")
    respx.post(URL).mock(
        return_value=Response(
            200, json={"body": {"message": {"errorCode": 12, "errorMessage": "bad"}}}
        )
    )

    async with _api() as api:
        await api.ots.control.get_project("alias")

    record = next(r for r in caplog.records if r.getMessage() == "ots_call")
    assert record.error_code == 12
    assert record.success is False


def test_log_event_drops_reserved_keys(caplog):
    caplog.set_level(logging.INFO, logger="webtrends_sdk.observability")
    log_event("custom", name="clash", endpoint="/x")

    record = next(r for r in caplog.records if r.getMessage() == "custom")
    assert record.endpoint == "/x"
    assert record.name == "webtrends_sdk.observability"


def test_logfmt_formatter_renders_extras():
    record = logging.LogRecord(
        "webtrends_sdk.observability", logging.INFO, __file__, 1, "ots_call", None, None
    )
    record.method = "POST"
    record.endpoint = "/ots/api/rest-1.2/control/1234"
    record.status = 200
    record.success = True
    record.error_type = "Connect Error"

    line = LogfmtFormatter().format(record)
    assert line.startswith(
        "level=info logger=webtrends_sdk.observability event=ots_call"
    )
    assert "method=POST" in line
    assert "status=200" in line
    assert "success=true" in line
    assert 'error_type="Connect Error"' in line


def test_logfmt_formatter_renders_decode_failure_and_quotes_empty():
    record = logging.LogRecord(
        "webtrends_sdk.client",
        logging.DEBUG,
        __file__,
        1,
        "ots.decode_failed",
        None,
        None,
    )
    record.status = 200
    record.model = "Project"
    record.endpoint = ""

    line = LogfmtFormatter().format(record)
    assert line == (
        "level=debug logger=webtrends_sdk.client event=ots.decode_failed "
        'endpoint="" status=200 model=Project'
    )


def test_setup_logging_replaces_handlers():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        setup_logging("debug")
        setup_logging("warning")
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, LogfmtFormatter)
        assert root.level == logging.WARNING
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
