import json
from pathlib import Path

import pytest
from webtrends_sdk.core.errors import ArgumentError
from webtrends_sdk.models import (
    CookieType,
    Error,
    OtsRequest,
    OtsResponse,
    Project,
    State,
)


def load_fixture(name: str) -> dict:
    p = Path(__file__).parent / "fixtures" / name
    with open(p, encoding="utf-8") as f:
        return json.load(f)


def test_project_parses_wire_names():
    project = Project.model_validate(load_fixture("project.json"))

    assert project.op_code == "control"
    assert project.op_status == "ok"
    assert project.guid == "p-guid"
    assert project.metadata == '{"source":"ots"}'
    assert project.embedded_error is None

    params = project.parameters
    assert params.session_id == "sess-1"
    assert params.experiment_id == 101
    assert params.run_id == 555
    assert params.test_id == 77
    assert params.test_alias == "ta_checkout"
    assert params.tracking_guid == "tg-1"

    assert [f.name for f in project.factors] == ["headline", "cta_colour"]
    assert project.factors[0].operation == 1
    assert project.factors[1].value is None


def test_cookie_type_parses_case_insensitively():
    project = Project.model_validate(load_fixture("project.json"))
    cookies = project.body.cookies
    assert cookies["_wt.control-1234-ta_checkout"].type is CookieType.PERSISTED
    assert cookies["_wt.session"].type is CookieType.SESSION


def test_embedded_message_becomes_error():
    resp = OtsResponse.model_validate(
        {"body": {"message": {"errorCode": 12, "errorMessage": "bad"}}}
    )
    assert resp.embedded_error == Error(error_code=12, error_message="bad")


def test_round_trip_preserves_populated_fields():
    project = Project.model_validate(load_fixture("project.json"))
    text = project.to_json_string()

    again = Project.from_json_string(text)
    assert again == project
    # enums go out lowercase
    assert '"type":"persisted"' in text


def test_round_trip_omits_none_fields():
    project = Project(op_code="control", body={"factors": [{"name": "f"}]})
    payload = json.loads(project.to_json_string())

    assert payload == {
        "body": {"factors": [{"name": "f", "operation": 0}]},
        "opcode": "control",
    }

    again = Project.from_json_string(json.dumps(payload))
    assert "metadata" not in again.model_fields_set
    assert "guid" not in again.model_fields_set
    assert "value" not in again.body.factors[0].model_fields_set


def test_error_exception_is_not_serialized():
    err = Error.from_exception(RuntimeError("boom"))
    assert err.error_message == "boom"
    assert isinstance(err.exception, RuntimeError)
    assert err.to_wire() == {"errorCode": 0, "errorMessage": "boom"}


def test_from_json_string_rejects_empty():
    with pytest.raises(ArgumentError):
        Project.from_json_string("")


def test_ots_request_wire_shape():
    req = OtsRequest(url="https://www.example.com", state=State.NORMAL)
    assert req.to_wire() == {"url": "https://www.example.com", "s_mode": "normal"}
    assert OtsRequest(url="https://www.example.com").to_wire() == {
        "url": "https://www.example.com"
    }
