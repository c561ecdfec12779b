from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .core.enums import CookieType, State
from .core.errors import ArgumentError


class OtsModel(BaseModel):
    """
    Base model for OTS wire shapes.
    - Fields carry their wire names as aliases; either name populates.
    - Serialization uses aliases, lowercase enum values and omits None fields.
    """

    model_config = ConfigDict(
        populate_by_name=True, extra="ignore", arbitrary_types_allowed=True
    )

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json_string(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)

    @classmethod
    def from_json_string(cls, json: str):
        if not json:
            raise ArgumentError("json", "must not be empty")
        return cls.model_validate_json(json)


class Error(OtsModel):
    error_code: int = Field(default=0, alias="errorCode")
    error_message: str = Field(default="", alias="errorMessage")
    # Only set for transport failures; never serialized.
    exception: Optional[BaseException] = Field(default=None, exclude=True)

    @classmethod
    def from_exception(cls, exc: BaseException) -> "Error":
        return cls(error_message=str(exc), exception=exc)


class Cookie(OtsModel):
    timeout: Optional[int] = None
    type: Optional[CookieType] = None
    value: Optional[str] = None


class Body(OtsModel):
    cookies: Optional[Dict[str, Cookie]] = None
    error: Optional[Error] = Field(default=None, alias="message")


class Factor(OtsModel):
    name: str = ""
    operation: int = 0
    value: Optional[str] = None


class ProjectBody(Body):
    factors: Optional[List[Factor]] = None


class Parameters(OtsModel):
    session_id: Optional[str] = Field(default=None, alias="_wt_sessionID")
    cookie_domain: Optional[str] = Field(default=None, alias="cookieDomain")
    guid: Optional[str] = None
    experiment_id: Optional[int] = Field(default=None, alias="r_experimentID")
    paused: Optional[str] = Field(default=None, alias="r_paused")
    run_id: Optional[int] = Field(default=None, alias="r_runID")
    run_state: Optional[str] = Field(default=None, alias="r_runState")
    test_id: Optional[int] = Field(default=None, alias="r_testID")
    type: Optional[str] = Field(default=None, alias="r_type")
    system_uid: Optional[str] = Field(default=None, alias="systemUID")
    test_alias: Optional[str] = Field(default=None, alias="testAlias")
    tracking_guid: Optional[str] = Field(default=None, alias="trackingGuid")


class OtsResponse(OtsModel):
    """Common OTS response shape; also used to read error bodies."""

    body: Optional[Body] = None
    metadata: Optional[str] = None
    parameters: Optional[Parameters] = Field(default=None, alias="params")

    @property
    def embedded_error(self) -> Optional[Error]:
        return self.body.error if self.body is not None else None


class Project(OtsResponse):
    """A WebTrends project (experiment) and the visitor's participation in it."""

    body: Optional[ProjectBody] = None
    op_code: Optional[str] = Field(default=None, alias="opcode")
    op_status: Optional[str] = Field(default=None, alias="opstatus")
    guid: Optional[str] = None

    @property
    def factors(self) -> List[Factor]:
        if self.body is None or not self.body.factors:
            return []
        return list(self.body.factors)


# --- Request payloads ---


class OtsRequest(OtsModel):
    url: str
    state: Optional[State] = Field(default=None, alias="s_mode")


__all__ = [
    "OtsModel",
    "Error",
    "Cookie",
    "CookieType",
    "Body",
    "Factor",
    "ProjectBody",
    "Parameters",
    "OtsResponse",
    "Project",
    "OtsRequest",
    "State",
]
