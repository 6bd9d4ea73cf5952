"""Inbound and outbound platform event shapes.

Inbound (Function URL style)::

    {"requestContext": {"http": {"method": ..., "path": ...}},
     "headers": {name: value}, "body": "..."}

Outbound::

    {"statusCode": int, "headers": {name: value}, "body": "..."}
"""

from dataclasses import dataclass, field
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Body bytes <-> event string. surrogateescape keeps non UTF-8 bytes intact.
BODY_ENCODING = "utf-8"
BODY_ERRORS = "surrogateescape"


class HTTPDescription(BaseModel):
    """``requestContext.http`` section of an inbound event."""

    model_config = ConfigDict(frozen=True)

    method: str = Field(default="", description="HTTP method")
    path: str = Field(default="", description="Request path")


class RequestContext(BaseModel):
    """``requestContext`` section of an inbound event."""

    model_config = ConfigDict(frozen=True)

    http: HTTPDescription = Field(default_factory=HTTPDescription)


class InboundEvent(BaseModel):
    """Platform-delivered request event.

    Absent fields take their zero values. Keys the shim does not use are
    ignored.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    request_context: RequestContext = Field(
        default_factory=RequestContext, alias="requestContext"
    )
    headers: Dict[str, str] = Field(
        default_factory=dict, description="Single-valued request headers"
    )
    body: str = Field(default="", description="Raw request body")

    @field_validator("request_context", "headers", mode="before")
    @classmethod
    def _null_as_empty(cls, v: Any) -> Any:
        """Treat explicit nulls like absent fields."""
        return {} if v is None else v

    @field_validator("body", mode="plain")
    @classmethod
    def _validate_body(cls, v: Any) -> str:
        """Accept any str, including surrogate-escaped bytes."""
        if v is None:
            return ""
        if not isinstance(v, str):
            raise ValueError("Input should be a valid string")
        return v

    @property
    def method(self) -> str:
        return self.request_context.http.method

    @property
    def path(self) -> str:
        return self.request_context.http.path

    @classmethod
    def from_event(cls, event: Dict[str, Any]) -> "InboundEvent":
        """Validate a raw event dictionary.

        Raises:
            pydantic.ValidationError: If the event is structurally invalid
        """
        return cls.model_validate(event)


@dataclass(frozen=True)
class OutboundEvent:
    """Response event returned to the platform.

    A plain dataclass rather than a model: the body may hold lone surrogates
    standing in for non UTF-8 bytes, which pydantic string validation rejects.
    """

    status_code: int = 0
    headers: Dict[str, str] = field(default_factory=dict)
    body: str = ""

    def to_event(self) -> Dict[str, Any]:
        return {
            "statusCode": self.status_code,
            "headers": dict(self.headers),
            "body": self.body,
        }
