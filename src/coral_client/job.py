"""Request and reply records carried through the handler pipeline.

A ``Job`` is created for exactly one remote call. Handlers mutate its
``request`` while encoding and its ``reply`` while decoding; the transport
fills the reply in between.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Request(BaseModel):
    """Attributes describing an outgoing call.

    Attributes:
        operation_name: Remote operation to invoke (e.g. "RunJobFlow")
        value: Caller-supplied input payload
        service_name: Name of the remote service (optional)
        identity: Per-call identity attributes (access keys and the like)
        query_string_map: Flat wire parameters, set by the protocol handler
        http_verb: HTTP method, set by the protocol handler

    Example:
        >>> request = Request(operation_name="DescribeJobFlows", value={})
        >>> print(request.http_verb)
        None
    """

    operation_name: str = Field(..., description="Remote operation name")
    value: dict[str, Any] = Field(default_factory=dict, description="Input payload")
    service_name: str | None = Field(default=None, description="Remote service name")
    identity: dict[str, str] = Field(default_factory=dict, description="Caller identity")
    query_string_map: dict[str, str] | None = Field(
        default=None, description="Flat wire parameters"
    )
    http_verb: str | None = Field(default=None, description="HTTP method")

    model_config = ConfigDict(frozen=False)


class Reply(BaseModel):
    """Attributes describing the response to a call.

    ``value`` holds the raw body text once the transport has run, and the
    decoded result (or an ``{"Error": ...}`` envelope) once the protocol
    handler's ``after`` has completed.

    Attributes:
        value: Raw body, then decoded result
        http_status_code: HTTP status code
        http_status_message: HTTP reason phrase
        request_id: Request id echoed by the service
    """

    value: Any = Field(default=None, description="Response body or decoded result")
    http_status_code: int | str | None = Field(default=None, description="HTTP status")
    http_status_message: str | None = Field(default=None, description="HTTP reason")
    request_id: str | None = Field(default=None, description="Service request id")

    model_config = ConfigDict(frozen=False)


class Job:
    """Carrier for the request and reply of one remote call."""

    def __init__(self, request: Request) -> None:
        self._request = request
        self._reply = Reply()

    @property
    def request(self) -> Request:
        """Request attributes."""
        return self._request

    @property
    def reply(self) -> Reply:
        """Reply attributes."""
        return self._reply
