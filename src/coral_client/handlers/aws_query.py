"""AWS/QUERY protocol handler.

Encodes a request into flat query parameters and decodes the JSON response,
unwrapping the ``{Operation}Response`` / ``{Operation}Result`` envelope.

Decoding has three outcomes:

- a result (including a service-reported ``{"Error": ...}`` envelope, which
  is data, not an exception)
- a transport failure: the body is not JSON and the status is not 200
- a decode failure: the status is 200 but the body is not JSON, or the JSON
  does not have the expected envelope
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import structlog

from coral_client.exceptions import DecodeError, TransportError
from coral_client.handlers.base import Handler
from coral_client.job import Job
from coral_client.query_string_map import QueryStringMap

ERROR_KEY = "Error"


def response_key(operation_name: str) -> str:
    """Outer envelope key for an operation (``RunJobFlowResponse``)."""
    return f"{operation_name}Response"


def result_key(operation_name: str) -> str:
    """Inner envelope key for an operation (``RunJobFlowResult``)."""
    return f"{operation_name}Result"


@dataclass(frozen=True)
class Ok:
    """Decoded result, or an application error envelope."""

    value: Any


@dataclass(frozen=True)
class TransportFailure:
    """Non-200 response whose body could not be parsed."""

    status_code: int | str | None
    status_message: str | None
    cause: Exception | None = field(default=None, compare=False)


@dataclass(frozen=True)
class DecodeFailure:
    """Unparseable 200 response, or unexpected envelope shape."""

    detail: str
    cause: Exception | None = field(default=None, compare=False)


DecodeResult = Ok | TransportFailure | DecodeFailure


def is_ok_status(status_code: int | str | None) -> bool:
    """Check whether a status code (int or text) means HTTP 200."""
    if status_code is None:
        return False
    try:
        return int(status_code) == 200
    except ValueError:
        return False


def unwrap(operation_name: str, document: Any) -> DecodeResult:
    """Extract the result from a parsed response document.

    Args:
        operation_name: Operation the request was made for
        document: Parsed JSON response

    Returns:
        Ok with the unwrapped result or an ``{"Error": ...}`` envelope,
        or DecodeFailure if the envelope does not match the operation
    """
    if not isinstance(document, dict):
        return DecodeFailure(
            f"Expected JSON object response, got {type(document).__name__}"
        )

    if ERROR_KEY in document:
        return Ok({ERROR_KEY: document[ERROR_KEY]})

    value: Any = document
    for key in (response_key(operation_name), result_key(operation_name)):
        if not isinstance(value, dict) or key not in value:
            return DecodeFailure(f"Response envelope is missing key '{key}'")
        value = value[key]

    return Ok(value)


def decode_response(
    operation_name: str,
    body: Any,
    status_code: int | str | None,
    status_message: str | None,
) -> DecodeResult:
    """Classify a raw response as a result or a failure.

    Args:
        operation_name: Operation the request was made for
        body: Raw response body text
        status_code: HTTP status code
        status_message: HTTP reason phrase

    Returns:
        Ok, TransportFailure or DecodeFailure

    Example:
        >>> decode_response("Foo", '{"FooResponse": {"FooResult": 1}}', 200, "OK")
        Ok(value=1)
    """
    try:
        document = json.loads(body)
    except (TypeError, ValueError, RecursionError) as e:
        # A non-200 status is definitive; the body is not inspected further
        if not is_ok_status(status_code):
            return TransportFailure(status_code, status_message, cause=e)
        return DecodeFailure(f"Failed parsing response: {e}", cause=e)

    return unwrap(operation_name, document)


class AwsQueryHandler(Handler):
    """Handler translating between jobs and the AWS/QUERY wire format.

    The handler holds no per-call state and may be shared between
    concurrent pipelines, as long as each pipeline has its own Job.

    Args:
        logger: Logger to report requests and responses to
            (default: a structlog logger)

    Example:
        >>> handler = AwsQueryHandler()
        >>> job = Job(Request(operation_name="DescribeJobFlows"))
        >>> handler.before(job)
        >>> job.request.query_string_map["Action"]
        'DescribeJobFlows'
    """

    def __init__(self, logger: Any | None = None) -> None:
        self.logger = logger if logger is not None else structlog.get_logger()

    def before(self, job: Job) -> None:
        """Encode the request into query parameters and set the HTTP verb."""
        request = job.request
        operation_name = request.operation_name

        query_string_map = QueryStringMap(request.value)
        query_string_map["Action"] = str(operation_name)
        query_string_map["ContentType"] = "JSON"

        request.query_string_map = dict(query_string_map)
        request.http_verb = "POST"

        self._log(
            "Making request to operation",
            operation=operation_name,
            parameters=str(query_string_map),
        )

    def after(self, job: Job) -> None:
        """Decode the reply body and replace it with the unwrapped result.

        Raises:
            TransportError: Body is not JSON and status is not 200
            DecodeError: Body is not JSON, or the envelope does not match
        """
        operation_name = job.request.operation_name
        reply = job.reply

        self._log("Received response body", operation=operation_name, body=reply.value)

        result = decode_response(
            operation_name,
            reply.value,
            reply.http_status_code,
            reply.http_status_message,
        )

        if isinstance(result, TransportFailure):
            raise TransportError(
                message=f"{result.status_code} : {result.status_message}",
                status_code=result.status_code,
                status_message=result.status_message,
                cause=result.cause,
            ) from result.cause
        if isinstance(result, DecodeFailure):
            raise DecodeError(
                message=f"Invalid response for operation {operation_name}",
                detail=result.detail,
                cause=result.cause,
            ) from result.cause

        reply.value = result.value

    def _log(self, event: str, **fields: Any) -> None:
        # Logging must never break a call
        try:
            self.logger.info(event, **fields)
        except Exception:  # noqa: BLE001
            pass
