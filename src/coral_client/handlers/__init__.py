"""Pipeline handlers.

Each handler takes part in a remote call through two hooks:
- ``before``: runs in chain order before the response exists
- ``after``: runs in reverse chain order once the response is recorded
"""

from coral_client.handlers.base import Handler
from coral_client.handlers.aws_query import (
    AwsQueryHandler,
    DecodeFailure,
    DecodeResult,
    Ok,
    TransportFailure,
    decode_response,
    response_key,
    result_key,
)
from coral_client.handlers.http import HttpHandler

__all__ = [
    # Contract
    "Handler",
    # Handlers
    "AwsQueryHandler",
    "HttpHandler",
    # Decoding
    "DecodeResult",
    "Ok",
    "TransportFailure",
    "DecodeFailure",
    "decode_response",
    "response_key",
    "result_key",
]
