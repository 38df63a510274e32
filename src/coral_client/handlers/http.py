"""HTTP transmission handler.

Sends the encoded request over HTTP and records the raw response on the
job. It has NO knowledge of the AWS/QUERY envelope: any status code is
stored as-is and classified later by the protocol handler.
"""

from __future__ import annotations

from typing import Any

import requests
import structlog

from coral_client.exceptions import TransportError
from coral_client.handlers.base import Handler
from coral_client.job import Job

logger = structlog.get_logger()

REQUEST_ID_HEADER = "x-amzn-RequestId"


class HttpHandler(Handler):
    """Handler that performs the HTTP round trip in its ``before`` hook.

    Place it last in the handler chain so every encoding handler has run
    before the request is sent.

    Args:
        endpoint: Service URL (e.g., "https://elasticmapreduce.amazonaws.com")
        timeout: Request timeout in seconds (default: 30)
        verify_ssl: Whether to verify SSL certificates (default: True)
        session: Optional pre-configured requests session

    Attributes:
        endpoint: Service URL
        timeout: Request timeout in seconds
        verify_ssl: SSL verification flag
        session: requests session used for every call

    Example:
        >>> with HttpHandler("https://elasticmapreduce.amazonaws.com") as http:
        ...     http.before(job)
        >>> job.reply.http_status_code
        200
    """

    def __init__(
        self,
        endpoint: str,
        timeout: int = 30,
        verify_ssl: bool = True,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize HTTP handler.

        Raises:
            ValueError: If endpoint is empty
        """
        if not endpoint:
            raise ValueError("endpoint cannot be empty")

        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self.session = session if session is not None else requests.Session()

    def before(self, job: Job) -> None:
        """Send the request and fill in the reply.

        Raises:
            TransportError: If no response could be obtained
        """
        request = job.request
        verb = request.http_verb or "POST"

        try:
            response = self.session.request(
                verb,
                f"{self.endpoint}/",
                data=request.query_string_map or {},
                timeout=self.timeout,
                verify=self.verify_ssl,
            )
        except requests.exceptions.Timeout as e:
            raise TransportError(
                message=f"Request timed out after {self.timeout}s",
                cause=e,
            ) from e
        except requests.exceptions.ConnectionError as e:
            raise TransportError(
                message=f"Connection failed: {str(e)}",
                cause=e,
            ) from e
        except requests.exceptions.RequestException as e:
            raise TransportError(
                message=f"Transport error: {str(e)}",
                cause=e,
            ) from e

        reply = job.reply
        reply.value = response.text
        reply.http_status_code = response.status_code
        reply.http_status_message = response.reason
        reply.request_id = response.headers.get(REQUEST_ID_HEADER)

        logger.debug(
            "HTTP response received",
            operation=request.operation_name,
            status_code=response.status_code,
            request_id=reply.request_id,
        )

    def close(self) -> None:
        """Close the HTTP session and release pooled connections."""
        self.session.close()

    def __enter__(self) -> HttpHandler:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
