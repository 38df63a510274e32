"""Unit tests for the HTTP handler.

The requests session is mocked; no actual network calls are made.
"""

from __future__ import annotations

from unittest.mock import Mock

import pytest
import requests

from coral_client.exceptions import TransportError
from coral_client.handlers.http import HttpHandler
from coral_client.job import Job, Request


def encoded_job() -> Job:
    """Create a job as it looks after the protocol handler ran."""
    job = Job(Request(operation_name="DescribeJobFlows"))
    job.request.query_string_map = {"Action": "DescribeJobFlows", "ContentType": "JSON"}
    job.request.http_verb = "POST"
    return job


def mock_response(status_code: int = 200, text: str = "{}", reason: str = "OK", headers: dict | None = None) -> Mock:
    response = Mock()
    response.status_code = status_code
    response.text = text
    response.reason = reason
    response.headers = headers or {}
    return response


class TestHttpHandlerInit:
    """Tests for HttpHandler initialization."""

    def test_init_with_defaults(self) -> None:
        handler = HttpHandler("https://elasticmapreduce.amazonaws.com")

        assert handler.endpoint == "https://elasticmapreduce.amazonaws.com"
        assert handler.timeout == 30
        assert handler.verify_ssl is True
        assert isinstance(handler.session, requests.Session)

    def test_init_strips_trailing_slash(self) -> None:
        handler = HttpHandler("http://localhost:8080/")

        assert handler.endpoint == "http://localhost:8080"

    def test_init_empty_endpoint_raises_error(self) -> None:
        with pytest.raises(ValueError, match="endpoint cannot be empty"):
            HttpHandler("")


class TestHttpHandlerBefore:
    """Tests for HttpHandler.before() transmission."""

    def test_sends_form_parameters(self) -> None:
        session = Mock(spec=requests.Session)
        session.request.return_value = mock_response()
        handler = HttpHandler("http://localhost:8080", timeout=5, session=session)

        handler.before(encoded_job())

        call_args = session.request.call_args
        assert call_args.args == ("POST", "http://localhost:8080/")
        assert call_args.kwargs["data"] == {"Action": "DescribeJobFlows", "ContentType": "JSON"}
        assert call_args.kwargs["timeout"] == 5
        assert call_args.kwargs["verify"] is True

    def test_records_reply(self) -> None:
        session = Mock(spec=requests.Session)
        session.request.return_value = mock_response(
            text='{"Error": {}}', headers={"x-amzn-RequestId": "req-1"}
        )
        job = encoded_job()

        HttpHandler("http://localhost:8080", session=session).before(job)

        assert job.reply.value == '{"Error": {}}'
        assert job.reply.http_status_code == 200
        assert job.reply.http_status_message == "OK"
        assert job.reply.request_id == "req-1"

    def test_error_status_is_recorded_not_raised(self) -> None:
        """Test failing statuses are left for the protocol handler."""
        session = Mock(spec=requests.Session)
        session.request.return_value = mock_response(500, "boom", "Internal Server Error")
        job = encoded_job()

        HttpHandler("http://localhost:8080", session=session).before(job)

        assert job.reply.http_status_code == 500
        assert job.reply.value == "boom"

    def test_timeout_raises_transport_error(self) -> None:
        session = Mock(spec=requests.Session)
        session.request.side_effect = requests.exceptions.Timeout("slow")

        with pytest.raises(TransportError, match="timed out after 30s") as exc_info:
            HttpHandler("http://localhost:8080", session=session).before(encoded_job())

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.cause, requests.exceptions.Timeout)

    def test_connection_error_raises_transport_error(self) -> None:
        session = Mock(spec=requests.Session)
        session.request.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(TransportError, match="Connection failed"):
            HttpHandler("http://localhost:8080", session=session).before(encoded_job())

    def test_after_is_a_no_op(self) -> None:
        job = encoded_job()
        job.reply.value = "raw"

        HttpHandler("http://localhost:8080", session=Mock(spec=requests.Session)).after(job)

        assert job.reply.value == "raw"


class TestHttpHandlerLifecycle:
    """Tests for session cleanup."""

    def test_context_manager_closes_session(self) -> None:
        session = Mock(spec=requests.Session)

        with HttpHandler("http://localhost:8080", session=session):
            pass

        session.close.assert_called_once()
