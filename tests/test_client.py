"""Tests for the ElasticMapReduce client stubs."""

from __future__ import annotations

import json
from unittest.mock import Mock, patch

import pytest

from coral_client.client import OPERATIONS, ElasticMapReduceClient
from coral_client.config import CoralConfig
from coral_client.handlers.http import HttpHandler
from coral_client.job import Reply, Request
from coral_client.orchestrator import Orchestrator


@pytest.fixture
def orchestrator() -> Mock:
    """Create a mock orchestrator returning an empty result."""
    mock = Mock(spec=Orchestrator)
    mock.orchestrate.return_value = Reply(value={}, request_id="req-1")
    return mock


class TestElasticMapReduceClient:
    """Tests for ElasticMapReduceClient."""

    @pytest.mark.parametrize(
        ("method", "operation"),
        [
            ("add_job_flow_steps", "AddJobFlowSteps"),
            ("terminate_job_flows", "TerminateJobFlows"),
            ("describe_job_flows", "DescribeJobFlows"),
            ("run_job_flow", "RunJobFlow"),
        ],
    )
    def test_shorthand_methods(self, orchestrator: Mock, method: str, operation: str) -> None:
        client = ElasticMapReduceClient(orchestrator)

        result = getattr(client, method)({"JobFlowIds": ["j-1"]})

        assert result == {}
        request: Request = orchestrator.orchestrate.call_args.args[0]
        assert request.operation_name == operation
        assert request.service_name == "ElasticMapReduce"
        assert request.value == {"JobFlowIds": ["j-1"]}

    def test_new_call_exposes_request_id(self, orchestrator: Mock) -> None:
        client = ElasticMapReduceClient(orchestrator)

        call = client.new_run_job_flow_call()
        call.call({"Name": "n"})

        assert call.request_id == "req-1"

    def test_new_call_unknown_operation(self, orchestrator: Mock) -> None:
        client = ElasticMapReduceClient(orchestrator)

        with pytest.raises(ValueError, match="Unknown operation: ListClusters"):
            client.new_call("ListClusters")

    def test_operations(self) -> None:
        assert OPERATIONS == ("AddJobFlowSteps", "TerminateJobFlows", "DescribeJobFlows", "RunJobFlow")

    def test_from_config(self) -> None:
        config = CoralConfig(endpoint="http://localhost:8080", timeout=12, verify_ssl=False)

        client = ElasticMapReduceClient.from_config(config)

        http = client.orchestrator.handlers[-1]
        assert isinstance(http, HttpHandler)
        assert http.endpoint == "http://localhost:8080"
        assert http.timeout == 12
        assert http.verify_ssl is False

    @patch("coral_client.handlers.http.requests.Session.request")
    def test_end_to_end_over_mocked_http(self, mock_request: Mock) -> None:
        """Test a real handler chain with only the HTTP call mocked."""
        response = Mock()
        response.status_code = 200
        response.reason = "OK"
        response.headers = {"x-amzn-RequestId": "req-9"}
        response.text = json.dumps(
            {"RunJobFlowResponse": {"RunJobFlowResult": {"JobFlowId": "j-ABC"}}}
        )
        mock_request.return_value = response

        with ElasticMapReduceClient.from_config(CoralConfig(endpoint="http://localhost:8080")) as client:
            result = client.run_job_flow({"Name": "nightly", "Instances": {"InstanceCount": 3}})

        assert result == {"JobFlowId": "j-ABC"}
        sent = mock_request.call_args.kwargs["data"]
        assert sent["Action"] == "RunJobFlow"
        assert sent["ContentType"] == "JSON"
        assert sent["Instances.InstanceCount"] == "3"
