"""Client interface for calling ElasticMapReduce.

Each operation can be invoked two ways: a shorthand method that calls the
service directly, or a ``Call`` object that allows setting identity
attributes and reading the request id afterwards. Inputs and return values
are plain dictionaries.
"""

from __future__ import annotations

from typing import Any

from coral_client.config import CoralConfig
from coral_client.dispatcher import Call, Dispatcher
from coral_client.orchestrator import Orchestrator

SERVICE_NAME = "ElasticMapReduce"

OPERATIONS = (
    "AddJobFlowSteps",
    "TerminateJobFlows",
    "DescribeJobFlows",
    "RunJobFlow",
)


class ElasticMapReduceClient:
    """ElasticMapReduce client backed by an orchestrator.

    Args:
        orchestrator: Pipeline that performs the remote calls

    Example:
        >>> client = ElasticMapReduceClient.from_config(CoralConfig())
        >>> output = client.describe_job_flows({"JobFlowIds": ["j-1"]})
        >>> if "Error" in output:
        ...     print(output["Error"]["Code"])
    """

    def __init__(self, orchestrator: Orchestrator) -> None:
        self.orchestrator = orchestrator
        self._dispatchers = {
            name: Dispatcher(orchestrator, SERVICE_NAME, name) for name in OPERATIONS
        }

    @classmethod
    def from_config(cls, config: CoralConfig) -> ElasticMapReduceClient:
        """Create a client using the AWS/QUERY protocol over HTTP."""
        return cls(
            Orchestrator.aws_query(
                config.endpoint,
                timeout=config.timeout,
                verify_ssl=config.verify_ssl,
            )
        )

    def new_call(self, operation_name: str) -> Call:
        """Create a call object for any supported operation.

        Raises:
            ValueError: If the operation is not supported
        """
        try:
            return Call(self._dispatchers[operation_name])
        except KeyError:
            raise ValueError(
                f"Unknown operation: {operation_name}. "
                f"Expected one of: {', '.join(OPERATIONS)}"
            ) from None

    def new_add_job_flow_steps_call(self) -> Call:
        return self.new_call("AddJobFlowSteps")

    def new_terminate_job_flows_call(self) -> Call:
        return self.new_call("TerminateJobFlows")

    def new_describe_job_flows_call(self) -> Call:
        return self.new_call("DescribeJobFlows")

    def new_run_job_flow_call(self) -> Call:
        return self.new_call("RunJobFlow")

    def add_job_flow_steps(self, input: dict[str, Any] | None = None) -> Any:
        """Add steps to a running job flow."""
        return self.new_add_job_flow_steps_call().call(input)

    def terminate_job_flows(self, input: dict[str, Any] | None = None) -> Any:
        """Shut down a list of job flows."""
        return self.new_terminate_job_flows_call().call(input)

    def describe_job_flows(self, input: dict[str, Any] | None = None) -> Any:
        """Describe job flows matching the given filters."""
        return self.new_describe_job_flows_call().call(input)

    def run_job_flow(self, input: dict[str, Any] | None = None) -> Any:
        """Create and start a job flow."""
        return self.new_run_job_flow_call().call(input)

    def close(self) -> None:
        """Release the underlying HTTP resources."""
        self.orchestrator.close()

    def __enter__(self) -> ElasticMapReduceClient:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
