"""Per-operation dispatch and per-call state."""

from __future__ import annotations

from typing import Any

from coral_client.job import Request
from coral_client.orchestrator import Orchestrator


class Dispatcher:
    """Binds an orchestrator to one operation of one service.

    Args:
        orchestrator: Pipeline that performs the call
        service_name: Remote service (e.g., "ElasticMapReduce")
        operation_name: Remote operation (e.g., "RunJobFlow")
    """

    def __init__(
        self,
        orchestrator: Orchestrator,
        service_name: str,
        operation_name: str,
    ) -> None:
        self.orchestrator = orchestrator
        self.service_name = service_name
        self.operation_name = operation_name

    def dispatch(self, call: Call, input: dict[str, Any] | None = None) -> Any:
        """Run one call through the orchestrator.

        Args:
            call: Call carrying identity; receives the request id
            input: Operation input payload

        Returns:
            Decoded result, or an ``{"Error": ...}`` envelope
        """
        request = Request(
            operation_name=self.operation_name,
            service_name=self.service_name,
            value=input or {},
            identity=dict(call.identity),
        )
        reply = self.orchestrator.orchestrate(request)
        call.request_id = reply.request_id
        return reply.value


class Call:
    """A single invocation of an operation.

    Lets callers set identity attributes before the call and read the
    service's request id after it.

    Example:
        >>> call = client.new_describe_job_flows_call()
        >>> call.identity["aws_access_key"] = access_key
        >>> output = call.call({"JobFlowIds": ["j-1"]})
        >>> call.request_id
        '5d1f...'
    """

    def __init__(self, dispatcher: Dispatcher) -> None:
        self.dispatcher = dispatcher
        self.identity: dict[str, str] = {}
        self.request_id: str | None = None

    def call(self, input: dict[str, Any] | None = None) -> Any:
        """Invoke the operation with the given input."""
        return self.dispatcher.dispatch(self, input)
