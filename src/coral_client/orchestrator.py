"""Pipeline runner for remote calls."""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from coral_client.exceptions import OrchestrationError
from coral_client.handlers.aws_query import AwsQueryHandler
from coral_client.handlers.base import Handler
from coral_client.handlers.http import HttpHandler
from coral_client.job import Job, Reply, Request

logger = structlog.get_logger()


class Orchestrator:
    """Runs a request through a chain of handlers.

    ``before`` is invoked on each handler in order, then ``after`` on each
    handler in reverse order. The first exception aborts the rest of the
    chain and reaches the caller unchanged.

    Args:
        handlers: Handler chain; the transmitting handler goes last

    Raises:
        OrchestrationError: If the chain is empty
    """

    def __init__(self, handlers: Sequence[Handler]) -> None:
        if not handlers:
            raise OrchestrationError("Orchestrator requires at least one handler")
        self.handlers: list[Handler] = list(handlers)

    def orchestrate(self, request: Request) -> Reply:
        """Process a request and return its reply.

        Args:
            request: Request attributes for a single call

        Returns:
            Reply with ``value`` set by the handlers
        """
        job = Job(request)

        for handler in self.handlers:
            handler.before(job)

        for handler in reversed(self.handlers):
            handler.after(job)

        logger.debug(
            "Call completed",
            operation=request.operation_name,
            request_id=job.reply.request_id,
        )
        return job.reply

    @classmethod
    def aws_query(
        cls,
        endpoint: str,
        timeout: int = 30,
        verify_ssl: bool = True,
    ) -> Orchestrator:
        """Build an orchestrator for the AWS/QUERY protocol over HTTP.

        Example:
            >>> orchestrator = Orchestrator.aws_query("https://elasticmapreduce.amazonaws.com")
            >>> [type(h).__name__ for h in orchestrator.handlers]
            ['AwsQueryHandler', 'HttpHandler']
        """
        return cls(
            [
                AwsQueryHandler(),
                HttpHandler(endpoint, timeout=timeout, verify_ssl=verify_ssl),
            ]
        )

    def close(self) -> None:
        """Release resources held by handlers that own any."""
        for handler in self.handlers:
            if isinstance(handler, HttpHandler):
                handler.close()
