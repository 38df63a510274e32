"""Handler contract for the request pipeline."""

from __future__ import annotations

from coral_client.job import Job


class Handler:
    """A stage of the request pipeline.

    The orchestrator calls ``before`` on every handler in order before the
    request is sent, then ``after`` on every handler in reverse order. Both
    hooks work purely by mutating the job. Exceptions are not caught here;
    they propagate to the orchestrator, which stops the pipeline.

    Both hooks default to doing nothing; subclasses override whichever of
    the two they need.
    """

    def before(self, job: Job) -> None:
        """Prepare the outgoing request.

        May read and mutate ``job.request``. ``job.reply`` is not populated
        yet.

        Args:
            job: Job for the current call
        """

    def after(self, job: Job) -> None:
        """Process the incoming reply.

        May read ``job.request`` and ``job.reply`` and replace
        ``job.reply.value`` with the caller-visible result.

        Args:
            job: Job for the current call
        """
