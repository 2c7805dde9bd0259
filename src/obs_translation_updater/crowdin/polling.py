"""
Polling of asynchronous Crowdin jobs.

Builds and reports are created remotely and finish some time later. A
:class:`RemoteJob` moves from ``REQUESTED`` through ``POLLING`` to
``FINISHED``; waiting between status checks goes through a :class:`Clock`
so tests can run without real delays. Polling is unbounded.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

logger = logging.getLogger(__name__)

FINISHED_STATUS = "finished"


class JobState(Enum):
    """Lifecycle of a remote export job."""

    REQUESTED = "requested"
    POLLING = "polling"
    FINISHED = "finished"


class Clock(Protocol):
    """Waits between status checks."""

    async def sleep(self, seconds: float) -> None: ...


class AsyncioClock:
    """Clock backed by :func:`asyncio.sleep`."""

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)


@dataclass
class RemoteJob:
    """A build or report being produced by Crowdin."""

    identifier: int | str
    status: str
    state: JobState = JobState.REQUESTED

    def __post_init__(self) -> None:
        if self.status == FINISHED_STATUS:
            self.state = JobState.FINISHED

    @property
    def finished(self) -> bool:
        return self.state is JobState.FINISHED

    def update(self, status: str) -> None:
        """Record a status reported by the server."""
        self.status = status
        self.state = JobState.FINISHED if status == FINISHED_STATUS else JobState.POLLING


async def poll_until_finished(
    job: RemoteJob,
    check_status: Callable[[int | str], Awaitable[str]],
    clock: Clock,
    interval: float = 3.0,
) -> RemoteJob:
    """
    Wait for a remote job to finish.

    Args:
        job: Job as returned by the creation request
        check_status: Coroutine returning the current status for an identifier
        clock: Clock used to wait between checks
        interval: Seconds between checks

    Returns:
        The same job, now in the FINISHED state
    """
    while not job.finished:
        await clock.sleep(interval)
        job.update(await check_status(job.identifier))
        logger.debug(f"Job {job.identifier} status: {job.status}")
    return job
