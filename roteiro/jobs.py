"""
Async Job Poller - submit-then-poll state machine for image generation

The poller owns every Job it creates. ``submit`` issues one POST, ``poll``
issues one GET, and ``run`` is the cooperative owner loop that spaces polls
with an injected Scheduler and enforces the wall-clock deadline with an
injected Clock. Nothing here sleeps on the real clock unless the default
AsyncioScheduler is used, so deadline and cancellation behaviour can be
tested without waiting.

State flow:
    CREATED -> POLLING -> SUCCEEDED | FAILED | TIMED_OUT
    CREATED -> FAILED                (rejected submission)
"""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, FrozenSet, Optional

from roteiro.errors import ErrorKind, InvalidJobTransition, TransportError
from roteiro.models import GenerationResult, Job, JobState

logger = logging.getLogger(__name__)


# Poll every 2s, give up 60s after submission
DEFAULT_POLL_INTERVAL = 2.0
DEFAULT_DEADLINE = 60.0


# ============================================================
# Time and cancellation
# ============================================================

class Clock(ABC):
    @abstractmethod
    def now(self) -> float:
        """Seconds on a monotonic timeline"""
        pass


class MonotonicClock(Clock):
    def now(self) -> float:
        return time.monotonic()


class Scheduler(ABC):
    @abstractmethod
    async def sleep(self, seconds: float) -> None:
        pass


class AsyncioScheduler(Scheduler):
    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)


class CancellationToken:
    """Set by the caller to stop a poll loop before its next request"""

    def __init__(self):
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


# ============================================================
# Backend contract
# ============================================================

@dataclass
class SubmitOutcome:
    """What a backend learned from the submission call"""
    accepted: bool
    job_id: Optional[str] = None
    status_code: Optional[int] = None
    error_message: Optional[str] = None


@dataclass
class PollSnapshot:
    """What a backend learned from one status call"""
    reachable: bool                        # False on non-2xx or transport error
    status: Optional[str] = None
    artifact_url: Optional[str] = None
    status_code: Optional[int] = None
    error_message: Optional[str] = None


class JobBackend(ABC):
    """Wire protocol of a job-based provider"""

    provider_id: str = ""
    failure_statuses: FrozenSet[str] = frozenset()

    @abstractmethod
    async def submit(self, credential: str, params: Any) -> SubmitOutcome:
        """Issue exactly one submission request"""
        pass

    @abstractmethod
    async def fetch(self, credential: str, job_id: str) -> PollSnapshot:
        """
        Issue exactly one status request.

        Raises:
            TransportError: If the request never completed
        """
        pass


# ============================================================
# Poller
# ============================================================

class AsyncJobPoller:
    """
    Drives one backend's jobs through their lifecycle.

    Jobs are independent: the poller keeps no per-job state of its own, so
    many ``run`` calls may proceed concurrently.
    """

    def __init__(
        self,
        backend: JobBackend,
        clock: Optional[Clock] = None,
        scheduler: Optional[Scheduler] = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        deadline: float = DEFAULT_DEADLINE,
    ):
        self.backend = backend
        self.clock = clock or MonotonicClock()
        self.scheduler = scheduler or AsyncioScheduler()
        self.poll_interval = poll_interval
        self.deadline = deadline

    async def submit(self, credential: str, params: Any) -> Job:
        """
        Submit a job.

        Returns:
            Job in POLLING when accepted, FAILED when rejected
        """
        job = Job(id=None, provider_id=self.backend.provider_id, submitted_at=self.clock.now())

        try:
            outcome = await self.backend.submit(credential, params)
        except TransportError as e:
            outcome = SubmitOutcome(accepted=False, error_message=str(e))

        if not outcome.accepted or not outcome.job_id:
            job.status_code = outcome.status_code
            job.error_message = outcome.error_message or "Submission returned no job id"
            job.advance(JobState.FAILED)
            logger.debug(f"{job.provider_id} submission rejected: {job.error_message}")
            return job

        job.id = outcome.job_id
        job.advance(JobState.POLLING)
        logger.debug(f"{job.provider_id} job {job.id} submitted")
        return job

    async def poll(self, job: Job, credential: str) -> Job:
        """
        Check the job once.

        A transient failure (non-2xx, transport error) leaves the state
        untouched and is recorded on ``last_poll_error`` with kind
        TRANSIENT_POLL_FAILURE.
        """
        if job.state != JobState.POLLING:
            raise InvalidJobTransition(str(job.id), job.state.value, JobState.POLLING.value)

        job.poll_count += 1
        try:
            snapshot = await self.backend.fetch(credential, job.id)
        except TransportError as e:
            snapshot = PollSnapshot(reachable=False, error_message=str(e))

        if not snapshot.reachable:
            job.transient_failures += 1
            job.last_poll_error = snapshot.error_message or f"HTTP {snapshot.status_code}"
            job.last_poll_error_kind = ErrorKind.TRANSIENT_POLL_FAILURE
            logger.debug(f"Job {job.id} poll {job.poll_count} failed transiently: {job.last_poll_error}")
            return job

        job.last_poll_error = None
        job.last_poll_error_kind = None

        if snapshot.artifact_url:
            job.artifact_url = snapshot.artifact_url
            job.advance(JobState.SUCCEEDED)
            logger.debug(f"Job {job.id} succeeded after {job.poll_count} polls")
            return job

        if snapshot.status and snapshot.status.upper() in self.backend.failure_statuses:
            job.failure_status = snapshot.status
            job.error_message = f"Generation failed with status: {snapshot.status}"
            job.advance(JobState.FAILED)
            logger.debug(f"Job {job.id} failed: {snapshot.status}")
            return job

        return job

    async def run(
        self,
        credential: str,
        params: Any,
        cancel_token: Optional[CancellationToken] = None,
    ) -> Job:
        """
        Submit and poll until terminal, deadline, or cancellation.

        Each cycle waits ``poll_interval`` (clipped to the time left) before
        polling. Once the deadline has passed the job is marked TIMED_OUT and
        no further request is made. A cancelled job is returned in whatever
        non-terminal state it had, with ``cancelled`` set.
        """
        job = await self.submit(credential, params)

        while not job.is_terminal:
            if cancel_token is not None and cancel_token.cancelled:
                job.cancelled = True
                break

            remaining = self.deadline - job.elapsed(self.clock.now())
            if remaining <= 0:
                self._time_out(job)
                break

            await self.scheduler.sleep(min(self.poll_interval, remaining))

            if cancel_token is not None and cancel_token.cancelled:
                job.cancelled = True
                break
            if job.elapsed(self.clock.now()) >= self.deadline:
                self._time_out(job)
                break

            await self.poll(job, credential)

        return job

    def _time_out(self, job: Job) -> None:
        job.error_message = f"Timed out after {self.deadline:.0f}s waiting for {job.provider_id}"
        job.advance(JobState.TIMED_OUT)
        logger.debug(f"Job {job.id} timed out after {job.poll_count} polls")


def _poll_metadata(job: Job) -> dict:
    """Poll history of a job that never reached a result"""
    return {
        "job_id": job.id,
        "poll_count": job.poll_count,
        "transient_failures": job.transient_failures,
        "last_poll_error": job.last_poll_error,
        "last_poll_error_kind": job.last_poll_error_kind,
    }


def job_result(job: Job) -> GenerationResult:
    """Map a finished job to a GenerationResult"""
    if job.state == JobState.SUCCEEDED:
        return GenerationResult.ok(artifact_url=job.artifact_url, job_id=job.id, provider=job.provider_id)

    if job.state == JobState.TIMED_OUT:
        return GenerationResult.fail(ErrorKind.TIMEOUT, job.error_message or "Timed out", **_poll_metadata(job))

    if job.state == JobState.FAILED:
        if job.id is None:
            if job.status_code is None:
                kind = ErrorKind.TRANSPORT_ERROR
            elif 200 <= job.status_code < 300:
                kind = ErrorKind.MALFORMED_RESPONSE
            else:
                kind = ErrorKind.PROVIDER_REJECTED
            return GenerationResult.fail(
                kind,
                job.error_message or "Submission rejected",
                status_code=job.status_code,
                provider=job.provider_id,
            )
        return GenerationResult.fail(
            ErrorKind.JOB_FAILED,
            job.error_message or "Generation failed",
            job_id=job.id,
            status=job.failure_status,
        )

    # Abandoned before reaching a terminal state
    if job.cancelled:
        return GenerationResult.fail(ErrorKind.CANCELLED, "Job cancelled before completion", **_poll_metadata(job))
    return GenerationResult.fail(ErrorKind.TIMEOUT, "Job did not finish", **_poll_metadata(job))
