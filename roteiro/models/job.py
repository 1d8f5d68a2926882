"""Job model for submit-then-poll image generation"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from roteiro.errors import ErrorKind, InvalidJobTransition


class JobState(Enum):
    """Lifecycle of an asynchronous generation job"""
    CREATED = "created"
    POLLING = "polling"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    TIMED_OUT = "timed_out"  # set by the owning loop, never by a poll


TERMINAL_STATES = frozenset({JobState.SUCCEEDED, JobState.FAILED, JobState.TIMED_OUT})

# Forward-only transition table
_ALLOWED = {
    JobState.CREATED: {JobState.POLLING, JobState.FAILED},
    JobState.POLLING: {JobState.SUCCEEDED, JobState.FAILED, JobState.TIMED_OUT},
}


@dataclass
class Job:
    """
    Handle for one asynchronous generation.

    Owned by the loop that submitted it. Terminal jobs are discarded,
    never resubmitted.
    """
    id: Optional[str]
    provider_id: str
    submitted_at: float
    state: JobState = JobState.CREATED
    artifact_url: Optional[str] = None
    status_code: Optional[int] = None      # HTTP status of a rejected submit
    failure_status: Optional[str] = None   # provider status token on failure
    error_message: Optional[str] = None
    poll_count: int = 0
    transient_failures: int = 0
    last_poll_error: Optional[str] = None  # cleared by the next good poll
    last_poll_error_kind: Optional[ErrorKind] = None
    cancelled: bool = False

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    def advance(self, target: JobState) -> None:
        """Move to ``target``; raises InvalidJobTransition if not a forward step"""
        if target not in _ALLOWED.get(self.state, set()):
            raise InvalidJobTransition(str(self.id), self.state.value, target.value)
        self.state = target

    def elapsed(self, now: float) -> float:
        return now - self.submitted_at
