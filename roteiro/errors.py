"""Error kinds and exception hierarchy for the generation core"""

from enum import Enum


class ErrorKind(Enum):
    """Typed failure reasons carried by GenerationResult"""
    UNSUPPORTED_PROVIDER = "unsupported_provider"
    CREDENTIAL_MISSING = "credential_missing"
    PROVIDER_REJECTED = "provider_rejected"
    MALFORMED_RESPONSE = "malformed_response"
    TRANSIENT_POLL_FAILURE = "transient_poll_failure"  # never terminal
    JOB_FAILED = "job_failed"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    TRANSPORT_ERROR = "transport_error"
    EMPTY_INPUT = "empty_input"
    MISSING_FIELDS = "missing_fields"


class RoteiroError(Exception):
    """Base class for programming errors raised by the core"""


class InvalidResultError(RoteiroError):
    """A result was built as both success and failure, or as neither"""


class InvalidJobTransition(RoteiroError):
    """A job was asked to move backwards or out of a terminal state"""

    def __init__(self, job_id: str, current: str, target: str):
        self.job_id = job_id
        self.current = current
        self.target = target
        super().__init__(f"Job {job_id}: cannot transition {current} -> {target}")


class TransportError(RoteiroError):
    """The HTTP transport could not complete a request (connection, timeout)"""


class MalformedResponse(RoteiroError):
    """Expected field path is absent from a provider response"""

    def __init__(self, provider_id: str, path: str):
        self.provider_id = provider_id
        self.path = path
        super().__init__(f"{provider_id}: response has no usable value at '{path}'")


class MetadataNotFound(RoteiroError):
    """Video metadata lookup returned no item"""
