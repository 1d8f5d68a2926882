"""
Generation data models

Provider-neutral request/result shapes shared by the dispatcher, the
image job poller and the narration client.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any

from roteiro.errors import ErrorKind, InvalidResultError


class ProviderCategory(Enum):
    """What a provider produces"""
    TEXT = "text"
    IMAGE = "image"
    AUDIO = "audio"
    METADATA = "metadata"


@dataclass(frozen=True)
class ProviderDescriptor:
    """Static description of an external service"""
    id: str
    display_name: str
    endpoint_base: str
    credential_slot: str
    category: ProviderCategory = ProviderCategory.TEXT
    api_key_url: str = ""


@dataclass
class GenerationRequest:
    """Normalized text-generation input"""
    prompt: str
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None


@dataclass
class GenerationResult:
    """
    Normalized generation outcome.

    Exactly one of two shapes:
    - success: ``text`` and/or ``artifact_url`` set, no ``error_kind``
    - failure: ``error_kind`` set, no text or artifact

    Use ``GenerationResult.ok`` and ``GenerationResult.fail`` to build one.
    """
    success: bool
    text: Optional[str] = None
    artifact_url: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    error_message: Optional[str] = None
    status_code: Optional[int] = None
    provider_metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        has_payload = bool(self.text) or bool(self.artifact_url)
        if self.success:
            if not has_payload:
                raise InvalidResultError("Successful result needs text or an artifact URL")
            if self.error_kind is not None:
                raise InvalidResultError("Successful result cannot carry an error kind")
            if self.error_message:
                raise InvalidResultError("Successful result cannot carry an error message")
        else:
            if self.error_kind is None:
                raise InvalidResultError("Failed result needs an error kind")
            if has_payload:
                raise InvalidResultError("Failed result cannot carry text or an artifact URL")

    @classmethod
    def ok(
        cls,
        text: Optional[str] = None,
        artifact_url: Optional[str] = None,
        **metadata
    ) -> "GenerationResult":
        return cls(success=True, text=text, artifact_url=artifact_url, provider_metadata=metadata)

    @classmethod
    def fail(
        cls,
        kind: ErrorKind,
        message: str,
        status_code: Optional[int] = None,
        **metadata
    ) -> "GenerationResult":
        return cls(
            success=False,
            error_kind=kind,
            error_message=message,
            status_code=status_code,
            provider_metadata=metadata,
        )
