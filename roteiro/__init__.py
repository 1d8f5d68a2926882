"""Roteiro Studio core - provider dispatch, image jobs and script analysis"""

from .errors import ErrorKind, RoteiroError
from .models import (
    GenerationRequest,
    GenerationResult,
    Job,
    JobState,
    ProviderDescriptor,
    ScriptAnalysis,
    ScriptParameters,
    Topic,
)
from .content_analyzer import classify, extract_topics
from .prompt_builder import build_prompt
from .jobs import AsyncJobPoller, CancellationToken
from .providers import PROVIDER_REGISTRY, RequestDispatcher

# ScriptPipeline reads settings; import it from roteiro.pipeline

__all__ = [
    # Errors
    "ErrorKind",
    "RoteiroError",
    # Models
    "GenerationRequest",
    "GenerationResult",
    "Job",
    "JobState",
    "ProviderDescriptor",
    "ScriptAnalysis",
    "ScriptParameters",
    "Topic",
    # Analysis
    "classify",
    "extract_topics",
    "build_prompt",
    # Generation
    "AsyncJobPoller",
    "CancellationToken",
    "PROVIDER_REGISTRY",
    "RequestDispatcher",
]
