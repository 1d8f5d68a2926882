"""Data models for roteiro-studio"""

from .generation import (
    ProviderCategory,
    ProviderDescriptor,
    GenerationRequest,
    GenerationResult,
)
from .job import Job, JobState, TERMINAL_STATES
from .script import (
    ScriptParameters,
    ScriptAnalysis,
    Topic,
    REQUIRED_FIELDS,
)

__all__ = [
    # Generation
    "ProviderCategory",
    "ProviderDescriptor",
    "GenerationRequest",
    "GenerationResult",
    # Jobs
    "Job",
    "JobState",
    "TERMINAL_STATES",
    # Script
    "ScriptParameters",
    "ScriptAnalysis",
    "Topic",
    "REQUIRED_FIELDS",
]
