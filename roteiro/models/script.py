"""
Script Data Models

Structured inputs and analysis outputs around a generated video script:
- ScriptParameters: the fields a user fills before generation
- Topic: one detected section of a generated script
- ScriptAnalysis: niche/qualification snapshot from imported metadata
"""

from dataclasses import dataclass, replace
from typing import List, Optional


REQUIRED_FIELDS = ("topic", "duration", "style")


@dataclass(frozen=True)
class ScriptAnalysis:
    """Classification snapshot; recomputed on every call, never merged"""
    niche: str
    subniche: str = ""
    microniche: str = ""
    nanoniche: str = ""
    qualified: bool = False


@dataclass
class ScriptParameters:
    """Structured script request collected from the user"""
    topic: str = ""
    duration: str = ""                     # minutes, e.g. "5-10"
    style: str = ""
    style_keywords: str = ""
    language: str = ""
    niche: str = ""
    subniche: str = ""
    microniche: str = ""
    nanoniche: str = ""
    audience: str = ""
    additional_info: str = ""
    youtube_link: str = ""
    qualified: bool = False

    def missing_required(self) -> List[str]:
        """Names of required fields that are empty"""
        return [name for name in REQUIRED_FIELDS if not getattr(self, name).strip()]

    def apply_analysis(self, analysis: ScriptAnalysis) -> "ScriptParameters":
        """Return a copy with the classification fields pre-filled"""
        return replace(
            self,
            niche=analysis.niche,
            subniche=analysis.subniche,
            microniche=analysis.microniche,
            nanoniche=analysis.nanoniche,
            qualified=analysis.qualified,
        )


@dataclass
class Topic:
    """A detected narrative section used to seed image generation"""
    title: str
    prompt: Optional[str] = None           # editable before generation
    artifact_url: Optional[str] = None
    error: Optional[str] = None

    def __post_init__(self):
        if self.prompt is None:
            self.prompt = self.title

    def __setattr__(self, name, value):
        if name == "title" and "title" in self.__dict__:
            raise AttributeError("Topic title is immutable once extracted")
        super().__setattr__(name, value)

    @property
    def has_artifact(self) -> bool:
        return bool(self.artifact_url)
