"""Audio provider implementations"""

from .elevenlabs import ElevenLabsNarrator, NarrationResult, DEFAULT_VOICES, MODELS

__all__ = [
    "ElevenLabsNarrator",
    "NarrationResult",
    "DEFAULT_VOICES",
    "MODELS",
]
