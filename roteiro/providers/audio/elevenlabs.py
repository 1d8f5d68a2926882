"""
ElevenLabs Text-to-Speech Narration

Turns a finished script into narrated audio with a single ElevenLabs call.
The audio comes back as raw MP3 bytes; saving or serving them is left to
the caller.

API Documentation: https://api.elevenlabs.io/docs
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from roteiro.errors import ErrorKind, TransportError
from ..registry import get_provider
from ..transport import HttpTransport

logger = logging.getLogger(__name__)


# Premade voices available on every account
DEFAULT_VOICES: List[Dict[str, str]] = [
    {"name": "Aria", "voice_id": "9BWtsMINqrJLrRacOk9x"},
    {"name": "Roger", "voice_id": "CwhRBWXzGAHq8TQ4Fs17"},
    {"name": "Sarah", "voice_id": "EXAVITQu4vr4xnSDxMaL"},
    {"name": "Laura", "voice_id": "FGY2WhTYpPnrIDTdsKH5"},
    {"name": "Charlie", "voice_id": "IKne3meq5aSn9XLyUdCD"},
    {"name": "George", "voice_id": "JBFqnCBsd6RMkjVDRZzb"},
    {"name": "Callum", "voice_id": "N2lVS1w4EtoT3dr4eOWO"},
    {"name": "River", "voice_id": "SAz9YHcvj6GT2YYXdXww"},
    {"name": "Liam", "voice_id": "TX3LPaxmHKxFdv7VOQHJ"},
    {"name": "Charlotte", "voice_id": "XB0fDUnXU5powFXDhCwa"},
    {"name": "Alice", "voice_id": "Xb7hH8MSUJpSbSDYk0k2"},
    {"name": "Matilda", "voice_id": "XrExE9yKIg1WjnnlVkGX"},
    {"name": "Will", "voice_id": "bIHbv24MWmeRgasZH58o"},
    {"name": "Jessica", "voice_id": "cgSgspJ2msm6clMCkdW9"},
    {"name": "Eric", "voice_id": "cjVigY5qzO86Huf0OWal"},
    {"name": "Chris", "voice_id": "iP95p4xoKVk53GoZ742B"},
    {"name": "Brian", "voice_id": "nPczCjzI2devNBz1zQrb"},
    {"name": "Daniel", "voice_id": "onwK4e9ZLuTAKqWW03F9"},
    {"name": "Lily", "voice_id": "pFZP5JQG7iQjIQuC4Bku"},
    {"name": "Bill", "voice_id": "pqHfZKP75CvOlQylNhV4"},
]

MODELS: List[Dict[str, str]] = [
    {"id": "eleven_multilingual_v2", "name": "Eleven Multilingual v2"},
    {"id": "eleven_turbo_v2_5", "name": "Eleven Turbo v2.5"},
    {"id": "eleven_turbo_v2", "name": "Eleven Turbo v2"},
]


@dataclass
class NarrationResult:
    """Result from narration; ``audio_data`` set exactly when successful"""
    success: bool
    audio_data: Optional[bytes] = None
    format: str = "mp3"
    error_kind: Optional[ErrorKind] = None
    error_message: Optional[str] = None
    status_code: Optional[int] = None
    provider_metadata: Dict[str, Any] = field(default_factory=dict)


class ElevenLabsNarrator:
    """ElevenLabs text-to-speech over the shared transport"""

    provider_id = "elevenlabs"

    def __init__(
        self,
        transport: HttpTransport,
        voice_id: str = DEFAULT_VOICES[0]["voice_id"],
        model_id: str = MODELS[0]["id"],
        base_url: Optional[str] = None,
    ):
        self.transport = transport
        self.default_voice_id = voice_id
        self.default_model_id = model_id
        self.base_url = base_url or get_provider(self.provider_id).endpoint_base

    def _get_headers(self, credential: str) -> Dict[str, str]:
        return {
            "xi-api-key": credential,
            "Content-Type": "application/json",
            "Accept": "audio/mpeg",
        }

    async def narrate(
        self,
        text: str,
        credential: Optional[str],
        voice_id: Optional[str] = None,
        model_id: Optional[str] = None,
    ) -> NarrationResult:
        """
        Generate speech audio for ``text``.

        Args:
            text: Script to narrate (sent as-is)
            credential: ElevenLabs API key
            voice_id: Voice to use (default: Aria)
            model_id: Model to use (default: eleven_multilingual_v2)

        Returns:
            NarrationResult with MP3 bytes, or a typed failure
        """
        if not text or not text.strip():
            return NarrationResult(
                success=False,
                error_kind=ErrorKind.EMPTY_INPUT,
                error_message="No script text to narrate",
            )
        if not credential:
            return NarrationResult(
                success=False,
                error_kind=ErrorKind.CREDENTIAL_MISSING,
                error_message="ElevenLabs API key is required",
            )

        effective_voice_id = voice_id or self.default_voice_id
        effective_model_id = model_id or self.default_model_id
        url = f"{self.base_url}/v1/text-to-speech/{effective_voice_id}"

        try:
            response = await self.transport.request(
                "POST",
                url,
                headers=self._get_headers(credential),
                json={"text": text, "model_id": effective_model_id},
            )
        except TransportError as e:
            return NarrationResult(
                success=False,
                error_kind=ErrorKind.TRANSPORT_ERROR,
                error_message=f"ElevenLabs request failed: {e}",
            )

        if not response.ok:
            return NarrationResult(
                success=False,
                error_kind=ErrorKind.PROVIDER_REJECTED,
                error_message=response.text() or f"ElevenLabs API error ({response.status})",
                status_code=response.status,
            )

        if not response.body:
            return NarrationResult(
                success=False,
                error_kind=ErrorKind.MALFORMED_RESPONSE,
                error_message="ElevenLabs returned an empty audio body",
            )

        logger.debug(f"Narrated {len(text)} chars with voice {effective_voice_id}")
        return NarrationResult(
            success=True,
            audio_data=response.body,
            provider_metadata={
                "provider": self.provider_id,
                "voice_id": effective_voice_id,
                "model": effective_model_id,
                "character_count": len(text),
            },
        )
