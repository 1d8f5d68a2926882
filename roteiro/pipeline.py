"""
Script Pipeline - prompt → script → topics → images, plus narration and
metadata import

Glue between the credential store and the provider clients. Each step
returns a typed outcome; nothing here retries.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from roteiro.config import Settings, get_settings
from roteiro.content_analyzer import classify, extract_topics
from roteiro.errors import ErrorKind, MetadataNotFound, TransportError
from roteiro.jobs import AsyncJobPoller, CancellationToken, Clock, Scheduler, job_result
from roteiro.models import GenerationRequest, GenerationResult, ScriptAnalysis, ScriptParameters, Topic
from roteiro.prompt_builder import build_prompt
from roteiro.providers import (
    AiohttpTransport,
    ElevenLabsNarrator,
    HttpTransport,
    ImageParams,
    LeonardoImageClient,
    NarrationResult,
    RequestDispatcher,
    YouTubeMetadataClient,
    get_provider,
    parse_youtube_id,
)
from roteiro.secrets import CredentialStore

logger = logging.getLogger(__name__)


@dataclass
class MetadataImport:
    """Outcome of importing a reference video"""
    success: bool
    analysis: Optional[ScriptAnalysis] = None
    error_kind: Optional[ErrorKind] = None
    error_message: Optional[str] = None


class ScriptPipeline:
    """
    Runs the generation steps against one credential store.

    Only the registry is shared between calls; every request and job is
    independent.
    """

    def __init__(
        self,
        credentials: CredentialStore,
        transport: Optional[HttpTransport] = None,
        settings: Optional[Settings] = None,
        clock: Optional[Clock] = None,
        scheduler: Optional[Scheduler] = None,
    ):
        self.settings = settings or get_settings()
        self.credentials = credentials
        self.transport = transport or AiohttpTransport(timeout=self.settings.http_timeout)

        self.dispatcher = RequestDispatcher(self.transport)
        self.image_client = LeonardoImageClient(self.transport)
        self.poller = AsyncJobPoller(
            self.image_client,
            clock=clock,
            scheduler=scheduler,
            poll_interval=self.settings.poll_interval,
            deadline=self.settings.poll_deadline,
        )
        self.narrator = ElevenLabsNarrator(
            self.transport,
            voice_id=self.settings.default_voice_id,
            model_id=self.settings.default_voice_model,
        )
        self.metadata_client = YouTubeMetadataClient(self.transport)

    def _credential(self, provider_id: str) -> Optional[str]:
        descriptor = get_provider(provider_id)
        if descriptor is None:
            return None
        return self.credentials.get(descriptor.credential_slot)

    # ------------------------------------------------------------
    # Script
    # ------------------------------------------------------------

    async def generate_script(
        self,
        provider_id: str,
        params: ScriptParameters,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> GenerationResult:
        """Validate parameters, build the prompt and dispatch it once"""
        missing = params.missing_required()
        if missing:
            return GenerationResult.fail(
                ErrorKind.MISSING_FIELDS,
                f"Required fields are empty: {', '.join(missing)}",
                missing=missing,
            )

        if get_provider(provider_id) is None:
            return GenerationResult.fail(
                ErrorKind.UNSUPPORTED_PROVIDER,
                f"Provider {provider_id} is not supported",
                provider=provider_id,
            )

        request = GenerationRequest(
            prompt=build_prompt(params),
            max_tokens=max_tokens,
            temperature=temperature,
        )
        logger.info(f"Generating script on {provider_id}: {params.topic[:60]}")
        result = await self.dispatcher.dispatch(provider_id, request, self._credential(provider_id))

        if not result.success:
            logger.warning(f"Script generation on {provider_id} failed: {result.error_message}")
        return result

    def extract_topics(self, script_text: str) -> List[Topic]:
        return extract_topics(script_text)

    # ------------------------------------------------------------
    # Images
    # ------------------------------------------------------------

    async def generate_image(
        self,
        topic: Topic,
        cancel_token: Optional[CancellationToken] = None,
    ) -> GenerationResult:
        """Run one image job for ``topic`` and record the outcome on it"""
        credential = self._credential(self.image_client.provider_id)
        if not credential:
            result = GenerationResult.fail(
                ErrorKind.CREDENTIAL_MISSING,
                "Leonardo API key is required",
                credential_slot=get_provider(self.image_client.provider_id).credential_slot,
            )
            topic.error = result.error_message
            return result

        job = await self.poller.run(credential, ImageParams(prompt=topic.prompt), cancel_token)
        result = job_result(job)

        if result.success:
            topic.artifact_url = result.artifact_url
            topic.error = None
            logger.info(f"Image ready for '{topic.title}'")
        else:
            topic.error = result.error_message
            logger.warning(f"Image for '{topic.title}' failed: {result.error_message}")
        return result

    async def generate_images(
        self,
        topics: List[Topic],
        cancel_token: Optional[CancellationToken] = None,
    ) -> List[Topic]:
        """
        Generate images one topic at a time.

        Topics that already have an image are skipped. Stops early once the
        credential turns out to be missing or the token is cancelled.
        """
        for topic in topics:
            if topic.has_artifact:
                continue
            if cancel_token is not None and cancel_token.cancelled:
                break
            result = await self.generate_image(topic, cancel_token)
            if result.error_kind == ErrorKind.CREDENTIAL_MISSING:
                break
        return topics

    # ------------------------------------------------------------
    # Narration
    # ------------------------------------------------------------

    async def narrate(
        self,
        text: str,
        voice_id: Optional[str] = None,
        model_id: Optional[str] = None,
    ) -> NarrationResult:
        credential = self._credential(self.narrator.provider_id)
        result = await self.narrator.narrate(text, credential, voice_id=voice_id, model_id=model_id)
        if not result.success:
            logger.warning(f"Narration failed: {result.error_message}")
        return result

    # ------------------------------------------------------------
    # Metadata import
    # ------------------------------------------------------------

    async def import_metadata(self, url: str) -> MetadataImport:
        """Fetch a reference video's metadata and classify it"""
        credential = self._credential(self.metadata_client.provider_id)
        if not credential:
            return MetadataImport(
                success=False,
                error_kind=ErrorKind.CREDENTIAL_MISSING,
                error_message="YouTube API key is required",
            )

        video_id = parse_youtube_id(url)
        if not video_id:
            return MetadataImport(
                success=False,
                error_kind=ErrorKind.EMPTY_INPUT,
                error_message=f"Could not find a video id in {url!r}",
            )

        try:
            metadata = await self.metadata_client.fetch(video_id, credential)
        except MetadataNotFound as e:
            return MetadataImport(success=False, error_kind=ErrorKind.MALFORMED_RESPONSE, error_message=str(e))
        except TransportError as e:
            return MetadataImport(success=False, error_kind=ErrorKind.TRANSPORT_ERROR, error_message=str(e))

        analysis = classify(metadata.text, metadata.tags)
        logger.info(f"Imported {video_id}: niche={analysis.niche} qualified={analysis.qualified}")
        return MetadataImport(success=True, analysis=analysis)

    async def close(self) -> None:
        await self.transport.close()
