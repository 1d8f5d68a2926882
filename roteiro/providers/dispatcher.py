"""
Request Dispatcher - one normalized call to any text-generation provider

Looks the provider up in the registry, shapes the wire request through the
WIRE_FORMATS table, sends it once and maps the answer back to a
GenerationResult. No retries, no caching: calling again is the caller's
decision.
"""

import logging
from typing import Optional

from roteiro.errors import ErrorKind, MalformedResponse, TransportError
from roteiro.models import GenerationRequest, GenerationResult
from .registry import get_provider
from .text.wire import WIRE_FORMATS, WireFormat
from .transport import HttpTransport

logger = logging.getLogger(__name__)


class RequestDispatcher:
    """Stateless per call; safe to share between concurrent requests"""

    def __init__(self, transport: HttpTransport, wire_formats: Optional[dict] = None):
        self.transport = transport
        self.wire_formats = wire_formats if wire_formats is not None else WIRE_FORMATS

    def supports(self, provider_id: str) -> bool:
        return get_provider(provider_id) is not None and provider_id in self.wire_formats

    async def dispatch(
        self,
        provider_id: str,
        request: GenerationRequest,
        credential: Optional[str]
    ) -> GenerationResult:
        """
        Generate text with one provider.

        Args:
            provider_id: Registry id (e.g. "gemini", "openai")
            request: Normalized prompt and generation parameters
            credential: API key for the provider's credential slot

        Returns:
            GenerationResult with the provider's text unmodified, or a typed failure
        """
        descriptor = get_provider(provider_id)
        wire: Optional[WireFormat] = self.wire_formats.get(provider_id)
        if descriptor is None or wire is None:
            return GenerationResult.fail(
                ErrorKind.UNSUPPORTED_PROVIDER,
                f"Provider {provider_id} is not supported",
                provider=provider_id,
            )

        if not credential:
            return GenerationResult.fail(
                ErrorKind.CREDENTIAL_MISSING,
                f"No API key in slot '{descriptor.credential_slot}'",
                provider=provider_id,
                credential_slot=descriptor.credential_slot,
            )

        wire_request = wire.shape_request(descriptor, request, credential)
        logger.debug(f"Dispatching to {provider_id} ({len(request.prompt)} char prompt)")

        try:
            response = await self.transport.request(
                wire_request.method,
                wire_request.url,
                headers=wire_request.headers,
                params=wire_request.params or None,
                json=wire_request.body,
            )
        except TransportError as e:
            return GenerationResult.fail(
                ErrorKind.TRANSPORT_ERROR,
                f"{descriptor.display_name} request failed: {e}",
                provider=provider_id,
            )

        if not response.ok:
            return GenerationResult.fail(
                ErrorKind.PROVIDER_REJECTED,
                f"{descriptor.display_name} API error ({response.status}): {response.text()[:500]}",
                status_code=response.status,
                provider=provider_id,
            )

        try:
            data = response.json()
        except ValueError:
            return GenerationResult.fail(
                ErrorKind.MALFORMED_RESPONSE,
                f"{descriptor.display_name} returned a non-JSON body",
                provider=provider_id,
            )

        try:
            text = wire.extract_text(data)
        except MalformedResponse as e:
            return GenerationResult.fail(
                ErrorKind.MALFORMED_RESPONSE,
                str(e),
                provider=provider_id,
                response_path=wire.response_path,
            )

        return GenerationResult.ok(text=text, provider=provider_id)
