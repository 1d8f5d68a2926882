"""Provider interfaces for external generative services"""

from typing import Dict, List, Optional

from roteiro.models import ProviderCategory, ProviderDescriptor
from .registry import PROVIDER_REGISTRY, get_provider, providers_by_category
from .transport import HttpTransport, HttpResponse, AiohttpTransport
from .text import WIRE_FORMATS
from .dispatcher import RequestDispatcher
from .image import LeonardoImageClient, ImageParams
from .audio import ElevenLabsNarrator, NarrationResult
from .metadata import YouTubeMetadataClient, VideoMetadata, parse_youtube_id

__all__ = [
    # Registry
    "PROVIDER_REGISTRY",
    "get_provider",
    "providers_by_category",
    "get_all_providers",
    "get_provider_info",
    # Transport
    "HttpTransport",
    "HttpResponse",
    "AiohttpTransport",
    # Text
    "WIRE_FORMATS",
    "RequestDispatcher",
    # Image
    "LeonardoImageClient",
    "ImageParams",
    # Audio
    "ElevenLabsNarrator",
    "NarrationResult",
    # Metadata
    "YouTubeMetadataClient",
    "VideoMetadata",
    "parse_youtube_id",
]


# Ids backed by a client in this package; the rest are listed but not integrated
_CLIENT_IDS = {
    LeonardoImageClient.provider_id,
    ElevenLabsNarrator.provider_id,
    YouTubeMetadataClient.provider_id,
}


def _status(provider_id: str) -> str:
    if provider_id in WIRE_FORMATS or provider_id in _CLIENT_IDS:
        return "implemented"
    return "stub"


def _info(descriptor: ProviderDescriptor, credentials=None) -> Dict:
    info = {
        "name": descriptor.id,
        "display_name": descriptor.display_name,
        "category": descriptor.category.value,
        "endpoint": descriptor.endpoint_base,
        "credential_slot": descriptor.credential_slot,
        "api_key_url": descriptor.api_key_url,
        "status": _status(descriptor.id),
    }
    if credentials is not None:
        info["api_key_set"] = bool(credentials.get(descriptor.credential_slot))
    return info


def get_all_providers(
    credentials=None,
    category: Optional[ProviderCategory] = None
) -> List[Dict]:
    """
    Get all providers with implementation status.

    Args:
        credentials: Optional CredentialStore; adds ``api_key_set`` per provider
        category: Only list providers of this category

    Returns:
        list: Provider info dicts in registry order
    """
    return [
        _info(descriptor, credentials)
        for descriptor in PROVIDER_REGISTRY.values()
        if category is None or descriptor.category == category
    ]


def get_provider_info(name: str, credentials=None) -> Optional[Dict]:
    """Info dict for one provider, or None if not found"""
    descriptor = get_provider(name)
    if descriptor is None:
        return None
    return _info(descriptor, credentials)
