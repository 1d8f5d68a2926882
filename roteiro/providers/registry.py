"""Static catalogue of the external services the studio can talk to"""

from typing import Dict, List, Optional

from roteiro.models import ProviderCategory, ProviderDescriptor


def _text(id: str, name: str, endpoint: str, key_url: str) -> ProviderDescriptor:
    return ProviderDescriptor(
        id=id,
        display_name=name,
        endpoint_base=endpoint,
        credential_slot=f"{id}_api_key",
        category=ProviderCategory.TEXT,
        api_key_url=key_url,
    )


_DESCRIPTORS = [
    # Text generation
    _text(
        "gemini", "Google Gemini",
        "https://generativelanguage.googleapis.com/v1beta/models/gemini-pro:generateContent",
        "https://makersuite.google.com/app/apikey",
    ),
    _text(
        "openai", "OpenAI ChatGPT",
        "https://api.openai.com/v1/chat/completions",
        "https://platform.openai.com/api-keys",
    ),
    _text(
        "claude", "Anthropic Claude",
        "https://api.anthropic.com/v1/messages",
        "https://console.anthropic.com/",
    ),
    _text(
        "grok", "Grok (X.AI)",
        "https://api.x.ai/v1/chat/completions",
        "https://console.x.ai/",
    ),
    _text(
        "mistral", "Mistral AI",
        "https://api.mistral.ai/v1/chat/completions",
        "https://console.mistral.ai/",
    ),
    _text(
        "deepseek", "DeepSeek",
        "https://api.deepseek.com/v1/chat/completions",
        "https://platform.deepseek.com/api_keys",
    ),
    _text(
        "perplexity", "Perplexity",
        "https://api.perplexity.ai/chat/completions",
        "https://www.perplexity.ai/settings/api",
    ),
    # Image generation
    ProviderDescriptor(
        id="leonardo",
        display_name="Leonardo AI",
        endpoint_base="https://cloud.leonardo.ai/api/rest/v1",
        credential_slot="leonardo_api_key",
        category=ProviderCategory.IMAGE,
        api_key_url="https://cloud.leonardo.ai/api-access",
    ),
    ProviderDescriptor(
        id="kling",
        display_name="Kling AI",
        endpoint_base="",
        credential_slot="kling_api_key",
        category=ProviderCategory.IMAGE,
        api_key_url="https://klingai.com/",
    ),
    ProviderDescriptor(
        id="midjourney",
        display_name="Midjourney",
        endpoint_base="",
        credential_slot="midjourney_api_key",
        category=ProviderCategory.IMAGE,
        api_key_url="https://www.midjourney.com/",
    ),
    # Narration
    ProviderDescriptor(
        id="elevenlabs",
        display_name="ElevenLabs",
        endpoint_base="https://api.elevenlabs.io",
        credential_slot="elevenlabs_api_key",
        category=ProviderCategory.AUDIO,
        api_key_url="https://elevenlabs.io/app/settings/api-keys",
    ),
    # Metadata import
    ProviderDescriptor(
        id="youtube",
        display_name="YouTube Data API",
        endpoint_base="https://www.googleapis.com/youtube/v3",
        credential_slot="youtube_api_key",
        category=ProviderCategory.METADATA,
        api_key_url="https://console.cloud.google.com/apis/credentials",
    ),
]


def _build_registry(descriptors: List[ProviderDescriptor]) -> Dict[str, ProviderDescriptor]:
    registry: Dict[str, ProviderDescriptor] = {}
    for descriptor in descriptors:
        if descriptor.id in registry:
            raise ValueError(f"Duplicate provider id: {descriptor.id}")
        registry[descriptor.id] = descriptor
    return registry


# Read-only after import
PROVIDER_REGISTRY: Dict[str, ProviderDescriptor] = _build_registry(_DESCRIPTORS)


def get_provider(provider_id: str) -> Optional[ProviderDescriptor]:
    """Look up a descriptor by id; None when unknown"""
    return PROVIDER_REGISTRY.get(provider_id)


def providers_by_category(category: ProviderCategory) -> List[ProviderDescriptor]:
    return [d for d in PROVIDER_REGISTRY.values() if d.category == category]
