"""
Wire formats for the text-generation providers

One table entry per provider: a request shaper that places the prompt and
credential where that service expects them, and a response extractor that
walks the provider's answer down to the generated text. Both are pure
functions; adding a provider means adding an entry, not a branch.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Sequence, Union

from roteiro.errors import MalformedResponse
from roteiro.models import GenerationRequest, ProviderDescriptor


DEFAULT_MAX_TOKENS = 2000
DEFAULT_TEMPERATURE = 0.7

ANTHROPIC_VERSION = "2023-06-01"

JSON_HEADERS = {"Content-Type": "application/json"}


@dataclass(frozen=True)
class WireRequest:
    """Everything needed to send one provider call"""
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    params: Dict[str, str] = field(default_factory=dict)
    body: Dict[str, Any] = field(default_factory=dict)


RequestShaper = Callable[[ProviderDescriptor, GenerationRequest, str], WireRequest]
ResponseExtractor = Callable[[Any], str]


@dataclass(frozen=True)
class WireFormat:
    """Request shaper and response extractor for one provider"""
    shape_request: RequestShaper
    extract_text: ResponseExtractor
    response_path: str


def _max_tokens(request: GenerationRequest) -> int:
    return request.max_tokens if request.max_tokens is not None else DEFAULT_MAX_TOKENS


def _temperature(request: GenerationRequest) -> float:
    return request.temperature if request.temperature is not None else DEFAULT_TEMPERATURE


def _user_messages(prompt: str) -> list:
    return [{"role": "user", "content": prompt}]


def _bearer_headers(credential: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {credential}", **JSON_HEADERS}


def dig(data: Any, path: Sequence[Union[str, int]]) -> Any:
    """
    Follow a path of dict keys and list indexes.

    Raises:
        KeyError: If any step is missing or the container has the wrong type
    """
    current = data
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, list) or len(current) <= step:
                raise KeyError(step)
        elif not isinstance(current, dict) or step not in current:
            raise KeyError(step)
        current = current[step]
    return current


def _format_path(path: Sequence[Union[str, int]]) -> str:
    out = ""
    for step in path:
        out += f"[{step}]" if isinstance(step, int) else (f".{step}" if out else step)
    return out


def path_extractor(provider_id: str, path: Sequence[Union[str, int]]) -> ResponseExtractor:
    """Build an extractor returning the non-empty string found at ``path``"""
    label = _format_path(path)

    def extract(data: Any) -> str:
        try:
            value = dig(data, path)
        except KeyError:
            raise MalformedResponse(provider_id, label)
        if not isinstance(value, str) or not value:
            raise MalformedResponse(provider_id, label)
        return value

    return extract


# ------------------------------------------------------------------
# Request shapers
# ------------------------------------------------------------------

def shape_gemini(
    descriptor: ProviderDescriptor,
    request: GenerationRequest,
    credential: str
) -> WireRequest:
    """Gemini takes the key as a query parameter and a contents/parts body"""
    return WireRequest(
        method="POST",
        url=descriptor.endpoint_base,
        headers=dict(JSON_HEADERS),
        params={"key": credential},
        body={"contents": [{"parts": [{"text": request.prompt}]}]},
    )


def shape_claude(
    descriptor: ProviderDescriptor,
    request: GenerationRequest,
    credential: str
) -> WireRequest:
    return WireRequest(
        method="POST",
        url=descriptor.endpoint_base,
        headers={
            "x-api-key": credential,
            **JSON_HEADERS,
            "anthropic-version": ANTHROPIC_VERSION,
        },
        body={
            "model": "claude-3-sonnet-20240229",
            "max_tokens": _max_tokens(request),
            "messages": _user_messages(request.prompt),
        },
    )


def shape_grok(
    descriptor: ProviderDescriptor,
    request: GenerationRequest,
    credential: str
) -> WireRequest:
    # x.ai: no max_tokens, explicit non-streaming
    return WireRequest(
        method="POST",
        url=descriptor.endpoint_base,
        headers=_bearer_headers(credential),
        body={
            "messages": _user_messages(request.prompt),
            "model": "grok-beta",
            "stream": False,
            "temperature": _temperature(request),
        },
    )


def chat_completions(model: str) -> RequestShaper:
    """Shaper for OpenAI-compatible chat completion endpoints"""

    def shape(
        descriptor: ProviderDescriptor,
        request: GenerationRequest,
        credential: str
    ) -> WireRequest:
        return WireRequest(
            method="POST",
            url=descriptor.endpoint_base,
            headers=_bearer_headers(credential),
            body={
                "model": model,
                "messages": _user_messages(request.prompt),
                "max_tokens": _max_tokens(request),
                "temperature": _temperature(request),
            },
        )

    return shape


# ------------------------------------------------------------------
# Provider table
# ------------------------------------------------------------------

CHOICES_PATH = ("choices", 0, "message", "content")
GEMINI_PATH = ("candidates", 0, "content", "parts", 0, "text")
CLAUDE_PATH = ("content", 0, "text")


def _entry(provider_id: str, shaper: RequestShaper, path: Sequence[Union[str, int]]) -> WireFormat:
    return WireFormat(
        shape_request=shaper,
        extract_text=path_extractor(provider_id, path),
        response_path=_format_path(path),
    )


WIRE_FORMATS: Dict[str, WireFormat] = {
    "gemini": _entry("gemini", shape_gemini, GEMINI_PATH),
    "openai": _entry("openai", chat_completions("gpt-4"), CHOICES_PATH),
    "claude": _entry("claude", shape_claude, CLAUDE_PATH),
    "grok": _entry("grok", shape_grok, CHOICES_PATH),
    "mistral": _entry("mistral", chat_completions("mistral-large-latest"), CHOICES_PATH),
    "deepseek": _entry("deepseek", chat_completions("deepseek-chat"), CHOICES_PATH),
    "perplexity": _entry(
        "perplexity", chat_completions("llama-3.1-sonar-small-128k-online"), CHOICES_PATH
    ),
}


def get_wire_format(provider_id: str) -> Optional[WireFormat]:
    return WIRE_FORMATS.get(provider_id)
