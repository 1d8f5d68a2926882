"""Tests for RequestDispatcher against every text provider"""

import pytest

from roteiro.errors import ErrorKind, TransportError
from roteiro.models import GenerationRequest
from roteiro.providers import RequestDispatcher
from roteiro.providers.transport import HttpResponse
from tests.mocks.transport import MockTransport, text_response


PROMPT = "Crie um roteiro sobre ETFs"


def choices_body(text):
    return {"choices": [{"message": {"role": "assistant", "content": text}}]}


@pytest.fixture
def dispatcher(transport):
    return RequestDispatcher(transport)


# ============================================================
# Wire shapes
# ============================================================

class TestWireShapes:
    """One golden request per provider"""

    @pytest.mark.asyncio
    async def test_gemini(self, dispatcher, transport):
        transport.add_json({"candidates": [{"content": {"parts": [{"text": "roteiro"}]}}]})

        result = await dispatcher.dispatch("gemini", GenerationRequest(prompt=PROMPT), "gem-key")

        assert result.success
        call = transport.last_call
        assert call["method"] == "POST"
        assert call["url"] == (
            "https://generativelanguage.googleapis.com/v1beta/models/gemini-pro:generateContent"
        )
        assert call["params"] == {"key": "gem-key"}
        assert call["headers"] == {"Content-Type": "application/json"}
        assert call["json"] == {"contents": [{"parts": [{"text": PROMPT}]}]}

    @pytest.mark.asyncio
    async def test_openai(self, dispatcher, transport):
        transport.add_json(choices_body("roteiro"))

        await dispatcher.dispatch("openai", GenerationRequest(prompt=PROMPT), "sk-test")

        call = transport.last_call
        assert call["url"] == "https://api.openai.com/v1/chat/completions"
        assert call["headers"]["Authorization"] == "Bearer sk-test"
        assert call["params"] is None
        assert call["json"] == {
            "model": "gpt-4",
            "messages": [{"role": "user", "content": PROMPT}],
            "max_tokens": 2000,
            "temperature": 0.7,
        }

    @pytest.mark.asyncio
    async def test_claude(self, dispatcher, transport):
        transport.add_json({"content": [{"type": "text", "text": "roteiro"}]})

        await dispatcher.dispatch("claude", GenerationRequest(prompt=PROMPT), "claude-key")

        call = transport.last_call
        assert call["url"] == "https://api.anthropic.com/v1/messages"
        assert call["headers"] == {
            "x-api-key": "claude-key",
            "Content-Type": "application/json",
            "anthropic-version": "2023-06-01",
        }
        assert call["json"] == {
            "model": "claude-3-sonnet-20240229",
            "max_tokens": 2000,
            "messages": [{"role": "user", "content": PROMPT}],
        }

    @pytest.mark.asyncio
    async def test_grok(self, dispatcher, transport):
        transport.add_json(choices_body("roteiro"))

        await dispatcher.dispatch("grok", GenerationRequest(prompt=PROMPT), "xai-key")

        call = transport.last_call
        assert call["url"] == "https://api.x.ai/v1/chat/completions"
        assert call["headers"]["Authorization"] == "Bearer xai-key"
        assert call["json"] == {
            "messages": [{"role": "user", "content": PROMPT}],
            "model": "grok-beta",
            "stream": False,
            "temperature": 0.7,
        }

    @pytest.mark.asyncio
    @pytest.mark.parametrize("provider_id,url,model", [
        ("mistral", "https://api.mistral.ai/v1/chat/completions", "mistral-large-latest"),
        ("deepseek", "https://api.deepseek.com/v1/chat/completions", "deepseek-chat"),
        ("perplexity", "https://api.perplexity.ai/chat/completions", "llama-3.1-sonar-small-128k-online"),
    ])
    async def test_chat_completion_providers(self, dispatcher, transport, provider_id, url, model):
        transport.add_json(choices_body("roteiro"))

        await dispatcher.dispatch(provider_id, GenerationRequest(prompt=PROMPT), "key-123")

        call = transport.last_call
        assert call["url"] == url
        assert call["headers"] == {
            "Authorization": "Bearer key-123",
            "Content-Type": "application/json",
        }
        assert call["json"]["model"] == model
        assert call["json"]["messages"] == [{"role": "user", "content": PROMPT}]

    @pytest.mark.asyncio
    async def test_request_overrides_defaults(self, dispatcher, transport):
        transport.add_json(choices_body("roteiro"))

        await dispatcher.dispatch(
            "openai",
            GenerationRequest(prompt=PROMPT, max_tokens=500, temperature=0.2),
            "sk-test",
        )

        assert transport.last_call["json"]["max_tokens"] == 500
        assert transport.last_call["json"]["temperature"] == 0.2


# ============================================================
# Results
# ============================================================

class TestDispatchResults:
    """Mapping of provider answers to GenerationResult"""

    @pytest.mark.asyncio
    async def test_text_returned_unmodified(self, dispatcher, transport):
        text = "  # Roteiro\n\n## Hook inicial\nOlá!  \n"
        transport.add_json(choices_body(text))

        result = await dispatcher.dispatch("deepseek", GenerationRequest(prompt=PROMPT), "k")

        assert result.success
        assert result.text == text
        assert result.error_kind is None
        assert result.provider_metadata["provider"] == "deepseek"

    @pytest.mark.asyncio
    async def test_unknown_provider_makes_no_call(self, dispatcher, transport):
        result = await dispatcher.dispatch("unknown", GenerationRequest(prompt=PROMPT), "k")

        assert not result.success
        assert result.error_kind == ErrorKind.UNSUPPORTED_PROVIDER
        assert result.error_message == "Provider unknown is not supported"
        assert transport.call_count == 0

    @pytest.mark.asyncio
    async def test_registered_provider_without_wire_format_is_unsupported(self, dispatcher, transport):
        result = await dispatcher.dispatch("leonardo", GenerationRequest(prompt=PROMPT), "k")

        assert result.error_kind == ErrorKind.UNSUPPORTED_PROVIDER
        assert transport.call_count == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("credential", [None, ""])
    async def test_missing_credential_makes_no_call(self, dispatcher, transport, credential):
        result = await dispatcher.dispatch("gemini", GenerationRequest(prompt=PROMPT), credential)

        assert result.error_kind == ErrorKind.CREDENTIAL_MISSING
        assert result.provider_metadata["credential_slot"] == "gemini_api_key"
        assert transport.call_count == 0

    @pytest.mark.asyncio
    async def test_rejected_status(self, dispatcher, transport):
        transport.add_response(text_response('{"error": "invalid key"}', status=401))

        result = await dispatcher.dispatch("openai", GenerationRequest(prompt=PROMPT), "bad")

        assert result.error_kind == ErrorKind.PROVIDER_REJECTED
        assert result.status_code == 401
        assert "invalid key" in result.error_message
        assert result.text is None

    @pytest.mark.asyncio
    async def test_missing_path_is_malformed(self, dispatcher, transport):
        transport.add_json({"choices": []})

        result = await dispatcher.dispatch("mistral", GenerationRequest(prompt=PROMPT), "k")

        assert result.error_kind == ErrorKind.MALFORMED_RESPONSE
        assert "choices[0].message.content" in result.error_message

    @pytest.mark.asyncio
    async def test_empty_text_is_malformed(self, dispatcher, transport):
        transport.add_json({"content": [{"text": ""}]})

        result = await dispatcher.dispatch("claude", GenerationRequest(prompt=PROMPT), "k")

        assert result.error_kind == ErrorKind.MALFORMED_RESPONSE

    @pytest.mark.asyncio
    async def test_non_json_body_is_malformed(self, dispatcher, transport):
        transport.add_response(HttpResponse(status=200, body=b"<html>oops</html>"))

        result = await dispatcher.dispatch("gemini", GenerationRequest(prompt=PROMPT), "k")

        assert result.error_kind == ErrorKind.MALFORMED_RESPONSE

    @pytest.mark.asyncio
    async def test_transport_error(self, dispatcher, transport):
        transport.add_response(TransportError("connection reset"))

        result = await dispatcher.dispatch("grok", GenerationRequest(prompt=PROMPT), "k")

        assert result.error_kind == ErrorKind.TRANSPORT_ERROR
        assert "connection reset" in result.error_message

    @pytest.mark.asyncio
    async def test_exactly_one_request_per_dispatch(self, dispatcher, transport):
        transport.add_response(text_response("busy", status=503))

        await dispatcher.dispatch("perplexity", GenerationRequest(prompt=PROMPT), "k")

        assert transport.call_count == 1


class TestSupports:

    def test_text_providers_supported(self):
        dispatcher = RequestDispatcher(MockTransport())
        for provider_id in ["gemini", "openai", "claude", "grok", "mistral", "deepseek", "perplexity"]:
            assert dispatcher.supports(provider_id)

    def test_non_text_providers_not_supported(self):
        dispatcher = RequestDispatcher(MockTransport())
        assert not dispatcher.supports("leonardo")
        assert not dispatcher.supports("nope")

    @pytest.mark.asyncio
    async def test_custom_wire_table(self):
        transport = MockTransport()
        dispatcher = RequestDispatcher(transport, wire_formats={})

        result = await dispatcher.dispatch("gemini", GenerationRequest(prompt=PROMPT), "k")

        assert result.error_kind == ErrorKind.UNSUPPORTED_PROVIDER
