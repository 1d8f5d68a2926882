"""Tests for YouTube metadata import"""

import pytest

from roteiro.errors import MetadataNotFound, TransportError
from roteiro.providers.metadata import YouTubeMetadataClient, parse_youtube_id
from tests.mocks.transport import text_response


class TestParseYoutubeId:

    @pytest.mark.parametrize("url,expected", [
        ("https://www.youtube.com/watch?v=dQw4w9WgXcQ", "dQw4w9WgXcQ"),
        ("https://www.youtube.com/watch?feature=share&v=abc123", "abc123"),
        ("https://youtu.be/abc123", "abc123"),
        ("https://www.youtube.com/shorts/xyz789", "xyz789"),
        ("  https://youtu.be/abc123  ", "abc123"),
    ])
    def test_valid(self, url, expected):
        assert parse_youtube_id(url) == expected

    @pytest.mark.parametrize("url", [
        "",
        "   ",
        "not a url",
        "youtube.com/watch?v=abc",
        "https://www.youtube.com/",
        "https://youtu.be/",
        "https://www.youtube.com/shorts/",
    ])
    def test_invalid(self, url):
        assert parse_youtube_id(url) is None


class TestYouTubeMetadataClient:

    @pytest.fixture
    def client(self, transport):
        return YouTubeMetadataClient(transport)

    @pytest.mark.asyncio
    async def test_fetch(self, client, transport):
        transport.add_json({
            "items": [{
                "snippet": {
                    "title": "ETFs para iniciantes",
                    "description": "Tudo sobre ETFs",
                    "tags": ["etf", "investimentos"],
                }
            }]
        })

        metadata = await client.fetch("abc123", "yt-key")

        assert metadata.title == "ETFs para iniciantes"
        assert metadata.tags == ["etf", "investimentos"]
        assert metadata.text == "ETFs para iniciantes\nTudo sobre ETFs"
        call = transport.last_call
        assert call["url"] == "https://www.googleapis.com/youtube/v3/videos"
        assert call["params"] == {
            "part": "snippet,contentDetails,statistics",
            "id": "abc123",
            "key": "yt-key",
        }

    @pytest.mark.asyncio
    async def test_missing_tags(self, client, transport):
        transport.add_json({"items": [{"snippet": {"title": "Sem tags"}}]})

        metadata = await client.fetch("abc123", "yt-key")

        assert metadata.tags == []
        assert metadata.description == ""

    @pytest.mark.asyncio
    async def test_no_items(self, client, transport):
        transport.add_json({"items": []})

        with pytest.raises(MetadataNotFound):
            await client.fetch("abc123", "yt-key")

    @pytest.mark.asyncio
    async def test_error_status(self, client, transport):
        transport.add_response(text_response("forbidden", status=403))

        with pytest.raises(TransportError):
            await client.fetch("abc123", "yt-key")
