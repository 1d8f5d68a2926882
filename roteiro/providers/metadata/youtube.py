"""
YouTube Data API metadata import

Reads title, description and tags of a reference video so the classifier
can pre-fill niche and qualification fields.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional
from urllib.parse import urlparse, parse_qs

from roteiro.errors import MetadataNotFound, TransportError
from ..registry import get_provider
from ..transport import HttpTransport

logger = logging.getLogger(__name__)


@dataclass
class VideoMetadata:
    video_id: str
    title: str = ""
    description: str = ""
    tags: List[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        """Title and description as fed to the classifier"""
        return f"{self.title}\n{self.description}"


def parse_youtube_id(url: str) -> Optional[str]:
    """
    Extract the video id from a YouTube URL.

    Handles youtu.be/<id>, /shorts/<id> and ?v=<id>; None otherwise.
    """
    if not url or not url.strip():
        return None
    parsed = urlparse(url.strip())
    if not parsed.scheme or not parsed.netloc:
        return None

    if parsed.hostname == "youtu.be":
        return parsed.path[1:] or None
    if parsed.path.startswith("/shorts/"):
        parts = parsed.path.split("/")
        return parts[2] if len(parts) > 2 and parts[2] else None

    values = parse_qs(parsed.query).get("v")
    return values[0] if values else None


class YouTubeMetadataClient:
    """Single-call client for the videos endpoint"""

    provider_id = "youtube"

    def __init__(self, transport: HttpTransport, base_url: Optional[str] = None):
        self.transport = transport
        self.base_url = base_url or get_provider(self.provider_id).endpoint_base

    async def fetch(self, video_id: str, credential: str) -> VideoMetadata:
        """
        Fetch snippet metadata for one video.

        Raises:
            MetadataNotFound: If the API answers without an item
            TransportError: On non-2xx status or connection failure
        """
        response = await self.transport.request(
            "GET",
            f"{self.base_url}/videos",
            params={
                "part": "snippet,contentDetails,statistics",
                "id": video_id,
                "key": credential,
            },
        )
        if not response.ok:
            raise TransportError(f"YouTube API error ({response.status})")

        try:
            data = response.json()
        except ValueError as e:
            raise MetadataNotFound(f"YouTube returned a non-JSON body for {video_id}") from e

        items = data.get("items") if isinstance(data, dict) else None
        if not items:
            raise MetadataNotFound(f"Video not found: {video_id}")

        snippet = items[0].get("snippet") or {}
        logger.debug(f"Fetched metadata for {video_id}: {len(snippet.get('tags') or [])} tags")
        return VideoMetadata(
            video_id=video_id,
            title=snippet.get("title") or "",
            description=snippet.get("description") or "",
            tags=list(snippet.get("tags") or []),
        )
