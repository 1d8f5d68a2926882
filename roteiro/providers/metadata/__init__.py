"""Metadata import clients"""

from .youtube import YouTubeMetadataClient, VideoMetadata, parse_youtube_id

__all__ = [
    "YouTubeMetadataClient",
    "VideoMetadata",
    "parse_youtube_id",
]
