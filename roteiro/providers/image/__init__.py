"""Image provider implementations"""

from .leonardo import LeonardoImageClient, ImageParams

__all__ = [
    "LeonardoImageClient",
    "ImageParams",
]
