"""Text-generation wire formats"""

from .wire import WIRE_FORMATS, WireFormat, WireRequest, get_wire_format

__all__ = [
    "WIRE_FORMATS",
    "WireFormat",
    "WireRequest",
    "get_wire_format",
]
