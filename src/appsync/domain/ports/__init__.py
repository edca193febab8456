"""Domain port definitions for adapters."""

from __future__ import annotations

from .codec import AppCodec
from .transport import JSON_HEADERS, Repository, TransportRequest

__all__ = [
    "JSON_HEADERS",
    "AppCodec",
    "Repository",
    "TransportRequest",
]
