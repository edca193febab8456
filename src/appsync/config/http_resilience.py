"""Configuration types for rate-limited HTTP clients."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(slots=True, frozen=True)
class RateLimit:
    max_calls: int
    per_seconds: float

    def __post_init__(self) -> None:
        if self.max_calls < 1:
            raise ValueError("Rate limit must allow at least one call")
        if self.per_seconds <= 0:
            raise ValueError("Rate limit window must be positive")


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    """Client settings shared by every call made through one ``ResilientClient``.

    Failed calls surface to the caller unchanged and responses are never cached.
    """

    name: str
    base_url: str | None = None
    timeout_seconds: float = 30.0
    ratelimit: RateLimit | None = None
    default_headers: Mapping[str, str] | None = None
