"""Transport port: four-verb CRUD access to nested remote resources."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

JSON_HEADERS: dict[str, str] = {"Content-Type": "application/json"}


def _json_headers() -> dict[str, str]:
    return dict(JSON_HEADERS)


@dataclass(slots=True, frozen=True, kw_only=True)
class TransportRequest:
    """Descriptor for a single remote call.

    ``payload`` is a JSON-ready value; for reads it is sent as query parameters.
    Headers and ``auth_method`` are passed through to the transport untouched.
    """

    url: str
    headers: dict[str, str] = field(default_factory=_json_headers)
    auth_method: str = "bearer"
    payload: object | None = None


@runtime_checkable
class Repository(Protocol):
    """Remote store port. Every verb returns the raw response body.

    Implementations raise ``TransportError`` when a call fails and hold no state
    that changes the outcome of later calls. ``close`` releases whatever the
    implementation holds open; no verb may be called afterwards.
    """

    def create(self, request: TransportRequest) -> bytes: ...

    def read(self, request: TransportRequest) -> bytes: ...

    def update(self, request: TransportRequest) -> bytes: ...

    def destroy(self, request: TransportRequest) -> bytes: ...

    def close(self) -> None: ...
