"""Codec port translating wire payloads to and from domain objects."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from appsync.domain.model import App, AppRule


@runtime_checkable
class AppCodec(Protocol):
    """Serialization collaborator. Decoders raise ``DecodeError`` on bad input."""

    def decode_app(self, raw: bytes) -> App: ...

    def decode_apps(self, raw: bytes) -> list[App]: ...

    def decode_rules(self, raw: bytes) -> list[AppRule]: ...

    def decode_id(self, raw: bytes) -> int: ...

    def encode_app(self, app: App) -> object: ...

    def encode_rule(self, rule: AppRule) -> object: ...
