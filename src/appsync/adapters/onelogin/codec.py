"""JSON implementation of the ``AppCodec`` port."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from appsync.domain.errors import DecodeError

from .schema import AppPayload, IdPayload, RulePayload
from .translator import app_to_payload, rule_to_payload, translate_app, translate_rule

if TYPE_CHECKING:
    from appsync.domain.model import App, AppRule

_APP = TypeAdapter(AppPayload)
_APP_LIST = TypeAdapter(list[AppPayload])
_ID = TypeAdapter(IdPayload)
_RULE_LIST = TypeAdapter(list[RulePayload])

T = TypeVar("T")


def _validate(adapter: TypeAdapter[T], raw: bytes, what: str) -> T:
    if not raw.strip():
        raise DecodeError(f"Empty {what} payload")
    try:
        return adapter.validate_json(raw)
    except ValidationError as exc:
        raise DecodeError(f"Invalid {what} payload: {exc.error_count()} error(s)") from exc


def _dump(model: BaseModel, *, exclude: set[str]) -> dict[str, Any]:
    return model.model_dump(mode="json", exclude_none=True, exclude=exclude)


class JsonAppCodec:
    """Decodes API responses with pydantic and encodes request bodies as JSON-ready dicts."""

    def decode_app(self, raw: bytes) -> App:
        return translate_app(_validate(_APP, raw, "app"))

    def decode_apps(self, raw: bytes) -> list[App]:
        return [translate_app(payload) for payload in _validate(_APP_LIST, raw, "app list")]

    def decode_rules(self, raw: bytes) -> list[AppRule]:
        return [translate_rule(payload) for payload in _validate(_RULE_LIST, raw, "rule list")]

    def decode_id(self, raw: bytes) -> int:
        return _validate(_ID, raw, "id").id

    def encode_app(self, app: App) -> dict[str, Any]:
        # rules are written through their own endpoint
        return _dump(app_to_payload(app), exclude={"id", "rules"})

    def encode_rule(self, rule: AppRule) -> dict[str, Any]:
        return _dump(rule_to_payload(rule), exclude={"id"})

    def dump_app(self, app: App) -> dict[str, Any]:
        """Full JSON-ready representation, used for CLI output."""

        return _dump(app_to_payload(app), exclude=set())
