"""Public interface for the OneLogin apps adapter."""

from __future__ import annotations

from .codec import JsonAppCodec
from .schema import AppPayload, IdPayload, ParameterPayload, RulePayload
from .translator import app_to_payload, rule_to_payload, translate_app, translate_rule

__all__ = [
    "AppPayload",
    "IdPayload",
    "JsonAppCodec",
    "ParameterPayload",
    "RulePayload",
    "app_to_payload",
    "rule_to_payload",
    "translate_app",
    "translate_rule",
]
