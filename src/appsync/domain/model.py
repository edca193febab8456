"""App aggregate and its child collections.

Identifiers are ``int | None``: ``None`` means the object has not been persisted
remotely yet. Zero and negative values are real identifiers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True, kw_only=True)
class AppRule:
    """Mapping rule attached to an app."""

    id: int | None = None
    name: str
    match: str = "all"
    enabled: bool = True
    position: int | None = None
    conditions: list[dict[str, Any]] = field(default_factory=list[dict[str, Any]])
    actions: list[dict[str, Any]] = field(default_factory=list[dict[str, Any]])


@dataclass(slots=True, kw_only=True)
class AppParameter:
    """Named app parameter; the remote keys parameters by name."""

    id: int | None = None
    label: str | None = None
    user_attribute_mappings: str | None = None
    user_attribute_macros: str | None = None
    include_in_saml_assertion: bool | None = None
    provisioned_entitlements: bool | None = None


@dataclass(slots=True, kw_only=True)
class App:
    """Parent resource owning the rule and parameter collections."""

    id: int | None = None
    name: str
    connector_id: int | None = None
    description: str | None = None
    notes: str | None = None
    visible: bool | None = None
    policy_id: int | None = None
    configuration: dict[str, Any] = field(default_factory=dict[str, Any])
    rules: list[AppRule] = field(default_factory=list[AppRule])
    parameters: dict[str, AppParameter] = field(default_factory=dict[str, AppParameter])

    def require_id(self) -> int:
        if self.id is None:
            raise ValueError(f"App {self.name!r} has not been created remotely")
        return self.id


@dataclass(slots=True, kw_only=True)
class AppsQuery:
    """Filters accepted by the app listing endpoint."""

    name: str | None = None
    connector_id: int | None = None
    auth_method: int | None = None
    limit: int | None = None
    page: int | None = None

    def as_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        for key in ("name", "connector_id", "auth_method", "limit", "page"):
            value = getattr(self, key)
            if value is not None:
                params[key] = str(value)
        return params
