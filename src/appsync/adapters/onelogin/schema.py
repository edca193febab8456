"""Pydantic models describing the OneLogin apps API payloads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _null_as_empty_list(value: object) -> object:
    return [] if value is None else value


def _null_as_empty_dict(value: object) -> object:
    return {} if value is None else value


class OneLoginBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class RulePayload(OneLoginBaseModel):
    id: int | None = None
    name: str
    match: str = "all"
    enabled: bool = True
    position: int | None = None
    conditions: list[dict[str, Any]] = Field(default_factory=list)
    actions: list[dict[str, Any]] = Field(default_factory=list)

    @field_validator("conditions", "actions", mode="before")
    @classmethod
    def _null_list(cls, value: object) -> object:
        return _null_as_empty_list(value)


class ParameterPayload(OneLoginBaseModel):
    id: int | None = None
    label: str | None = None
    user_attribute_mappings: str | None = None
    user_attribute_macros: str | None = None
    include_in_saml_assertion: bool | None = None
    provisioned_entitlements: bool | None = None


class AppPayload(OneLoginBaseModel):
    id: int | None = None
    name: str
    connector_id: int | None = None
    description: str | None = None
    notes: str | None = None
    visible: bool | None = None
    policy_id: int | None = None
    configuration: dict[str, Any] = Field(default_factory=dict)
    rules: list[RulePayload] = Field(default_factory=list)
    parameters: dict[str, ParameterPayload] = Field(default_factory=dict)

    @field_validator("configuration", "parameters", mode="before")
    @classmethod
    def _null_mapping(cls, value: object) -> object:
        return _null_as_empty_dict(value)

    @field_validator("rules", mode="before")
    @classmethod
    def _null_rules(cls, value: object) -> object:
        return _null_as_empty_list(value)


class IdPayload(OneLoginBaseModel):
    """Body returned by single child writes."""

    id: int


class TokenPayload(OneLoginBaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int | None = None


class ErrorPayload(OneLoginBaseModel):
    message: str | None = None
    name: str | None = None
    status_code: int | None = Field(default=None, alias="statusCode")
