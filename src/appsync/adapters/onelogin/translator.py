"""Translate OneLogin payload models into domain objects and back."""

from __future__ import annotations

from appsync.domain.model import App, AppParameter, AppRule

from .schema import AppPayload, ParameterPayload, RulePayload


def translate_rule(payload: RulePayload) -> AppRule:
    return AppRule(
        id=payload.id,
        name=payload.name,
        match=payload.match,
        enabled=payload.enabled,
        position=payload.position,
        conditions=list(payload.conditions),
        actions=list(payload.actions),
    )


def translate_parameter(payload: ParameterPayload) -> AppParameter:
    return AppParameter(
        id=payload.id,
        label=payload.label,
        user_attribute_mappings=payload.user_attribute_mappings,
        user_attribute_macros=payload.user_attribute_macros,
        include_in_saml_assertion=payload.include_in_saml_assertion,
        provisioned_entitlements=payload.provisioned_entitlements,
    )


def translate_app(payload: AppPayload) -> App:
    return App(
        id=payload.id,
        name=payload.name,
        connector_id=payload.connector_id,
        description=payload.description,
        notes=payload.notes,
        visible=payload.visible,
        policy_id=payload.policy_id,
        configuration=dict(payload.configuration),
        rules=[translate_rule(rule) for rule in payload.rules],
        parameters={
            name: translate_parameter(parameter) for name, parameter in payload.parameters.items()
        },
    )


def rule_to_payload(rule: AppRule) -> RulePayload:
    return RulePayload(
        id=rule.id,
        name=rule.name,
        match=rule.match,
        enabled=rule.enabled,
        position=rule.position,
        conditions=list(rule.conditions),
        actions=list(rule.actions),
    )


def parameter_to_payload(parameter: AppParameter) -> ParameterPayload:
    return ParameterPayload(
        id=parameter.id,
        label=parameter.label,
        user_attribute_mappings=parameter.user_attribute_mappings,
        user_attribute_macros=parameter.user_attribute_macros,
        include_in_saml_assertion=parameter.include_in_saml_assertion,
        provisioned_entitlements=parameter.provisioned_entitlements,
    )


def app_to_payload(app: App) -> AppPayload:
    return AppPayload(
        id=app.id,
        name=app.name,
        connector_id=app.connector_id,
        description=app.description,
        notes=app.notes,
        visible=app.visible,
        policy_id=app.policy_id,
        configuration=dict(app.configuration),
        rules=[rule_to_payload(rule) for rule in app.rules],
        parameters={
            name: parameter_to_payload(parameter) for name, parameter in app.parameters.items()
        },
    )
