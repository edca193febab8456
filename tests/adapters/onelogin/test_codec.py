from __future__ import annotations

import json

import pytest

from appsync.adapters.onelogin import JsonAppCodec
from appsync.domain.errors import DecodeError
from appsync.domain.model import App, AppParameter, AppRule

APP_RESPONSE = {
    "id": 12,
    "name": "Portal",
    "connector_id": 108,
    "visible": True,
    "configuration": None,
    "unknown_field": "ignored",
    "parameters": {
        "email": {"id": 3, "label": "Email", "user_attribute_mappings": "email"},
        "groups": {"id": 4, "label": "Groups", "include_in_saml_assertion": False},
    },
}


@pytest.fixture
def codec() -> JsonAppCodec:
    return JsonAppCodec()


def test_decode_app_translates_parameters_and_defaults(codec: JsonAppCodec) -> None:
    app = codec.decode_app(json.dumps(APP_RESPONSE).encode())

    assert app.id == 12
    assert app.connector_id == 108
    assert app.configuration == {}
    assert app.rules == []
    assert app.parameters["email"] == AppParameter(
        id=3, label="Email", user_attribute_mappings="email"
    )
    assert app.parameters["groups"].include_in_saml_assertion is False


def test_decode_rules_keeps_opaque_conditions(codec: JsonAppCodec) -> None:
    raw = json.dumps(
        [
            {
                "id": 1,
                "name": "Admins",
                "match": "any",
                "enabled": False,
                "position": 2,
                "conditions": [{"source": "has_role", "operator": "ri", "value": "5"}],
                "actions": None,
            }
        ]
    ).encode()

    (rule,) = codec.decode_rules(raw)

    assert rule.id == 1
    assert rule.match == "any"
    assert rule.enabled is False
    assert rule.conditions == [{"source": "has_role", "operator": "ri", "value": "5"}]
    assert rule.actions == []


def test_decode_id_reads_write_response(codec: JsonAppCodec) -> None:
    assert codec.decode_id(b'{"id": 0}') == 0


@pytest.mark.parametrize("raw", [b"", b"   ", b"not json", b'{"name": "missing id"}', b"[]"])
def test_decode_id_rejects_bad_payloads(codec: JsonAppCodec, raw: bytes) -> None:
    with pytest.raises(DecodeError):
        codec.decode_id(raw)


def test_decode_app_rejects_payload_without_name(codec: JsonAppCodec) -> None:
    with pytest.raises(DecodeError, match="app"):
        codec.decode_app(b'{"id": 1}')


def test_encode_app_omits_rules_id_and_unset_fields(codec: JsonAppCodec) -> None:
    app = App(
        id=5,
        name="Portal",
        connector_id=108,
        rules=[AppRule(name="ignored")],
        parameters={"email": AppParameter(id=3, label="Email"), "new": AppParameter()},
    )

    payload = codec.encode_app(app)

    assert payload == {
        "name": "Portal",
        "connector_id": 108,
        "configuration": {},
        "parameters": {"email": {"id": 3, "label": "Email"}, "new": {}},
    }


def test_encode_rule_omits_id(codec: JsonAppCodec) -> None:
    rule = AppRule(id=9, name="Admins", conditions=[{"source": "x"}])

    assert codec.encode_rule(rule) == {
        "name": "Admins",
        "match": "all",
        "enabled": True,
        "conditions": [{"source": "x"}],
        "actions": [],
    }


def test_dump_app_round_trips_through_decode(codec: JsonAppCodec) -> None:
    app = App(id=5, name="Portal", rules=[AppRule(id=1, name="Admins")])

    assert codec.decode_app(json.dumps(codec.dump_app(app)).encode()) == app
