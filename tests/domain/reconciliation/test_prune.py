from __future__ import annotations

from typing import TYPE_CHECKING

from appsync.domain.model import AppParameter, AppRule
from appsync.domain.reconciliation import (
    ChildKind,
    ItemOperation,
    keep_set,
    plan_deletions,
    prune_parameters,
    prune_rules,
)

if TYPE_CHECKING:
    from appsync.adapters.onelogin import JsonAppCodec
    from tests.helpers.remote import FakeRemote


def _rule(rule_id: int | None, name: str = "rule") -> AppRule:
    return AppRule(id=rule_id, name=name)


def test_keep_set_ignores_items_without_id() -> None:
    assert keep_set([_rule(None), _rule(0), _rule(4)]) == frozenset({0, 4})


def test_plan_deletions_selects_only_unkept_remote_ids() -> None:
    remote = [_rule(1), _rule(2), _rule(3)]
    desired = [_rule(2), _rule(3), _rule(None)]

    assert plan_deletions(desired, remote) == [1]


def test_plan_deletions_keeps_remote_order_and_skips_unidentified() -> None:
    remote = [_rule(9), _rule(None), _rule(-1), _rule(5)]

    assert plan_deletions([_rule(5)], remote) == [9, -1]


def test_prune_rules_destroys_exactly_the_missing_rule(
    remote: FakeRemote, codec: JsonAppCodec
) -> None:
    app_id = remote.seed_app(rules=[{"name": "a"}, {"name": "b"}, {"name": "c"}])
    first, second, third = remote.rule_ids(app_id)

    error = prune_rules(
        repository=remote,
        codec=codec,
        endpoints=remote.endpoints,
        app_id=app_id,
        desired=[_rule(second), _rule(third), _rule(None, "new")],
    )

    assert error is None
    assert [call.url for call in remote.calls_for("destroy")] == [
        remote.endpoints.rule(app_id, first)
    ]
    assert remote.rule_ids(app_id) == [second, third]


def test_prune_rules_reads_fresh_remote_state(remote: FakeRemote, codec: JsonAppCodec) -> None:
    app_id = remote.seed_app(rules=[{"name": "a"}])

    prune_rules(
        repository=remote,
        codec=codec,
        endpoints=remote.endpoints,
        app_id=app_id,
        desired=[],
    )

    assert remote.calls[0].verb == "read"
    assert remote.calls[0].url == remote.endpoints.rules(app_id)


def test_prune_rules_continues_after_destroy_failure(
    remote: FakeRemote, codec: JsonAppCodec
) -> None:
    app_id = remote.seed_app(rules=[{"name": "a"}, {"name": "b"}])
    first, second = remote.rule_ids(app_id)
    remote.fail("destroy", remote.endpoints.rule(app_id, first))

    error = prune_rules(
        repository=remote,
        codec=codec,
        endpoints=remote.endpoints,
        app_id=app_id,
        desired=[],
    )

    assert error is not None
    assert len(error) == 1
    assert error.failures[0].item_id == first
    assert error.failures[0].operation is ItemOperation.DESTROY
    assert remote.rule_ids(app_id) == [first]
    assert second not in remote.rule_ids(app_id)


def test_prune_rules_reports_failed_read_without_deleting(
    remote: FakeRemote, codec: JsonAppCodec
) -> None:
    app_id = remote.seed_app(rules=[{"name": "a"}])
    remote.fail("read", remote.endpoints.rules(app_id))

    error = prune_rules(
        repository=remote,
        codec=codec,
        endpoints=remote.endpoints,
        app_id=app_id,
        desired=[],
    )

    assert error is not None
    assert error.failures[0].operation is ItemOperation.READ
    assert error.failures[0].kind is ChildKind.RULE
    assert remote.calls_for("destroy") == []
    assert len(remote.rule_ids(app_id)) == 1


def test_prune_parameters_uses_given_remote_state_only(remote: FakeRemote) -> None:
    app_id = remote.seed_app(parameters={"email": {}, "groups": {}, "role": {}})
    ids = remote.parameter_ids(app_id)
    current = {name: AppParameter(id=value) for name, value in ids.items()}

    error = prune_parameters(
        repository=remote,
        endpoints=remote.endpoints,
        app_id=app_id,
        desired={"email": AppParameter(id=ids["email"]), "role": AppParameter(id=ids["role"])},
        remote=current,
    )

    assert error is None
    assert remote.calls_for("read") == []
    assert [call.url for call in remote.calls] == [
        remote.endpoints.parameter(app_id, ids["groups"])
    ]
    assert set(remote.parameter_ids(app_id)) == {"email", "role"}


def test_prune_parameters_keeps_new_parameters_matched_by_name(remote: FakeRemote) -> None:
    app_id = remote.seed_app(parameters={"email": {}, "stale": {}})
    ids = remote.parameter_ids(app_id)
    current = {name: AppParameter(id=value) for name, value in ids.items()}

    error = prune_parameters(
        repository=remote,
        endpoints=remote.endpoints,
        app_id=app_id,
        desired={"email": AppParameter(label="Email")},
        remote=current,
    )

    assert error is None
    assert set(remote.parameter_ids(app_id)) == {"email"}


def test_pruning_never_crosses_collections(remote: FakeRemote, codec: JsonAppCodec) -> None:
    app_id = remote.seed_app(rules=[{"name": "a"}], parameters={"email": {}})
    parameter_ids = remote.parameter_ids(app_id)

    prune_rules(
        repository=remote,
        codec=codec,
        endpoints=remote.endpoints,
        app_id=app_id,
        desired=[],
    )
    rule_destroys = [call.url for call in remote.calls_for("destroy")]
    remote.calls.clear()
    prune_parameters(
        repository=remote,
        endpoints=remote.endpoints,
        app_id=app_id,
        desired={},
        remote={"email": AppParameter(id=parameter_ids["email"])},
    )
    parameter_destroys = [call.url for call in remote.calls_for("destroy")]

    assert rule_destroys and all("/rules/" in url for url in rule_destroys)
    assert parameter_destroys and all("/parameters/" in url for url in parameter_destroys)
