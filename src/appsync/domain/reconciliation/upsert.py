"""Create-or-update of an app's rules, one call per rule."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from appsync.domain.errors import DecodeError, TransportError
from appsync.domain.model import AppRule
from appsync.domain.ports.transport import TransportRequest

from .errors import AggregatedError, ChildKind, ItemFailure, ItemOperation, stack_errors

if TYPE_CHECKING:
    from appsync.domain.endpoints import AppEndpoints
    from appsync.domain.model import App
    from appsync.domain.ports.codec import AppCodec
    from appsync.domain.ports.transport import Repository


@dataclass(slots=True)
class UpsertResult:
    """Rules after the batch, in input order, with server ids bound where saved.

    When ``error`` is set the collection was only partially saved: failed rules are
    returned exactly as they were passed in.
    """

    items: list[AppRule] = field(default_factory=list[AppRule])
    error: AggregatedError | None = None
    created: int = 0
    updated: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None


def save_all(
    *,
    repository: Repository,
    codec: AppCodec,
    endpoints: AppEndpoints,
    app: App,
) -> UpsertResult:
    """Upsert every rule of ``app``; a failing rule never stops the rest.

    ``app`` is not mutated. The returned items are copies carrying the ids the
    server assigned.
    """

    app_id = app.require_id()
    result = UpsertResult()
    failures: list[ItemFailure] = []

    for index, rule in enumerate(app.rules):
        if rule.id is not None:
            operation = ItemOperation.UPDATE
            send = repository.update
            url = endpoints.rule(app_id, rule.id)
        else:
            operation = ItemOperation.CREATE
            send = repository.create
            url = endpoints.rules(app_id)

        try:
            raw = send(TransportRequest(url=url, payload=codec.encode_rule(rule)))
            saved_id = codec.decode_id(raw)
        except (TransportError, DecodeError) as exc:
            failures.append(
                ItemFailure(
                    kind=ChildKind.RULE,
                    operation=operation,
                    error=exc,
                    index=index,
                    item_id=rule.id,
                )
            )
            result.items.append(rule)
            continue

        result.items.append(replace(rule, id=saved_id))
        if operation is ItemOperation.CREATE:
            result.created += 1
        else:
            result.updated += 1

    result.error = stack_errors(failures)
    return result
