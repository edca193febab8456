"""Set-diff pruning of child collections.

Every remote child whose identifier is not in the keep-set is destroyed, one at a
time and in remote order. Children without an identifier never enter the
keep-set and are never destroyed.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Protocol

from appsync.domain.errors import DecodeError, TransportError
from appsync.domain.ports.transport import TransportRequest

from .errors import AggregatedError, ChildKind, ItemFailure, ItemOperation, stack_errors

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

    from appsync.domain.endpoints import AppEndpoints
    from appsync.domain.model import AppParameter, AppRule
    from appsync.domain.ports.codec import AppCodec
    from appsync.domain.ports.transport import Repository


class Identified(Protocol):
    @property
    def id(self) -> int | None: ...


def keep_set(items: Iterable[Identified]) -> frozenset[int]:
    return frozenset(item.id for item in items if item.id is not None)


def plan_deletions(desired: Iterable[Identified], remote: Iterable[Identified]) -> list[int]:
    """Return ids of ``remote`` items absent from the keep-set of ``desired``."""

    keep = keep_set(desired)
    return [item.id for item in remote if item.id is not None and item.id not in keep]


def destroy_all(
    repository: Repository,
    ids: Iterable[int],
    *,
    kind: ChildKind,
    url_for: Callable[[int], str],
) -> list[ItemFailure]:
    failures: list[ItemFailure] = []
    for index, item_id in enumerate(ids):
        try:
            repository.destroy(TransportRequest(url=url_for(item_id)))
        except TransportError as exc:
            failures.append(
                ItemFailure(
                    kind=kind,
                    operation=ItemOperation.DESTROY,
                    error=exc,
                    index=index,
                    item_id=item_id,
                )
            )
    return failures


def prune_rules(
    *,
    repository: Repository,
    codec: AppCodec,
    endpoints: AppEndpoints,
    app_id: int,
    desired: Iterable[AppRule],
) -> AggregatedError | None:
    """Destroy remote rules of ``app_id`` that are not in ``desired``.

    The remote set comes from a fresh read: rule write responses do not reflect
    everything the server now holds. When that read fails nothing is destroyed
    and the read failure is returned.
    """

    try:
        remote = codec.decode_rules(repository.read(TransportRequest(url=endpoints.rules(app_id))))
    except (TransportError, DecodeError) as exc:
        return AggregatedError(
            [ItemFailure(kind=ChildKind.RULE, operation=ItemOperation.READ, error=exc)]
        )

    doomed = plan_deletions(desired, remote)
    return stack_errors(
        destroy_all(
            repository,
            doomed,
            kind=ChildKind.RULE,
            url_for=lambda rule_id: endpoints.rule(app_id, rule_id),
        )
    )


def resolve_parameter_ids(
    desired: Mapping[str, AppParameter],
    remote: Mapping[str, AppParameter],
) -> dict[str, AppParameter]:
    """Fill in ids of new desired parameters from the remote parameter of the same name.

    Parameters are keyed by name remotely, so a parameter sent without an id in
    the parent payload comes back with one and must not be pruned.
    """

    resolved: dict[str, AppParameter] = {}
    for name, parameter in desired.items():
        counterpart = remote.get(name)
        if parameter.id is None and counterpart is not None and counterpart.id is not None:
            parameter = replace(parameter, id=counterpart.id)
        resolved[name] = parameter
    return resolved


def prune_parameters(
    *,
    repository: Repository,
    endpoints: AppEndpoints,
    app_id: int,
    desired: Mapping[str, AppParameter],
    remote: Mapping[str, AppParameter],
) -> AggregatedError | None:
    """Destroy parameters in ``remote`` that are not in ``desired``.

    ``remote`` is the parameter map returned by the parent update, which already
    carries every parameter the server holds; no extra read is made.
    """

    desired = resolve_parameter_ids(desired, remote)
    doomed = plan_deletions(desired.values(), remote.values())
    return stack_errors(
        destroy_all(
            repository,
            doomed,
            kind=ChildKind.PARAMETER,
            url_for=lambda parameter_id: endpoints.parameter(app_id, parameter_id),
        )
    )
