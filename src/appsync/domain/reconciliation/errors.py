"""Aggregation of per-item failures from a batch of child operations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from appsync.domain.errors import AppSyncError

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence


class ChildKind(StrEnum):
    RULE = "rule"
    PARAMETER = "parameter"


class ItemOperation(StrEnum):
    CREATE = "create"
    UPDATE = "update"
    DESTROY = "destroy"
    READ = "read"


@dataclass(slots=True, frozen=True, kw_only=True)
class ItemFailure:
    """One failed remote call inside a batch.

    ``index`` is the position in the collection being processed; it is ``None``
    for failures that concern the whole collection (the pre-prune read).
    """

    kind: ChildKind
    operation: ItemOperation
    error: Exception
    index: int | None = None
    item_id: int | None = None

    @property
    def message(self) -> str:
        return str(self.error)

    def describe(self) -> str:
        target = self.kind.value if self.item_id is None else f"{self.kind.value} {self.item_id}"
        if self.index is not None:
            target = f"{target} at #{self.index}"
        return f"{self.operation.value} {target}: {self.message}"


class AggregatedError(AppSyncError):
    """Non-empty, ordered collection of per-item failures."""

    def __init__(self, failures: Sequence[ItemFailure]) -> None:
        if not failures:
            raise ValueError("AggregatedError needs at least one failure")
        self.failures: tuple[ItemFailure, ...] = tuple(failures)
        super().__init__("; ".join(failure.describe() for failure in self.failures))

    @property
    def errors(self) -> tuple[Exception, ...]:
        return tuple(failure.error for failure in self.failures)

    def __len__(self) -> int:
        return len(self.failures)

    def __iter__(self) -> Iterator[ItemFailure]:
        return iter(self.failures)


def stack_errors(failures: Sequence[ItemFailure]) -> AggregatedError | None:
    """Combine ``failures`` into one error, or return ``None`` when there are none."""

    if not failures:
        return None
    return AggregatedError(failures)
