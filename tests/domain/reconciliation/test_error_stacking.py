from __future__ import annotations

import pytest

from appsync.domain.errors import AppSyncError, TransportError
from appsync.domain.reconciliation import (
    AggregatedError,
    ChildKind,
    ItemFailure,
    ItemOperation,
    stack_errors,
)


def _failure(message: str, *, index: int, item_id: int | None = None) -> ItemFailure:
    return ItemFailure(
        kind=ChildKind.RULE,
        operation=ItemOperation.UPDATE if item_id is not None else ItemOperation.CREATE,
        error=TransportError(message),
        index=index,
        item_id=item_id,
    )


def test_stack_errors_returns_none_for_no_failures() -> None:
    assert stack_errors([]) is None


def test_stack_errors_keeps_every_failure_in_order() -> None:
    failures = [
        _failure("boom", index=0),
        _failure("boom", index=1, item_id=7),
        _failure("bang", index=2),
    ]

    error = stack_errors(failures)

    assert isinstance(error, AggregatedError)
    assert isinstance(error, AppSyncError)
    assert len(error) == 3
    assert list(error) == failures
    assert [str(exc) for exc in error.errors] == ["boom", "boom", "bang"]
    text = str(error)
    assert text.index("create rule at #0: boom") < text.index("update rule 7 at #1: boom")
    assert text.index("update rule 7 at #1: boom") < text.index("bang")


def test_item_failure_without_index_describes_the_collection() -> None:
    failure = ItemFailure(
        kind=ChildKind.PARAMETER,
        operation=ItemOperation.READ,
        error=TransportError("timeout"),
    )

    assert failure.describe() == "read parameter: timeout"
    assert failure.message == "timeout"


def test_aggregated_error_rejects_empty_input() -> None:
    with pytest.raises(ValueError, match="at least one failure"):
        AggregatedError([])
