"""Reconciliation of an app's child collections against the remote store."""

from __future__ import annotations

from .errors import AggregatedError, ChildKind, ItemFailure, ItemOperation, stack_errors
from .prune import keep_set, plan_deletions, prune_parameters, prune_rules
from .upsert import UpsertResult, save_all

__all__ = [
    "AggregatedError",
    "ChildKind",
    "ItemFailure",
    "ItemOperation",
    "UpsertResult",
    "keep_set",
    "plan_deletions",
    "prune_parameters",
    "prune_rules",
    "save_all",
    "stack_errors",
]
