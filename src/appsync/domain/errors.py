"""Error hierarchy raised by the sync layer and its adapters."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from appsync.domain.model import App
    from appsync.domain.reconciliation.errors import AggregatedError


class AppSyncError(RuntimeError):
    """Base class for every failure raised by appsync."""


class TransportError(AppSyncError):
    """Raised by a transport adapter when a single remote call fails."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class DecodeError(AppSyncError):
    """Raised when a remote payload cannot be decoded into domain objects."""


class PartialSyncError(AppSyncError):
    """A parent write succeeded but one of its child batches did not.

    ``error`` is the original batch failure. ``app`` is the state re-read from the
    remote after the failure, or ``None`` when that recovery read failed too; in
    that case nothing about the remote state is known.
    """

    def __init__(self, error: AggregatedError, *, app: App | None) -> None:
        super().__init__(str(error))
        self.error = error
        self.app = app

    @property
    def recovered(self) -> bool:
        return self.app is not None
