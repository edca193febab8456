"""App lifecycle service: persists an app, then converges its rules and parameters.

Every successful write ends with a full re-read so the returned app reflects what
the server stored. When a child batch fails after the parent write went through,
the service re-reads the app and raises ``PartialSyncError`` carrying it.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from logging import getLogger
from typing import TYPE_CHECKING

from appsync.domain.errors import AppSyncError, DecodeError, PartialSyncError
from appsync.domain.ports.transport import TransportRequest
from appsync.domain.reconciliation import prune_parameters, prune_rules, save_all

if TYPE_CHECKING:
    from appsync.domain.endpoints import AppEndpoints
    from appsync.domain.model import App, AppRule, AppsQuery
    from appsync.domain.ports.codec import AppCodec
    from appsync.domain.ports.transport import Repository
    from appsync.domain.reconciliation import AggregatedError

log = getLogger(__name__)


@dataclass(slots=True)
class AppsService:
    repository: Repository
    codec: AppCodec
    endpoints: AppEndpoints

    def query(self, query: AppsQuery | None = None) -> list[App]:
        """List apps matching ``query`` (all apps when omitted), each with its rules."""

        raw = self.repository.read(
            TransportRequest(
                url=self.endpoints.collection,
                payload=query.as_params() if query is not None else None,
            )
        )
        apps = self.codec.decode_apps(raw)
        return [replace(app, rules=self._read_rules(_remote_id(app))) for app in apps]

    def get_one(self, app_id: int) -> App:
        raw = self.repository.read(TransportRequest(url=self.endpoints.app(app_id)))
        app = self.codec.decode_app(raw)
        # rules live under their own endpoint and are never embedded in the app body
        return replace(app, rules=self._read_rules(app_id))

    def create(self, app: App) -> App:
        raw = self.repository.create(
            TransportRequest(url=self.endpoints.collection, payload=self.codec.encode_app(app))
        )
        created = self.codec.decode_app(raw)
        app_id = _remote_id(created)
        log.info("Created app %s (%r), saving %d rules", app_id, created.name, len(app.rules))

        upsert = save_all(
            repository=self.repository,
            codec=self.codec,
            endpoints=self.endpoints,
            app=replace(created, rules=list(app.rules)),
        )
        if upsert.error is not None:
            raise self._recover(app_id, upsert.error, stage="rule save") from upsert.error

        return self.get_one(app_id)

    def update(self, app_id: int, app: App) -> App:
        raw = self.repository.update(
            TransportRequest(url=self.endpoints.app(app_id), payload=self.codec.encode_app(app))
        )
        updated = replace(self.codec.decode_app(raw), id=app_id)

        upsert = save_all(
            repository=self.repository,
            codec=self.codec,
            endpoints=self.endpoints,
            app=replace(updated, rules=list(app.rules)),
        )
        if upsert.error is not None:
            raise self._recover(app_id, upsert.error, stage="rule save") from upsert.error
        log.debug(
            "App %s rules saved: %d created, %d updated",
            app_id,
            upsert.created,
            upsert.updated,
        )

        rule_error = self._prune_rules(app_id, upsert.items)
        parameter_error = prune_parameters(
            repository=self.repository,
            endpoints=self.endpoints,
            app_id=app_id,
            desired=app.parameters,
            remote=updated.parameters,
        )
        prune_error = rule_error or parameter_error
        if prune_error is not None:
            raise self._recover(app_id, prune_error, stage="prune") from prune_error

        return self.get_one(app_id)

    def destroy(self, app_id: int) -> None:
        self.repository.destroy(TransportRequest(url=self.endpoints.app(app_id)))
        log.info("Destroyed app %s", app_id)

    def _read_rules(self, app_id: int) -> list[AppRule]:
        raw = self.repository.read(TransportRequest(url=self.endpoints.rules(app_id)))
        return self.codec.decode_rules(raw)

    def _prune_rules(self, app_id: int, desired: list[AppRule]) -> AggregatedError | None:
        return prune_rules(
            repository=self.repository,
            codec=self.codec,
            endpoints=self.endpoints,
            app_id=app_id,
            desired=desired,
        )

    def _recover(self, app_id: int, error: AggregatedError, *, stage: str) -> PartialSyncError:
        log.warning("Partial %s state for app %s: %s", stage, app_id, error)
        try:
            recovered = self.get_one(app_id)
        except AppSyncError as exc:
            log.error("Recovery read of app %s failed: %s", app_id, exc)
            return PartialSyncError(error, app=None)
        return PartialSyncError(error, app=recovered)


def _remote_id(app: App) -> int:
    if app.id is None:
        raise DecodeError(f"Remote response for app {app.name!r} carried no id")
    return app.id
