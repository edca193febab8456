"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from appsync.adapters.http_repository import HttpRepository
from appsync.adapters.onelogin import JsonAppCodec
from appsync.config import get_onelogin_config
from appsync.domain.apps import AppsService
from appsync.domain.endpoints import AppEndpoints

if TYPE_CHECKING:
    from pathlib import Path

    from appsync.config import OneLoginConfig
    from appsync.domain.model import App
    from appsync.domain.ports.codec import AppCodec
    from appsync.domain.ports.transport import Repository

log = getLogger(__name__)


def build_apps_service(
    *,
    config: OneLoginConfig | None = None,
    repository: Repository | None = None,
    codec: AppCodec | None = None,
) -> AppsService:
    """Wire the apps service to the configured HTTP adapter."""

    effective_config = config or get_onelogin_config()
    return AppsService(
        repository=repository or HttpRepository(config=effective_config),
        codec=codec or JsonAppCodec(),
        endpoints=AppEndpoints(effective_config.base_url),
    )


def load_app_file(path: Path, *, codec: AppCodec | None = None) -> App:
    """Read a desired app document (same shape as the API's app payload)."""

    return (codec or JsonAppCodec()).decode_app(path.read_bytes())


def apply_app(service: AppsService, desired: App, *, app_id: int | None = None) -> App:
    """Create ``desired`` when it has no id, otherwise converge the existing app to it."""

    target_id = app_id if app_id is not None else desired.id
    if target_id is None:
        log.info(
            "Creating app %r with %d rules and %d parameters",
            desired.name,
            len(desired.rules),
            len(desired.parameters),
        )
        result = service.create(desired)
    else:
        log.info(
            "Updating app %s to %d rules and %d parameters",
            target_id,
            len(desired.rules),
            len(desired.parameters),
        )
        result = service.update(target_id, desired)

    log.info(f"Finished sync of app {result.id}: rules={len(result.rules)}")
    return result
