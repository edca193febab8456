"""HTTP implementation of the transport ``Repository`` port."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from appsync.adapters.http_resilience import RequestOptions, ResilientClient, build_limiter
from appsync.adapters.onelogin.schema import ErrorPayload, TokenPayload
from appsync.domain.errors import TransportError

if TYPE_CHECKING:
    from collections.abc import Callable

    from aiolimiter import AsyncLimiter

    from appsync.config.http_resilience import ResilienceConfig
    from appsync.config.onelogin import OneLoginConfig
    from appsync.domain.ports.transport import TransportRequest

log = getLogger(__name__)


def _default_client_factory(
    config: ResilienceConfig, limiter: AsyncLimiter | None
) -> ResilientClient:
    return ResilientClient(config, limiter=limiter)


def _describe_failure(method: str, url: str, response: httpx.Response) -> str:
    detail = response.reason_phrase or "error"
    try:
        payload = ErrorPayload.model_validate(response.json())
    except (ValueError, ValidationError):
        payload = None
    if payload is not None and payload.message:
        detail = payload.message
    return f"{method} {url} returned {response.status_code}: {detail}"


@dataclass(slots=True)
class HttpRepository:
    """Sends each transport request as one HTTP call; failures raise ``TransportError``.

    Requests tagged with the ``bearer`` auth method get an OAuth2 client-credentials
    token, fetched on first use and dropped after a 401 so the next call asks for a
    new one. Calls run on one event loop owned by the repository, so they all draw
    from the same rate-limit bucket. ``close`` releases the loop.
    """

    config: OneLoginConfig
    client_factory: Callable[[ResilienceConfig, AsyncLimiter | None], ResilientClient] = field(
        default=_default_client_factory
    )
    _token: str | None = field(default=None, init=False, repr=False)
    _limiter: AsyncLimiter | None = field(default=None, init=False, repr=False)
    _runner: asyncio.Runner = field(default_factory=asyncio.Runner, init=False, repr=False)

    def __post_init__(self) -> None:
        self._limiter = build_limiter(self.config.resilience)

    def __enter__(self) -> HttpRepository:
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._runner.close()

    def create(self, request: TransportRequest) -> bytes:
        return self._runner.run(self._call("POST", request))

    def read(self, request: TransportRequest) -> bytes:
        return self._runner.run(self._call("GET", request))

    def update(self, request: TransportRequest) -> bytes:
        return self._runner.run(self._call("PUT", request))

    def destroy(self, request: TransportRequest) -> bytes:
        return self._runner.run(self._call("DELETE", request))

    async def _call(self, method: str, request: TransportRequest) -> bytes:
        async with self.client_factory(self.config.resilience, self._limiter) as client:
            try:
                options = await self._request_options(client, method, request)
                response = await client.request(method, request.url, **options)
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                if exc.response.status_code == httpx.codes.UNAUTHORIZED:
                    self._token = None
                message = _describe_failure(
                    exc.request.method, str(exc.request.url), exc.response
                )
                log.debug(message)
                raise TransportError(
                    message,
                    url=request.url,
                    status_code=exc.response.status_code,
                ) from exc
            except httpx.HTTPError as exc:
                raise TransportError(
                    f"{method} {request.url} failed: {exc}",
                    url=request.url,
                ) from exc
            return response.content

    async def _request_options(
        self,
        client: ResilientClient,
        method: str,
        request: TransportRequest,
    ) -> RequestOptions:
        headers = dict(request.headers)
        if request.auth_method == "bearer":
            headers["Authorization"] = f"Bearer {await self._bearer_token(client)}"
        options: RequestOptions = {"headers": headers}
        if request.payload is not None:
            if method == "GET":
                options["params"] = request.payload  # type: ignore[typeddict-item]
            else:
                options["json"] = request.payload
        return options

    async def _bearer_token(self, client: ResilientClient) -> str:
        if self._token is not None:
            return self._token
        response = await client.post(
            self.config.token_url,
            json={"grant_type": "client_credentials"},
            auth=(self.config.client_id, self.config.client_secret),
        )
        response.raise_for_status()
        try:
            token = TokenPayload.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise TransportError(
                "Token endpoint returned an unexpected payload",
                url=self.config.token_url,
            ) from exc
        self._token = token.access_token
        return self._token
