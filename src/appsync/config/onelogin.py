"""OneLogin API configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import require_env_vars
from .errors import ConfigurationError
from .http_resilience import RateLimit, ResilienceConfig

ONELOGIN_TIMEOUT_SECONDS = 30.0
ONELOGIN_DEFAULT_HEADERS = {"Content-Type": "application/json"}


@dataclass(frozen=True)
class OneLoginConfig:
    """Holds OneLogin API configuration values."""

    base_url: str
    client_id: str
    client_secret: str
    resilience: ResilienceConfig

    @property
    def token_url(self) -> str:
        return f"{self.base_url}/auth/oauth2/v2/token"


def _normalize_base_url(value: str) -> str:
    normalized = value.strip().rstrip("/")
    if not normalized.startswith(("http://", "https://")):
        raise ConfigurationError(f"ONELOGIN_URL must be an http(s) URL, got: {value}")
    return normalized


def get_onelogin_config(*, resilience: ResilienceConfig | None = None) -> OneLoginConfig:
    values = require_env_vars(("ONELOGIN_URL", "ONELOGIN_CLIENT_ID", "ONELOGIN_CLIENT_SECRET"))
    base_url = _normalize_base_url(values["ONELOGIN_URL"])
    return OneLoginConfig(
        base_url=base_url,
        client_id=values["ONELOGIN_CLIENT_ID"],
        client_secret=values["ONELOGIN_CLIENT_SECRET"],
        resilience=resilience
        or ResilienceConfig(
            name="onelogin",
            base_url=base_url,
            timeout_seconds=ONELOGIN_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
            default_headers=ONELOGIN_DEFAULT_HEADERS,
        ),
    )
