"""
Rate limiting configuration and setup.

Uses slowapi to enforce the default limit on every endpoint and the
limits library for the register endpoint's own budget. Both are built
per application from the settings handed to create_app, and both are
keyed on the same client address the routes record.
"""

import logging

from limits import parse
from limits.storage import storage_from_string
from limits.strategies import FixedWindowRateLimiter
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from app.core.config import Settings

logger = logging.getLogger(__name__)


def client_address(request: Request) -> str | None:
    """Return the public address a request came from, if known.

    The first X-Forwarded-For entry is used only when the deployment
    sits behind a trusted proxy (trust_forwarded_for).
    """
    if request.app.state.settings.trust_forwarded_for:
        forwarded = request.headers.get("x-forwarded-for", "")
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    if request.client is None:
        return None
    return request.client.host


def rate_limit_key(request: Request) -> str:
    """Key rate limit counters on the resolved client address."""
    return client_address(request) or get_remote_address(request)


class RouteRateLimit:
    """A fixed-window budget for one route, counted per client address."""

    def __init__(self, scope: str, limit_value: str, storage_uri: str = "memory://") -> None:
        self.scope = scope
        self.limit = parse(limit_value)
        self._strategy = FixedWindowRateLimiter(storage_from_string(storage_uri))

    def hit(self, key: str) -> bool:
        """Consume one request for key. Returns False once the budget is spent."""
        return self._strategy.hit(self.limit, self.scope, key)


def build_limiter(app_settings: Settings) -> Limiter:
    """Build the application-wide default limiter."""
    return Limiter(
        key_func=rate_limit_key,
        default_limits=[app_settings.rate_limit_default],
    )


def build_register_limit(app_settings: Settings) -> RouteRateLimit:
    """Build the register endpoint's budget."""
    logger.debug("Register rate limit: %s", app_settings.register_rate_limit)
    return RouteRateLimit("register", app_settings.register_rate_limit)
