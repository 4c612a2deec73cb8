"""
Dependency injection for the boxes bounded context.

Provides FastAPI dependency functions that wire the record store
owned by the application into use cases via constructor injection.
"""

import logging
from http import HTTPStatus

from fastapi import Depends, Request

from app.application.boxes.ping_boxes import PingBoxesUseCase
from app.application.boxes.register_box import RegisterBoxUseCase
from app.domain.boxes.ports import RecordStore
from app.shared.errors.mapping import ERRNO_BAD_REQUEST, ERRNO_RATE_LIMITED, from_status
from app.shared.security.rate_limiting import client_address

logger = logging.getLogger(__name__)


def get_record_store(request: Request) -> RecordStore:
    """Return the record store opened during application startup."""
    return request.app.state.record_store


def get_client_ip(request: Request) -> str:
    """Return the public address the request came from."""
    address = client_address(request)
    if address is None:
        raise from_status(HTTPStatus.BAD_REQUEST, ERRNO_BAD_REQUEST)
    return address


def enforce_register_rate_limit(
    request: Request,
    public_ip: str = Depends(get_client_ip),
) -> None:
    """Spend one unit of the caller's register budget, or reject with 429."""
    register_limit = request.app.state.register_rate_limit
    if not register_limit.hit(public_ip):
        logger.warning("Register rate limit exceeded: %s", register_limit.limit)
        raise from_status(HTTPStatus.TOO_MANY_REQUESTS, ERRNO_RATE_LIMITED)


def get_register_box_use_case(
    store: RecordStore = Depends(get_record_store),
) -> RegisterBoxUseCase:
    """Build RegisterBoxUseCase with its infrastructure dependencies."""
    return RegisterBoxUseCase(store=store)


def get_ping_boxes_use_case(
    request: Request,
    store: RecordStore = Depends(get_record_store),
) -> PingBoxesUseCase:
    """Build PingBoxesUseCase with its infrastructure dependencies."""
    return PingBoxesUseCase(
        store=store,
        ttl_seconds=request.app.state.settings.box_ttl_seconds,
    )
