"""
Pydantic schemas for boxes API request/response validation.

These schemas enforce input validation and define the API contract.
Missing or mistyped fields surface as RequestValidationError and are
mapped to errno values by the centralized handlers.
"""

from typing import Optional

from pydantic import BaseModel, Field, StrictBool

MESSAGE_MAX_LEN = 253


class RegisterRequest(BaseModel):
    """Request schema for the register endpoint.

    Attributes:
        message: Tunnel fingerprint hostname announced by the box.
        tunnel_configured: Whether the box reports a working tunnel.
    """

    message: str = Field(
        ...,
        min_length=1,
        max_length=MESSAGE_MAX_LEN,
        description="Tunnel fingerprint hostname",
    )
    tunnel_configured: StrictBool = Field(
        ..., description="Whether the box tunnel is configured"
    )


class BoxItem(BaseModel):
    """A single registration as returned to clients."""

    public_ip: str
    message: Optional[str]
    tunnel_configured: bool
    timestamp: int


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str


class ErrorResponse(BaseModel):
    """Standard error body returned by all error handlers."""

    code: int
    errno: int
    error: str
