"""
Data Transfer Objects for the boxes application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass
from typing import Optional

from app.domain.boxes.entities import Record


@dataclass(frozen=True)
class RegisterBoxCommand:
    """Input DTO for registering (or refreshing) a box.

    Attributes:
        public_ip: Address the registration request came from.
        message: Tunnel fingerprint hostname announced by the box.
        tunnel_configured: Whether the box reports a working tunnel.
    """

    public_ip: str
    message: str
    tunnel_configured: bool


@dataclass(frozen=True)
class PingBoxesQuery:
    """Input DTO for listing the boxes registered behind an address."""

    public_ip: str


@dataclass(frozen=True)
class BoxResult:
    """Output DTO for a single registration."""

    public_ip: str
    message: Optional[str]
    tunnel_configured: bool
    timestamp: int

    @classmethod
    def from_record(cls, record: Record) -> "BoxResult":
        return cls(
            public_ip=record.public_ip,
            message=record.message,
            tunnel_configured=record.tunnel_configured,
            timestamp=record.timestamp,
        )
