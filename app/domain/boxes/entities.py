"""
Domain entities for the boxes bounded context.

A box is a registered endpoint identified by the public IP it reaches
the server from and the tunnel message it announces.
No framework imports and no IO operations.
"""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class Record:
    """A single box registration.

    Attributes:
        public_ip: IPv4/IPv6 literal the box was seen from.
        message: Opaque tunnel fingerprint hostname, may be None.
        tunnel_configured: Whether the box reports a working tunnel.
        timestamp: Seconds since the Unix epoch, set by the caller.
    """

    public_ip: str
    message: Optional[str]
    tunnel_configured: bool
    timestamp: int


@dataclass(frozen=True)
class ByPublicIp:
    """Match every record registered from a public IP."""

    public_ip: str


@dataclass(frozen=True)
class ByPublicIpAndMessage:
    """Match records registered from a public IP with a given message."""

    public_ip: str
    message: Optional[str]


FindFilter = Union[ByPublicIp, ByPublicIpAndMessage]
