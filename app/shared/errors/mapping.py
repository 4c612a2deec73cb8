"""
Error mapping: failures to {code, errno, error} bodies.

Pure functions, no IO and no state. The errno table for request
decoding failures is part of the wire contract with existing clients
and must not be computed or extended implicitly.
"""

from collections.abc import Mapping, Sequence
from dataclasses import asdict, dataclass
from http import HTTPStatus
from typing import Any, Union

from app.domain.boxes.errors import StorageFault

ERRNO_MISSING_DOMAIN = 100
ERRNO_MISSING_TUNNEL_CONFIGURED = 101
ERRNO_BAD_REQUEST = 400
ERRNO_RATE_LIMITED = 429
ERRNO_INTERNAL = 500

MISSING_FIELD_ERRNOS = {
    "domain": ERRNO_MISSING_DOMAIN,
    "tunnel_configured": ERRNO_MISSING_TUNNEL_CONFIGURED,
}


@dataclass(frozen=True)
class ErrorBody:
    """JSON body of every error response.

    Attributes:
        code: Numeric HTTP status.
        errno: Fine-grained application error code.
        error: Canonical reason phrase of the HTTP status.
    """

    code: int
    errno: int
    error: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class EndpointError(Exception):
    """An HTTP error response waiting to be rendered.

    Raise it from a route, or let a handler build one from a lower-level
    failure. The registered handler turns it into a JSON response.
    """

    def __init__(self, status_code: int, body: ErrorBody) -> None:
        super().__init__(body.error)
        self.status_code = status_code
        self.body = body


@dataclass(frozen=True)
class MissingField:
    """The request body lacks a required field."""

    name: str


@dataclass(frozen=True)
class MalformedBody:
    """The request body could not be decoded for any other reason."""


DecodeFailure = Union[MissingField, MalformedBody]


def from_status(status: Union[int, HTTPStatus], errno: int) -> EndpointError:
    """Build an EndpointError for an HTTP status and application errno.

    Raises:
        ValueError: If the status code has no canonical reason phrase.
    """
    status = HTTPStatus(status)
    body = ErrorBody(code=status.value, errno=errno, error=status.phrase)
    return EndpointError(status.value, body)


def from_decode_failure(failure: DecodeFailure) -> EndpointError:
    """Map a request decoding failure to a 400 with its fixed errno."""
    if isinstance(failure, MissingField):
        errno = MISSING_FIELD_ERRNOS.get(failure.name, ERRNO_BAD_REQUEST)
    else:
        errno = ERRNO_BAD_REQUEST
    return from_status(HTTPStatus.BAD_REQUEST, errno)


def from_storage_fault(_fault: StorageFault) -> EndpointError:
    """Map a record store failure to a 500. No internals are exposed."""
    return from_status(HTTPStatus.INTERNAL_SERVER_ERROR, ERRNO_INTERNAL)


def decode_failure_from_validation(
    errors: Sequence[Mapping[str, Any]],
) -> DecodeFailure:
    """Reduce FastAPI/Pydantic validation errors to a DecodeFailure.

    The first missing top-level body field wins. Anything else, including
    an invalid JSON document or a wrongly typed field, is a malformed body.
    """
    for error in errors:
        loc = tuple(error.get("loc", ()))
        if error.get("type") == "missing" and len(loc) == 2 and loc[0] == "body":
            return MissingField(str(loc[1]))
    return MalformedBody()
