"""Request-scoped helpers for the routers."""

from fastapi import Header, Request

from ..container import Services
from ..errors import InvalidPayloadError
from ..hashing import MAX_U64
from ..principal import InvalidPrincipalError, Principal


def get_services(request: Request) -> Services:
    """Get the service container from app state."""
    return request.app.state.services


def get_caller(x_principal: str | None = Header(default=None)) -> Principal:
    """The calling principal, as asserted by the host in ``X-Principal``.

    The header is trusted as-is.  Requests without it run as the
    anonymous principal.
    """
    if not x_principal:
        return Principal.anonymous()
    try:
        return Principal.from_text(x_principal)
    except InvalidPrincipalError as e:
        raise InvalidPayloadError(str(e)) from e


def parse_principal(text: str) -> Principal:
    """Parse principal text from a request body or path."""
    try:
        return Principal.from_text(text)
    except InvalidPrincipalError as e:
        raise InvalidPayloadError(str(e)) from e


def parse_u64(data: dict, name: str) -> int:
    """Read a required unsigned 64-bit integer field from a JSON body."""
    value = data.get(name)
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise InvalidPayloadError(f"{name} must be an unsigned integer") from None
    if isinstance(value, bool) or not 0 <= number <= MAX_U64:
        raise InvalidPayloadError(f"{name} must be an unsigned integer")
    return number
