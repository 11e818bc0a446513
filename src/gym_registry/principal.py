"""Principals and ledger account identifiers.

A principal is an opaque identity of up to 29 bytes.  Its textual form
is the lowercase base32 encoding of ``crc32(bytes) || bytes`` without
padding, split into groups of five characters joined by dashes, e.g.
``ryjl3-tyaaa-aaaaa-aaaba-cai``.

The ledger addresses accounts by a 32-byte account identifier derived
from a principal and a 32-byte subaccount::

    hash = sha224(b"\\x0aaccount-id" || principal || subaccount)
    account_id = crc32(hash) || hash
"""

import base64
import binascii
import hashlib
import zlib
from dataclasses import dataclass

MAX_PRINCIPAL_LENGTH = 29
SUBACCOUNT_LENGTH = 32
ACCOUNT_ID_LENGTH = 32

_ACCOUNT_DOMAIN_SEPARATOR = b"\x0aaccount-id"
_ANONYMOUS_BYTES = b"\x04"


class InvalidPrincipalError(ValueError):
    """Raised when principal text or bytes cannot be decoded."""


def _crc32_bytes(data: bytes) -> bytes:
    return zlib.crc32(data).to_bytes(4, "big")


@dataclass(frozen=True)
class Principal:
    """An opaque caller identity."""

    raw: bytes

    def __post_init__(self):
        if len(self.raw) > MAX_PRINCIPAL_LENGTH:
            raise InvalidPrincipalError(
                f"principal is {len(self.raw)} bytes, max is {MAX_PRINCIPAL_LENGTH}"
            )

    @classmethod
    def from_text(cls, text: str) -> "Principal":
        """Decode a principal from its dash-grouped base32 text."""
        if not text:
            raise InvalidPrincipalError("empty principal text")

        compact = text.replace("-", "").upper()
        padded = compact + "=" * (-len(compact) % 8)
        try:
            decoded = base64.b32decode(padded)
        except binascii.Error as e:
            raise InvalidPrincipalError(f"invalid principal text {text!r}: {e}") from e

        if len(decoded) < 4:
            raise InvalidPrincipalError(f"invalid principal text {text!r}: too short")

        principal = cls(decoded[4:])
        if principal.to_text() != text.lower():
            raise InvalidPrincipalError(f"invalid principal text {text!r}: bad checksum")
        return principal

    @classmethod
    def anonymous(cls) -> "Principal":
        """The principal used for unauthenticated callers."""
        return cls(_ANONYMOUS_BYTES)

    @property
    def is_anonymous(self) -> bool:
        return self.raw == _ANONYMOUS_BYTES

    def to_text(self) -> str:
        encoded = base64.b32encode(_crc32_bytes(self.raw) + self.raw)
        compact = encoded.decode("ascii").lower().rstrip("=")
        return "-".join(compact[i:i + 5] for i in range(0, len(compact), 5))

    def account_id(self, subaccount: int | bytes = 0) -> bytes:
        """Binary ledger address of this principal."""
        return account_id_from_principal(self, subaccount)

    def __str__(self) -> str:
        return self.to_text()


def _subaccount_bytes(subaccount: int | bytes) -> bytes:
    if isinstance(subaccount, int):
        if subaccount < 0:
            raise ValueError("subaccount index must be non-negative")
        return subaccount.to_bytes(SUBACCOUNT_LENGTH, "big")
    if len(subaccount) != SUBACCOUNT_LENGTH:
        raise ValueError(f"subaccount must be {SUBACCOUNT_LENGTH} bytes")
    return bytes(subaccount)


def account_id_from_principal(principal: Principal, subaccount: int | bytes = 0) -> bytes:
    """Derive the 32-byte account identifier for a principal and subaccount."""
    digest = hashlib.sha224(
        _ACCOUNT_DOMAIN_SEPARATOR + principal.raw + _subaccount_bytes(subaccount)
    ).digest()
    return _crc32_bytes(digest) + digest


def hex_address_from_principal(principal: Principal, subaccount: int | bytes = 0) -> str:
    """Hex rendering of the account identifier, as shown by wallets."""
    return account_id_from_principal(principal, subaccount).hex()


def account_id_from_hex(address: str) -> bytes:
    """Parse a hex account identifier and validate its checksum."""
    try:
        data = bytes.fromhex(address)
    except ValueError as e:
        raise ValueError(f"invalid account identifier {address!r}") from e

    if len(data) != ACCOUNT_ID_LENGTH:
        raise ValueError(f"account identifier must be {ACCOUNT_ID_LENGTH} bytes")
    if _crc32_bytes(data[4:]) != data[:4]:
        raise ValueError(f"account identifier {address!r} has a bad checksum")
    return data
