"""Stable hashing and comparison of loosely-typed values.

Ledger addresses arrive either as raw ``bytes`` or as a JSON list of
byte values, depending on the transport.  ``HashMatcher.equal`` compares
those blobs byte for byte and refuses anything else, so a number or a
text string can never compare equal to an address.

``HashMatcher.hash`` folds a canonical byte form of any supported value
into a non-negative 64-bit integer.  It is used for correlation ids and
indexing.  ``hash_equal`` compares hashes only and can report false
positives on collisions, or across types that share a canonical form.
"""

import hashlib
import json
import string
from collections.abc import Mapping

_HEX_DIGITS = frozenset(string.hexdigits)

MAX_U64 = 2**64 - 1


def _looks_like_hex(value: str) -> bool:
    return bool(value) and len(value) % 2 == 0 and all(c in _HEX_DIGITS for c in value)


def _is_byte_list(value) -> bool:
    return isinstance(value, (list, tuple)) and all(
        isinstance(v, int) and not isinstance(v, bool) and 0 <= v <= 255 for v in value
    )


class HashMatcher:
    """Canonicalises values for stable hashing and compares byte blobs."""

    def canonical(self, value) -> bytes:
        """Canonical byte representation of ``value``, used for hashing."""
        if value is None:
            return b""
        if isinstance(value, (bytes, bytearray, memoryview)):
            return bytes(value)
        if isinstance(value, bool):
            return b"true" if value else b"false"
        if isinstance(value, int):
            return str(value).encode("ascii")
        if isinstance(value, str):
            if _looks_like_hex(value):
                return bytes.fromhex(value)
            return value.encode("utf-8")
        if _is_byte_list(value):
            # JSON renderings of a blob, e.g. [12, 250, ...]
            return bytes(value)
        if isinstance(value, (list, tuple, Mapping)):
            return json.dumps(value, sort_keys=True, separators=(",", ":"), default=str).encode(
                "utf-8"
            )
        raise TypeError(f"cannot canonicalise value of type {type(value).__name__}")

    def blob(self, value) -> bytes:
        """Bytes of a bytes-like value or a list of byte values."""
        if isinstance(value, (bytes, bytearray, memoryview)):
            return bytes(value)
        if _is_byte_list(value):
            return bytes(value)
        raise TypeError(f"expected bytes or a list of byte values, got {type(value).__name__}")

    def hash(self, value) -> int:
        """Deterministic non-negative 64-bit hash of ``value``."""
        digest = hashlib.blake2b(self.canonical(value), digest_size=8).digest()
        return int.from_bytes(digest, "big")

    def equal(self, left, right) -> bool:
        """Exact byte equality of two blobs.  Other types raise TypeError."""
        return self.blob(left) == self.blob(right)

    def hash_equal(self, left, right) -> bool:
        """Hash-only equality.  Collisions make this a weaker check than ``equal``."""
        return self.hash(left) == self.hash(right)


default_matcher = HashMatcher()
