"""Ledger client protocol and the HTTP gateway implementation."""

import logging
from typing import Protocol, runtime_checkable

import httpx

from ..models.ledger import BlockRange, LedgerFormatError, Tokens, TransferArgs, TransferError

logger = logging.getLogger(__name__)


class LedgerError(Exception):
    """Base class for ledger faults.  These propagate to the caller."""


class LedgerUnavailableError(LedgerError):
    """The ledger could not be reached or answered with an HTTP error."""


class LedgerProtocolError(LedgerError):
    """The ledger answered with something we cannot decode."""


@runtime_checkable
class LedgerClient(Protocol):
    """Operations the service needs from the ledger."""

    async def query_blocks(self, start: int, length: int) -> BlockRange:
        """Fetch up to ``length`` contiguous blocks starting at ``start``.

        A short or empty range means the blocks do not exist yet.
        """
        ...

    async def transfer_fee(self) -> Tokens:
        """Current transfer fee."""
        ...

    async def transfer(self, args: TransferArgs) -> int | TransferError:
        """Submit a transfer.  Returns the block index or the ledger's error."""
        ...


class HttpLedgerClient:
    """Talks to a JSON ledger gateway over HTTP.

    Each method is one POST.  Transport and HTTP status failures raise
    ``LedgerUnavailableError``; a rejected transfer is returned as a
    ``TransferError`` value.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def _post(self, path: str, payload: dict) -> dict:
        url = f"{self.base_url}/{path}"
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(url, json=payload)
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Ledger call %s failed: %s", path, e)
            raise LedgerUnavailableError(f"ledger call {path} failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise LedgerProtocolError(f"ledger call {path} returned invalid JSON") from e
        if not isinstance(data, dict):
            raise LedgerProtocolError(f"ledger call {path} returned {type(data).__name__}")
        return data

    async def query_blocks(self, start: int, length: int) -> BlockRange:
        data = await self._post("query_blocks", {"start": start, "length": length})
        try:
            return BlockRange.from_dict(data)
        except (LedgerFormatError, KeyError, TypeError) as e:
            raise LedgerProtocolError(f"malformed query_blocks response: {e}") from e

    async def transfer_fee(self) -> Tokens:
        data = await self._post("transfer_fee", {})
        try:
            return Tokens(int(data["transfer_fee"]["e8s"]))
        except (KeyError, TypeError, ValueError) as e:
            raise LedgerProtocolError(f"malformed transfer_fee response: {data!r}") from e

    async def transfer(self, args: TransferArgs) -> int | TransferError:
        data = await self._post("transfer", args.to_dict())
        if "Ok" in data:
            try:
                return int(data["Ok"])
            except (TypeError, ValueError) as e:
                raise LedgerProtocolError(f"malformed transfer response: {data!r}") from e
        if "Err" in data:
            return TransferError.from_dict(data["Err"])
        raise LedgerProtocolError(f"malformed transfer response: {data!r}")
