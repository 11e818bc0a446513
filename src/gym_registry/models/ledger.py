"""Ledger data types and their JSON wire representation.

Amounts are in e8s (10^-8 of the base unit).  Account identifiers are
32 raw bytes in memory and hex strings on the wire.
"""

from dataclasses import dataclass, field


class LedgerFormatError(ValueError):
    """Raised when ledger JSON does not have the expected shape."""


def _account(value) -> bytes:
    if isinstance(value, str):
        try:
            return bytes.fromhex(value)
        except ValueError as e:
            raise LedgerFormatError(f"invalid account identifier: {value!r}") from e
    if isinstance(value, list):
        return bytes(value)
    raise LedgerFormatError(f"invalid account identifier: {value!r}")


def _e8s(value) -> int:
    try:
        return int(value["e8s"])
    except (TypeError, KeyError, ValueError) as e:
        raise LedgerFormatError(f"invalid token amount: {value!r}") from e


@dataclass(frozen=True)
class Tokens:
    e8s: int

    def to_dict(self) -> dict:
        return {"e8s": self.e8s}


@dataclass(frozen=True)
class Transfer:
    """A transfer between two accounts."""

    from_account: bytes
    to_account: bytes
    amount: Tokens
    fee: Tokens = Tokens(0)

    def to_dict(self) -> dict:
        return {
            "Transfer": {
                "from": self.from_account.hex(),
                "to": self.to_account.hex(),
                "amount": self.amount.to_dict(),
                "fee": self.fee.to_dict(),
            }
        }


@dataclass(frozen=True)
class Mint:
    to_account: bytes
    amount: Tokens

    def to_dict(self) -> dict:
        return {"Mint": {"to": self.to_account.hex(), "amount": self.amount.to_dict()}}


@dataclass(frozen=True)
class Burn:
    from_account: bytes
    amount: Tokens

    def to_dict(self) -> dict:
        return {"Burn": {"from": self.from_account.hex(), "amount": self.amount.to_dict()}}


Operation = Transfer | Mint | Burn


def operation_from_dict(data: dict | None) -> Operation | None:
    """Decode an operation.  Unknown kinds (approvals etc.) decode to ``None``."""
    if not data:
        return None
    if "Transfer" in data:
        body = data["Transfer"]
        return Transfer(
            from_account=_account(body["from"]),
            to_account=_account(body["to"]),
            amount=Tokens(_e8s(body["amount"])),
            fee=Tokens(_e8s(body["fee"])) if "fee" in body else Tokens(0),
        )
    if "Mint" in data:
        body = data["Mint"]
        return Mint(to_account=_account(body["to"]), amount=Tokens(_e8s(body["amount"])))
    if "Burn" in data:
        body = data["Burn"]
        return Burn(from_account=_account(body["from"]), amount=Tokens(_e8s(body["amount"])))
    return None


@dataclass(frozen=True)
class Transaction:
    memo: int
    operation: Operation | None = None
    created_at_time: int | None = None  # nanoseconds since epoch

    def to_dict(self) -> dict:
        return {
            "memo": self.memo,
            "operation": self.operation.to_dict() if self.operation else None,
            "created_at_time": self.created_at_time,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Transaction":
        try:
            memo = int(data["memo"])
        except (KeyError, TypeError, ValueError) as e:
            raise LedgerFormatError(f"invalid transaction: {data!r}") from e
        return cls(
            memo=memo,
            operation=operation_from_dict(data.get("operation")),
            created_at_time=data.get("created_at_time"),
        )


@dataclass(frozen=True)
class Block:
    transaction: Transaction
    timestamp: int = 0
    parent_hash: str | None = None

    def to_dict(self) -> dict:
        return {
            "transaction": self.transaction.to_dict(),
            "timestamp": self.timestamp,
            "parent_hash": self.parent_hash,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Block":
        if "transaction" not in data:
            raise LedgerFormatError(f"block without transaction: {data!r}")
        return cls(
            transaction=Transaction.from_dict(data["transaction"]),
            timestamp=data.get("timestamp", 0),
            parent_hash=data.get("parent_hash"),
        )


@dataclass
class BlockRange:
    """Result of a block query.  May hold fewer blocks than requested."""

    blocks: list[Block] = field(default_factory=list)
    chain_length: int = 0
    first_block_index: int = 0

    def to_dict(self) -> dict:
        return {
            "blocks": [b.to_dict() for b in self.blocks],
            "chain_length": self.chain_length,
            "first_block_index": self.first_block_index,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BlockRange":
        return cls(
            blocks=[Block.from_dict(b) for b in data.get("blocks", [])],
            chain_length=data.get("chain_length", 0),
            first_block_index=data.get("first_block_index", 0),
        )


@dataclass(frozen=True)
class TransferArgs:
    memo: int
    amount: Tokens
    fee: Tokens
    to: bytes
    from_subaccount: bytes | None = None
    created_at_time: int | None = None

    def to_dict(self) -> dict:
        return {
            "memo": self.memo,
            "amount": self.amount.to_dict(),
            "fee": self.fee.to_dict(),
            "from_subaccount": self.from_subaccount.hex() if self.from_subaccount else None,
            "to": self.to.hex(),
            "created_at_time": (
                {"timestamp_nanos": self.created_at_time}
                if self.created_at_time is not None
                else None
            ),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TransferArgs":
        created = data.get("created_at_time")
        return cls(
            memo=int(data["memo"]),
            amount=Tokens(_e8s(data["amount"])),
            fee=Tokens(_e8s(data["fee"])),
            to=_account(data["to"]),
            from_subaccount=_account(data["from_subaccount"]) if data.get("from_subaccount") else None,
            created_at_time=created["timestamp_nanos"] if created else None,
        )


@dataclass(frozen=True)
class TransferError:
    """A transfer rejected by the ledger.  ``kind`` is the ledger's error name."""

    kind: str
    detail: str = ""

    def __str__(self) -> str:
        return f"{self.kind}: {self.detail}" if self.detail else self.kind

    @classmethod
    def from_dict(cls, data) -> "TransferError":
        if isinstance(data, dict) and len(data) == 1:
            kind, detail = next(iter(data.items()))
            return cls(kind=str(kind), detail="" if detail is None else str(detail))
        return cls(kind="Unknown", detail=str(data))
