"""In-memory ledger used in tests and local development."""

import time

from ..models.ledger import (
    Block,
    BlockRange,
    Burn,
    Mint,
    Tokens,
    Transaction,
    Transfer,
    TransferArgs,
    TransferError,
)

DEFAULT_FEE_E8S = 10_000


class InMemoryLedger:
    """An append-only list of blocks with just enough ledger behaviour.

    Outbound transfers are debited from ``account``.  Balances are only
    enforced for accounts that were minted into; an untracked sender can
    always pay.
    """

    def __init__(self, account: bytes, fee_e8s: int = DEFAULT_FEE_E8S):
        self.account = account
        self.fee = Tokens(fee_e8s)
        self.blocks: list[Block] = []
        self.balances: dict[bytes, int] = {}
        self.fee_queries = 0
        self._seen: set[tuple] = set()

    def append(self, block: Block) -> int:
        """Append an arbitrary block and return its index."""
        self.blocks.append(block)
        return len(self.blocks) - 1

    def _append_operation(self, memo: int, operation, created_at_time: int | None = None) -> int:
        return self.append(
            Block(
                transaction=Transaction(
                    memo=memo, operation=operation, created_at_time=created_at_time
                ),
                timestamp=time.time_ns(),
                parent_hash=None,
            )
        )

    def mint(self, to_account: bytes, amount_e8s: int, memo: int = 0) -> int:
        self.balances[to_account] = self.balances.get(to_account, 0) + amount_e8s
        return self._append_operation(memo, Mint(to_account, Tokens(amount_e8s)))

    def burn(self, from_account: bytes, amount_e8s: int, memo: int = 0) -> int:
        if from_account in self.balances:
            self.balances[from_account] -= amount_e8s
        return self._append_operation(memo, Burn(from_account, Tokens(amount_e8s)))

    def record_transfer(
        self, from_account: bytes, to_account: bytes, amount_e8s: int, memo: int
    ) -> int:
        """Record a transfer made by some other account, e.g. a paying member."""
        self._move(from_account, to_account, amount_e8s, self.fee.e8s)
        return self._append_operation(
            memo, Transfer(from_account, to_account, Tokens(amount_e8s), self.fee)
        )

    def _move(self, from_account: bytes, to_account: bytes, amount: int, fee: int) -> None:
        if from_account in self.balances:
            self.balances[from_account] -= amount + fee
        if to_account in self.balances or from_account in self.balances:
            self.balances[to_account] = self.balances.get(to_account, 0) + amount

    async def query_blocks(self, start: int, length: int) -> BlockRange:
        return BlockRange(
            blocks=list(self.blocks[start:start + length]),
            chain_length=len(self.blocks),
            first_block_index=start,
        )

    async def transfer_fee(self) -> Tokens:
        self.fee_queries += 1
        return self.fee

    async def transfer(self, args: TransferArgs) -> int | TransferError:
        if args.fee != self.fee:
            return TransferError("BadFee", f"expected_fee={self.fee.e8s}")

        if args.created_at_time is not None:
            key = (args.memo, args.amount.e8s, args.to, args.created_at_time)
            if key in self._seen:
                return TransferError("TxDuplicate", "duplicate transfer")
            self._seen.add(key)

        if self.account in self.balances:
            balance = self.balances[self.account]
            if balance < args.amount.e8s + args.fee.e8s:
                return TransferError("InsufficientFunds", f"balance={balance}")

        self._move(self.account, args.to, args.amount.e8s, args.fee.e8s)
        return self._append_operation(
            args.memo,
            Transfer(self.account, args.to, args.amount, args.fee),
            args.created_at_time,
        )
