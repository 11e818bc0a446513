"""Payment verification against the ledger."""

import logging
import time

from ..hashing import HashMatcher, default_matcher
from ..ledger.client import LedgerClient
from ..models.ledger import Block, Transfer
from ..principal import Principal

logger = logging.getLogger(__name__)


def generate_correlation_id(
    gym_id: str,
    caller: Principal,
    now_ns: int | None = None,
    matcher: HashMatcher = default_matcher,
) -> int:
    """Memo a payer attaches to a transfer so it can be matched to an order."""
    if now_ns is None:
        now_ns = time.time_ns()
    return matcher.hash(f"{gym_id}_{caller.to_text()}_{now_ns}")


class PaymentVerifier:
    """Checks that a ledger block holds an expected transfer.

    Only transfers sent FROM the calling principal's default account can
    be verified: the sender address is always derived from ``caller``.
    """

    def __init__(self, ledger: LedgerClient, matcher: HashMatcher = default_matcher):
        self.ledger = ledger
        self.matcher = matcher

    async def verify(
        self,
        caller: Principal,
        receiver: Principal,
        amount: int,
        block_index: int,
        memo: int,
    ) -> bool:
        """Return True if the block at ``block_index`` is the expected payment.

        A missing block is a normal negative result (the payment may not
        be committed yet).  Ledger faults propagate.
        """
        block_range = await self.ledger.query_blocks(block_index, 1)
        if not block_range.blocks:
            logger.debug(
                "Block %d not found (chain length %d)", block_index, block_range.chain_length
            )
            return False

        sender_address = caller.account_id()
        receiver_address = receiver.account_id()

        for block in block_range.blocks:
            if self._matches(block, sender_address, receiver_address, amount, memo):
                logger.info("Verified payment of %d e8s in block %d", amount, block_index)
                return True

        logger.info("Block %d does not match the expected payment", block_index)
        return False

    def _matches(
        self,
        block: Block,
        sender_address: bytes,
        receiver_address: bytes,
        amount: int,
        memo: int,
    ) -> bool:
        operation = block.transaction.operation
        if not isinstance(operation, Transfer):
            return False

        return (
            block.transaction.memo == memo
            and self.matcher.equal(sender_address, operation.from_account)
            and self.matcher.equal(receiver_address, operation.to_account)
            and operation.amount.e8s == amount
        )
