"""Outbound payments from the service account."""

import logging
from dataclasses import dataclass
from enum import Enum

from ..errors import InvalidPayloadError
from ..hashing import MAX_U64
from ..ledger.client import LedgerClient
from ..models.ledger import Tokens, TransferArgs, TransferError
from ..principal import Principal

logger = logging.getLogger(__name__)


class PaymentStatus(str, Enum):
    COMPLETED = "PaymentCompleted"
    FAILED = "PaymentFailed"


@dataclass
class PaymentResult:
    status: PaymentStatus
    message: str
    block_index: int | None = None

    @property
    def ok(self) -> bool:
        return self.status == PaymentStatus.COMPLETED

    def to_dict(self) -> dict:
        data = {self.status.value: self.message}
        if self.block_index is not None:
            data["block_index"] = self.block_index
        return data


class PaymentExecutor:
    """Sends ledger transfers on behalf of the service.

    Every call fetches the fee again and submits a new transfer, so
    calling ``pay`` twice pays twice.
    """

    def __init__(self, ledger: LedgerClient):
        self.ledger = ledger

    async def pay(self, to_principal_text: str, amount_e8s: int, memo: int = 0) -> PaymentResult:
        """Transfer ``amount_e8s`` to the default account of a principal.

        Raises InvalidPrincipalError for malformed principal text,
        InvalidPayloadError for an amount or memo outside the u64 range
        and LedgerError when the ledger cannot be reached.
        """
        for name, value in (("amount_e8s", amount_e8s), ("memo", memo)):
            if isinstance(value, bool) or not 0 <= value <= MAX_U64:
                raise InvalidPayloadError(f"{name} must be an unsigned 64-bit integer")

        to_principal = Principal.from_text(to_principal_text)
        to_address = to_principal.account_id()

        fee: Tokens = await self.ledger.transfer_fee()

        result = await self.ledger.transfer(
            TransferArgs(
                memo=memo,
                amount=Tokens(amount_e8s),
                fee=fee,
                to=to_address,
                from_subaccount=None,
                created_at_time=None,
            )
        )

        if isinstance(result, TransferError):
            logger.warning("Payment of %d e8s to %s failed: %s", amount_e8s, to_principal, result)
            return PaymentResult(PaymentStatus.FAILED, f"payment failed, err={result}")

        logger.info("Paid %d e8s to %s in block %d", amount_e8s, to_principal, result)
        return PaymentResult(PaymentStatus.COMPLETED, "payment completed", block_index=result)
