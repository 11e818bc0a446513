"""Pending membership order model."""

from dataclasses import dataclass
from datetime import datetime, timedelta

from .gym import MembershipPayload


@dataclass
class PendingOrder:
    """A membership reservation waiting for its payment.

    ``memo`` is the correlation id the payer must attach to the ledger
    transfer.  The order is discarded once ``expires_at`` passes.
    """

    memo: int
    gym_id: str
    payer: str
    receiver: str
    amount_e8s: int
    membership: MembershipPayload
    created_at: datetime
    expires_at: datetime

    @classmethod
    def open(
        cls,
        memo: int,
        gym_id: str,
        payer: str,
        receiver: str,
        amount_e8s: int,
        membership: MembershipPayload,
        period_seconds: float,
        now: datetime | None = None,
    ) -> "PendingOrder":
        created_at = now or datetime.now()
        return cls(
            memo=memo,
            gym_id=gym_id,
            payer=payer,
            receiver=receiver,
            amount_e8s=amount_e8s,
            membership=membership,
            created_at=created_at,
            expires_at=created_at + timedelta(seconds=period_seconds),
        )

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or datetime.now()) >= self.expires_at

    def to_dict(self) -> dict:
        return {
            # u64 memos do not fit a JS number or a SQLite integer
            "memo": str(self.memo),
            "gym_id": self.gym_id,
            "payer": self.payer,
            "receiver": self.receiver,
            "amount_e8s": self.amount_e8s,
            "membership": self.membership.to_dict(),
            "created_at": self.created_at.isoformat(),
            "expires_at": self.expires_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PendingOrder":
        return cls(
            memo=int(data["memo"]),
            gym_id=data["gym_id"],
            payer=data["payer"],
            receiver=data["receiver"],
            amount_e8s=data["amount_e8s"],
            membership=MembershipPayload.from_dict(data["membership"]),
            created_at=datetime.fromisoformat(data["created_at"]),
            expires_at=datetime.fromisoformat(data["expires_at"]),
        )
