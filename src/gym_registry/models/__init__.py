"""Data models for gym-registry."""

from .gym import Gym, GymPayload, GymService, GymServicePayload, Membership, MembershipPayload
from .ledger import Block, BlockRange, Burn, Mint, Tokens, Transaction, Transfer, TransferArgs, TransferError
from .order import PendingOrder

__all__ = [
    "Block",
    "BlockRange",
    "Burn",
    "Gym",
    "GymPayload",
    "GymService",
    "GymServicePayload",
    "Membership",
    "MembershipPayload",
    "Mint",
    "PendingOrder",
    "Tokens",
    "Transaction",
    "Transfer",
    "TransferArgs",
    "TransferError",
]
