"""Database layer for gym-registry."""

from .engine import get_db_path, init_db
from .repositories import GymRepository, PendingOrderRepository

__all__ = [
    "get_db_path",
    "GymRepository",
    "init_db",
    "PendingOrderRepository",
]
