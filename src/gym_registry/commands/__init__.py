"""CLI commands for gym-registry."""

from .gyms import gyms
from .init import init
from .ledger import ledger
from .members import members, services
from .serve import serve

__all__ = [
    "gyms",
    "init",
    "ledger",
    "members",
    "serve",
    "services",
]
