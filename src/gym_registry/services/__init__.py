"""Business logic for gym-registry."""

from .payments import PaymentExecutor, PaymentResult, PaymentStatus
from .registry import GymRegistry
from .reservations import ReservationService
from .verifier import PaymentVerifier, generate_correlation_id

__all__ = [
    "generate_correlation_id",
    "GymRegistry",
    "PaymentExecutor",
    "PaymentResult",
    "PaymentStatus",
    "PaymentVerifier",
    "ReservationService",
]
