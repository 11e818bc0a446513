"""Wiring of repositories, ledger client and services."""

import logging
from dataclasses import dataclass
from pathlib import Path

from .config import Settings, settings as default_settings
from .db.engine import get_db_path
from .db.repositories import GymRepository, PendingOrderRepository
from .ledger import HttpLedgerClient, InMemoryLedger, LedgerClient
from .principal import Principal
from .services.payments import PaymentExecutor
from .services.registry import GymRegistry
from .services.reservations import ReservationService
from .services.verifier import PaymentVerifier

logger = logging.getLogger(__name__)


def make_ledger(config: Settings) -> LedgerClient:
    """HTTP ledger when a URL is configured, otherwise an in-memory one."""
    if config.ledger_url:
        return HttpLedgerClient(config.ledger_url, timeout=config.ledger_timeout)

    logger.warning("LEDGER_URL not set, using an in-memory ledger")
    if config.service_principal:
        service = Principal.from_text(config.service_principal)
    else:
        service = Principal.anonymous()
    return InMemoryLedger(account=service.account_id())


@dataclass
class Services:
    """Everything an entry point needs, built around one storage handle."""

    db_path: Path
    ledger: LedgerClient
    registry: GymRegistry
    verifier: PaymentVerifier
    executor: PaymentExecutor
    reservations: ReservationService


def build_services(
    db_path: Path | None = None,
    ledger: LedgerClient | None = None,
    config: Settings | None = None,
) -> Services:
    config = config or default_settings
    db_path = db_path or get_db_path(config.data_dir)
    ledger = ledger or make_ledger(config)

    registry = GymRegistry(GymRepository(db_path))
    verifier = PaymentVerifier(ledger)
    return Services(
        db_path=db_path,
        ledger=ledger,
        registry=registry,
        verifier=verifier,
        executor=PaymentExecutor(ledger),
        reservations=ReservationService(
            registry=registry,
            orders=PendingOrderRepository(db_path),
            verifier=verifier,
            price_e8s=config.membership_price_e8s,
            period_seconds=config.reservation_period,
        ),
    )
