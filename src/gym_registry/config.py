"""Configuration loaded from environment variables.

Every field has a default so the service runs locally without any
setup.  Values are read when ``Settings`` is instantiated, so set the
environment before importing this module (or build a fresh
``Settings()`` in tests).
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

# Default data directory (project root / data)
DATA_DIR = Path(__file__).parent.parent.parent / "data"


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    data_dir: Path = field(
        default_factory=lambda: Path(os.getenv("GYM_REGISTRY_DATA_DIR", str(DATA_DIR)))
    )

    # Base URL of the JSON ledger gateway.  Empty means "use the
    # in-memory ledger", which is only useful for local development.
    ledger_url: str = field(default_factory=lambda: os.getenv("LEDGER_URL", ""))
    ledger_timeout: float = field(
        default_factory=lambda: float(os.getenv("LEDGER_TIMEOUT", "30"))
    )
    # Principal whose default account funds outbound payments when the
    # in-memory ledger is used.  Empty means the anonymous principal.
    service_principal: str = field(default_factory=lambda: os.getenv("SERVICE_PRINCIPAL", ""))

    # Seconds a pending membership order stays valid before it is discarded.
    reservation_period: int = field(
        default_factory=lambda: _env_int("RESERVATION_PERIOD_SECONDS", 120)
    )
    membership_price_e8s: int = field(
        default_factory=lambda: _env_int("MEMBERSHIP_PRICE_E8S", 100_000_000)
    )

    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_file: str | None = field(default_factory=lambda: os.getenv("LOG_FILE") or None)


settings = Settings()
