"""Database engine setup and initialization."""

from pathlib import Path

import aiosqlite

from ..config import settings


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    if data_dir is None:
        data_dir = settings.data_dir
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / "gym_registry.db"


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        # Gyms, with members and services embedded as JSON lists
        await db.execute("""
            CREATE TABLE IF NOT EXISTS gyms (
                id TEXT PRIMARY KEY,
                owner TEXT NOT NULL,
                gym_name TEXT NOT NULL,
                gym_img_url TEXT NOT NULL,
                gym_location TEXT NOT NULL,
                gym_description TEXT NOT NULL,
                email_address TEXT NOT NULL,
                members TEXT DEFAULT '[]',
                gym_services TEXT DEFAULT '[]',
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # Membership orders waiting for a ledger payment.
        # memo is a u64 and is stored as TEXT.
        await db.execute("""
            CREATE TABLE IF NOT EXISTS pending_orders (
                memo TEXT PRIMARY KEY,
                gym_id TEXT NOT NULL,
                payer TEXT NOT NULL,
                receiver TEXT NOT NULL,
                amount_e8s INTEGER NOT NULL,
                membership TEXT NOT NULL,
                created_at TIMESTAMP NOT NULL,
                expires_at TIMESTAMP NOT NULL
            )
        """)

        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_gyms_owner
            ON gyms(owner)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_pending_orders_gym
            ON pending_orders(gym_id)
        """)

        await db.commit()
