"""Data access layer for gym-registry."""

import json
from datetime import datetime
from pathlib import Path

import aiosqlite

from ..models.gym import Gym, GymService, Membership
from ..models.order import PendingOrder
from .engine import get_db_path


class GymRepository:
    """Repository for gyms.  Members and services live in JSON columns."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def insert(self, gym: Gym) -> None:
        """Insert a new gym."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO gyms
                (id, owner, gym_name, gym_img_url, gym_location, gym_description,
                 email_address, members, gym_services, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    gym.id,
                    gym.owner,
                    gym.gym_name,
                    gym.gym_img_url,
                    gym.gym_location,
                    gym.gym_description,
                    gym.email_address,
                    json.dumps([m.to_dict() for m in gym.members]),
                    json.dumps([s.to_dict() for s in gym.gym_services]),
                    gym.created_at.isoformat() if gym.created_at else None,
                    gym.updated_at.isoformat() if gym.updated_at else None,
                ),
            )
            await db.commit()

    async def get(self, gym_id: str) -> Gym | None:
        """Get a gym by ID."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM gyms WHERE id = ?", (gym_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_gym(row)

    async def list_all(self) -> list[Gym]:
        """List all gyms in creation order."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM gyms ORDER BY created_at, rowid")
            rows = await cursor.fetchall()
            return [self._row_to_gym(row) for row in rows]

    async def update(self, gym: Gym) -> None:
        """Write back a modified gym.  The owner column is never rewritten."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                UPDATE gyms SET
                    gym_name = ?, gym_img_url = ?, gym_location = ?,
                    gym_description = ?, email_address = ?,
                    members = ?, gym_services = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    gym.gym_name,
                    gym.gym_img_url,
                    gym.gym_location,
                    gym.gym_description,
                    gym.email_address,
                    json.dumps([m.to_dict() for m in gym.members]),
                    json.dumps([s.to_dict() for s in gym.gym_services]),
                    gym.updated_at.isoformat() if gym.updated_at else None,
                    gym.id,
                ),
            )
            await db.commit()

    async def delete(self, gym_id: str) -> bool:
        """Delete a gym.  Returns False if it did not exist."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute("DELETE FROM gyms WHERE id = ?", (gym_id,))
            await db.commit()
            return cursor.rowcount > 0

    def _row_to_gym(self, row: aiosqlite.Row) -> Gym:
        """Convert a database row to a Gym."""
        return Gym(
            id=row["id"],
            owner=row["owner"],
            gym_name=row["gym_name"],
            gym_img_url=row["gym_img_url"],
            gym_location=row["gym_location"],
            gym_description=row["gym_description"],
            email_address=row["email_address"],
            members=[Membership.from_dict(m) for m in json.loads(row["members"])],
            gym_services=[GymService.from_dict(s) for s in json.loads(row["gym_services"])],
            created_at=datetime.fromisoformat(row["created_at"]) if row["created_at"] else None,
            updated_at=datetime.fromisoformat(row["updated_at"]) if row["updated_at"] else None,
        )


class PendingOrderRepository:
    """Repository for membership orders awaiting payment."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, order: PendingOrder) -> None:
        """Store a new pending order."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO pending_orders
                (memo, gym_id, payer, receiver, amount_e8s, membership, created_at, expires_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    str(order.memo),
                    order.gym_id,
                    order.payer,
                    order.receiver,
                    order.amount_e8s,
                    json.dumps(order.membership.to_dict()),
                    order.created_at.isoformat(),
                    order.expires_at.isoformat(),
                ),
            )
            await db.commit()

    async def get(self, memo: int) -> PendingOrder | None:
        """Get a pending order by its memo."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM pending_orders WHERE memo = ?", (str(memo),)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_order(row)

    async def remove(self, memo: int) -> bool:
        """Remove an order.  Removing a missing order is a no-op returning False."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "DELETE FROM pending_orders WHERE memo = ?", (str(memo),)
            )
            await db.commit()
            return cursor.rowcount > 0

    async def remove_expired(self, now: datetime | None = None) -> int:
        """Remove all orders whose reservation window has passed."""
        now = now or datetime.now()
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "DELETE FROM pending_orders WHERE expires_at <= ?", (now.isoformat(),)
            )
            await db.commit()
            return cursor.rowcount

    def _row_to_order(self, row: aiosqlite.Row) -> PendingOrder:
        """Convert a database row to a PendingOrder."""
        return PendingOrder.from_dict(
            {
                "memo": row["memo"],
                "gym_id": row["gym_id"],
                "payer": row["payer"],
                "receiver": row["receiver"],
                "amount_e8s": row["amount_e8s"],
                "membership": json.loads(row["membership"]),
                "created_at": row["created_at"],
                "expires_at": row["expires_at"],
            }
        )
