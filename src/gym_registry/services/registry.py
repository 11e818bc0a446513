"""Gym registry service: gyms, members and services."""

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from uuid import uuid4

from ..db.repositories import GymRepository
from ..errors import AlreadyExistError, InvalidPayloadError, NotAuthorizedError, NotFoundError
from ..models.gym import (
    Gym,
    GymPayload,
    GymService,
    GymServicePayload,
    Membership,
    MembershipPayload,
    missing_fields,
)
from ..principal import Principal

logger = logging.getLogger(__name__)


class GymRegistry:
    """Owner-checked operations on the gym store.

    Read-modify-write sequences on one gym run under a per-gym lock, so
    two requests touching the same gym cannot interleave at an await.
    Nothing is written until all checks have passed.
    """

    def __init__(self, repository: GymRepository):
        self.repository = repository
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_users: dict[str, int] = {}

    @asynccontextmanager
    async def locked(self, gym_id: str):
        """Hold the write lock for one gym.

        The lock is dropped from the map once nobody holds or waits on it.
        """
        lock = self._locks.get(gym_id)
        if lock is None:
            lock = self._locks[gym_id] = asyncio.Lock()
        self._lock_users[gym_id] = self._lock_users.get(gym_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[gym_id] -= 1
            if not self._lock_users[gym_id]:
                del self._lock_users[gym_id]
                del self._locks[gym_id]

    async def list_gyms(self) -> list[Gym]:
        return await self.repository.list_all()

    async def get_gym(self, gym_id: str) -> Gym:
        gym = await self.repository.get(gym_id)
        if gym is None:
            raise NotFoundError(f"gym with id={gym_id} not found")
        return gym

    async def create_gym(self, payload: GymPayload, caller: Principal) -> Gym:
        """Create a gym owned by the caller."""
        missing = missing_fields(payload)
        if missing:
            raise InvalidPayloadError(f"Missing required fields: {', '.join(missing)}")

        now = datetime.now()
        gym = Gym(
            id=str(uuid4()),
            owner=caller.to_text(),
            gym_name=payload.gym_name,
            gym_img_url=payload.gym_img_url,
            gym_location=payload.gym_location,
            gym_description=payload.gym_description,
            email_address=payload.email_address,
            created_at=now,
            updated_at=now,
        )
        await self.repository.insert(gym)
        logger.info("Created gym %s for %s", gym.id, gym.owner)
        return gym

    async def update_gym(self, gym_id: str, payload: GymPayload, caller: Principal) -> Gym:
        """Replace the descriptive fields of a gym the caller owns."""
        missing = missing_fields(payload)
        if missing:
            raise InvalidPayloadError(f"Missing required fields: {', '.join(missing)}")

        async with self.locked(gym_id):
            gym = await self.repository.get(gym_id)
            if gym is None:
                raise NotFoundError(f"cannot update gym: gym with id={gym_id} not found")
            self._check_owner(gym, caller)

            gym.apply(payload)
            gym.updated_at = datetime.now()
            await self.repository.update(gym)
            return gym

    async def delete_gym(self, gym_id: str, caller: Principal) -> str:
        """Delete a gym the caller owns.  Returns the deleted id."""
        async with self.locked(gym_id):
            gym = await self.repository.get(gym_id)
            if gym is None:
                raise NotFoundError(f"cannot delete the gym: gym with id={gym_id} not found")
            self._check_owner(gym, caller)

            await self.repository.delete(gym_id)

        logger.info("Deleted gym %s", gym_id)
        return gym_id

    async def register_member(self, payload: MembershipPayload, caller: Principal) -> Gym:
        """Enroll the caller in a gym."""
        async with self.locked(payload.gym_id):
            gym = await self.prepare_membership(payload, caller)
            return await self.append_member(gym, payload, caller)

    async def prepare_membership(self, payload: MembershipPayload, caller: Principal) -> Gym:
        """Run the enrollment checks without writing.  Caller must hold the gym lock
        if the result will be written back."""
        missing = payload.required_missing()
        if missing:
            raise InvalidPayloadError(f"Missing required fields: {', '.join(missing)}")

        gym = await self.repository.get(payload.gym_id)
        if gym is None:
            raise NotFoundError(f"Gym with id={payload.gym_id} not found")

        if gym.find_member(caller.to_text()) is not None:
            raise AlreadyExistError("user already exists")
        return gym

    async def append_member(self, gym: Gym, payload: MembershipPayload, caller: Principal) -> Gym:
        gym.members.append(
            Membership(
                user_id=caller.to_text(),
                user_name=payload.user_name,
                full_name=payload.full_name,
                email_address=payload.email_address,
                gym_id=gym.id,
            )
        )
        gym.updated_at = datetime.now()
        await self.repository.update(gym)
        logger.info("Registered %s in gym %s", caller, gym.id)
        return gym

    async def list_members(self, gym_id: str) -> list[Membership]:
        gym = await self.get_gym(gym_id)
        return [m for m in gym.members if m.gym_id == gym_id]

    async def add_service(self, payload: GymServicePayload, caller: Principal) -> Gym:
        """Append a service to a gym the caller owns."""
        missing = payload.required_missing()
        if missing:
            raise InvalidPayloadError(f"Missing required fields: {', '.join(missing)}")

        async with self.locked(payload.gym_id):
            gym = await self.repository.get(payload.gym_id)
            if gym is None:
                raise NotFoundError(f"Gym with id={payload.gym_id} not found")
            self._check_owner(gym, caller)

            gym.gym_services.append(
                GymService(
                    gym_id=gym.id,
                    service_name=payload.service_name,
                    service_description=payload.service_description,
                    operating_days_start=payload.operating_days_start,
                    operating_days_end=payload.operating_days_end,
                )
            )
            gym.updated_at = datetime.now()
            await self.repository.update(gym)
            return gym

    async def list_services(self, gym_id: str) -> list[GymService]:
        gym = await self.get_gym(gym_id)
        return [s for s in gym.gym_services if s.gym_id == gym_id]

    def _check_owner(self, gym: Gym, caller: Principal) -> None:
        if gym.owner != caller.to_text():
            raise NotAuthorizedError(f"you are not the owner of this gym with id={gym.id}")
