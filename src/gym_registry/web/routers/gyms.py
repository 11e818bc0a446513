"""Gym, membership and service routes."""

from fastapi import APIRouter, Body, Depends

from ...container import Services
from ...models.gym import GymPayload, GymServicePayload, MembershipPayload
from ...principal import Principal
from ..deps import get_caller, get_services

router = APIRouter(prefix="/gyms", tags=["gyms"])


@router.get("")
async def list_gyms(services: Services = Depends(get_services)):
    """List all gyms."""
    gyms = await services.registry.list_gyms()
    return [gym.to_dict() for gym in gyms]


@router.post("", status_code=201)
async def create_gym(
    data: dict = Body(...),
    caller: Principal = Depends(get_caller),
    services: Services = Depends(get_services),
):
    """Create a gym owned by the caller."""
    gym = await services.registry.create_gym(GymPayload.from_dict(data), caller)
    return gym.to_dict()


@router.get("/{gym_id}")
async def get_gym(gym_id: str, services: Services = Depends(get_services)):
    """Get a gym by ID."""
    gym = await services.registry.get_gym(gym_id)
    return gym.to_dict()


@router.put("/{gym_id}")
async def update_gym(
    gym_id: str,
    data: dict = Body(...),
    caller: Principal = Depends(get_caller),
    services: Services = Depends(get_services),
):
    """Update the descriptive fields of a gym."""
    gym = await services.registry.update_gym(gym_id, GymPayload.from_dict(data), caller)
    return gym.to_dict()


@router.delete("/{gym_id}")
async def delete_gym(
    gym_id: str,
    caller: Principal = Depends(get_caller),
    services: Services = Depends(get_services),
):
    """Delete a gym."""
    deleted_id = await services.registry.delete_gym(gym_id, caller)
    return {"id": deleted_id}


@router.get("/{gym_id}/members")
async def list_members(gym_id: str, services: Services = Depends(get_services)):
    """List members enrolled in a gym."""
    members = await services.registry.list_members(gym_id)
    return [m.to_dict() for m in members]


@router.post("/{gym_id}/members")
async def register_member(
    gym_id: str,
    data: dict = Body(...),
    caller: Principal = Depends(get_caller),
    services: Services = Depends(get_services),
):
    """Enroll the caller in a gym without payment."""
    payload = MembershipPayload.from_dict({**data, "gym_id": gym_id})
    gym = await services.registry.register_member(payload, caller)
    return gym.to_dict()


@router.get("/{gym_id}/services")
async def list_services(gym_id: str, services: Services = Depends(get_services)):
    """List services offered by a gym."""
    gym_services = await services.registry.list_services(gym_id)
    return [s.to_dict() for s in gym_services]


@router.post("/{gym_id}/services")
async def add_service(
    gym_id: str,
    data: dict = Body(...),
    caller: Principal = Depends(get_caller),
    services: Services = Depends(get_services),
):
    """Add a service to a gym the caller owns."""
    payload = GymServicePayload.from_dict({**data, "gym_id": gym_id})
    gym = await services.registry.add_service(payload, caller)
    return gym.to_dict()


@router.post("/{gym_id}/reservations", status_code=201)
async def reserve_membership(
    gym_id: str,
    data: dict = Body(...),
    caller: Principal = Depends(get_caller),
    services: Services = Depends(get_services),
):
    """Open a paid membership order.

    The response carries the memo and amount the caller must transfer
    to the gym owner before completing the order.
    """
    payload = MembershipPayload.from_dict(data)
    order = await services.reservations.reserve(gym_id, payload, caller)
    return order.to_dict()
