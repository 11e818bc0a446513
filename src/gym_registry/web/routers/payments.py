"""Ledger payment routes."""

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from ...container import Services
from ...errors import InvalidPayloadError
from ...principal import Principal, hex_address_from_principal
from ..deps import get_caller, get_services, parse_principal, parse_u64

router = APIRouter(tags=["payments"])


@router.post("/payments/verify")
async def verify_payment(
    data: dict = Body(...),
    caller: Principal = Depends(get_caller),
    services: Services = Depends(get_services),
):
    """Check that a block holds a transfer from the caller to ``receiver``."""
    receiver = parse_principal(data.get("receiver") or "")
    verified = await services.verifier.verify(
        caller=caller,
        receiver=receiver,
        amount=parse_u64(data, "amount"),
        block_index=parse_u64(data, "block_index"),
        memo=parse_u64(data, "memo"),
    )
    return {"verified": verified}


@router.get("/payments/address/{principal}")
async def address_from_principal(principal: str):
    """Hex ledger address of a principal's default account."""
    return {"address": hex_address_from_principal(parse_principal(principal), 0)}


@router.post("/payments")
async def make_payment(
    data: dict = Body(...),
    services: Services = Depends(get_services),
):
    """Send a transfer from the service account."""
    to = data.get("to")
    if not to:
        raise InvalidPayloadError("Missing required fields: to")
    parse_principal(to)

    result = await services.executor.pay(
        to, parse_u64(data, "amount"), memo=parse_u64({"memo": data.get("memo", 0)}, "memo")
    )
    return JSONResponse(result.to_dict(), status_code=200 if result.ok else 402)


@router.get("/reservations/{memo}")
async def get_reservation(memo: str, services: Services = Depends(get_services)):
    """Get a pending membership order."""
    order = await services.reservations.get(parse_u64({"memo": memo}, "memo"))
    return order.to_dict()


@router.post("/reservations/{memo}/complete")
async def complete_reservation(
    memo: str,
    data: dict = Body(...),
    caller: Principal = Depends(get_caller),
    services: Services = Depends(get_services),
):
    """Verify the order's payment and activate the membership."""
    gym = await services.reservations.complete(
        parse_u64({"memo": memo}, "memo"), parse_u64(data, "block_index"), caller
    )
    return gym.to_dict()
