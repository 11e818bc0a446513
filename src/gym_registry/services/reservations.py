"""Membership reservations paid through the ledger.

A reservation is a pending order keyed by a correlation id.  The payer
sends the membership price to the gym owner's account with that id as
the transfer memo, then completes the order with the block index.  An
order that is not completed within the reservation period is discarded
by a one-shot timer and the payment flow must start over.
"""

import asyncio
import logging

from ..db.repositories import PendingOrderRepository
from ..errors import NotAuthorizedError, NotFoundError, PaymentFailedError
from ..models.gym import Gym, MembershipPayload
from ..models.order import PendingOrder
from ..principal import Principal
from .registry import GymRegistry
from .verifier import PaymentVerifier, generate_correlation_id

logger = logging.getLogger(__name__)


class ReservationService:
    """Opens, completes and expires pending membership orders."""

    def __init__(
        self,
        registry: GymRegistry,
        orders: PendingOrderRepository,
        verifier: PaymentVerifier,
        price_e8s: int,
        period_seconds: float = 120,
    ):
        self.registry = registry
        self.orders = orders
        self.verifier = verifier
        self.price_e8s = price_e8s
        self.period_seconds = period_seconds
        self._timers: dict[int, asyncio.TimerHandle] = {}
        self._tasks: set[asyncio.Task] = set()

    async def reserve(
        self, gym_id: str, payload: MembershipPayload, caller: Principal
    ) -> PendingOrder:
        """Open an order for the caller to join ``gym_id``."""
        payload.gym_id = gym_id
        gym = await self.registry.prepare_membership(payload, caller)

        memo = generate_correlation_id(gym_id, caller, matcher=self.verifier.matcher)
        order = PendingOrder.open(
            memo=memo,
            gym_id=gym_id,
            payer=caller.to_text(),
            receiver=gym.owner,
            amount_e8s=self.price_e8s,
            membership=payload,
            period_seconds=self.period_seconds,
        )
        await self.orders.create(order)
        self.schedule_discard(memo, self.period_seconds)

        logger.info("Reserved membership in gym %s for %s (memo %d)", gym_id, caller, memo)
        return order

    async def get(self, memo: int) -> PendingOrder:
        order = await self.orders.get(memo)
        if order is None:
            raise NotFoundError(f"order with memo={memo} not found or expired")
        return order

    async def complete(self, memo: int, block_index: int, caller: Principal) -> Gym:
        """Verify the payment for an order and activate the membership."""
        order = await self.get(memo)
        if order.is_expired():
            await self.discard(memo)
            raise NotFoundError(f"order with memo={memo} not found or expired")

        if order.payer != caller.to_text():
            raise NotAuthorizedError(f"order with memo={memo} belongs to another principal")

        verified = await self.verifier.verify(
            caller=caller,
            receiver=Principal.from_text(order.receiver),
            amount=order.amount_e8s,
            block_index=block_index,
            memo=memo,
        )
        if not verified:
            raise PaymentFailedError(
                f"no payment of {order.amount_e8s} e8s with memo={memo} in block {block_index}"
            )

        async with self.registry.locked(order.gym_id):
            gym = await self.registry.prepare_membership(order.membership, caller)
            # The discard timer may have fired while the ledger was queried;
            # whoever removes the order owns it.
            if order.is_expired() or not await self.orders.remove(memo):
                self.cancel(memo)
                await self.discard(memo)
                raise NotFoundError(f"order with memo={memo} not found or expired")
            gym = await self.registry.append_member(gym, order.membership, caller)

        self.cancel(memo)
        return gym

    def schedule_discard(self, memo: int, delay: float) -> None:
        """Discard the order after ``delay`` seconds unless cancelled first."""
        self.cancel(memo)
        loop = asyncio.get_running_loop()
        self._timers[memo] = loop.call_later(delay, self._fire, memo)

    def cancel(self, memo: int) -> None:
        handle = self._timers.pop(memo, None)
        if handle is not None:
            handle.cancel()

    def _fire(self, memo: int) -> None:
        self._timers.pop(memo, None)
        task = asyncio.ensure_future(self.discard(memo))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def discard(self, memo: int) -> bool:
        """Remove an order if it is still there.  Never raises."""
        try:
            removed = await self.orders.remove(memo)
        except Exception:
            logger.exception("Failed to discard order %d", memo)
            return False

        if removed:
            logger.info("Order discarded %d", memo)
        else:
            logger.debug("Order %d already gone", memo)
        return removed

    async def sweep_expired(self) -> int:
        """Remove orders whose timers were lost, e.g. across a restart."""
        count = await self.orders.remove_expired()
        if count:
            logger.info("Discarded %d expired orders", count)
        return count

    def close(self) -> None:
        """Cancel all pending timers."""
        for handle in self._timers.values():
            handle.cancel()
        self._timers.clear()
