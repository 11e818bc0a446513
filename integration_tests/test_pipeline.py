"""Integration tests for the paid membership flow.

The app talks to the ledger over HTTP through ``HttpLedgerClient``.  The
gateway is served by an ``httpx.MockTransport`` backed by an in-memory
ledger, so these run without network access but exercise the wire
format end to end.
"""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from gym_registry.config import Settings
from gym_registry.container import build_services
from gym_registry.ledger import HttpLedgerClient, InMemoryLedger
from gym_registry.models.ledger import TransferArgs
from gym_registry.principal import Principal
from gym_registry.web import create_app

pytestmark = pytest.mark.integration

PRICE = 100_000_000

OWNER = Principal(b"\x01gym-owner")
MEMBER = Principal(b"\x02gym-member")
SERVICE = Principal(b"\x09service")


def gateway(ledger: InMemoryLedger):
    """A JSON ledger gateway in front of ``ledger``."""

    async def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content or b"{}")
        if request.url.path == "/query_blocks":
            result = await ledger.query_blocks(body["start"], body["length"])
            return httpx.Response(200, json=result.to_dict())
        if request.url.path == "/transfer_fee":
            fee = await ledger.transfer_fee()
            return httpx.Response(200, json={"transfer_fee": fee.to_dict()})
        if request.url.path == "/transfer":
            result = await ledger.transfer(TransferArgs.from_dict(body))
            if isinstance(result, int):
                return httpx.Response(200, json={"Ok": result})
            return httpx.Response(200, json={"Err": {result.kind: result.detail}})
        return httpx.Response(404)

    return httpx.MockTransport(handler)


@pytest.fixture
def ledger():
    return InMemoryLedger(account=SERVICE.account_id())


@pytest.fixture
def client(tmp_path, ledger):
    config = Settings(membership_price_e8s=PRICE, log_level="WARNING")
    http_ledger = HttpLedgerClient("http://ledger.test", transport=gateway(ledger))
    services = build_services(db_path=tmp_path / "gyms.db", ledger=http_ledger, config=config)
    with TestClient(create_app(services=services, config=config)) as test_client:
        yield test_client


class TestMembershipPipeline:
    """Gym creation through paid enrollment over the HTTP ledger."""

    def test_paid_membership(self, client, ledger):
        owner = {"X-Principal": OWNER.to_text()}
        member = {"X-Principal": MEMBER.to_text()}

        gym = client.post(
            "/gyms",
            json={
                "gym_name": "Iron Den",
                "gym_img_url": "https://example.com/iron-den.png",
                "gym_location": "12 Harbour Street",
                "gym_description": "Strength and conditioning",
                "email_address": "hello@ironden.example",
            },
            headers=owner,
        ).json()

        order = client.post(
            f"/gyms/{gym['id']}/reservations",
            json={"full_name": "Dana Reyes", "user_name": "dreyes", "email_address": "d@x.io"},
            headers=member,
        ).json()
        assert order["amount_e8s"] == PRICE

        # Too early: nothing on the ledger yet
        early = client.post(
            f"/reservations/{order['memo']}/complete", json={"block_index": 0}, headers=member
        )
        assert early.status_code == 402

        block = ledger.record_transfer(
            MEMBER.account_id(), OWNER.account_id(), PRICE, memo=int(order["memo"])
        )
        verified = client.post(
            "/payments/verify",
            json={
                "receiver": OWNER.to_text(),
                "amount": PRICE,
                "block_index": block,
                "memo": order["memo"],
            },
            headers=member,
        )
        assert verified.json() == {"verified": True}

        done = client.post(
            f"/reservations/{order['memo']}/complete", json={"block_index": block}, headers=member
        )
        assert done.status_code == 200
        assert [m["user_id"] for m in done.json()["members"]] == [MEMBER.to_text()]

    def test_payout(self, client, ledger):
        response = client.post("/payments", json={"to": OWNER.to_text(), "amount": 5000, "memo": 3})

        assert response.status_code == 200
        assert ledger.blocks[-1].transaction.memo == 3
        assert ledger.blocks[-1].transaction.operation.to_account == OWNER.account_id()

    def test_payout_rejected(self, client, ledger):
        ledger.mint(SERVICE.account_id(), 10)
        response = client.post("/payments", json={"to": OWNER.to_text(), "amount": 5000})

        assert response.status_code == 402
        assert response.json()["PaymentFailed"].startswith("payment failed, err=InsufficientFunds")
