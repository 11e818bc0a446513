"""Tests for the command line interface."""

import importlib

import pytest
from click.testing import CliRunner

from gym_registry.cli import main
from gym_registry.config import settings
from gym_registry.container import build_services
from gym_registry.ledger import InMemoryLedger
from gym_registry.principal import Principal

OWNER = Principal(b"\x01gym-owner").to_text()
STRANGER = Principal(b"\x03stranger").to_text()

GYM_OPTIONS = [
    "--name", "Iron Den",
    "--image-url", "https://example.com/iron-den.png",
    "--location", "12 Harbour Street",
    "--description", "Strength and conditioning",
    "--email", "hello@ironden.example",
]


@pytest.fixture
def runner(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "data_dir", tmp_path)
    monkeypatch.setattr(settings, "ledger_url", "")
    return CliRunner()


def invoke(runner, *args):
    return runner.invoke(main, list(args))


class TestGymCommands:
    """Tests for init and gyms commands."""

    def test_requires_init(self, runner):
        result = invoke(runner, "gyms", "list")
        assert result.exit_code == 1
        assert "not initialized" in result.output

    def test_create_and_list(self, runner, tmp_path):
        assert invoke(runner, "init").exit_code == 0
        assert (tmp_path / "gym_registry.db").exists()

        result = invoke(runner, "gyms", "create", "--caller", OWNER, *GYM_OPTIONS)
        assert result.exit_code == 0
        assert "Created gym" in result.output

        result = invoke(runner, "gyms", "list")
        assert result.exit_code == 0
        assert "Iron Den" in result.output
        assert "12 Harbour Street" in result.output

    def test_create_missing_fields(self, runner):
        invoke(runner, "init")
        result = invoke(runner, "gyms", "create", "--caller", OWNER, "--name", "Iron Den")

        assert result.exit_code == 1
        assert "InvalidPayload: Missing required fields" in result.output

    def test_delete_not_owner(self, runner):
        invoke(runner, "init")
        created = invoke(runner, "gyms", "create", "--caller", OWNER, *GYM_OPTIONS)
        gym_id = created.output.strip().split()[-1]

        result = invoke(runner, "gyms", "delete", gym_id, "--caller", STRANGER)
        assert result.exit_code == 1
        assert "NotAuthorized" in result.output

        result = invoke(runner, "gyms", "delete", gym_id, "--caller", OWNER)
        assert result.exit_code == 0

    def test_invalid_caller(self, runner):
        invoke(runner, "init")
        result = invoke(runner, "gyms", "create", "--caller", "bad principal", *GYM_OPTIONS)
        assert result.exit_code == 1
        assert "InvalidPayload" in result.output

    def test_show_and_update(self, runner):
        invoke(runner, "init")
        created = invoke(runner, "gyms", "create", "--caller", OWNER, *GYM_OPTIONS)
        gym_id = created.output.strip().split()[-1]

        result = invoke(runner, "gyms", "show", gym_id)
        assert result.exit_code == 0
        assert "Iron Den (12 Harbour Street) - 0 members, 0 services" in result.output
        assert OWNER in result.output

        renamed = [opt if opt != "Iron Den" else "Iron Den 2" for opt in GYM_OPTIONS]
        result = invoke(runner, "gyms", "update", gym_id, "--caller", OWNER, *renamed)
        assert result.exit_code == 0
        assert "Iron Den 2 (12 Harbour Street) - 0 members, 0 services" in result.output

    def test_show_missing(self, runner):
        invoke(runner, "init")
        result = invoke(runner, "gyms", "show", "missing")
        assert result.exit_code == 1
        assert "NotFound" in result.output


class TestMemberAndServiceCommands:
    """Tests for the members and services groups."""

    @pytest.fixture
    def gym_id(self, runner):
        invoke(runner, "init")
        created = invoke(runner, "gyms", "create", "--caller", OWNER, *GYM_OPTIONS)
        return created.output.strip().split()[-1]

    def test_register_and_list(self, runner, gym_id):
        member = [
            "members", "register", gym_id,
            "--full-name", "Dana Reyes",
            "--user-name", "dreyes",
            "--email", "dana@example.com",
            "--caller", STRANGER,
        ]
        assert invoke(runner, *member).exit_code == 0

        again = invoke(runner, *member)
        assert again.exit_code == 1
        assert "AlreadyExist: user already exists" in again.output

        listing = invoke(runner, "members", "list", gym_id)
        assert STRANGER in listing.output
        assert "dreyes" in listing.output

    def test_add_service(self, runner, gym_id):
        service = [
            "services", "add", gym_id,
            "--name", "Yoga",
            "--description", "Morning vinyasa",
            "--start", "Mon",
            "--end", "Fri",
        ]
        denied = invoke(runner, *service, "--caller", STRANGER)
        assert denied.exit_code == 1
        assert "NotAuthorized" in denied.output

        assert invoke(runner, *service, "--caller", OWNER).exit_code == 0
        listing = invoke(runner, "services", "list", gym_id)
        assert "Yoga" in listing.output
        assert "Mon-Fri" in listing.output


class TestLedgerCommands:
    """Tests for the ledger group."""

    def test_address(self, runner):
        result = invoke(runner, "ledger", "address", OWNER)
        assert result.exit_code == 0
        assert result.output.strip() == Principal.from_text(OWNER).account_id().hex()

    def test_address_invalid(self, runner):
        result = invoke(runner, "ledger", "address", "nope")
        assert result.exit_code == 1
        assert "[ERROR]" in result.output

    def test_verify_no_payment(self, runner):
        result = invoke(
            runner, "ledger", "verify", OWNER, "--amount", "1", "--block", "0", "--memo", "0"
        )
        assert result.exit_code == 2
        assert "No matching payment" in result.output

    def test_verify_rejects_negative_block(self, runner):
        result = invoke(
            runner, "ledger", "verify", OWNER, "--amount", "1", "--block=-1", "--memo", "0"
        )
        assert result.exit_code == 2
        assert "Invalid value" in result.output


class TestPayCommand:
    """Tests for ledger pay."""

    @pytest.fixture
    def ledger(self, runner, tmp_path, monkeypatch):
        """Point the command at a configured ledger backed by memory."""
        monkeypatch.setattr(settings, "ledger_url", "http://ledger.test")
        ledger = InMemoryLedger(Principal.anonymous().account_id())
        services = build_services(db_path=tmp_path / "pay.db", ledger=ledger, config=settings)
        module = importlib.import_module("gym_registry.commands.ledger")
        monkeypatch.setattr(module, "get_services", lambda: services)
        return ledger

    def test_pay(self, runner, ledger):
        result = invoke(runner, "ledger", "pay", OWNER, "--amount", "100")

        assert result.exit_code == 0
        assert "payment completed (block 0)" in result.output
        assert len(ledger.blocks) == 1

    def test_requires_ledger_url(self, runner):
        result = invoke(runner, "ledger", "pay", OWNER, "--amount", "100")

        assert result.exit_code == 1
        assert "LEDGER_URL is not set" in result.output

    @pytest.mark.parametrize("amount", ["-500", str(2**70)])
    def test_amount_out_of_range(self, runner, ledger, amount):
        result = invoke(runner, "ledger", "pay", OWNER, f"--amount={amount}")

        assert result.exit_code == 2
        assert "Invalid value" in result.output
        assert ledger.blocks == []

    def test_memo_out_of_range(self, runner, ledger):
        result = invoke(runner, "ledger", "pay", OWNER, "--amount", "1", "--memo", str(2**64))

        assert result.exit_code == 2
        assert ledger.blocks == []
