"""Tests for principals and account identifiers."""

import pytest

from gym_registry.principal import (
    ACCOUNT_ID_LENGTH,
    InvalidPrincipalError,
    Principal,
    account_id_from_hex,
    hex_address_from_principal,
)

LEDGER_CANISTER = "ryjl3-tyaaa-aaaaa-aaaba-cai"


class TestPrincipalText:
    """Tests for the textual principal encoding."""

    def test_management_canister(self):
        """The empty principal encodes to aaaaa-aa."""
        assert Principal(b"").to_text() == "aaaaa-aa"
        assert Principal.from_text("aaaaa-aa").raw == b""

    def test_anonymous(self):
        """The anonymous principal has its well-known text."""
        anonymous = Principal.anonymous()
        assert anonymous.to_text() == "2vxsx-fae"
        assert anonymous.is_anonymous
        assert Principal.from_text("2vxsx-fae") == anonymous

    def test_canister_id(self):
        """Canister ids decode to their 10-byte form and back."""
        principal = Principal.from_text(LEDGER_CANISTER)
        assert principal.raw == bytes.fromhex("00000000000000020101")
        assert principal.to_text() == LEDGER_CANISTER
        assert str(principal) == LEDGER_CANISTER

    def test_round_trip(self):
        """Arbitrary bytes survive text encoding."""
        principal = Principal(bytes(range(29)))
        assert Principal.from_text(principal.to_text()) == principal

    def test_uppercase_accepted(self):
        """Decoding is case-insensitive."""
        assert Principal.from_text(LEDGER_CANISTER.upper()).to_text() == LEDGER_CANISTER

    def test_bad_checksum(self):
        """A changed character fails the checksum."""
        with pytest.raises(InvalidPrincipalError):
            Principal.from_text("ryjl3-tyaab-aaaaa-aaaba-cai")

    def test_invalid_characters(self):
        """Characters outside the base32 alphabet are rejected."""
        with pytest.raises(InvalidPrincipalError):
            Principal.from_text("ryjl3-tyaa1-aaaaa-aaaba-cai")

    def test_empty_text(self):
        with pytest.raises(InvalidPrincipalError):
            Principal.from_text("")

    def test_too_long(self):
        """Principals are at most 29 bytes."""
        with pytest.raises(InvalidPrincipalError):
            Principal(bytes(30))


class TestAccountId:
    """Tests for ledger account identifiers."""

    def test_length_and_checksum(self):
        """Account ids are 32 bytes with a valid CRC32 prefix."""
        principal = Principal.from_text(LEDGER_CANISTER)
        account = principal.account_id()

        assert len(account) == ACCOUNT_ID_LENGTH
        assert account_id_from_hex(account.hex()) == account

    def test_hex_address(self):
        """The hex address is the account id rendered as 64 hex chars."""
        principal = Principal.anonymous()
        address = hex_address_from_principal(principal, 0)

        assert len(address) == 64
        assert address == principal.account_id().hex()

    def test_deterministic(self):
        principal = Principal(b"\x01abc")
        assert principal.account_id() == Principal(b"\x01abc").account_id()

    def test_subaccounts_differ(self):
        """Each subaccount gets its own address."""
        principal = Principal(b"\x01abc")
        assert principal.account_id(0) != principal.account_id(1)
        assert principal.account_id(0) == principal.account_id(bytes(32))

    def test_principals_differ(self):
        assert Principal(b"\x01a").account_id() != Principal(b"\x01b").account_id()

    def test_bad_subaccount(self):
        with pytest.raises(ValueError):
            Principal(b"\x01abc").account_id(b"short")

    def test_corrupted_hex_rejected(self):
        """Flipping a byte breaks the checksum."""
        account = bytearray(Principal(b"\x01abc").account_id())
        account[10] ^= 0xFF
        with pytest.raises(ValueError):
            account_id_from_hex(bytes(account).hex())
