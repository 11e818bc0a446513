"""Ledger commands: addresses, verification and payments."""

import click

from ..config import settings
from ..hashing import MAX_U64
from ..principal import Principal, hex_address_from_principal
from .base import (
    async_command,
    caller_option,
    echo_error,
    echo_success,
    echo_warning,
    get_services,
    parse_caller,
    reports_errors,
)

# Amounts, block indexes and memos are ledger u64 values
U64 = click.IntRange(0, MAX_U64)


@click.group()
def ledger():
    """Inspect and use the payment ledger."""
    pass


@ledger.command("address")
@click.argument("principal")
@click.option("--subaccount", default=0, type=int, help="Subaccount index (default: 0)")
def address(principal: str, subaccount: int):
    """Print the hex ledger address of a principal."""
    try:
        click.echo(hex_address_from_principal(Principal.from_text(principal), subaccount))
    except ValueError as e:
        echo_error(str(e))
        click.get_current_context().exit(1)


@ledger.command("verify")
@click.argument("receiver")
@click.option("--amount", required=True, type=U64, help="Amount in e8s")
@click.option("--block", "block_index", required=True, type=U64, help="Block index")
@click.option("--memo", required=True, type=U64, help="Transfer memo")
@caller_option
@async_command
@reports_errors
async def verify(receiver: str, amount: int, block_index: int, memo: int, caller: str):
    """Check that a block holds a transfer from --caller to RECEIVER."""
    services = get_services()
    verified = await services.verifier.verify(
        caller=parse_caller(caller),
        receiver=Principal.from_text(receiver),
        amount=amount,
        block_index=block_index,
        memo=memo,
    )
    if verified:
        echo_success(f"Payment found in block {block_index}")
    else:
        echo_warning(f"No matching payment in block {block_index}")
        click.get_current_context().exit(2)


@ledger.command("pay")
@click.argument("to")
@click.option("--amount", required=True, type=U64, help="Amount in e8s")
@click.option("--memo", default=0, type=U64, help="Transfer memo (default: 0)")
@async_command
@reports_errors
async def pay(to: str, amount: int, memo: int):
    """Send AMOUNT e8s from the service account to principal TO.

    Requires LEDGER_URL: a payment against the in-memory ledger would
    vanish with this process.
    """
    if not settings.ledger_url:
        echo_error("LEDGER_URL is not set, refusing to pay against an in-memory ledger")
        click.get_current_context().exit(1)

    result = await get_services().executor.pay(to, amount, memo=memo)
    if result.ok:
        echo_success(f"{result.message} (block {result.block_index})")
    else:
        echo_error(result.message)
        click.get_current_context().exit(1)
