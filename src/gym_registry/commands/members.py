"""Membership and gym service commands."""

import click

from ..models.gym import GymServicePayload, MembershipPayload
from .base import (
    async_command,
    caller_option,
    echo_info,
    echo_success,
    ensure_initialized,
    format_table,
    get_services,
    parse_caller,
    reports_errors,
)


@click.group()
def members():
    """Manage gym members."""
    pass


@members.command("list")
@click.argument("gym_id")
@click.pass_context
@async_command
@reports_errors
async def list_members(ctx: click.Context, gym_id: str):
    """List members of a gym."""
    ensure_initialized(ctx)

    enrolled = await get_services().registry.list_members(gym_id)
    if not enrolled:
        echo_info("No members yet.")
        return

    rows = [[m.user_id, m.user_name, m.full_name, m.email_address] for m in enrolled]
    click.echo(format_table(["Principal", "User", "Name", "Email"], rows))


@members.command("register")
@click.argument("gym_id")
@click.option("--full-name", default="", help="Member's full name")
@click.option("--user-name", default="", help="Member's user name")
@click.option("--email", default="", help="Member's email")
@caller_option
@click.pass_context
@async_command
@reports_errors
async def register(
    ctx: click.Context, gym_id: str, full_name: str, user_name: str, email: str, caller: str
):
    """Enroll --caller in a gym."""
    ensure_initialized(ctx)

    payload = MembershipPayload(
        gym_id=gym_id, full_name=full_name, user_name=user_name, email_address=email
    )
    gym = await get_services().registry.register_member(payload, parse_caller(caller))
    echo_success(f"Registered in {gym.gym_name} ({len(gym.members)} members)")


@click.group()
def services():
    """Manage services offered by gyms."""
    pass


@services.command("list")
@click.argument("gym_id")
@click.pass_context
@async_command
@reports_errors
async def list_services(ctx: click.Context, gym_id: str):
    """List services of a gym."""
    ensure_initialized(ctx)

    offered = await get_services().registry.list_services(gym_id)
    if not offered:
        echo_info("No services yet.")
        return

    rows = [
        [s.service_name, f"{s.operating_days_start}-{s.operating_days_end}", s.service_description]
        for s in offered
    ]
    click.echo(format_table(["Service", "Days", "Description"], rows))


@services.command("add")
@click.argument("gym_id")
@click.option("--name", default="", help="Service name")
@click.option("--description", default="", help="Service description")
@click.option("--start", default="", help="First operating day, e.g. Mon")
@click.option("--end", default="", help="Last operating day, e.g. Fri")
@caller_option
@click.pass_context
@async_command
@reports_errors
async def add(
    ctx: click.Context,
    gym_id: str,
    name: str,
    description: str,
    start: str,
    end: str,
    caller: str,
):
    """Add a service to a gym owned by --caller."""
    ensure_initialized(ctx)

    payload = GymServicePayload(
        gym_id=gym_id,
        service_name=name,
        service_description=description,
        operating_days_start=start,
        operating_days_end=end,
    )
    gym = await get_services().registry.add_service(payload, parse_caller(caller))
    echo_success(f"Added {name} to {gym.gym_name}")
