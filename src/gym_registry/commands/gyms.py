"""Gym management commands."""

import click

from ..models.gym import Gym, GymPayload
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


def gym_payload_options(f):
    """Options shared by create and update."""
    options = [
        click.option("--name", "gym_name", default="", help="Gym name"),
        click.option("--image-url", "gym_img_url", default="", help="Image URL"),
        click.option("--location", "gym_location", default="", help="Location"),
        click.option("--description", "gym_description", default="", help="Description"),
        click.option("--email", "email_address", default="", help="Contact email"),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def echo_gym(gym: Gym) -> None:
    click.echo(click.style(gym.get_summary(), bold=True))
    click.echo(f"  ID:          {gym.id}")
    click.echo(f"  Owner:       {gym.owner}")
    click.echo(f"  Email:       {gym.email_address}")
    click.echo(f"  Image:       {gym.gym_img_url}")
    click.echo(f"  Description: {gym.gym_description}")


@click.group()
def gyms():
    """Manage registered gyms."""
    pass


@gyms.command("list")
@click.pass_context
@async_command
async def list_gyms(ctx: click.Context):
    """List all gyms."""
    ensure_initialized(ctx)

    all_gyms = await get_services().registry.list_gyms()
    if not all_gyms:
        echo_info("No gyms registered yet.")
        return

    rows = [
        [g.id, g.gym_name, g.gym_location, str(len(g.members)), str(len(g.gym_services))]
        for g in all_gyms
    ]
    click.echo(format_table(["ID", "Name", "Location", "Members", "Services"], rows))


@gyms.command("show")
@click.argument("gym_id")
@click.pass_context
@async_command
@reports_errors
async def show(ctx: click.Context, gym_id: str):
    """Show a gym."""
    ensure_initialized(ctx)
    echo_gym(await get_services().registry.get_gym(gym_id))


@gyms.command("create")
@gym_payload_options
@caller_option
@click.pass_context
@async_command
@reports_errors
async def create(ctx: click.Context, caller: str, **fields):
    """Register a gym owned by --caller."""
    ensure_initialized(ctx)

    gym = await get_services().registry.create_gym(GymPayload(**fields), parse_caller(caller))
    echo_success(f"Created gym {gym.id}")


@gyms.command("update")
@click.argument("gym_id")
@gym_payload_options
@caller_option
@click.pass_context
@async_command
@reports_errors
async def update(ctx: click.Context, gym_id: str, caller: str, **fields):
    """Replace the details of a gym owned by --caller."""
    ensure_initialized(ctx)

    gym = await get_services().registry.update_gym(
        gym_id, GymPayload(**fields), parse_caller(caller)
    )
    echo_success(f"Updated gym {gym.id}")
    echo_gym(gym)


@gyms.command("delete")
@click.argument("gym_id")
@caller_option
@click.pass_context
@async_command
@reports_errors
async def delete(ctx: click.Context, gym_id: str, caller: str):
    """Delete a gym owned by --caller."""
    ensure_initialized(ctx)

    deleted = await get_services().registry.delete_gym(gym_id, parse_caller(caller))
    echo_success(f"Deleted gym {deleted}")
