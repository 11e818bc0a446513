"""Initialize project command."""

import click

from ..config import settings
from ..db import get_db_path, init_db
from .base import async_command, echo_info, echo_success


@click.command()
@async_command
async def init():
    """Initialize the gym-registry data directory and database."""
    data_dir = settings.data_dir
    db_path = get_db_path(data_dir)

    echo_info(f"Initializing gym-registry in {data_dir}")

    await init_db(db_path)
    echo_success("Database initialized")

    click.echo()
    click.echo("Next steps:")
    click.echo('  gym-registry gyms create --caller <principal> --name "..." ...')
    click.echo("  gym-registry serve")
