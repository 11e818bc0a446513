"""CLI entry point for gym-registry."""

import click

from . import __version__
from .commands import gyms, init, ledger, members, serve, services
from .config import settings
from .logging_config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="gym-registry")
@click.option("--log-level", default=None, help="Override LOG_LEVEL for this run")
def main(log_level: str | None):
    """gym-registry: gyms, memberships and ledger-verified payments.

    Example usage:

        # Initialize the database
        gym-registry init

        # Register a gym and a service
        gym-registry gyms create --caller <principal> --name "Iron Den" ...
        gym-registry services add <gym-id> --caller <principal> --name Yoga ...

        # Check a payment on the ledger
        gym-registry ledger verify <receiver> --amount 1000 --block 5 --memo 42

        # Serve the HTTP API
        gym-registry serve
    """
    setup_logging(log_level or settings.log_level, settings.log_file)


# Register commands
main.add_command(init)
main.add_command(gyms)
main.add_command(members)
main.add_command(services)
main.add_command(ledger)
main.add_command(serve)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
