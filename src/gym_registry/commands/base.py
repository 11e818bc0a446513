"""Shared CLI utilities."""

import asyncio
from functools import wraps

import click

from ..config import settings
from ..container import Services, build_services
from ..db import get_db_path
from ..errors import RegistryError
from ..ledger.client import LedgerError
from ..principal import InvalidPrincipalError, Principal


def async_command(f):
    """Decorator to run async Click commands."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def reports_errors(f):
    """Turn domain and ledger errors into an [ERROR] line and exit code 1."""

    @wraps(f)
    async def wrapper(*args, **kwargs):
        try:
            return await f(*args, **kwargs)
        except RegistryError as e:
            echo_error(f"{e.kind}: {e.message}")
        except InvalidPrincipalError as e:
            echo_error(f"InvalidPayload: {e}")
        except LedgerError as e:
            echo_error(f"Ledger unavailable: {e}")
        click.get_current_context().exit(1)

    return wrapper


caller_option = click.option(
    "--caller",
    default="",
    help="Principal to act as (default: anonymous)",
)


def parse_caller(text: str) -> Principal:
    return Principal.from_text(text) if text else Principal.anonymous()


def ensure_initialized(ctx: click.Context) -> None:
    """Ensure the database is initialized."""
    db_path = get_db_path(settings.data_dir)
    if not db_path.exists():
        click.echo(
            click.style("Error: ", fg="red")
            + "Project not initialized. Run 'gym-registry init' first."
        )
        ctx.exit(1)


def get_services() -> Services:
    return build_services(config=settings)


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(click.style("[WARN] ", fg="yellow") + message)


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = ["".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers))]
    lines.append("".join("-" * w + " " * padding for w in widths))
    for row in rows:
        lines.append("".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row)))

    return "\n".join(lines)
