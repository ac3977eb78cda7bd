"""Shared CLI utilities."""

import asyncio
from functools import wraps

import click

from ..db import ClientProfileRepository, get_db_path
from ..errors import GymflowError, NotFoundError
from ..models.profile import ClientProfile

# Member the command acts for; identity is resolved upstream of gymflow
user_option = click.option(
    "--user",
    "-u",
    "user_id",
    required=True,
    envvar="GYMFLOW_USER",
    help="User id of the member (or set GYMFLOW_USER)",
)


def async_command(f):
    """Decorator to run async Click commands.

    Domain errors are printed and turn into exit code 1.
    """

    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return asyncio.run(f(*args, **kwargs))
        except GymflowError as e:
            echo_error(e.message)
            click.get_current_context().exit(1)

    return wrapper


def ensure_initialized(ctx: click.Context) -> None:
    """Ensure the database is initialized."""
    db_path = get_db_path()
    if not db_path.exists():
        click.echo(
            click.style("Error: ", fg="red")
            + "Database not initialized. Run 'gymflow init' first."
        )
        ctx.exit(1)


async def resolve_profile(user_id: str) -> ClientProfile:
    """Look up the member profile for a user id."""
    profile = await ClientProfileRepository().get_by_user(user_id)
    if profile is None:
        raise NotFoundError(
            f"No profile for user {user_id}. Create one with 'gymflow profile add'."
        )
    return profile


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


def format_table(headers: list[str], rows: list[list], padding: int = 2) -> str:
    """Format rows as a left-aligned text table."""
    if not rows:
        return ""

    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    def line(cells) -> str:
        return "".join(str(c).ljust(widths[i] + padding) for i, c in enumerate(cells))

    lines = [line(headers), "".join("-" * w + " " * padding for w in widths)]
    lines.extend(line(row) for row in rows)
    return "\n".join(lines)
