"""Initialize database command."""

import click

from ..config import get_settings
from ..db import get_db_path, init_db, seed_exercises
from .base import async_command, echo_info, echo_success


@click.command()
@async_command
async def init():
    """Initialize the gymflow database.

    Creates the data directory, the SQLite schema and a starter exercise
    catalog. Safe to run again; existing data is kept.
    """
    data_dir = get_settings().data_dir
    db_path = get_db_path(data_dir)

    echo_info(f"Initializing gymflow in {data_dir}")

    await init_db(db_path)
    echo_success("Database initialized")

    count = await seed_exercises(db_path)
    echo_success(f"Exercise catalog populated ({count} new exercises)")

    click.echo()
    click.echo("gymflow is ready to use!")
    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Add a member profile:")
    click.echo("     gymflow profile add <user-id> --name 'Ana' --gym <gym-id>")
    click.echo()
    click.echo("  2. Create a routine and put it on some days:")
    click.echo("     gymflow routine create 'Push day' -e 1 -e 4 -d 1 -d 4 --user <user-id>")
    click.echo()
    click.echo("  3. Start the API:")
    click.echo("     gymflow serve")
