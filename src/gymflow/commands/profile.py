"""Member profile commands."""

import click

from ..db import ClientProfileRepository
from ..models.profile import ClientProfile
from .base import async_command, echo_info, echo_success, echo_warning, ensure_initialized, format_table


@click.group()
def profile():
    """Manage member profiles."""
    pass


@profile.command("add")
@click.argument("user_id")
@click.option("--name", default="", help="Display name")
@click.option("--gym", "gym_id", default=None, help="Gym the member belongs to")
@click.pass_context
@async_command
async def add(ctx: click.Context, user_id: str, name: str, gym_id: str | None):
    """Create a profile for USER_ID."""
    ensure_initialized(ctx)

    repo = ClientProfileRepository()
    if await repo.get_by_user(user_id):
        echo_warning(f"User {user_id} already has a profile.")
        return

    created = await repo.create(ClientProfile(user_id=user_id, name=name, gym_id=gym_id))
    echo_success(f"Created profile {created.id} for {user_id}")


@profile.command("list")
@click.pass_context
@async_command
async def list_profiles(ctx: click.Context):
    """List member profiles."""
    ensure_initialized(ctx)

    profiles = await ClientProfileRepository().list_all()
    if not profiles:
        echo_info("No profiles yet.")
        return

    rows = [[p.id, p.user_id, p.name, p.gym_id or "-"] for p in profiles]
    click.echo(format_table(["ID", "User", "Name", "Gym"], rows))
