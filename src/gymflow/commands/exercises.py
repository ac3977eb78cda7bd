"""Exercise catalog command."""

import click

from ..db import ExerciseRepository
from .base import async_command, echo_info, ensure_initialized, format_table


@click.command()
@click.argument("query", required=False)
@click.pass_context
@async_command
async def exercises(ctx: click.Context, query: str | None):
    """List catalog exercises, optionally matching QUERY."""
    ensure_initialized(ctx)

    repo = ExerciseRepository()
    found = await repo.search(query) if query else await repo.list_all()
    if not found:
        echo_info("No exercises found.")
        return

    rows = [
        [
            ex.id,
            ex.name,
            ex.muscle_group.value if ex.muscle_group else "-",
            ex.calorie_coefficient,
        ]
        for ex in found
    ]
    click.echo(format_table(["ID", "Name", "Muscle group", "kcal/rep"], rows))
