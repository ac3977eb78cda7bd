"""Own routine commands."""

import click

from ..db import DayAssignmentRepository, RoutineRepository
from ..models.routine import DAY_NAMES, AssignmentOrigin, Routine, RoutineCategory, RoutineExercise
from .base import (
    async_command,
    echo_info,
    echo_success,
    echo_warning,
    ensure_initialized,
    format_table,
    resolve_profile,
    user_option,
)


@click.group()
def routine():
    """Create routines and place them on days of the week."""
    pass


@routine.command("create")
@click.argument("name")
@click.option("--exercise", "-e", "exercise_ids", multiple=True, type=int, help="Catalog exercise id, in order")
@click.option("--day", "-d", "days", multiple=True, type=click.IntRange(0, 6), help="Day of week, 0 = Sunday")
@click.option("--sets", default=3, type=int, help="Sets per exercise (default: 3)")
@click.option("--reps", default="12", help="Reps per set, e.g. 8-12 (default: 12)")
@click.option(
    "--category",
    type=click.Choice([c.value for c in RoutineCategory]),
    default=RoutineCategory.STRENGTH.value,
)
@user_option
@click.pass_context
@async_command
async def create(
    ctx: click.Context,
    name: str,
    exercise_ids: tuple[int, ...],
    days: tuple[int, ...],
    sets: int,
    reps: str,
    category: str,
    user_id: str,
):
    """Create an own routine called NAME."""
    ensure_initialized(ctx)
    profile = await resolve_profile(user_id)

    created = await RoutineRepository().create(
        Routine(
            name=name,
            created_by=profile.user_id,
            gym_id=profile.gym_id,
            category=RoutineCategory(category),
            exercises=[
                RoutineExercise(exercise_id=ex_id, sets=sets, reps=reps, order=i + 1)
                for i, ex_id in enumerate(exercise_ids)
            ],
        )
    )
    echo_success(f"Created routine {created.id}: {created.name}")

    if days:
        await DayAssignmentRepository().set_days(
            profile.id, created.id, list(days), AssignmentOrigin.SELF
        )
        click.echo("Scheduled on: " + ", ".join(DAY_NAMES[d] for d in sorted(set(days))))


@routine.command("list")
@user_option
@click.pass_context
@async_command
async def list_routines(ctx: click.Context, user_id: str):
    """List routines you authored."""
    ensure_initialized(ctx)
    profile = await resolve_profile(user_id)

    routines = await RoutineRepository().list_routines(owner=profile.user_id)
    if not routines:
        echo_info("No routines yet. Create one with 'gymflow routine create'.")
        return

    assignments = DayAssignmentRepository()
    rows = []
    for r in routines:
        days = [a.day_of_week for a in await assignments.list_for_routine(profile.id, r.id)]
        rows.append([
            r.id,
            r.name,
            r.category.value,
            len(r.exercises),
            ", ".join(DAY_NAMES[d][:3] for d in days) or "-",
        ])
    click.echo(format_table(["ID", "Name", "Category", "Exercises", "Days"], rows))


@routine.command("assign")
@click.argument("routine_id", type=int)
@click.argument("day", type=click.IntRange(0, 6))
@user_option
@click.pass_context
@async_command
async def assign(ctx: click.Context, routine_id: int, day: int, user_id: str):
    """Put your routine ROUTINE_ID on DAY (0 = Sunday)."""
    ensure_initialized(ctx)
    profile = await resolve_profile(user_id)

    owned = await RoutineRepository().get_owned(routine_id, profile.user_id)
    _, created = await DayAssignmentRepository().assign(
        profile.id, owned.id, day, AssignmentOrigin.SELF
    )
    if created:
        echo_success(f"{owned.name} scheduled on {DAY_NAMES[day]}")
    else:
        echo_warning(f"{owned.name} is already on {DAY_NAMES[day]}")
