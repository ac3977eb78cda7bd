"""Schedule commands."""

import click

from ..models.routine import DAY_NAMES
from ..services.schedule import ScheduleResolver
from .base import async_command, ensure_initialized, resolve_profile, user_option


def _describe(scheduled) -> str:
    origin = "own" if scheduled.is_own else "assigned"
    return f"{scheduled.routine.name} (#{scheduled.routine_id}, {origin})"


@click.group()
def schedule():
    """Show your training schedule."""
    pass


@schedule.command("week")
@user_option
@click.pass_context
@async_command
async def week(ctx: click.Context, user_id: str):
    """Routines for each day of the week."""
    ensure_initialized(ctx)
    profile = await resolve_profile(user_id)

    days = await ScheduleResolver().week_schedule(profile)
    click.echo()
    for day, routines in days.items():
        label = click.style(f"{DAY_NAMES[day]:<10}", bold=True)
        if routines:
            click.echo(f"{label} " + "; ".join(_describe(r) for r in routines))
        else:
            click.echo(f"{label} " + click.style("rest", dim=True))


@schedule.command("today")
@user_option
@click.pass_context
@async_command
async def today(ctx: click.Context, user_id: str):
    """Today's routines and completion status."""
    ensure_initialized(ctx)
    profile = await resolve_profile(user_id)

    plan = await ScheduleResolver().today_schedule(profile)
    click.echo()
    click.echo(click.style(DAY_NAMES[plan.day_of_week], bold=True))
    if plan.is_rest_day:
        click.echo("Rest day. Nothing scheduled.")
        return

    done = set(plan.completed_routine_ids)
    for scheduled in plan.routines:
        mark = click.style("[done]", fg="green") if scheduled.routine_id in done else "[    ]"
        click.echo(f"  {mark} {_describe(scheduled)}")
    if plan.is_completed:
        click.echo()
        click.echo(click.style("All done for today!", fg="green"))
