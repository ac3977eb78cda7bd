"""Workout session commands."""

import click

from ..services.progress import ProgressAggregator
from ..services.sessions import SessionManager
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


def parse_set(value: str) -> tuple[int, float]:
    """Parse ``REPS`` or ``REPSxWEIGHT`` (e.g. ``10x62.5``)."""
    reps, _, weight = value.lower().partition("x")
    try:
        return int(reps), float(weight) if weight else 0.0
    except ValueError:
        raise click.BadParameter(f"expected REPS or REPSxWEIGHT, got {value!r}")


@click.group()
def workout():
    """Start, log and complete workout sessions."""
    pass


@workout.command("start")
@click.option("--routine", "routine_id", type=int, default=None, help="Train one routine instead of today's plan")
@user_option
@click.pass_context
@async_command
async def start(ctx: click.Context, routine_id: int | None, user_id: str):
    """Open today's session (or resume the one already open)."""
    ensure_initialized(ctx)
    profile = await resolve_profile(user_id)

    session, is_new = await SessionManager().start(profile, routine_id)
    if is_new:
        echo_success(f"Started session {session.id}")
    else:
        echo_info(f"Resuming open session {session.id}")
    if session.routine_ids:
        click.echo("Routines: " + ", ".join(f"#{rid}" for rid in session.routine_ids))
    else:
        click.echo("No routines scheduled. Log whatever you train.")


@workout.command("log")
@click.argument("session_id", type=int)
@click.argument("exercise_id", type=int)
@click.option("--set", "-s", "sets", multiple=True, help="One performed set as REPS or REPSxWEIGHT")
@user_option
@click.pass_context
@async_command
async def log(ctx: click.Context, session_id: int, exercise_id: int, sets: tuple[str, ...], user_id: str):
    """Record EXERCISE_ID in SESSION_ID.

    Example: gymflow workout log 12 3 -s 10x60 -s 8x65 -s 6x70
    """
    ensure_initialized(ctx)
    profile = await resolve_profile(user_id)

    series = []
    for number, value in enumerate(sets, start=1):
        reps, weight = parse_set(value)
        series.append({"set_number": number, "reps": reps, "weight": weight})

    session = await SessionManager().record_exercise(
        profile, session_id, exercise_id, series_data=series
    )
    echo_success(
        f"Logged exercise {exercise_id} ({len(series)} sets); "
        f"{len(session.exercises_completed)} exercises in session {session.id}"
    )


@workout.command("complete")
@click.argument("session_id", type=int)
@click.option("--duration", "duration_minutes", type=int, default=None, help="Minutes trained")
@click.option("--calories", "calories_burned", type=float, default=None, help="Calories burned")
@user_option
@click.pass_context
@async_command
async def complete(
    ctx: click.Context,
    session_id: int,
    duration_minutes: int | None,
    calories_burned: float | None,
    user_id: str,
):
    """Mark SESSION_ID as completed."""
    ensure_initialized(ctx)
    profile = await resolve_profile(user_id)

    session, is_duplicate = await SessionManager().complete(
        profile, session_id, duration_minutes, calories_burned
    )
    if is_duplicate:
        echo_warning(f"Session {session.id} was already completed.")
    else:
        echo_success(f"Completed session {session.id}")


@workout.command("show")
@click.argument("session_id", type=int)
@user_option
@click.pass_context
@async_command
async def show(ctx: click.Context, session_id: int, user_id: str):
    """Show a session with per-exercise intensity."""
    ensure_initialized(ctx)
    profile = await resolve_profile(user_id)

    detail = await SessionManager().session_detail(profile, session_id)
    session = detail["session"]

    click.echo()
    click.echo(click.style(f"Session {session['id']} ({session['status']})", bold=True))
    click.echo(f"Date: {session['date'][:16].replace('T', ' ')}")
    if detail["routines"]:
        click.echo("Routines: " + " + ".join(r["name"] for r in detail["routines"]))
    elif detail["is_free_workout"]:
        click.echo("Free workout")

    rows = [
        [
            ex["name"],
            len(ex["series_data"] or []) or ex["sets"] or "-",
            ex["intensity"]["total_reps"],
            ex["intensity"]["volume"],
            f"{ex['intensity']['score']} ({ex['intensity']['label']})",
        ]
        for ex in session["exercises_completed"]
    ]
    if rows:
        click.echo()
        click.echo(format_table(["Exercise", "Sets", "Reps", "Volume", "Intensity"], rows))
    click.echo()
    click.echo(f"Total volume: {detail['total_volume']:g}  Total reps: {detail['total_reps']}")
    click.echo(f"Overall intensity: {detail['overall_intensity']}")


@workout.command("history")
@click.option("--limit", "-n", default=10, type=int, help="Sessions to show (default: 10)")
@user_option
@click.pass_context
@async_command
async def history(ctx: click.Context, limit: int, user_id: str):
    """List completed sessions and summary stats."""
    ensure_initialized(ctx)
    profile = await resolve_profile(user_id)

    result = await ProgressAggregator().history(profile)
    sessions = result["sessions"][:limit]
    stats = result["stats"]

    if not sessions:
        echo_info("No completed sessions yet.")
        return

    rows = [
        [
            s["id"],
            s["date"][:10],
            s["session_name"],
            s["duration_minutes"] if s["duration_minutes"] is not None else "-",
            s["calories_burned"] if s["calories_burned"] is not None else "-",
        ]
        for s in sessions
    ]
    click.echo(format_table(["ID", "Date", "Workout", "Min", "kcal"], rows))
    click.echo()
    click.echo(
        f"Sessions: {stats['total_sessions']}  Minutes: {stats['total_minutes']}  "
        f"Calories: {stats['total_calories']}  Streak: {stats['current_streak']} days"
    )
