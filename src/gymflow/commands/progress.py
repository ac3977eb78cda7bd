"""Progress dashboard command."""

import click

from ..services.progress import ProgressAggregator
from .base import async_command, ensure_initialized, format_table, resolve_profile, user_option


@click.command()
@click.option("--year", type=int, default=None, help="Year for the monthly view (default: current)")
@user_option
@click.pass_context
@async_command
async def progress(ctx: click.Context, year: int | None, user_id: str):
    """Show streaks, totals and weekly/monthly rollups."""
    ensure_initialized(ctx)
    profile = await resolve_profile(user_id)

    data = await ProgressAggregator().progress(profile, year=year)
    overview = data["overview"]

    click.echo()
    click.echo(click.style("Overview", bold=True))
    click.echo(f"  Sessions: {overview['total_sessions']}  Minutes: {overview['total_minutes']}  Calories: {overview['total_calories']}")
    click.echo(f"  Current streak: {overview['current_streak']}  Best streak: {overview['best_streak']}")
    click.echo(f"  This month: {overview['this_month_sessions']} ({overview['monthly_growth']:+d}%)")

    click.echo()
    click.echo(click.style("Last 8 weeks", bold=True))
    rows = [[w["label"], w["sessions"], w["minutes"], w["calories"], f"{w['growth']:+d}%"] for w in data["weekly_data"]]
    click.echo(format_table(["Week", "Sessions", "Min", "kcal", "Growth"], rows))

    click.echo()
    click.echo(click.style("By month", bold=True))
    rows = [[m["label"], m["sessions"], m["minutes"], m["calories"], f"{m['growth']:+d}%"] for m in data["monthly_data"]]
    click.echo(format_table(["Month", "Sessions", "Min", "kcal", "Growth"], rows))

    if data["top_muscle_groups"]:
        click.echo()
        click.echo(click.style("Top muscle groups", bold=True))
        for group in data["top_muscle_groups"]:
            bar = "#" * (group["intensity"] // 10)
            click.echo(f"  {group['name']:<10} {bar} {group['count']}")
