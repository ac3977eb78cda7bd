"""CLI entry point for gymflow."""

import click

from . import __version__
from .commands import exercises, init, profile, progress, routine, schedule, serve, workout
from .config import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="gymflow")
def main():
    """gymflow: weekly routine scheduling and workout progress.

    Example usage:

        # Initialize the database
        gymflow init

        # Add a member and a routine
        gymflow profile add ana --gym gym-1
        gymflow routine create "Legs" -e 15 -e 16 -d 1 --user ana

        # Train
        gymflow workout start --user ana
        gymflow workout log 1 15 -s 10x80 -s 8x90 --user ana
        gymflow workout complete 1 --duration 45 --user ana

        # Check progress
        gymflow progress --user ana
    """
    pass


# Register commands
main.add_command(init)
main.add_command(profile)
main.add_command(exercises)
main.add_command(routine)
main.add_command(schedule)
main.add_command(workout)
main.add_command(progress)
main.add_command(serve)


def run():
    """Run the CLI with logging configured from the environment."""
    configure_logging()
    main()


if __name__ == "__main__":
    run()
