"""CLI to mark a plan task done or not done."""
import argparse
import sys

from rich.console import Console

from holiday_hero.cli.common import add_common_args, configure_logging, open_session
from holiday_hero.tools import plan_state


console = Console()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Mark a task as completed (or not)")
    parser.add_argument("--task", required=True, help="Task ID, e.g. day-3-funTask")
    parser.add_argument(
        "--day",
        type=int,
        help="Day number holding the task (default: looked up from the task ID)"
    )
    state = parser.add_mutually_exclusive_group()
    state.add_argument("--done", dest="completed", action="store_const", const=True,
                       help="Mark completed")
    state.add_argument("--undone", dest="completed", action="store_const", const=False,
                       help="Mark not completed")
    add_common_args(parser)
    args = parser.parse_args(argv)
    configure_logging(args)

    session = open_session(args)
    if session.data is None:
        console.print("[yellow]No plan yet. Run 'python -m holiday_hero.cli.onboard' first.[/yellow]")
        sys.exit(1)

    if args.day is not None:
        day_index = args.day - 1
    else:
        found = plan_state.find_task(session.data, args.task)
        if found is None:
            console.print(f"[red]✗ No task with ID {args.task}[/red]")
            sys.exit(1)
        day_index = found[0]

    if args.completed is None:
        snapshot = session.toggle_task(day_index, args.task)
    else:
        snapshot = session.update_task(day_index, args.task, args.completed)

    located = plan_state.find_task(snapshot, args.task)
    if located is None or located[0] != day_index:
        console.print(f"[yellow]Task {args.task} not found on day {day_index + 1}, nothing changed[/yellow]")
        return

    task = located[1]
    marker = "[green]✔ done[/green]" if task.is_completed else "○ not done"
    console.print(f"{task.title}: {marker}")
    console.print(f"Progress: {plan_state.progress_percent(snapshot)}%")


if __name__ == "__main__":
    main()
