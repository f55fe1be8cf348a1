"""CLI dashboard: progress, day strip and the selected day's tasks."""
import argparse
import sys

from rich.console import Console
from rich.table import Table

from holiday_hero.cli.common import add_common_args, configure_logging, open_session
from holiday_hero.models.plan import AppData
from holiday_hero.tools import plan_state
from holiday_hero.tools.presentation import (
    day_label,
    greeting,
    progress_bar,
    progress_message,
    style_for,
)


console = Console()


def render_day_strip(snapshot: AppData, active_index: int) -> str:
    """One cell per day; the active day bracketed, finished days ticked."""
    cells = []
    for idx, day in enumerate(snapshot.plan):
        mark = "✓" if day.is_complete else ""
        cell = f"{day.day_number}{mark}"
        if idx == active_index:
            cell = f"[bold white on dark_orange][{cell}][/bold white on dark_orange]"
        elif day.is_complete:
            cell = f"[green]{cell}[/green]"
        else:
            cell = f"[dim]{cell}[/dim]"
        cells.append(cell)
    return " ".join(cells)


def render_tasks(snapshot: AppData, active_index: int) -> Table:
    day = snapshot.plan[active_index]
    table = Table(title=f"جدول اليوم ({day_label(active_index)})")
    table.add_column("", justify="center")
    table.add_column("Type")
    table.add_column("Task ID", style="dim")
    table.add_column("Task")

    for task in day.tasks:
        style = style_for(task.type)
        status = "[green]✔[/green]" if task.is_completed else "○"
        title = f"[strike]{task.title}[/strike]" if task.is_completed else f"[bold]{task.title}[/bold]"
        table.add_row(
            status,
            f"[{style.color}]{style.icon} {style.label}[/{style.color}]",
            task.id,
            f"{title}\n{task.description}",
        )
    return table


def main(argv=None):
    parser = argparse.ArgumentParser(description="Show the holiday plan dashboard")
    parser.add_argument(
        "--day",
        type=int,
        help="Day number to show (1-15, default: today's day of the plan)"
    )
    add_common_args(parser)
    args = parser.parse_args(argv)
    configure_logging(args)

    session = open_session(args)
    snapshot = session.data
    if snapshot is None:
        console.print("[yellow]No plan yet. Run 'python -m holiday_hero.cli.onboard' first.[/yellow]")
        sys.exit(1)

    if args.day is not None:
        if not 1 <= args.day <= len(snapshot.plan):
            console.print(f"[red]Day must be between 1 and {len(snapshot.plan)}[/red]")
            sys.exit(2)
        active_index = args.day - 1
    else:
        active_index = plan_state.plan_day_for_date(snapshot)

    percent = plan_state.progress_percent(snapshot)

    console.print(f"\n[bold]{greeting(snapshot)}[/bold]  {day_label(active_index)}")
    console.print(f"[cyan]{progress_bar(percent)}[/cyan] {percent}%")
    console.print(progress_message(snapshot))
    console.print(
        f"Completed {plan_state.completed_tasks(snapshot)}/{plan_state.total_tasks(snapshot)} tasks, "
        f"{len(plan_state.completed_days(snapshot))} full days\n"
    )
    console.print(render_day_strip(snapshot, active_index))
    console.print()
    console.print(render_tasks(snapshot, active_index))


if __name__ == "__main__":
    main()
