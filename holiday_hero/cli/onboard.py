"""CLI to onboard a child and generate their 15-day holiday plan."""
import argparse
import asyncio
import sys

from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console

from holiday_hero.cli.common import add_common_args, configure_logging, open_session
from holiday_hero.models.plan import EducationLevel, Profile, PLAN_DAYS


console = Console()

LEVEL_CHOICES = {
    "primary": EducationLevel.PRIMARY,
    "middle": EducationLevel.MIDDLE,
    "high": EducationLevel.HIGH,
}


def parse_languages(text: str) -> list[str]:
    """Split comma-separated input into trimmed, non-empty language names."""
    return [lang.strip() for lang in text.split(",") if lang.strip()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Create a holiday plan for a child"
    )
    parser.add_argument("--name", required=True, help="Child's name")
    parser.add_argument("--age", type=int, default=10, help="Child's age in years")
    parser.add_argument(
        "--level",
        choices=sorted(LEVEL_CHOICES),
        default="primary",
        help="School stage"
    )
    parser.add_argument(
        "--languages",
        default="",
        help="Comma-separated languages to practise, e.g. 'English, French'"
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Replace an existing plan without asking"
    )
    add_common_args(parser)
    return parser


def main(argv=None):
    load_dotenv()
    args = build_parser().parse_args(argv)
    configure_logging(args)

    try:
        profile = Profile(
            name=args.name,
            age=args.age,
            level=LEVEL_CHOICES[args.level],
            languages=parse_languages(args.languages),
        )
    except ValidationError as e:
        console.print(f"[red]Invalid profile:[/red] {e}")
        sys.exit(2)

    session = open_session(args)
    if session.is_onboarded and not args.force:
        console.print("[yellow]A plan already exists. Use --force or reset_plan to start over.[/yellow]")
        sys.exit(1)

    with console.status(f"[bold cyan]Preparing a {PLAN_DAYS}-day plan for {profile.name}...[/bold cyan]"):
        snapshot = asyncio.run(session.complete_onboarding(profile))

    if snapshot is None:
        console.print(f"[red]✗ {session.error}[/red]")
        sys.exit(1)

    console.print(f"\n✓ [green]Plan ready![/green] {len(snapshot.plan)} days for {profile.name}")
    console.print(f"  Images generated: {len(snapshot.generated_images or [])}")
    console.print("  Run 'python -m holiday_hero.cli.dashboard' to see today's tasks")


if __name__ == "__main__":
    main()
