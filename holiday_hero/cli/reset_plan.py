"""CLI to delete the saved plan and start over."""
import argparse

from rich.console import Console
from rich.prompt import Confirm

from holiday_hero.cli.common import add_common_args, configure_logging, open_session


console = Console()


def main(argv=None):
    """Clear the saved plan after confirmation."""
    parser = argparse.ArgumentParser(description="Delete the saved plan")
    parser.add_argument("--yes", action="store_true", help="Do not ask for confirmation")
    add_common_args(parser)
    args = parser.parse_args(argv)
    configure_logging(args)

    session = open_session(args)
    if session.data is None:
        console.print("No saved plan found")
        return

    if not args.yes and not Confirm.ask("هل أنت متأكد من حذف جميع البيانات والبدء من جديد؟"):
        console.print("Cancelled")
        return

    session.reset()
    console.print("✓ Plan deleted. Run 'python -m holiday_hero.cli.onboard' to create a new one")


if __name__ == "__main__":
    main()
