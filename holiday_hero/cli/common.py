"""Shared argument and logging setup for the holiday_hero CLIs."""
import argparse
import logging
import sys
from pathlib import Path

from holiday_hero import config
from holiday_hero.tools.session import HolidaySession
from holiday_hero.tools.storage_io import open_gateway


def add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--state-dir",
        type=Path,
        default=None,
        help="Directory holding the saved plan (default: storage/state)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging (shows AI input/output, very verbose)"
    )


def configure_logging(args: argparse.Namespace) -> None:
    if args.debug:
        log_level = logging.DEBUG
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    elif args.verbose:
        log_level = logging.INFO
        log_format = "%(asctime)s - %(levelname)s - %(message)s"
    else:
        log_level = logging.WARNING
        log_format = "%(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )


def open_session(args: argparse.Namespace) -> HolidaySession:
    """Session over the configured state directory, already loaded."""
    state_dir = args.state_dir or config.get_state_dir()
    session = HolidaySession(open_gateway(state_dir))
    session.start()
    return session
