"""Google Hangouts Takeout to typed domain model converter."""

import argparse
import logging
from pathlib import Path
from typing import Optional

from hangouts_takeout.core.config import ConverterConfig
from hangouts_takeout.core.models import Conversation
from hangouts_takeout.core.scalars import TimestampUnit
from hangouts_takeout.takeout import convert_takeout

logger = logging.getLogger(__name__)


def print_last_conversation(conversations: list[Conversation]) -> None:
    """prints the chat messages of the last conversation in timestamp order."""
    if not conversations:
        return

    last = conversations[-1]
    for event in sorted(last.events, key=lambda e: e.timestamp):
        message = event.as_chat_message()
        if message is not None:
            print(message.as_text())


def main(argv: Optional[list[str]] = None) -> int:
    """
    main entry point for hangouts-takeout CLI.

    Args:
        argv: command line arguments (defaults to sys.argv[1:])

    Returns:
        exit code (0 success, 1 partial failure, 2 fatal error)
    """
    parser = argparse.ArgumentParser(
        description="Convert a Google Hangouts Takeout export"
    )
    parser.add_argument(
        "source",
        help="Hangouts.json file, directory of JSON files, or Takeout ZIP archive",
    )
    parser.add_argument(
        "--timestamp-unit",
        choices=[unit.name.lower() for unit in TimestampUnit],
        default=TimestampUnit.MICROSECONDS.name.lower(),
        help="unit of raw timestamps in the export (default: microseconds)",
    )
    parser.add_argument(
        "--strict-read-states",
        action="store_true",
        help="fail conversations with read states that match no participant",
    )
    parser.add_argument(
        "--keep-going",
        action="store_true",
        help="skip conversations that fail to convert instead of aborting",
    )
    parser.add_argument(
        "--show-last",
        action="store_true",
        help="print the chat messages of the last conversation",
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        help="show progress bar",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="suppress non-error output",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="enable debug logging",
    )

    args = parser.parse_args(argv)

    # configures logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="[%(levelname)s] %(message)s",
    )

    # validates source path exists
    source_path = Path(args.source)
    if not source_path.exists():
        logger.error("Source not found: %s", args.source)
        return 2

    config = ConverterConfig(
        timestamp_unit=TimestampUnit[args.timestamp_unit.upper()],
        strict_read_states=args.strict_read_states,
    )

    try:
        exit_code, conversations = convert_takeout(
            source=source_path,
            config=config,
            keep_going=args.keep_going,
            quiet=args.quiet,
            progress=args.progress,
        )
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.error("Fatal error: %s", e)
        return 2

    if args.show_last and exit_code != 2:
        print_last_conversation(conversations)

    return exit_code
