"""
Frames Inspector CLI Entry Point

Replays a recorded panel trace into an inspector session and prints the
message log and frame forest.

Usage:
    python -m frames_inspector.main trace.jsonl
    python -m frames_inspector.main trace.jsonl --filter "sourcetype:child" --hierarchy
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from frames_inspector.columns import COLUMNS_BY_ID, DEFAULT_COLUMNS
from frames_inspector.config import InspectorConfig, configure_logging, get_logger
from frames_inspector.exceptions import InspectorError
from frames_inspector.session import InspectorSession
from frames_inspector.trace import load_trace, replay_trace
from frames_inspector.tui import (
    InspectorConsole,
    get_console,
    print_error,
    print_frame_tree,
    print_message_table,
    print_summary,
)

logger = get_logger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="frames-inspector",
        description="Inspect cross-frame postMessage traffic from a recorded trace",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    frames-inspector trace.jsonl
    frames-inspector trace.jsonl --filter "-type:ping source:example.com"
    frames-inspector trace.jsonl --sort dataSize --desc --hierarchy
        """,
    )

    parser.add_argument(
        "trace",
        help="Path to a JSON Lines trace of panel messages",
    )

    parser.add_argument(
        "--tab-id", "-t",
        type=int,
        default=0,
        help="Inspected tab id used to resolve frames (default: 0)",
    )

    parser.add_argument(
        "--filter", "-f",
        dest="filter_text",
        default="",
        help="Filter query, e.g. 'type:ready -sourcetype:self frame:frame[3]'",
    )

    parser.add_argument(
        "--sort", "-s",
        dest="sort_column",
        choices=sorted(COLUMNS_BY_ID),
        default="timestamp",
        help="Column to sort by (default: timestamp)",
    )

    parser.add_argument(
        "--desc",
        action="store_true",
        help="Sort in descending order",
    )

    parser.add_argument(
        "--columns", "-c",
        default=None,
        help="Comma-separated column ids to display",
    )

    parser.add_argument(
        "--hierarchy",
        action="store_true",
        help="Print the frame forest from the last hierarchy snapshot",
    )

    parser.add_argument(
        "--show-registration",
        action="store_true",
        help="Include frame registration messages in the listing",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show replay statistics and detailed log format",
    )

    parser.add_argument(
        "--dev",
        action="store_true",
        help="Development mode with debug output and consistency checks",
    )

    return parser.parse_args(argv)


def parse_columns(value: Optional[str]) -> list[str]:
    """
    Parse a --columns value.

    Raises:
        InspectorError: An unknown column id was given
    """
    if not value:
        return list(DEFAULT_COLUMNS)

    columns = [column.strip() for column in value.split(",") if column.strip()]
    unknown = [column for column in columns if column not in COLUMNS_BY_ID]
    if unknown:
        raise InspectorError(f"Unknown column(s): {', '.join(unknown)}")
    return columns


def run(args: argparse.Namespace, console: Optional[InspectorConsole] = None) -> int:
    """
    Replay a trace and print the results.

    Returns:
        Process exit code
    """
    console = console or get_console()

    config = InspectorConfig.from_env()
    if args.show_registration:
        config.show_registration_messages = True

    try:
        columns = parse_columns(args.columns)
        envelopes = load_trace(args.trace)
    except InspectorError as e:
        print_error(str(e), error_type=type(e).__name__, console=console)
        return 1
    except OSError as e:
        print_error(
            f"Cannot read trace: {e}",
            error_type="TraceError",
            suggestion="Check the trace path",
            console=console,
        )
        return 1

    session = InspectorSession(tab_id=args.tab_id, config=config)
    replayed = replay_trace(session, envelopes)

    messages = session.filtered_messages(
        args.filter_text,
        sort_column=args.sort_column,
        descending=args.desc,
    )

    if args.verbose:
        print_summary(
            {
                "Trace": args.trace,
                "Envelopes": replayed,
                "Messages recorded": len(session.messages),
                "Messages shown": len(messages),
                "Frames": len(session.store.frames_for_tab(args.tab_id)),
                "Store version": session.store.version,
            },
            title="[REPLAY]",
            console=console,
        )

    print_message_table(messages, columns=columns, console=console)

    if args.hierarchy:
        print_frame_tree(session.roots, snapshot=session.frame_hierarchy, console=console)

    if args.dev:
        problems = session.store.check_consistency()
        for problem in problems:
            logger.warning(f"Frame store inconsistency: {problem}")
        if problems:
            console.print_warning("\n".join(problems), title="[CONSISTENCY]")

    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Setup logging for dev mode
    level = logging.DEBUG if args.dev else None
    configure_logging(level=level, verbose=args.verbose)

    try:
        return run(args)
    except KeyboardInterrupt:
        get_console().print("\n[yellow]Interrupted[/yellow]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
