"""
CLI (Command Line Interface).

This module provides quick terminal commands around the extraction engine, e.g.:

    lichhoc parse <file>
    lichhoc parse <file> --json
    lichhoc export <file> <out.ics>
    lichhoc conflicts <file>

<file> may be a plain text file (OCR output, pasted text), an HTML page
saved from the student portal, or "-" for stdin.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date, datetime
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from lichhoc.conflicts import find_conflicts
from lichhoc.export_ics import export_events_to_ics
from lichhoc.model import Event
from lichhoc.parse import parse, parse_file, parse_html

console = Console()


def _parse_today(value: str) -> date:
    """
    argparse type for --today (YYYY-MM-DD or DD/MM/YYYY).
    """
    for fmt in ("%Y-%m-%d", "%d/%m/%Y"):
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    raise argparse.ArgumentTypeError(f"Invalid date: {value!r} (use YYYY-MM-DD)")


def _load_events(args: argparse.Namespace) -> Optional[List[Event]]:
    """
    Read and parse the input named on the command line.

    Returns None (after printing why) if the input cannot be read.
    """
    html = True if args.html else None
    if args.input == "-":
        content = sys.stdin.read()
        return parse_html(content, today=args.today) if html else parse(content, today=args.today)

    try:
        return parse_file(args.input, today=args.today, html=html)
    except FileNotFoundError:
        print(f"File not found: {args.input}")
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Cannot read {args.input}: {exc}")
    return None


def _print_table(events: List[Event]) -> None:
    table = Table(box=box.SIMPLE_HEAVY)
    table.add_column("#", justify="right")
    table.add_column("Ngày")
    table.add_column("Giờ")
    table.add_column("Môn học")
    table.add_column("Phòng")
    table.add_column("Ghi chú")
    for ev in events:
        table.add_row(
            ev.id,
            ev.date.strftime("%a %d/%m/%Y"),
            f"{ev.start_time}-{ev.end_time}",
            ev.title,
            ev.location or "",
            ev.description or "",
        )
    console.print(table)


def _cmd_parse(args: argparse.Namespace) -> int:
    """
    Print recognized events as a table (or JSON with --json).
    """
    events = _load_events(args)
    if events is None:
        return 1

    if args.json:
        print(json.dumps([ev.to_dict() for ev in events], ensure_ascii=False, indent=2))
        return 0

    if not events:
        print("No schedule recognized.")
        return 0

    _print_table(events)
    return 0


def _cmd_export(args: argparse.Namespace) -> int:
    """
    Export recognized events into an iCalendar (.ics) file.
    """
    events = _load_events(args)
    if events is None:
        return 1

    if not events:
        print("No schedule recognized, nothing to export.")
        return 0

    out_path = (args.out or "").strip()
    if not out_path:
        print("Please provide output .ics path.")
        return 1

    n = export_events_to_ics(events, out_path)
    print(f"Exported {n} events to: {out_path}")
    return 0


def _cmd_conflicts(args: argparse.Namespace) -> int:
    """
    Print all overlapping pairs among the recognized events.
    """
    events = _load_events(args)
    if events is None:
        return 1

    confs = find_conflicts(events)
    if not confs:
        print("No conflicts found.")
        return 0

    print(f"Conflicts found: {len(confs)}")
    for a, b in confs:
        print(
            f"- {a.date.isoformat()} {a.start_time}-{a.end_time} {a.title}"
            f"  <->  {b.start_time}-{b.end_time} {b.title}"
        )
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="lichhoc", description="Timetable text -> calendar events")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log grammar decisions to stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("input", type=str, help="Text/HTML file with the timetable, '-' for stdin")
    common.add_argument("--html", action="store_true", help="Treat input as HTML (default: by extension)")
    common.add_argument(
        "--today",
        type=_parse_today,
        default=None,
        help="Date used when the text does not name its week (default: system date)",
    )

    p_parse = sub.add_parser("parse", parents=[common], help="Show recognized events")
    p_parse.add_argument("--json", action="store_true", help="Print JSON instead of a table")

    p_export = sub.add_parser("export", parents=[common], help="Export recognized events to .ics")
    p_export.add_argument("out", type=str, help="Output file path (e.g. out.ics)")

    sub.add_parser("conflicts", parents=[common], help="Show overlapping events")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "parse":
        raise SystemExit(_cmd_parse(args))
    if args.command == "export":
        raise SystemExit(_cmd_export(args))
    if args.command == "conflicts":
        raise SystemExit(_cmd_conflicts(args))

    raise SystemExit(2)
