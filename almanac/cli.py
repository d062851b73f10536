#!/usr/bin/env python3
"""
almanac — multi-stage identifier remapping

Command-line interface over an almanac file.

Usage:
    almanac lowest <file>                 Lowest destination for seeds and seed ranges
    almanac trace <file> <value>          Follow one identifier through every stage
    almanac map <file> <start> <length>   Translate one interval in range mode
    almanac stages <file>                 Show identifier spaces and stages
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import textwrap
from typing import Optional, Sequence

from almanac import __version__
from almanac.config import Settings
from almanac.errors import AlmanacError
from almanac.parser import load_almanac, parse_identifier, parse_query_interval
from almanac.queries import QueryMode, run_query
from almanac.segment import Interval


# ============================================================================
# Formatting helpers
# ============================================================================

class C:
    """ANSI colors."""
    BOLD = "\033[1m"
    DIM = "\033[2m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"
    RESET = "\033[0m"

    @staticmethod
    def off():
        C.BOLD = C.DIM = C.RED = C.GREEN = C.YELLOW = C.CYAN = C.RESET = ""


def header(text: str) -> str:
    return f"\n{C.BOLD}{C.CYAN}{'─' * 60}{C.RESET}\n{C.BOLD}  {text}{C.RESET}\n{C.BOLD}{C.CYAN}{'─' * 60}{C.RESET}"


def ok(text: str) -> str:
    return f"  {C.GREEN}✓{C.RESET} {text}"


def fail(text: str) -> str:
    return f"  {C.RED}✗{C.RESET} {text}"


def dim(text: str) -> str:
    return f"{C.DIM}{text}{C.RESET}"


def fmt_interval(interval: Interval) -> str:
    return f"[{interval.start}, {interval.end})"


def load(args, settings: Settings):
    almanac = load_almanac(args.file, strict=settings.strict_overlaps)
    pipeline = almanac.pipeline(settings.source, settings.destination)
    return almanac, pipeline


# ============================================================================
# Commands
# ============================================================================

def cmd_lowest(args, settings: Settings):
    """Lowest destination identifier for the seed list, per mode."""
    almanac, pipeline = load(args, settings)
    modes = [QueryMode.SCALAR, QueryMode.RANGES] if args.mode == "both" else [QueryMode(args.mode)]
    results = [run_query(pipeline, almanac.seeds, mode) for mode in modes]

    if args.json:
        print(json.dumps([
            {"mode": r.mode.value, "value": r.value, "elapsed_ms": r.elapsed_ms, "count": r.count}
            for r in results
        ], indent=2))
        return

    print(header(f"LOWEST: {args.file}"))
    print(f"  {dim(f'{pipeline.source} → {pipeline.destination}  |  {len(pipeline)} stages')}")
    for result in results:
        label = "Minimal location" if result.mode is QueryMode.SCALAR else "Minimal location with ranges"
        print(ok(f"{label}: {C.BOLD}{result.value}{C.RESET}"))
        print(f"    {dim(f'{result.count} results in {result.elapsed_ms:.0f}ms')}")
    total = sum(r.elapsed_ms for r in results)
    print(f"\n  Done in {total:.0f}ms")


def cmd_trace(args, settings: Settings):
    """Follow one identifier through every stage."""
    value = parse_identifier(args.value, "value")
    _, pipeline = load(args, settings)
    steps = pipeline.trace(value)

    if args.json:
        print(json.dumps([
            {"stage": s.stage, "before": s.before, "after": s.after} for s in steps
        ], indent=2))
        return

    print(header(f"TRACE: {value}"))
    for step in steps:
        marker = f"{C.GREEN}mapped{C.RESET}" if step.mapped else dim("identity")
        print(f"  {step.stage:30s} {step.before:>12} → {step.after:<12} {marker}")
    print(f"\n  Result: {C.BOLD}{pipeline.translate_scalar_all(value)}{C.RESET}")


def cmd_map(args, settings: Settings):
    """Translate one interval in range mode."""
    query = parse_query_interval(args.start, args.length)
    _, pipeline = load(args, settings)
    results = pipeline.translate_range_all([query])

    if args.json:
        print(json.dumps([[r.start, r.end] for r in results], indent=2))
        return

    print(header(f"MAP: {fmt_interval(query)}"))
    print(f"  {dim(f'{len(results)} intervals, {sum(r.length for r in results)} identifiers')}")
    for r in results:
        print(f"    {fmt_interval(r)}")
    non_empty = [r for r in results if not r.is_empty]
    if non_empty:
        print(f"\n  Lowest: {C.BOLD}{min(r.start for r in non_empty)}{C.RESET}")


def cmd_stages(args, settings: Settings):
    """Show the identifier spaces and the stages that join them."""
    almanac = load_almanac(args.file, strict=settings.strict_overlaps)
    graph = almanac.graph()

    if args.json:
        print(json.dumps({
            "seeds": len(almanac.seeds),
            "stages": [
                {"source": s.source, "destination": s.destination, "segments": len(s)}
                for s in graph.stages
            ],
        }, indent=2))
        return

    print(header(f"STAGES: {args.file}"))
    print(f"  Seeds: {len(almanac.seeds)}")
    print(graph.summary())
    for stage in almanac.stages:
        overlapping = stage.overlaps()
        if overlapping:
            print(fail(f"{stage.name}: {len(overlapping)} overlapping segment pair(s)"))


# ============================================================================
# CLI setup
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="almanac",
        description="almanac — multi-stage identifier remapping",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""
        examples:
          almanac lowest input.txt
          almanac lowest input.txt --mode ranges --json
          almanac trace input.txt 79
          almanac map input.txt 79 14
          almanac --from soil --to humidity map input.txt 79 14
        """),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    parser.add_argument("--strict", action="store_true", help="Refuse stages with overlapping segments")
    parser.add_argument("--from", dest="source", help="Identifier space to start from")
    parser.add_argument("--to", dest="destination", help="Identifier space to end in")
    parser.add_argument("--json", action="store_true", help="Machine-readable output")

    sub = parser.add_subparsers(dest="command", help="Command to run")

    p = sub.add_parser("lowest", aliases=["low"], help="Lowest destination for the seed list")
    p.add_argument("file", help="Almanac file")
    p.add_argument("--mode", default="both", choices=["scalar", "ranges", "both"])

    p = sub.add_parser("trace", help="Follow one identifier through every stage")
    p.add_argument("file", help="Almanac file")
    p.add_argument("value", help="Identifier to trace")

    p = sub.add_parser("map", help="Translate one interval in range mode")
    p.add_argument("file", help="Almanac file")
    p.add_argument("start", help="First identifier")
    p.add_argument("length", help="Number of identifiers")

    p = sub.add_parser("stages", help="Show identifier spaces and stages")
    p.add_argument("file", help="Almanac file")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = Settings.from_args(args)

    logging.basicConfig(
        level=logging.DEBUG if settings.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if not settings.color:
        C.off()

    if not args.command:
        parser.print_help()
        return 0

    commands = {
        "lowest": cmd_lowest, "low": cmd_lowest,
        "trace": cmd_trace,
        "map": cmd_map,
        "stages": cmd_stages,
    }

    handler = commands[args.command]
    try:
        handler(args, settings)
    except FileNotFoundError as e:
        print(fail(f"File not found: {e.filename}"))
        return 1
    except (AlmanacError, KeyError) as e:
        print(fail(f"Error: {e}"))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
