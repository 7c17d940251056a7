#!/usr/bin/env python3
"""Elves vs Goblins - Main entry point.

Runs the grid battle for a layout file and prints the outcome score for
part one (default attack powers), part two (weakest Elves that win without
losses), or both.
"""

import argparse
import logging
import sys
import time
from pathlib import Path

from combat_sim.analysis import RoundLogger
from combat_sim.engine import BattleError, find_minimum_elf_power, run_battle
from combat_sim.schemas import BattleReport, SimulationReport
from combat_sim.utils import DEFAULT_ATTACK_POWER, MAX_ROUNDS


def read_layout(source: str) -> str:
    """Read layout text from a file path, or stdin when source is '-'."""
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text()


def positive_int(value: str) -> int:
    """argparse type for options that must be a positive integer."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Elves vs Goblins - turn-based grid battle simulator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s input.txt                       # Both parts
  %(prog)s input.txt --part 1              # Outcome with default attack powers
  %(prog)s input.txt --part 1 --elf-power 15
  %(prog)s input.txt --part 2 --show-time  # Minimum Elf power search, timed
  %(prog)s - --json < input.txt            # Read stdin, print JSON report
  %(prog)s input.txt --trace --debug       # Log the map after every round
        """,
    )

    parser.add_argument("layout", metavar="LAYOUT_FILE", help="Layout file, or '-' for stdin")
    parser.add_argument(
        "--part",
        choices=["1", "2", "both"],
        default="both",
        help="Which answer to compute (default: both)",
    )
    parser.add_argument(
        "--elf-power",
        type=positive_int,
        default=DEFAULT_ATTACK_POWER,
        help=f"Elf attack power for part one (default: {DEFAULT_ATTACK_POWER})",
    )
    parser.add_argument(
        "--max-rounds",
        type=positive_int,
        default=MAX_ROUNDS,
        help=f"Fail if a battle runs longer than this many rounds (default: {MAX_ROUNDS})",
    )
    parser.add_argument("--json", action="store_true", help="Print a JSON report")
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Log a map snapshot after every round (visible with --debug)",
    )
    parser.add_argument(
        "--trace-file",
        type=str,
        metavar="FILE",
        default=None,
        help="Append a JSON line per round to FILE",
    )
    parser.add_argument("--show-time", action="store_true", help="Show elapsed time per part")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    # Keep stdout clean for the JSON report
    log_level = logging.DEBUG if args.debug else logging.INFO
    log_stream = sys.stderr if args.json else sys.stdout
    logging.basicConfig(
        level=log_level,
        format="[%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(log_stream)],
        force=True,
    )

    try:
        layout = read_layout(args.layout)
    except FileNotFoundError:
        print(f"Error: File {args.layout} not found.")
        return 1

    observer = None
    report = SimulationReport(layout=args.layout)
    try:
        if args.trace or args.trace_file:
            observer = RoundLogger(output_path=args.trace_file, snapshots=args.trace)

        if args.part in ("1", "both"):
            start = time.perf_counter()
            outcome = run_battle(
                layout,
                elf_attack_power=args.elf_power,
                observer=observer,
                max_rounds=args.max_rounds,
            )
            report.timings["part_one"] = time.perf_counter() - start
            report.part_one = BattleReport.from_outcome(outcome)

        if args.part in ("2", "both"):
            start = time.perf_counter()
            outcome = find_minimum_elf_power(
                layout, observer=observer, max_rounds=args.max_rounds
            )
            report.timings["part_two"] = time.perf_counter() - start
            report.part_two = BattleReport.from_outcome(outcome)
    except (BattleError, OSError) as e:
        print(f"Error: {e}")
        return 1
    finally:
        if observer is not None:
            observer.close()

    if not args.show_time:
        report.timings = {}

    if args.json:
        print(report.model_dump_json(indent=2))
    else:
        _print_report(report)
    return 0


def _print_report(report: SimulationReport) -> None:
    """Print answers in plain text."""
    print(f"Battle {report.layout}")
    for label, key, part in (
        ("part 1", "part_one", report.part_one),
        ("part 2", "part_two", report.part_two),
    ):
        if part is None:
            continue
        line = f"  {label}: {part.score}"
        line += f" ({part.rounds} rounds x {part.remaining_hp} hp, elf power {part.elf_attack_power})"
        if key in report.timings:
            line += f" [{report.timings[key]:.2f}s]"
        print(line)


if __name__ == "__main__":
    sys.exit(main())
