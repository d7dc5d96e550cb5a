"""CLI entrypoint for the picross solver."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from picross.core.exceptions import PicrossError
from picross.core.models import SolverConfig
from picross.engine.solver import PuzzleSolver
from picross.engine.validator import validate_hints
from picross.io.puzzle_file import load_hints
from picross.utils.logger import configure_logging, get_logger, level_from_name
from picross.utils.pretty import pretty_print_grid, print_solve_report


LOGGER = get_logger("picross.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Solve nonogram (picross) puzzles and list every solution",
    )
    parser.add_argument("puzzle", type=Path, help="JSON file with 'rows'/'cols' (or 'rowHints'/'colHints')")
    parser.add_argument(
        "--show-progress",
        action="store_true",
        help="Print the partial grid each time the solver yields",
    )
    parser.add_argument(
        "--slice-seconds",
        type=float,
        default=1.0,
        help="Time budget of one solver slice before it yields (default 1.0)",
    )
    parser.add_argument(
        "--branch-max-rounds",
        type=int,
        default=None,
        help="Cap on propagation rounds after each search branch (default: run to fixpoint)",
    )
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument("--pretty", action="store_true", help="Print text grids instead of JSON")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(level_from_name(args.log_level))

    if args.slice_seconds <= 0:
        parser.error("--slice-seconds must be positive")
    if args.branch_max_rounds is not None and args.branch_max_rounds < 1:
        parser.error("--branch-max-rounds must be at least 1")

    try:
        hints = load_hints(args.puzzle)
    except PicrossError as exc:
        parser.error(str(exc))

    validation = validate_hints(hints)
    for message in validation.messages:
        LOGGER.warning("Puzzle looks malformed: %s", message)

    config = SolverConfig(
        show_progress=args.show_progress,
        slice_seconds=args.slice_seconds,
        branch_max_rounds=args.branch_max_rounds,
    )
    solver = PuzzleSolver(hints, config)

    def report_progress(grid) -> None:
        # stdout carries the result payload.
        pretty_print_grid(grid, label="Progress", stream=sys.stderr)

    result = solver.solve(on_progress=report_progress)

    if args.pretty:
        print_solve_report(result, hints)
        return 0 if result.solutions else 1

    output_text = json.dumps(result.to_jsonable(), indent=2)
    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
    else:
        print(output_text)
    return 0 if result.solutions else 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
