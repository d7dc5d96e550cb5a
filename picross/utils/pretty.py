"""Pretty-print helpers for display grids."""

from __future__ import annotations

import sys
from typing import Sequence

from ..core.constants import DisplayState
from ..core.models import DisplayGrid, PuzzleHints, SolveResult


SYMBOLS = {
    DisplayState.FILLED: "#",
    DisplayState.EMPTY: ".",
    DisplayState.UNDETERMINED: "?",
}


def cell_symbol(cell) -> str:
    return SYMBOLS.get(DisplayState(cell), "?")


def format_grid(grid: DisplayGrid) -> str:
    if not grid:
        return ""
    width = len(grid[0])
    header_cells = [f"{c:>2}" for c in range(width)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * width - 1))
    for r, row in enumerate(grid):
        row_render = " ".join(f"{cell_symbol(cell):>2}" for cell in row)
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def _format_hint(hint: Sequence[int]) -> str:
    return " ".join(str(run) for run in hint) or "0"


def pretty_print_grid(grid: DisplayGrid, *, label: str | None = None, stream=None) -> None:
    """Print a display grid in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_grid(grid), file=stream)


def print_solve_report(result: SolveResult, hints: PuzzleHints, *, stream=None) -> None:
    """Print every solution followed by summary stats."""

    stream = stream or sys.stdout
    for index, grid in enumerate(result.solutions, start=1):
        pretty_print_grid(grid, label=f"Solution {index}", stream=stream)
        print(file=stream)

    print("--- Puzzle ---", file=stream)
    print(f"  Size:          {hints.height} x {hints.width}", file=stream)
    print(f"  Row hints:     {' | '.join(_format_hint(h) for h in hints.rows)}", file=stream)
    print(f"  Column hints:  {' | '.join(_format_hint(h) for h in hints.cols)}", file=stream)
    print(file=stream)
    print("--- Result ---", file=stream)
    print(f"  Status:        {result.status.value}", file=stream)
    print(f"  Solutions:     {len(result.solutions)}", file=stream)
    print(f"  Iterations:    {result.iterations}", file=stream)
