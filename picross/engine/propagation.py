"""Constraint propagation: alternate column and row reduction to a fixpoint."""

from __future__ import annotations

from typing import Optional

from ..core.constants import UNKNOWN, Orientation
from ..utils.logger import get_logger
from .grid import CandidatePuzzle
from .reducer import cannot_match, common_marks, has_known_cells


LOGGER = get_logger(__name__)


def reduce_line(puzzle: CandidatePuzzle, orientation: Orientation, index: int) -> bool:
    """Narrow one line's candidates against the grid and mark forced cells.

    Returns ``True`` when at least one grid cell changed. An emptied
    candidate set sets ``puzzle.cannot_match`` and returns ``False``.
    """

    line = puzzle.line(orientation, index)
    all_arrangements = puzzle.arrangements(orientation)
    cache = puzzle.common_marks_cache(orientation)
    arrangements = all_arrangements[index]

    recalculate = cache[index] is None
    if has_known_cells(line):
        before = len(arrangements)
        arrangements = [a for a in arrangements if not cannot_match(a, line)]
        all_arrangements[index] = arrangements
        if len(arrangements) < before:
            recalculate = True

    if not arrangements:
        LOGGER.debug("%s %s has no remaining arrangements", orientation.value.lower(), index)
        puzzle.cannot_match = True
        return False

    if recalculate:
        marks = common_marks(arrangements)
        cache[index] = marks
    else:
        marks = cache[index]

    changed = False
    for position, value in enumerate(marks):
        if value is UNKNOWN or line[position] == value:
            continue
        puzzle.set_line(orientation, index, position, value)
        changed = True
    return changed


def _reduce_all(puzzle: CandidatePuzzle, orientation: Orientation) -> bool:
    changed = False
    for index in range(puzzle.line_count(orientation)):
        if reduce_line(puzzle, orientation, index):
            changed = True
        if puzzle.cannot_match:
            break
    return changed


def propagate_round(puzzle: CandidatePuzzle) -> bool:
    """Run one round (all columns, then all rows). Returns whether it was productive."""

    puzzle.iterations += 1
    changed = _reduce_all(puzzle, Orientation.COLUMN)
    if not puzzle.cannot_match:
        changed = _reduce_all(puzzle, Orientation.ROW) or changed
    return changed and not puzzle.cannot_match


def propagate(puzzle: CandidatePuzzle, max_rounds: Optional[int] = None) -> CandidatePuzzle:
    """Run rounds until a fixpoint, a contradiction, or ``max_rounds`` rounds."""

    rounds = 0
    while not puzzle.cannot_match:
        if max_rounds is not None and rounds >= max_rounds:
            break
        rounds += 1
        if not propagate_round(puzzle):
            break
    return puzzle
