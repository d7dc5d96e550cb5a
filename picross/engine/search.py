"""Depth-first backtracking over row arrangements, pruned by column checks."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from ..core.constants import FILLED, UNKNOWN
from ..core.models import DisplayGrid, Hint
from ..utils.logger import get_logger
from .arrangements import runs_for_line
from .grid import CandidatePuzzle
from .propagation import propagate
from .reducer import cannot_match


LOGGER = get_logger(__name__)

WorkItem = Tuple[CandidatePuzzle, int]


def has_correct_hints(rows: Sequence[Hint], cols: Sequence[Hint], puzzle: CandidatePuzzle) -> bool:
    """Recompute every line's hint from the grid and compare with the targets."""

    for row_index, hint in enumerate(rows):
        if runs_for_line(puzzle.row_matrix[row_index]) != tuple(hint):
            return False
    for col_index, hint in enumerate(cols):
        if runs_for_line(puzzle.col_matrix[col_index]) != tuple(hint):
            return False
    return True


def partial_match(
    column: Sequence[Optional[int]],
    hints: Sequence[int],
    hint_total: int,
    total_space: int,
) -> bool:
    """Check that a partially filled line can still satisfy ``hints``.

    The determined prefix (everything before the first unknown cell) must be
    a plausible start of the hint sequence, and the rest of the line must
    still have room for the filled cells and gaps that are missing.
    """

    try:
        first_unknown = list(column).index(UNKNOWN)
    except ValueError:
        first_unknown = len(column)
    completed = column[:first_unknown]

    computed = runs_for_line(completed)
    if len(computed) > len(hints):
        return False

    committed = runs_for_line(column)
    if committed and max(committed) > max(hints, default=0):
        return False

    if sum(1 for value in column if value == FILLED) > hint_total:
        return False

    last_open = bool(completed) and completed[-1] == FILLED
    for index, run in enumerate(computed):
        if index == len(computed) - 1 and last_open:
            if run > hints[index]:
                return False
        elif run != hints[index]:
            # A run followed by a gap can no longer grow.
            return False

    remaining_space = total_space - len(completed)
    remaining_runs = len(hints) - len(computed)
    spaces_for_runs = hint_total - sum(computed)
    if last_open:
        # Every further run needs a gap after the open one.
        spaces_between_runs = remaining_runs
    else:
        spaces_between_runs = max(remaining_runs - 1, 0)
    return spaces_for_runs + spaces_between_runs <= remaining_space


class BacktrackingSearch:
    """Expands work items and collects validated solutions."""

    def __init__(
        self,
        rows: Sequence[Hint],
        cols: Sequence[Hint],
        branch_max_rounds: Optional[int] = None,
        col_totals: Optional[Sequence[int]] = None,
    ) -> None:
        self.rows = tuple(tuple(hint) for hint in rows)
        self.cols = tuple(tuple(hint) for hint in cols)
        if col_totals is None:
            col_totals = [sum(hint) for hint in self.cols]
        self.col_totals = list(col_totals)
        self.branch_max_rounds = branch_max_rounds
        self.solutions: List[DisplayGrid] = []
        self.pruned = 0
        self.rejected_leaves = 0

    def expand(self, puzzle: CandidatePuzzle, row_index: int) -> List[WorkItem]:
        """Process one work item and return its successors, nearest first."""

        height = len(self.rows)
        if row_index == height:
            if has_correct_hints(self.rows, self.cols, puzzle):
                self.solutions.append(puzzle.to_display())
                LOGGER.debug("Accepted solution #%s", len(self.solutions))
            else:
                self.rejected_leaves += 1
                LOGGER.debug("Rejected complete grid with mismatched hints")
            return []

        if row_index > 1 and not self._columns_match(puzzle):
            self.pruned += 1
            return []

        if puzzle.is_row_complete(row_index):
            return [(puzzle, row_index + 1)]

        successors: List[WorkItem] = []
        for arrangement in puzzle.row_arrangements[row_index]:
            if cannot_match(arrangement, puzzle.row_matrix[row_index]):
                continue
            branch = puzzle.clone()
            branch.set_row(row_index, arrangement)
            branch.row_arrangements[row_index] = [arrangement]
            branch.row_common_marks_cache[row_index] = arrangement
            propagate(branch, self.branch_max_rounds)
            if branch.cannot_match:
                continue
            successors.append((branch, row_index + 1))
        return successors

    def _columns_match(self, puzzle: CandidatePuzzle) -> bool:
        height = len(self.rows)
        for col_index, hint in enumerate(self.cols):
            if not partial_match(puzzle.col_matrix[col_index], hint, self.col_totals[col_index], height):
                LOGGER.debug("Column %s cannot match its hint; pruning branch", col_index)
                return False
        return True

