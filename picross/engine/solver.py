"""Main solver orchestration.

Three stages:
  1. Enumerate every row and column arrangement and seed the grid with the
     rows' common marks.
  2. Propagate common marks between rows and columns to a fixpoint.
  3. Search the remaining ambiguity row by row, collecting every grid whose
     recomputed hints match the puzzle.
Stages 2 and 3 run inside a :class:`SolveTask` so they can be time-sliced.
"""

from __future__ import annotations

from typing import Optional, Sequence, Union

from ..core.constants import Orientation
from ..core.models import Hint, PuzzleHints, SolveResult, SolverConfig
from ..utils.logger import get_logger
from .arrangements import generate_arrangements
from .grid import CandidatePuzzle, from_display_grid
from .propagation import reduce_line
from .scheduler import ProgressCallback, SolveTask, run_async, run_until_complete
from .search import BacktrackingSearch


LOGGER = get_logger(__name__)


class PuzzleSolver:
    """Solver bound to one pair of hint tables."""

    def __init__(self, hints: PuzzleHints, config: Optional[SolverConfig] = None) -> None:
        self.config = config or SolverConfig()
        self.rows: Sequence[Hint] = hints.rows
        self.cols: Sequence[Hint] = hints.cols
        self.col_totals = [sum(hint) for hint in self.cols]
        self.search = self._new_search()

    def _new_search(self) -> BacktrackingSearch:
        return BacktrackingSearch(
            self.rows,
            self.cols,
            branch_max_rounds=self.config.branch_max_rounds,
            col_totals=self.col_totals,
        )

    @property
    def solutions(self):
        return self.search.solutions

    @property
    def show_progress(self) -> bool:
        return self.config.show_progress

    # ------------------------------------------------------------------
    # Candidate construction
    # ------------------------------------------------------------------
    def create_initial_candidate_puzzle(self) -> CandidatePuzzle:
        row_arrangements = [generate_arrangements(hint, len(self.cols)) for hint in self.rows]
        col_arrangements = [generate_arrangements(hint, len(self.rows)) for hint in self.cols]
        return CandidatePuzzle(row_arrangements, col_arrangements)

    def create_initial_matrix(self) -> CandidatePuzzle:
        puzzle = self.create_initial_candidate_puzzle()
        puzzle.seed_from_common_marks()
        return puzzle

    def create_task(self, on_progress: Optional[ProgressCallback] = None) -> SolveTask:
        self.search = self._new_search()
        puzzle = self.create_initial_matrix()
        LOGGER.info(
            "Solving %sx%s puzzle (%s row / %s column arrangements)",
            len(self.rows),
            len(self.cols),
            sum(len(a) for a in puzzle.row_arrangements),
            sum(len(a) for a in puzzle.col_arrangements),
        )
        return SolveTask(
            puzzle,
            self.search,
            slice_seconds=self.config.slice_seconds,
            on_progress=on_progress if self.show_progress else None,
        )

    # ------------------------------------------------------------------
    # Public entrypoints
    # ------------------------------------------------------------------
    def solve(self, on_progress: Optional[ProgressCallback] = None) -> SolveResult:
        task = self.create_task(on_progress)
        result = run_until_complete(task)
        self._log_result(task, result)
        return result

    async def solve_async(self, on_progress: Optional[ProgressCallback] = None) -> SolveResult:
        task = self.create_task(on_progress)
        result = await run_async(task)
        self._log_result(task, result)
        return result

    def _log_result(self, task: SolveTask, result: SolveResult) -> None:
        LOGGER.info(
            "Solve finished: %s solution(s), %s propagation rounds, %s slices, %s pruned branches",
            len(result.solutions),
            result.iterations,
            task.slices,
            self.search.pruned,
        )

    # ------------------------------------------------------------------
    # Player assistance
    # ------------------------------------------------------------------
    def has_unmarked_required_cells(
        self,
        board: Sequence[Sequence[str]],
        index: int,
        orientation: Union[Orientation, str] = Orientation.ROW,
    ) -> bool:
        """Report whether deduction on one line would mark cells the player has not.

        ``board`` holds display symbols. Only the selected line is reduced,
        against its full arrangement set, so the answer reflects what that
        line's hint alone forces given the player's marks.
        """

        orientation = Orientation(orientation)
        puzzle = self.create_initial_candidate_puzzle()
        puzzle.load_board(from_display_grid(board))
        before = list(puzzle.line(orientation, index))
        reduce_line(puzzle, orientation, index)
        if puzzle.cannot_match:
            return False
        return before != puzzle.line(orientation, index)


def _as_hints(hints: Union[PuzzleHints, dict]) -> PuzzleHints:
    if isinstance(hints, PuzzleHints):
        return hints
    return PuzzleHints.from_dict(hints)


def _as_config(config: Union[SolverConfig, dict, None]) -> SolverConfig:
    if isinstance(config, SolverConfig):
        return config
    return SolverConfig.from_dict(config)


def solve_puzzle(
    hints: Union[PuzzleHints, dict],
    config: Union[SolverConfig, dict, None] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> SolveResult:
    """Solve synchronously and return every solution."""

    return PuzzleSolver(_as_hints(hints), _as_config(config)).solve(on_progress)


async def solutions_for_puzzle(
    hints: Union[PuzzleHints, dict],
    config: Union[SolverConfig, dict, None] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> SolveResult:
    """Solve cooperatively on the running event loop."""

    return await PuzzleSolver(_as_hints(hints), _as_config(config)).solve_async(on_progress)
