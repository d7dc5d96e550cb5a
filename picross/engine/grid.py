"""Tri-state grid representation shared by propagation and search."""

from __future__ import annotations

from typing import List, Optional, Sequence

from ..core.constants import CELL_TO_DISPLAY, DISPLAY_TO_CELL, UNKNOWN, Orientation
from ..core.models import Arrangement, DisplayGrid, Line
from ..utils.logger import get_logger
from .reducer import common_marks


LOGGER = get_logger(__name__)


class CandidatePuzzle:
    """A full solver state: the grid in both orientations plus line candidates.

    ``row_matrix`` and ``col_matrix`` are mirror views of the same cells and
    are only ever written through :meth:`set_cell`, which updates both.
    """

    def __init__(
        self,
        row_arrangements: Sequence[Sequence[Arrangement]],
        col_arrangements: Sequence[Sequence[Arrangement]],
    ) -> None:
        self.height = len(row_arrangements)
        self.width = len(col_arrangements)
        self.row_matrix: List[List[Optional[int]]] = [
            [UNKNOWN] * self.width for _ in range(self.height)
        ]
        self.col_matrix: List[List[Optional[int]]] = [
            [UNKNOWN] * self.height for _ in range(self.width)
        ]
        self.row_arrangements: List[List[Arrangement]] = [list(a) for a in row_arrangements]
        self.col_arrangements: List[List[Arrangement]] = [list(a) for a in col_arrangements]
        self.row_common_marks_cache: List[Optional[Line]] = [None] * self.height
        self.col_common_marks_cache: List[Optional[Line]] = [None] * self.width
        self.cannot_match = False
        self.iterations = 0

    # ------------------------------------------------------------------
    # Initialization helpers
    # ------------------------------------------------------------------
    def seed_from_common_marks(self) -> None:
        """Write each row's common marks into the grid.

        A row without any arrangement (an infeasible hint) marks the puzzle
        as contradictory straight away.
        """

        for row_index, arrangements in enumerate(self.row_arrangements):
            marks = common_marks(arrangements)
            if marks is None:
                LOGGER.debug("Row %s has no arrangements; puzzle cannot match", row_index)
                self.cannot_match = True
                return
            self.row_common_marks_cache[row_index] = marks
            self.set_row(row_index, marks)
        for col_index, arrangements in enumerate(self.col_arrangements):
            if not arrangements:
                LOGGER.debug("Column %s has no arrangements; puzzle cannot match", col_index)
                self.cannot_match = True
                return

    def load_board(self, board: Sequence[Sequence[Optional[int]]]) -> None:
        for row_index, row in enumerate(board):
            self.set_row(row_index, row)

    # ------------------------------------------------------------------
    # Cell manipulation
    # ------------------------------------------------------------------
    def set_cell(self, row: int, col: int, value: Optional[int]) -> None:
        self.row_matrix[row][col] = value
        self.col_matrix[col][row] = value

    def set_row(self, row: int, values: Sequence[Optional[int]]) -> None:
        for col, value in enumerate(values):
            self.set_cell(row, col, value)

    def set_line(self, orientation: Orientation, index: int, position: int, value: Optional[int]) -> None:
        if orientation == Orientation.ROW:
            self.set_cell(index, position, value)
        else:
            self.set_cell(position, index, value)

    def clone(self) -> "CandidatePuzzle":
        """Independent copy for a search branch.

        Arrangements and cached marks are immutable tuples, so copying the
        containing lists is enough to isolate the branch.
        """

        copy = CandidatePuzzle.__new__(CandidatePuzzle)
        copy.height = self.height
        copy.width = self.width
        copy.row_matrix = [list(row) for row in self.row_matrix]
        copy.col_matrix = [list(col) for col in self.col_matrix]
        copy.row_arrangements = [list(a) for a in self.row_arrangements]
        copy.col_arrangements = [list(a) for a in self.col_arrangements]
        copy.row_common_marks_cache = list(self.row_common_marks_cache)
        copy.col_common_marks_cache = list(self.col_common_marks_cache)
        copy.cannot_match = self.cannot_match
        copy.iterations = self.iterations
        return copy

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def line(self, orientation: Orientation, index: int) -> List[Optional[int]]:
        if orientation == Orientation.ROW:
            return self.row_matrix[index]
        return self.col_matrix[index]

    def arrangements(self, orientation: Orientation) -> List[List[Arrangement]]:
        if orientation == Orientation.ROW:
            return self.row_arrangements
        return self.col_arrangements

    def common_marks_cache(self, orientation: Orientation) -> List[Optional[Line]]:
        if orientation == Orientation.ROW:
            return self.row_common_marks_cache
        return self.col_common_marks_cache

    def line_count(self, orientation: Orientation) -> int:
        return self.height if orientation == Orientation.ROW else self.width

    def is_row_complete(self, row: int) -> bool:
        return UNKNOWN not in self.row_matrix[row]

    def is_complete(self) -> bool:
        return all(UNKNOWN not in row for row in self.row_matrix)

    def unknown_count(self) -> int:
        return sum(1 for row in self.row_matrix for value in row if value is UNKNOWN)

    # ------------------------------------------------------------------
    # Serialization helpers
    # ------------------------------------------------------------------
    def to_display(self) -> DisplayGrid:
        return to_display_grid(self.row_matrix)


def to_display_grid(matrix: Sequence[Sequence[Optional[int]]]) -> DisplayGrid:
    """Convert a tri-state matrix into display symbols."""

    return [[CELL_TO_DISPLAY[value] for value in row] for row in matrix]


def from_display_grid(board: Sequence[Sequence[str]]) -> List[List[Optional[int]]]:
    """Convert display symbols (or their string values) back to cell values."""

    return [[DISPLAY_TO_CELL.get(_symbol(cell), UNKNOWN) for cell in row] for row in board]


def _symbol(cell) -> str:
    return cell.value if hasattr(cell, "value") else str(cell)
