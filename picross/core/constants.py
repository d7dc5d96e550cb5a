"""Shared constants and enumerations for the picross solver."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional

# Tri-state cell values. Arrangements only ever contain FILLED and EMPTY.
FILLED = 1
EMPTY = 0
UNKNOWN: Optional[int] = None

DEFAULT_SLICE_SECONDS = 1.0


class DisplayState(str, Enum):
    """Symbols used in grids handed to collaborators."""

    FILLED = "x"
    EMPTY = "b"
    UNDETERMINED = "o"


class Orientation(str, Enum):
    """Line orientations within the grid."""

    ROW = "ROW"
    COLUMN = "COLUMN"


class SolveStatus(str, Enum):
    """Outcome categories for a finished solve."""

    UNSOLVABLE = "unsolvable"
    UNIQUE = "unique"
    AMBIGUOUS = "ambiguous"


CELL_TO_DISPLAY: Dict[Optional[int], DisplayState] = {
    FILLED: DisplayState.FILLED,
    EMPTY: DisplayState.EMPTY,
    UNKNOWN: DisplayState.UNDETERMINED,
}

DISPLAY_TO_CELL: Dict[str, Optional[int]] = {
    state.value: value for value, state in CELL_TO_DISPLAY.items()
}
