"""Data models supporting the picross solver."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from .constants import DEFAULT_SLICE_SECONDS, DisplayState, SolveStatus
from .exceptions import HintFormatError

Hint = Tuple[int, ...]
Arrangement = Tuple[int, ...]
Line = Tuple[Optional[int], ...]
DisplayGrid = List[List[DisplayState]]


def normalize_hint(values: Sequence[Any]) -> Hint:
    """Return the canonical form of a hint: a tuple of positive run lengths.

    ``[]`` and ``[0]`` both describe a blank line and normalize to ``()``.
    """

    cleaned: List[int] = []
    for value in values:
        if isinstance(value, bool) or not isinstance(value, int):
            raise HintFormatError(f"Hint values must be integers, got {value!r}")
        if value < 0:
            raise HintFormatError(f"Hint values must not be negative, got {value}")
        cleaned.append(value)
    if cleaned == [0]:
        return ()
    if 0 in cleaned:
        raise HintFormatError(f"Zero is only valid as a lone blank-line hint: {list(values)}")
    return tuple(cleaned)


def _hint_table(raw: Any, label: str) -> List[Hint]:
    if not isinstance(raw, (list, tuple)):
        raise HintFormatError(f"'{label}' must be a list of hints")
    table: List[Hint] = []
    for entry in raw:
        if not isinstance(entry, (list, tuple)):
            raise HintFormatError(f"Each entry of '{label}' must be a list, got {entry!r}")
        table.append(normalize_hint(entry))
    return table


@dataclass(frozen=True)
class PuzzleHints:
    """Row and column hint tables, as supplied by a puzzle catalog."""

    rows: Tuple[Hint, ...]
    cols: Tuple[Hint, ...]

    @classmethod
    def from_tables(cls, rows: Sequence[Sequence[int]], cols: Sequence[Sequence[int]]) -> "PuzzleHints":
        return cls(
            rows=tuple(_hint_table(list(rows), "rows")),
            cols=tuple(_hint_table(list(cols), "cols")),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PuzzleHints":
        """Build hints from ``{"rows", "cols"}`` or the catalog's ``{"rowHints", "colHints"}``."""

        if "rows" in data and "cols" in data:
            return cls(
                rows=tuple(_hint_table(data["rows"], "rows")),
                cols=tuple(_hint_table(data["cols"], "cols")),
            )
        if "rowHints" in data and "colHints" in data:
            return cls(
                rows=tuple(_hint_table(_catalog_values(data["rowHints"], "rowHints"), "rowHints")),
                cols=tuple(_hint_table(_catalog_values(data["colHints"], "colHints"), "colHints")),
            )
        raise HintFormatError("Puzzle data needs either 'rows'/'cols' or 'rowHints'/'colHints'")

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return len(self.cols)

    def to_dict(self) -> dict:
        return {
            "rows": [list(hint) for hint in self.rows],
            "cols": [list(hint) for hint in self.cols],
        }


def _catalog_values(raw: Any, label: str) -> List[List[Any]]:
    if not isinstance(raw, (list, tuple)):
        raise HintFormatError(f"'{label}' must be a list of hints")
    table: List[List[Any]] = []
    for entry in raw:
        if not isinstance(entry, (list, tuple)):
            raise HintFormatError(f"Each entry of '{label}' must be a list, got {entry!r}")
        values: List[Any] = []
        for item in entry:
            if not isinstance(item, Mapping) or "value" not in item:
                raise HintFormatError(f"Catalog hint items need a 'value' key, got {item!r}")
            values.append(item["value"])
        table.append(values)
    return table


@dataclass
class SolverConfig:
    """Configuration values driving a solve."""

    show_progress: bool = False
    slice_seconds: float = DEFAULT_SLICE_SECONDS
    branch_max_rounds: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "SolverConfig":
        if not data:
            return cls()
        return cls(
            show_progress=bool(data.get("showProgress", data.get("show_progress", False))),
            slice_seconds=float(data.get("sliceSeconds", data.get("slice_seconds", DEFAULT_SLICE_SECONDS))),
            branch_max_rounds=data.get("branchMaxRounds", data.get("branch_max_rounds")),
        )


@dataclass
class SolveResult:
    """Final outcome of a solve."""

    solutions: List[DisplayGrid] = field(default_factory=list)
    iterations: int = 0

    @property
    def status(self) -> SolveStatus:
        if not self.solutions:
            return SolveStatus.UNSOLVABLE
        if len(self.solutions) == 1:
            return SolveStatus.UNIQUE
        return SolveStatus.AMBIGUOUS

    @property
    def is_well_formed(self) -> bool:
        return self.status == SolveStatus.UNIQUE

    def to_jsonable(self) -> dict:
        return {
            "status": self.status.value,
            "iterations": self.iterations,
            "solutions": [
                [[cell.value for cell in row] for row in grid] for grid in self.solutions
            ],
        }
