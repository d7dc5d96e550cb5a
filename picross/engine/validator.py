"""Deterministic sanity checks for hint tables.

The engine assumes well-formed input; these checks are for collaborators
(catalog tooling, the CLI) that want to reject a puzzle before solving it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from ..core.exceptions import ValidationError
from ..core.models import Hint, PuzzleHints
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


def minimum_length(hint: Sequence[int]) -> int:
    """Smallest line that can hold ``hint``."""

    runs = [run for run in hint if run]
    if not runs:
        return 0
    return sum(runs) + len(runs) - 1


class HintValidator:
    """Runs deterministic validation over a pair of hint tables."""

    def validate(self, hints: PuzzleHints) -> ValidationResult:
        try:
            self._check_dimensions(hints)
            self._check_lines_fit(hints.rows, hints.width, "Row")
            self._check_lines_fit(hints.cols, hints.height, "Column")
            self._check_totals(hints)
        except ValidationError as exc:
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=[str(exc)])
        return ValidationResult(ok=True, messages=[])

    def _check_dimensions(self, hints: PuzzleHints) -> None:
        if hints.height == 0 or hints.width == 0:
            raise ValidationError(
                f"Puzzle needs at least one row and one column, got {hints.height}x{hints.width}"
            )

    def _check_lines_fit(self, table: Sequence[Hint], length: int, label: str) -> None:
        for index, hint in enumerate(table):
            needed = minimum_length(hint)
            if needed > length:
                raise ValidationError(
                    f"{label} {index} hint {list(hint)} needs {needed} cells but the line has {length}"
                )

    def _check_totals(self, hints: PuzzleHints) -> None:
        row_total = sum(sum(hint) for hint in hints.rows)
        col_total = sum(sum(hint) for hint in hints.cols)
        if row_total != col_total:
            raise ValidationError(
                f"Row hints fill {row_total} cells but column hints fill {col_total}"
            )


def validate_hints(hints: PuzzleHints) -> ValidationResult:
    return HintValidator().validate(hints)
