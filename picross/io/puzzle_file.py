"""Reading hint tables from JSON puzzle files."""

from __future__ import annotations

import json
from pathlib import Path

from ..core.exceptions import HintFormatError, PuzzleLoadError
from ..core.models import PuzzleHints
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


def load_hints(path: Path | str) -> PuzzleHints:
    """Load hints from ``{"rows": ..., "cols": ...}`` or catalog-style JSON."""

    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise PuzzleLoadError(f"Cannot read puzzle file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise PuzzleLoadError(f"Puzzle file {path} is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise PuzzleLoadError(f"Puzzle file {path} must contain a JSON object")
    try:
        hints = PuzzleHints.from_dict(data)
    except HintFormatError as exc:
        raise PuzzleLoadError(f"Puzzle file {path} has malformed hints: {exc}") from exc
    LOGGER.debug("Loaded %sx%s puzzle from %s", hints.height, hints.width, path)
    return hints


def save_hints(hints: PuzzleHints, path: Path | str) -> None:
    Path(path).write_text(json.dumps(hints.to_dict(), indent=2), encoding="utf-8")
