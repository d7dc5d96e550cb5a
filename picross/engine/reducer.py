"""Common-mark deduction over a set of candidate arrangements."""

from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import UNKNOWN
from ..core.models import Arrangement, Line


def common_marks(arrangements: Sequence[Arrangement]) -> Optional[Line]:
    """Return the cells every arrangement agrees on, ``UNKNOWN`` elsewhere.

    An empty arrangement set has no common marks and yields ``None``; callers
    treat that as a contradiction.
    """

    if not arrangements:
        return None

    first = arrangements[0]
    marks = list(first)
    for position in range(len(first)):
        mark = first[position]
        for arrangement in arrangements[1:]:
            if arrangement[position] != mark:
                marks[position] = UNKNOWN
                break
    return tuple(marks)


def cannot_match(arrangement: Arrangement, line: Sequence[Optional[int]]) -> bool:
    """True when a known cell of ``line`` disagrees with ``arrangement``."""

    for value, expected in zip(line, arrangement):
        if value is not UNKNOWN and value != expected:
            return True
    return False


def has_known_cells(line: Sequence[Optional[int]]) -> bool:
    return any(value is not UNKNOWN for value in line)
