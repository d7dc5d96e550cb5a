"""Enumeration of every filling of a single line that satisfies its hint."""

from __future__ import annotations

from typing import List, Optional, Sequence

from ..core.constants import EMPTY, FILLED
from ..core.models import Arrangement, Hint


def generate_arrangements(hint: Sequence[int], length: int) -> List[Arrangement]:
    """Return all arrangements of ``hint`` on a line of ``length`` cells.

    Runs are placed left to right. For each run the number of leading empty
    cells ranges over the line's wiggle room, i.e. the space left once the
    remaining runs and their mandatory separators are accounted for. A hint
    that cannot fit yields an empty list.
    """

    runs = list(hint)
    if not runs or runs == [0]:
        return [tuple([EMPTY] * length)]

    arrangements: List[Arrangement] = []
    _place_runs(runs, length, [], arrangements)
    return arrangements


def _place_runs(remaining: List[int], length: int, current: List[int], out: List[Arrangement]) -> None:
    if not remaining:
        out.append(tuple(current + [EMPTY] * (length - len(current))))
        return

    remaining_space = length - len(current)
    wiggle_room = remaining_space - sum(remaining) - (len(remaining) - 1)
    run, rest = remaining[0], remaining[1:]

    for lead in range(wiggle_room + 1):
        placed = current + [EMPTY] * lead + [FILLED] * run
        # Separator whenever the run does not end the line.
        if remaining_space - run - lead > 0:
            placed.append(EMPTY)
        _place_runs(rest, length, placed, out)


def runs_for_line(line: Sequence[Optional[int]]) -> Hint:
    """Compute the run-length hint of a line.

    Only ``FILLED`` cells extend a run; empty and unknown cells both close it,
    so partial lines report the runs committed so far.
    """

    runs: List[int] = []
    current = 0
    for value in line:
        if value == FILLED:
            current += 1
        elif current:
            runs.append(current)
            current = 0
    if current:
        runs.append(current)
    return tuple(runs)
