"""Cooperative time-sliced execution of a solve.

A :class:`SolveTask` owns the whole resumable state of one solve: the puzzle
being propagated and, once propagation settles, the search worklist. Each call
to :meth:`SolveTask.run_slice` performs whole units of work (one propagation
round or one search work item) until the slice budget runs out, then hands
control back. Drivers decide what "yield" means: a plain loop, or an asyncio
task that lets the event loop run between slices.
"""

from __future__ import annotations

import asyncio
import time
from collections import deque
from enum import Enum
from typing import Callable, Deque, Optional

from ..core.constants import DEFAULT_SLICE_SECONDS
from ..core.models import DisplayGrid, SolveResult
from ..utils.logger import get_logger
from .grid import CandidatePuzzle
from .propagation import propagate_round
from .search import BacktrackingSearch, WorkItem


LOGGER = get_logger(__name__)

ProgressCallback = Callable[[DisplayGrid], None]


class Phase(str, Enum):
    PROPAGATE = "PROPAGATE"
    SEARCH = "SEARCH"
    DONE = "DONE"
    CANCELLED = "CANCELLED"


class SolveTask:
    """Resumable state machine driving propagation and search."""

    def __init__(
        self,
        puzzle: CandidatePuzzle,
        search: BacktrackingSearch,
        slice_seconds: float = DEFAULT_SLICE_SECONDS,
        on_progress: Optional[ProgressCallback] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.puzzle = puzzle
        self.search = search
        self.slice_seconds = slice_seconds
        self.on_progress = on_progress
        self.clock = clock
        self.worklist: Deque[WorkItem] = deque()
        self.phase = Phase.PROPAGATE if not puzzle.cannot_match else Phase.DONE
        self.slices = 0
        self.work_units = 0

    @property
    def done(self) -> bool:
        return self.phase in (Phase.DONE, Phase.CANCELLED)

    def cancel(self) -> None:
        if not self.done:
            LOGGER.info("Solve cancelled after %s slices", self.slices)
            self.phase = Phase.CANCELLED

    def run_slice(self) -> bool:
        """Work until the slice budget is spent. Returns ``True`` if work remains."""

        if self.done:
            return False

        self.slices += 1
        started = self.clock()
        while not self.done:
            self._step()
            if not self.done and self.clock() - started > self.slice_seconds:
                self._yield_progress()
                return True
        return False

    def _step(self) -> None:
        self.work_units += 1
        if self.phase == Phase.PROPAGATE:
            productive = propagate_round(self.puzzle)
            if self.puzzle.cannot_match:
                LOGGER.debug("Initial propagation found a contradiction")
                self.phase = Phase.DONE
            elif not productive:
                LOGGER.debug(
                    "Propagation reached a fixpoint after %s rounds, %s cells unresolved",
                    self.puzzle.iterations,
                    self.puzzle.unknown_count(),
                )
                self.worklist = deque([(self.puzzle, 0)])
                self.phase = Phase.SEARCH
            return

        if not self.worklist:
            self.phase = Phase.DONE
            return
        puzzle, row_index = self.worklist.popleft()
        successors = self.search.expand(puzzle, row_index)
        # Depth first: successors go ahead of older alternatives.
        self.worklist.extendleft(reversed(successors))
        if not self.worklist:
            self.phase = Phase.DONE

    def _yield_progress(self) -> None:
        LOGGER.debug(
            "Yielding after slice %s (%s work units, %s pending, %s solutions)",
            self.slices,
            self.work_units,
            len(self.worklist),
            len(self.search.solutions),
        )
        if self.on_progress is None:
            return
        current = self.worklist[0][0] if self.worklist else self.puzzle
        self.on_progress(current.to_display())

    def result(self) -> SolveResult:
        return SolveResult(
            solutions=list(self.search.solutions),
            iterations=self.puzzle.iterations,
        )


def run_until_complete(task: SolveTask) -> SolveResult:
    """Drive ``task`` in a plain loop."""

    while task.run_slice():
        pass
    return task.result()


async def run_async(task: SolveTask) -> SolveResult:
    """Drive ``task`` on the running event loop, yielding between slices."""

    while task.run_slice():
        await asyncio.sleep(0)
    return task.result()
