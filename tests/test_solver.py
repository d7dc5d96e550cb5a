import asyncio
import itertools
import random
import unittest

from picross.core.constants import DisplayState, SolveStatus
from picross.core.models import PuzzleHints, SolverConfig
from picross.engine.arrangements import runs_for_line
from picross.engine.solver import PuzzleSolver, solutions_for_puzzle, solve_puzzle

X = DisplayState.FILLED
B = DisplayState.EMPTY
O = DisplayState.UNDETERMINED


def hints_for_grid(grid):
    rows = [list(runs_for_line(row)) for row in grid]
    cols = [list(runs_for_line(col)) for col in zip(*grid)]
    return rows, cols


def brute_force_count(rows, cols) -> int:
    height, width = len(rows), len(cols)
    target_rows = [tuple(h) for h in rows]
    target_cols = [tuple(h) for h in cols]
    count = 0
    for cells in itertools.product((0, 1), repeat=height * width):
        grid = [cells[r * width:(r + 1) * width] for r in range(height)]
        if [runs_for_line(row) for row in grid] != target_rows:
            continue
        if [runs_for_line(col) for col in zip(*grid)] != target_cols:
            continue
        count += 1
    return count


def as_binary(display_grid):
    return [[1 if cell == X else 0 for cell in row] for row in display_grid]


class ScenarioTests(unittest.TestCase):
    def test_single_full_row(self) -> None:
        result = solve_puzzle(PuzzleHints.from_tables([[3]], [[1], [1], [1]]))
        self.assertEqual(result.solutions, [[[X, X, X]]])
        self.assertEqual(result.status, SolveStatus.UNIQUE)
        self.assertTrue(result.is_well_formed)

    def test_two_by_two_diagonals_are_both_found(self) -> None:
        result = solve_puzzle(PuzzleHints.from_tables([[1], [1]], [[1], [1]]))
        self.assertEqual(len(result.solutions), 2)
        self.assertIn([[X, B], [B, X]], result.solutions)
        self.assertIn([[B, X], [X, B]], result.solutions)
        self.assertEqual(result.status, SolveStatus.AMBIGUOUS)

    def test_blank_single_cell(self) -> None:
        result = solve_puzzle({"rows": [[0]], "cols": [[0]]})
        self.assertEqual(result.solutions, [[[B]]])

    def test_infeasible_hint_gives_no_solution(self) -> None:
        result = solve_puzzle(PuzzleHints.from_tables([[5]], [[1], [1], [1]]))
        self.assertEqual(result.solutions, [])
        self.assertEqual(result.status, SolveStatus.UNSOLVABLE)

    def test_conflicting_tables_give_no_solution(self) -> None:
        result = solve_puzzle(PuzzleHints.from_tables([[2], [2]], [[1], [1]]))
        self.assertEqual(result.solutions, [])

    def test_line_solvable_puzzle_needs_no_branching(self) -> None:
        hints = PuzzleHints.from_tables(
            [[1, 1], [5], [5], [3], [1]],
            [[2], [4], [4], [4], [2]],
        )
        result = solve_puzzle(hints)
        self.assertEqual(len(result.solutions), 1)
        self.assertEqual(
            as_binary(result.solutions[0]),
            [
                [0, 1, 0, 1, 0],
                [1, 1, 1, 1, 1],
                [1, 1, 1, 1, 1],
                [0, 1, 1, 1, 0],
                [0, 0, 1, 0, 0],
            ],
        )
        self.assertGreaterEqual(result.iterations, 2)

    def test_catalog_shaped_hints_are_accepted(self) -> None:
        data = {
            "rowHints": [[{"value": 1}], [{"value": 1}]],
            "colHints": [[{"value": 2}], [{"value": 0}]],
        }
        result = solve_puzzle(data)
        self.assertEqual(result.solutions, [[[X, B], [X, B]]])


class SoundnessAndCompletenessTests(unittest.TestCase):
    def test_solutions_match_brute_force_on_random_grids(self) -> None:
        rng = random.Random(7)
        for trial in range(25):
            height = rng.randint(1, 3)
            width = rng.randint(1, 4)
            grid = [[rng.randint(0, 1) for _ in range(width)] for _ in range(height)]
            rows, cols = hints_for_grid(grid)
            with self.subTest(trial=trial, grid=grid):
                result = solve_puzzle(PuzzleHints.from_tables(rows, cols))
                self.assertEqual(len(result.solutions), brute_force_count(rows, cols))
                self.assertIn(grid, [as_binary(s) for s in result.solutions])
                for solution in result.solutions:
                    binary = as_binary(solution)
                    self.assertEqual(hints_for_grid(binary), (rows, cols))

    def test_solutions_are_distinct(self) -> None:
        rows = [[1], [1], [1]]
        cols = [[1], [1], [1]]
        result = solve_puzzle(PuzzleHints.from_tables(rows, cols))
        self.assertEqual(len(result.solutions), 6)
        binaries = [tuple(map(tuple, as_binary(s))) for s in result.solutions]
        self.assertEqual(len(set(binaries)), 6)

    def test_bounded_branch_propagation_keeps_results(self) -> None:
        rows = [[1, 1], [1], [1, 1]]
        cols = [[1, 1], [1], [1, 1]]
        expected = brute_force_count(rows, cols)
        hints = PuzzleHints.from_tables(rows, cols)
        bounded = PuzzleSolver(hints, SolverConfig(branch_max_rounds=1)).solve()
        self.assertEqual(len(bounded.solutions), expected)


class SolverWiringTests(unittest.TestCase):
    def test_search_uses_solver_column_totals(self) -> None:
        solver = PuzzleSolver(PuzzleHints.from_tables([[1, 1], [2]], [[2], [1], [1]]))
        self.assertEqual(solver.col_totals, [2, 1, 1])
        self.assertEqual(solver.search.col_totals, solver.col_totals)
        solver.solve()
        self.assertEqual(solver.search.col_totals, [2, 1, 1])


class ProgressTests(unittest.TestCase):
    def test_no_progress_without_flag(self) -> None:
        seen = []
        solver = PuzzleSolver(
            PuzzleHints.from_tables([[1], [1], [1]], [[1], [1], [1]]),
            SolverConfig(show_progress=False, slice_seconds=0.0),
        )
        solver.solve(on_progress=seen.append)
        self.assertEqual(seen, [])

    def test_progress_grids_have_puzzle_shape(self) -> None:
        seen = []
        solver = PuzzleSolver(
            PuzzleHints.from_tables([[1], [1], [1]], [[1], [1], [1]]),
            SolverConfig(show_progress=True, slice_seconds=-1.0),
        )
        result = solver.solve(on_progress=seen.append)
        self.assertEqual(len(result.solutions), 6)
        self.assertTrue(seen)
        for grid in seen:
            self.assertEqual(len(grid), 3)
            for row in grid:
                self.assertEqual(len(row), 3)
                for cell in row:
                    self.assertIn(cell, (X, B, O))

    def test_config_bundle_enables_progress(self) -> None:
        seen = []
        result = solve_puzzle(
            {"rows": [[1], [1]], "cols": [[1], [1]]},
            {"showProgress": True, "sliceSeconds": -1.0},
            on_progress=seen.append,
        )
        self.assertEqual(len(result.solutions), 2)
        self.assertTrue(seen)


class AsyncSolveTests(unittest.TestCase):
    def test_async_result_matches_sync(self) -> None:
        hints = PuzzleHints.from_tables([[1], [1]], [[1], [1]])
        result = asyncio.run(solutions_for_puzzle(hints, SolverConfig(slice_seconds=-1.0)))
        self.assertEqual(len(result.solutions), 2)
        self.assertEqual(result.solutions, solve_puzzle(hints).solutions)

    def test_independent_solves_do_not_interfere(self) -> None:
        async def run_both():
            return await asyncio.gather(
                solutions_for_puzzle({"rows": [[1], [1]], "cols": [[1], [1]]}, {"sliceSeconds": -1.0}),
                solutions_for_puzzle({"rows": [[3]], "cols": [[1], [1], [1]]}, {"sliceSeconds": -1.0}),
            )

        first, second = asyncio.run(run_both())
        self.assertEqual(len(first.solutions), 2)
        self.assertEqual(second.solutions, [[[X, X, X]]])


class RequiredCellHintTests(unittest.TestCase):
    def setUp(self) -> None:
        self.solver = PuzzleSolver(PuzzleHints.from_tables([[3], [1]], [[1], [2], [1]]))

    def test_reports_forced_cells_in_row(self) -> None:
        board = [["o", "o", "o"], ["o", "o", "o"]]
        self.assertTrue(self.solver.has_unmarked_required_cells(board, 0, "ROW"))

    def test_fully_marked_row_has_nothing_left(self) -> None:
        board = [["x", "x", "x"], ["o", "o", "o"]]
        self.assertFalse(self.solver.has_unmarked_required_cells(board, 0, "ROW"))

    def test_column_deduction_uses_player_marks(self) -> None:
        board = [["o", "o", "o"], ["b", "o", "o"]]
        # Column 0 hint [1] with its lower cell blank forces the top cell.
        self.assertTrue(self.solver.has_unmarked_required_cells(board, 0, "COLUMN"))
        board = [["o", "o", "o"], ["o", "o", "o"]]
        self.assertFalse(self.solver.has_unmarked_required_cells(board, 0, "COLUMN"))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
