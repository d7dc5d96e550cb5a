import contextlib
import io
import json
import tempfile
import unittest
from pathlib import Path

import main


class CliTests(unittest.TestCase):
    def test_writes_json_payload(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            puzzle = Path(tmpdir) / "puzzle.json"
            puzzle.write_text(json.dumps({"rows": [[3]], "cols": [[1], [1], [1]]}), encoding="utf-8")
            output = Path(tmpdir) / "out.json"

            code = main.main([str(puzzle), "--output", str(output), "--log-level", "WARNING"])

            self.assertEqual(code, 0)
            payload = json.loads(output.read_text(encoding="utf-8"))
            self.assertEqual(payload["status"], "unique")
            self.assertEqual(payload["solutions"], [[["x", "x", "x"]]])

    def test_unsolvable_puzzle_exits_nonzero(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            puzzle = Path(tmpdir) / "puzzle.json"
            puzzle.write_text(json.dumps({"rows": [[5]], "cols": [[1], [1], [1]]}), encoding="utf-8")
            stdout = io.StringIO()
            with contextlib.redirect_stdout(stdout):
                code = main.main([str(puzzle), "--log-level", "ERROR"])
            self.assertEqual(code, 1)
            self.assertEqual(json.loads(stdout.getvalue())["solutions"], [])

    def test_pretty_output(self) -> None:
        stdout = io.StringIO()
        sample = Path(__file__).resolve().parent.parent / "puzzles" / "heart.json"
        with contextlib.redirect_stdout(stdout):
            code = main.main([str(sample), "--pretty", "--log-level", "WARNING"])
        self.assertEqual(code, 0)
        self.assertIn("unique", stdout.getvalue())

    def test_progress_grids_keep_stdout_json(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            puzzle = Path(tmpdir) / "puzzle.json"
            puzzle.write_text(json.dumps({"rows": [[1]] * 4, "cols": [[1]] * 4}), encoding="utf-8")
            stdout = io.StringIO()
            stderr = io.StringIO()
            with contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(stderr):
                code = main.main(
                    [str(puzzle), "--show-progress", "--slice-seconds", "0.000001", "--log-level", "ERROR"]
                )

            self.assertEqual(code, 0)
            payload = json.loads(stdout.getvalue())
            self.assertEqual(len(payload["solutions"]), 24)
            self.assertIn("Progress", stderr.getvalue())

    def test_missing_file_is_a_usage_error(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                main.main(["does-not-exist.json"])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
