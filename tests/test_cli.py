"""
Tests for CLI entry points.

These tests focus on:
- Exit codes (missing input file, bad --today)
- JSON output of the parse command
- .ics export through the CLI, using a temporary directory
"""

import contextlib
import io
import json
import tempfile
import unittest
from pathlib import Path

from fixtures import ANNOTATED_WEEK, WEEK_TABLE

from lichhoc.cli import main


def _run(argv: list) -> tuple:
    # main() always ends with SystemExit; capture its code and stdout
    out = io.StringIO()
    with contextlib.redirect_stdout(out):
        try:
            main(argv)
        except SystemExit as exc:
            return exc.code, out.getvalue()
    return None, out.getvalue()


class TestCLI(unittest.TestCase):
    def test_missing_file_exits_nonzero(self) -> None:
        code, out = _run(["parse", "/nonexistent/timetable.txt"])
        self.assertNotEqual(code, 0)
        self.assertIn("File not found", out)

    def test_bad_today_is_rejected(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                main(["parse", "x.txt", "--today", "tomorrow"])
        self.assertNotEqual(ctx.exception.code, 0)

    def test_parse_json(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "tkb.txt"
            p.write_text(ANNOTATED_WEEK, encoding="utf-8")
            code, out = _run(["parse", str(p), "--json", "--today", "2026-10-19"])
        self.assertEqual(code, 0)
        data = json.loads(out)
        self.assertEqual(len(data), 1)
        self.assertEqual(data[0]["date"], "2025-05-16")
        self.assertEqual(data[0]["start_time"], "07:00")
        self.assertEqual(data[0]["location"], "K23-101")

    def test_export_ics(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "tkb.txt"
            p.write_text(WEEK_TABLE, encoding="utf-8")
            out_ics = Path(d) / "tkb.ics"
            code, out = _run(["export", str(p), str(out_ics)])
            self.assertEqual(code, 0)
            self.assertIn("Exported 2 events", out)
            self.assertEqual(out_ics.read_text(encoding="utf-8").count("BEGIN:VEVENT"), 2)

    def test_conflicts_none(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "tkb.txt"
            p.write_text(WEEK_TABLE, encoding="utf-8")
            code, out = _run(["conflicts", str(p)])
        self.assertEqual(code, 0)
        self.assertIn("No conflicts found.", out)


if __name__ == "__main__":
    unittest.main()
