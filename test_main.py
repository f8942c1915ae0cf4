#!/usr/bin/env python3
"""
test_main.py
============
Command-line smoke tests: run :func:`main.main` against the worked example
in a temporary directory.
"""

import contextlib
import io
import os
import tempfile
import unittest
from unittest import mock

import pandas as pd

import main
from sim.samples import EXAMPLE_DATASET, EXAMPLE_SUBMISSION


class MainTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self._tmp.name, "a.txt")
        with open(self.path, "w", encoding="utf-8") as fh:
            fh.write(EXAMPLE_DATASET)
        with open(self.path + ".out.txt", "w", encoding="utf-8") as fh:
            fh.write(EXAMPLE_SUBMISSION)
        env = mock.patch.dict(os.environ, {"JUDGE_LOG_FILE": ""})
        env.start()
        self.addCleanup(env.stop)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _run(self, *args: str):
        out, err = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            code = main.main(list(args))
        return code, out.getvalue(), err.getvalue()

    def test_prints_highlighted_report(self) -> None:
        code, out, _ = self._run(self.path)
        self.assertEqual(code, 0)
        self.assertIn("\u001b[33m1,002\u001b[0m", out)

    def test_writes_plain_insights_file(self) -> None:
        code, out, _ = self._run(self.path, "0")
        self.assertEqual(code, 0)
        self.assertEqual(out, "")
        with open(self.path + ".insights.txt", encoding="utf-8") as fh:
            text = fh.read()
        self.assertTrue(text.startswith("The submission scored 1,002 points."))
        self.assertNotIn("\u001b[", text)

    def test_writes_car_csv(self) -> None:
        code, _, _ = self._run(self.path, "0", "0", "1")
        self.assertEqual(code, 0)
        df = pd.read_csv(self.path + ".cars.csv")
        self.assertEqual(df["score"].tolist(), [0, 1002])

    def test_debug_mode_still_reports(self) -> None:
        code, out, _ = self._run(self.path, "1", "1")
        self.assertEqual(code, 0)
        self.assertIn("1,002", out)

    def test_usage_on_missing_arguments(self) -> None:
        code, out, _ = self._run()
        self.assertEqual(code, 0)
        self.assertIn("Usage:", out)

    def test_usage_on_non_numeric_flag(self) -> None:
        code, out, _ = self._run(self.path, "yes")
        self.assertEqual(code, 0)
        self.assertIn("Usage:", out)
        self.assertFalse(os.path.exists(self.path + ".insights.txt"))

    def test_fractional_flag_is_on(self) -> None:
        code, out, _ = self._run(self.path, "0.5")
        self.assertEqual(code, 0)
        self.assertIn("1,002", out)
        self.assertFalse(os.path.exists(self.path + ".insights.txt"))

    def test_usage_on_nan_flag(self) -> None:
        code, out, _ = self._run(self.path, "nan")
        self.assertEqual(code, 0)
        self.assertIn("Usage:", out)

    def test_failure_is_logged_as_error(self) -> None:
        with self.assertLogs("main", level="ERROR") as logs:
            code, _, _ = self._run(self.path + ".nope")
        self.assertEqual(code, 1)
        self.assertEqual(len(logs.records), 1)
        self.assertIn("Evaluation failed", logs.output[0])

    def test_invalid_submission_goes_to_stderr(self) -> None:
        with open(self.path + ".out.txt", "w", encoding="utf-8") as fh:
            fh.write("1\n0\n1\nrue-de-londres 99\n")
        code, out, err = self._run(self.path)
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("between 1 and 6", err)

    def test_missing_input_file(self) -> None:
        code, _, err = self._run(self.path + ".nope")
        self.assertEqual(code, 1)
        self.assertIn("Error:", err)


if __name__ == "__main__":
    unittest.main()
