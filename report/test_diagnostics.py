"""
Tests for the run diagnostics helpers.
"""

import logging
import unittest

from report.diagnostics import ElapsedTimer, memory_usage, memory_usage_message


class ElapsedTimerTests(unittest.TestCase):
    def test_log_and_reset_chain(self) -> None:
        timer = ElapsedTimer(enabled=True)
        with self.assertLogs("report.diagnostics", level=logging.INFO) as logs:
            self.assertIs(timer.log("Elapsed time").reset(), timer)
        self.assertEqual(len(logs.records), 1)
        self.assertTrue(logs.records[0].getMessage().startswith("Elapsed time: "))
        self.assertTrue(logs.records[0].getMessage().endswith(" ms"))

    def test_disabled_timer_is_silent(self) -> None:
        timer = ElapsedTimer(enabled=False)
        logger = logging.getLogger("report.diagnostics")
        with self.assertRaises(AssertionError):
            with self.assertLogs(logger, level=logging.DEBUG):
                timer.log("Elapsed time")

    def test_elapsed_is_non_negative(self) -> None:
        self.assertGreaterEqual(ElapsedTimer().elapsed_ms(), 0.0)


class MemoryUsageTests(unittest.TestCase):
    def test_snapshot_keys(self) -> None:
        usage = memory_usage()
        self.assertEqual(set(usage), {"max_rss", "traced_current", "traced_peak"})
        self.assertGreater(usage["max_rss"], 0.0)

    def test_message_layout(self) -> None:
        lines = memory_usage_message().splitlines()
        self.assertEqual(lines[0], "Memory Usage (MiB):")
        self.assertEqual(len(lines[2].split(" :: ")), 3)


if __name__ == "__main__":
    unittest.main()
