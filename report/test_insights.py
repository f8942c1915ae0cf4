"""
Tests for insight aggregation, report rendering and the per-car table.
"""

import math
import unittest

from report.insights import collect_insights
from report.render import format_percentage, render_report, to_fixed
from report.tables import CAR_COLUMNS, car_frame
from sim.network import parse_dataset
from sim.samples import EXAMPLE_DATASET, EXAMPLE_SUBMISSION
from sim.schedule import load_schedule
from sim.world import World

_EXPECTED_REPORT = (
    "The submission scored 1,002 points. This is the sum of 1,000 bonus points "
    "for cars arriving before the deadline (1,000 points each) and 2 points for "
    "early arrival times."
    "\n\n"
    "1 of 2 cars arrived before the deadline (50%). The earliest car arrived at "
    "its destination after 4 seconds scoring 1,002 points, whereas the last car "
    "arrived at its destination after 4 seconds scoring 1,002 points. Cars that "
    "arrived within the deadline drove for an average of 4.00 seconds to arrive "
    "at their destination."
    "\n\n"
    "The schedules for the 4 traffic lights had an average total cycle length of "
    "1.50 seconds. A traffic light that turned green was scheduled to stay green "
    "for 1.50 seconds on average.\n"
)


def _simulate(dataset: str, submission: str):
    city = parse_dataset(dataset)
    schedule = load_schedule(submission, city)
    World(city).run()
    return city, schedule.stats


class CollectInsightsTests(unittest.TestCase):
    def test_example(self) -> None:
        insights = collect_insights(*_simulate(EXAMPLE_DATASET, EXAMPLE_SUBMISSION))
        self.assertEqual(insights.num_cars, 2)
        self.assertEqual(insights.num_arrived, 1)
        self.assertEqual(insights.total_score, 1002)
        self.assertEqual(insights.bonus_score, 1000)
        self.assertEqual(insights.early_arrival_score, 2)
        self.assertEqual((insights.earliest_commute, insights.earliest_score), (4, 1002))
        self.assertEqual((insights.latest_commute, insights.latest_score), (4, 1002))
        self.assertAlmostEqual(insights.average_commute_time, 4.0)
        self.assertAlmostEqual(insights.arrived_fraction, 0.5)
        self.assertAlmostEqual(insights.average_cycle_length, 1.5)

    def test_earliest_and_latest_follow_commute_time(self) -> None:
        # Three single-street routes arrive at tick 0; of the two cars sharing
        # ``a`` car 0 arrives at tick 1 and car 3 one tick later.
        dataset = (
            "9 3 2 5 10\n"
            "0 1 a 1\n"
            "1 2 b 1\n"
            "2 a b\n"
            "1 b\n"
            "1 b\n"
            "2 a b\n"
            "1 b\n"
        )
        city, stats = _simulate(dataset, "1\n1\n1\na 9\n")
        insights = collect_insights(city, stats)
        self.assertEqual(insights.num_arrived, 5)
        self.assertEqual(insights.earliest_commute, 0)
        self.assertEqual(insights.earliest_score, 19)
        self.assertEqual(insights.latest_commute, 2)
        self.assertEqual(insights.latest_score, 17)
        self.assertEqual(insights.total_score, 19 * 3 + 18 + 17)
        self.assertEqual(insights.early_arrival_score, insights.total_score - 50)
        self.assertAlmostEqual(insights.average_commute_time, 3 / 5)

    def test_nobody_arrived(self) -> None:
        dataset = "4 2 2 1 10\n0 1 a 1\n1 0 b 1\n2 a b\n"
        insights = collect_insights(*_simulate(dataset, "0\n"))
        self.assertEqual(insights.num_arrived, 0)
        self.assertEqual(insights.total_score, 0)
        self.assertEqual(insights.early_arrival_score, 0)
        self.assertIsNone(insights.earliest_commute)
        self.assertIsNone(insights.latest_score)
        self.assertTrue(math.isnan(insights.average_commute_time))
        self.assertTrue(math.isnan(insights.average_green_duration))
        self.assertFalse(insights.any_arrived)

        data = insights.as_dict()
        self.assertIsNone(data["average_commute_time"])
        self.assertIsNone(data["average_green_duration"])
        self.assertEqual(data["arrived_fraction"], 0.0)


class RenderReportTests(unittest.TestCase):
    def setUp(self) -> None:
        self.insights = collect_insights(*_simulate(EXAMPLE_DATASET, EXAMPLE_SUBMISSION))

    def test_plain_report(self) -> None:
        self.assertEqual(render_report(self.insights, color=False), _EXPECTED_REPORT)

    def test_highlighted_report(self) -> None:
        text = render_report(self.insights, color=True)
        self.assertIn("\u001b[33m1,002\u001b[0m", text)
        self.assertIn("\u001b[33m50%\u001b[0m", text)
        self.assertEqual(text.count("\n\n"), 2)

    def test_report_without_arrivals_skips_commute_sentences(self) -> None:
        dataset = "4 2 2 1 10\n0 1 a 1\n1 0 b 1\n2 a b\n"
        insights = collect_insights(*_simulate(dataset, "0\n"))
        text = render_report(insights, color=False)
        self.assertIn("0 of 1 cars arrived before the deadline (0%).", text)
        self.assertNotIn("earliest", text)
        self.assertIn("stay green for NaN seconds", text)

    def test_rounding_matches_half_up(self) -> None:
        self.assertEqual(to_fixed(4.125, 2), "4.13")
        self.assertEqual(to_fixed(2.5, 0), "3")
        self.assertEqual(to_fixed(1 / 3, 2), "0.33")
        self.assertEqual(format_percentage(2 / 3), "67%")
        self.assertEqual(format_percentage(math.nan), "NaN%")


class CarFrameTests(unittest.TestCase):
    def test_one_row_per_car(self) -> None:
        city, _ = _simulate(EXAMPLE_DATASET, EXAMPLE_SUBMISSION)
        df = car_frame(city)
        self.assertEqual(list(df.columns), CAR_COLUMNS)
        self.assertEqual(df["car"].tolist(), [0, 1])
        self.assertEqual(df["arrived"].tolist(), [False, True])
        self.assertEqual(df["route_length"].tolist(), [4, 3])
        self.assertEqual(df["streets_travelled"].tolist(), [3, 2])
        self.assertEqual(int(df.loc[1, "commute_time"]), 4)
        self.assertTrue(df["commute_time"].isna()[0])
        self.assertEqual(df["score"].tolist(), [0, 1002])


if __name__ == "__main__":
    unittest.main()
