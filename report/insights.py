"""
report/insights.py
==================
Aggregation of final car states into the figures shown in the report.

:func:`collect_insights` is pure computation over the simulated
:class:`~sim.network.CityModel` and the validator's
:class:`~sim.schedule.ScheduleStats`; formatting lives in
:mod:`report.render`.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

import numpy as np

from sim.network import CityModel
from sim.schedule import ScheduleStats


@dataclass(frozen=True)
class Insights:
    """Scores and statistics of one evaluated submission.

    Attributes
    ----------
    num_cars, num_arrived : int
        Car totals.
    bonus : int
        Per-arrival bonus from the dataset.
    total_score : int
        Sum of the arrived cars' scores.
    bonus_score : int
        ``bonus * num_arrived``.
    early_arrival_score : int
        ``total_score - bonus_score``.
    earliest_commute, earliest_score, latest_commute, latest_score : int or None
        First and last arrival after a stable sort by commute time;
        ``None`` when no car arrived.
    average_commute_time : float
        ``nan`` when no car arrived.
    num_intersections : int
        Declared intersection count.
    average_cycle_length, average_green_duration : float
        Copied from :class:`~sim.schedule.ScheduleStats`.
    """

    num_cars: int
    num_arrived: int
    bonus: int
    total_score: int
    bonus_score: int
    early_arrival_score: int
    earliest_commute: Optional[int]
    earliest_score: Optional[int]
    latest_commute: Optional[int]
    latest_score: Optional[int]
    average_commute_time: float
    num_intersections: int
    average_cycle_length: float
    average_green_duration: float

    @property
    def arrived_fraction(self) -> float:
        if not self.num_cars:
            return math.nan
        return self.num_arrived / self.num_cars

    @property
    def any_arrived(self) -> bool:
        return self.num_arrived > 0

    def as_dict(self) -> Dict[str, Any]:
        """Plain dict with ``nan`` replaced by ``None`` (JSON friendly)."""
        data = asdict(self)
        data["arrived_fraction"] = self.arrived_fraction
        return {
            k: (None if isinstance(v, float) and math.isnan(v) else v)
            for k, v in data.items()
        }


def collect_insights(city: CityModel, stats: ScheduleStats) -> Insights:
    """Aggregate the final state of *city* after simulation.

    Parameters
    ----------
    city : CityModel
        Model whose cars have been advanced by :class:`~sim.world.World`.
    stats : ScheduleStats
        Totals gathered while validating the submission.
    """
    bonus = city.config.bonus
    arrived = [car for car in city.cars if car.arrived]
    commute = np.array([car.commute_time for car in arrived], dtype=np.int64)
    scores = np.array([car.score for car in arrived], dtype=np.int64)

    # Stable so that equal commute times keep car order.
    order = np.argsort(commute, kind="stable")
    commute = commute[order]
    scores = scores[order]

    num_arrived = len(arrived)
    total_score = int(scores.sum())
    bonus_score = bonus * num_arrived

    if num_arrived:
        earliest_commute: Optional[int] = int(commute[0])
        earliest_score: Optional[int] = int(scores[0])
        latest_commute: Optional[int] = int(commute[-1])
        latest_score: Optional[int] = int(scores[-1])
        average_commute = float(commute.mean())
    else:
        earliest_commute = earliest_score = None
        latest_commute = latest_score = None
        average_commute = math.nan

    return Insights(
        num_cars=len(city.cars),
        num_arrived=num_arrived,
        bonus=bonus,
        total_score=total_score,
        bonus_score=bonus_score,
        early_arrival_score=int((scores - bonus).sum()),
        earliest_commute=earliest_commute,
        earliest_score=earliest_score,
        latest_commute=latest_commute,
        latest_score=latest_score,
        average_commute_time=average_commute,
        num_intersections=city.config.num_intersections,
        average_cycle_length=stats.average_cycle_length,
        average_green_duration=stats.average_green_duration,
    )
