#!/usr/bin/env python3
"""
sim/judge.py
============
End-to-end evaluation of one submission: parse the dataset, validate and
compile the schedule, run the tick loop and aggregate the results.

Public API consumed by :mod:`main` and :mod:`api.server`
---------------------------------------------------------
* ``evaluate(dataset_text, submission_text)`` → :class:`Evaluation`
* ``evaluate_files(dataset_path, submission_path)`` → :class:`Evaluation`
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Tuple

from sim.network import CityModel, parse_dataset
from sim.schedule import Schedule, load_schedule
from sim.world import World
from report.insights import Insights, collect_insights

log = logging.getLogger("judge")


@dataclass
class Evaluation:
    """Everything produced by one run."""

    city: CityModel
    schedule: Schedule
    world: World
    insights: Insights

    @property
    def score(self) -> int:
        return self.insights.total_score


def evaluate(
    dataset_text: str,
    submission_text: str,
    record_crossings: bool = False,
) -> Evaluation:
    """Score *submission_text* against *dataset_text*.

    Raises
    ------
    sim.errors.SubmissionError
        When the submission is invalid; nothing is simulated in that case.
    """
    city = parse_dataset(dataset_text)
    schedule = load_schedule(submission_text, city)
    log.info(
        "Loaded %d streets, %d cars, %d scheduled intersections",
        len(city.streets), len(city.cars), schedule.stats.scheduled_intersections,
    )

    world = World(city, record_crossings=record_crossings)
    world.run()

    insights = collect_insights(city, schedule.stats)
    log.info("Submission scored %d points", insights.total_score)
    return Evaluation(city=city, schedule=schedule, world=world, insights=insights)


def _read_text(path: str) -> str:
    with open(path, "r", encoding="utf-8") as fh:
        return fh.read()


def read_inputs(dataset_path: str, submission_path: str) -> Tuple[str, str]:
    """Read both files concurrently and wait for both."""
    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="judge-io") as pool:
        dataset = pool.submit(_read_text, dataset_path)
        submission = pool.submit(_read_text, submission_path)
        return dataset.result(), submission.result()


def evaluate_files(dataset_path: str, submission_path: str) -> Evaluation:
    """Read both files and :func:`evaluate` them."""
    dataset_text, submission_text = read_inputs(dataset_path, submission_path)
    return evaluate(dataset_text, submission_text)
