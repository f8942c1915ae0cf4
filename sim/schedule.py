#!/usr/bin/env python3
"""
sim/schedule.py
===============
Submission parsing, validation and green-window compilation.

The submission lists, for some intersections, the order in which incoming
streets turn green and for how long.  :func:`parse_submission` validates the
whole file against a :class:`~sim.network.CityModel` without touching it;
:func:`apply_schedule` then compiles each street's inclusive green window and
its intersection's cycle length onto the street table.
:func:`load_schedule` does both.

Validation stops at the first problem with a
:class:`~sim.errors.SubmissionError` subclass.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union

from sim.clock import GreenWindow
from sim.errors import (
    DuplicateIntersectionSchedule,
    GreenDurationOutOfRange,
    MalformedCount,
    MalformedGreenDuration,
    StreetIntersectionMismatch,
    TruncatedSubmission,
)
from sim.network import CityModel

log = logging.getLogger("schedule")

IntersectionId = Union[int, str]

MIN_GREEN_DURATION = 1

_INT_RE = re.compile(r"[+-]?\d+")


def _parse_int(token: Optional[str]) -> Optional[int]:
    """Return *token* as an ``int``, or ``None`` when it is not an integer."""
    if token is None or not _INT_RE.fullmatch(token):
        return None
    return int(token)


def _parse_intersection_id(token: str) -> IntersectionId:
    # Integer tokens are keyed by value, so "01" and "1" name the same
    # intersection and a second schedule for it is a duplicate.
    value = _parse_int(token)
    return token if value is None else value


# ── Schedule types ────────────────────────────────────────────────────────────

@dataclass
class IntersectionSchedule:
    """Ordered ``(street name, green duration)`` pairs for one intersection."""

    intersection_id: IntersectionId
    entries: List[Tuple[str, int]] = field(default_factory=list)

    @property
    def cycle_length(self) -> int:
        return sum(green for _, green in self.entries)

    def windows(self) -> Iterator[Tuple[str, GreenWindow]]:
        """Yield ``(street name, (first, last))`` tiling ``[0, cycle_length)``."""
        offset = 0
        for name, green in self.entries:
            yield name, (offset, offset + green - 1)
            offset += green


@dataclass
class ScheduleStats:
    """Running totals gathered during validation.

    ``average_cycle_length`` divides by the intersection count declared in
    the dataset, not by the number of scheduled intersections.
    """

    num_intersections: int
    scheduled_intersections: int = 0
    scheduled_streets: int = 0
    total_green: int = 0

    @property
    def average_cycle_length(self) -> float:
        if not self.num_intersections:
            return math.nan
        return self.total_green / self.num_intersections

    @property
    def average_green_duration(self) -> float:
        if not self.scheduled_streets:
            return math.nan
        return self.total_green / self.scheduled_streets


@dataclass
class Schedule:
    """A fully validated submission."""

    intersections: List[IntersectionSchedule]
    stats: ScheduleStats


# ── Line reader ───────────────────────────────────────────────────────────────

class _Lines:
    """Sequential reader that reports premature end of file."""

    def __init__(self, lines: Sequence[str]) -> None:
        self._lines = lines
        self.number = 0  # 1-based number of the last line taken

    def take(self, what: str) -> str:
        if self.number >= len(self._lines):
            raise TruncatedSubmission(
                "Submission file has fewer lines than expected. "
                f"Unexpected EOF (end of file) at line {self.number + 1} "
                f"while reading {what}",
                line=self.number + 1,
            )
        line = self._lines[self.number]
        self.number += 1
        return line


# ── Parsing / validation ──────────────────────────────────────────────────────

def parse_submission(text: str, city: CityModel) -> Schedule:
    """Validate submission *text* against *city*.

    The city model is only read; nothing is compiled onto it.

    Raises
    ------
    SubmissionError
        One of its six subclasses, on the first problem found.
    """
    duration = city.config.duration
    reader = _Lines(text.splitlines())

    raw_count = reader.take("the number of scheduled intersections").strip()
    num_scheduled = _parse_int(raw_count)
    if num_scheduled is None or num_scheduled < 0:
        raise MalformedCount(
            f"Invalid number of intersections found at line {reader.number}: "
            f"{raw_count!r}",
            line=reader.number,
        )

    stats = ScheduleStats(num_intersections=city.config.num_intersections)
    intersections: List[IntersectionSchedule] = []
    seen: Dict[IntersectionId, int] = {}

    for _ in range(num_scheduled):
        raw_id = reader.take("an intersection id").strip()
        id_line = reader.number
        intersection_id = _parse_intersection_id(raw_id)

        raw_streets = reader.take(
            f"the number of incoming streets of intersection {raw_id}"
        ).strip()
        num_streets = _parse_int(raw_streets)
        if num_streets is None or num_streets < 0:
            raise MalformedCount(
                f"Invalid number of elements found at line {reader.number}: "
                f"{raw_streets!r}",
                line=reader.number,
            )

        if intersection_id in seen:
            raise DuplicateIntersectionSchedule(
                f"More than one adjustment was provided for intersection "
                f"{raw_id} (lines {seen[intersection_id]} and {id_line}).",
                line=id_line,
            )
        seen[intersection_id] = id_line

        schedule = IntersectionSchedule(intersection_id)
        for _ in range(num_streets):
            tokens = reader.take(
                f"a street schedule of intersection {raw_id}"
            ).split()
            name = tokens[0] if tokens else ""
            street = city.street(name)

            if street is not None and street.end != intersection_id:
                raise StreetIntersectionMismatch(
                    f"The schedule of intersection {raw_id} refers to street "
                    f"{name}, but that street does not enter this "
                    "intersection, so it cannot be part of the intersection "
                    "schedule.",
                    line=reader.number,
                )

            raw_green = tokens[1] if len(tokens) > 1 else None
            green = _parse_int(raw_green)
            if green is None:
                raise MalformedGreenDuration(
                    f"The schedule of street {name} has a duration for green "
                    f"light that is not a number: {raw_green}.",
                    line=reader.number,
                )
            if green < MIN_GREEN_DURATION or green > duration:
                raise GreenDurationOutOfRange(
                    f"The schedule of street {name} should have duration for "
                    f"green light that is between {MIN_GREEN_DURATION} and "
                    f"{duration}.",
                    line=reader.number,
                )

            schedule.entries.append((name, green))
            stats.total_green += green

        stats.scheduled_streets += num_streets
        stats.scheduled_intersections += 1
        intersections.append(schedule)

    log.debug(
        "Validated %d intersection schedules (%d street entries)",
        stats.scheduled_intersections, stats.scheduled_streets,
    )
    return Schedule(intersections=intersections, stats=stats)


def apply_schedule(schedule: Schedule, city: CityModel) -> None:
    """Compile green windows and cycle lengths onto the streets of *city*.

    Streets absent from the city are skipped.  A street listed twice under
    the same intersection keeps its later window.
    """
    for street in city.streets:
        street.clear_schedule()

    for item in schedule.intersections:
        cycle = item.cycle_length
        for name, window in item.windows():
            street = city.street(name)
            if street is None:
                log.debug(
                    "Intersection %s schedules unknown street %s",
                    item.intersection_id, name,
                )
                continue
            street.green_window = window
            street.cycle_length = cycle

    log.debug("Compiled green windows for %d streets", len(city.scheduled_streets()))


def load_schedule(text: str, city: CityModel) -> Schedule:
    """Validate *text* and compile it onto *city*; see :func:`parse_submission`."""
    schedule = parse_submission(text, city)
    apply_schedule(schedule, city)
    return schedule
