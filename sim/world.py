#!/usr/bin/env python3
"""
sim/world.py
============
Discrete-time simulation engine.

:class:`World` advances a :class:`~sim.network.CityModel` one tick at a time
for ticks ``0 … duration``.  Cars are processed in ascending id order and
each street lets at most one car through per tick.  Crossing order on a
street follows the queuing numbers handed out by
:meth:`~sim.network.Street.issue_ticket`: a car announces itself on the
queue one tick before it reaches the end of the street, so ties between
cars arriving on the same tick go to the lower car id.

Car life cycle::

    travelling(i, remaining) ──cross──▶ travelling(i + 1, duration)
            │
            └── last street, remaining == 0 ──▶ arrived (terminal)
"""

from __future__ import annotations

import logging
from typing import List, NamedTuple, Set

from sim.clock import ticks_remaining
from sim.network import Car, CityModel, Street

log = logging.getLogger("world")


class Crossing(NamedTuple):
    """One car leaving a street through its end intersection."""

    tick: int
    street_id: int
    car_id: int
    ticket: int


class World:
    """Tick loop owning a city model for the duration of a run.

    Parameters
    ----------
    city : CityModel
        Parsed dataset with its schedule already compiled.
    record_crossings : bool
        Keep a :class:`Crossing` log in :attr:`crossings`.
    """

    def __init__(self, city: CityModel, record_crossings: bool = False) -> None:
        self.city = city
        self.config = city.config
        self.record_crossings = record_crossings
        self.crossings: List[Crossing] = []
        self.tick: int = 0
        self.arrived_count: int = 0

    # ── queries ───────────────────────────────────────────────────────────

    def is_finished(self) -> bool:
        return self.tick > self.config.duration

    @property
    def cars(self) -> List[Car]:
        return self.city.cars

    # ── lifecycle ─────────────────────────────────────────────────────────

    def reset(self) -> None:
        """Rewind to tick 0 so the same schedule can be replayed."""
        self.city.reset()
        self.crossings = []
        self.tick = 0
        self.arrived_count = 0

    def run(self) -> List[Car]:
        """Simulate every remaining tick and return the final car list."""
        while not self.is_finished():
            self.step()
        log.info(
            "Simulation finished: %d of %d cars arrived",
            self.arrived_count, len(self.cars),
        )
        return self.cars

    # ── tick ──────────────────────────────────────────────────────────────

    def step(self) -> int:
        """Advance one tick; return the number of crossings it produced."""
        if self.is_finished():
            raise RuntimeError(
                f"Simulation already finished after tick {self.config.duration}"
            )

        t = self.tick
        left = ticks_remaining(self.config.duration, t)
        streets = self.city.streets
        crossed: Set[int] = set()

        for car in self.cars:
            if car.arrived:
                continue

            street = streets[car.street_id]

            if car.remaining == 1 and not car.on_last_street:
                car.ticket = street.issue_ticket()

            if car.remaining > 0:
                car.remaining -= 1
            if car.remaining > 0:
                continue

            if car.on_last_street:
                self._arrive(car, t, left)
                continue

            # No horizon left to cross into the next street.
            if left == 0:
                continue

            if self._can_cross(car, street, t, crossed):
                self._cross(car, street, t, crossed)

        if log.isEnabledFor(logging.DEBUG):
            log.debug("tick=%d crossings=%d arrived=%d", t, len(crossed), self.arrived_count)

        self.tick += 1
        return len(crossed)

    # ── helpers ───────────────────────────────────────────────────────────

    def _arrive(self, car: Car, t: int, left: int) -> None:
        car.arrived = True
        car.score = self.config.bonus + left
        car.commute_time = t
        self.arrived_count += 1

    @staticmethod
    def _can_cross(car: Car, street: Street, t: int, crossed: Set[int]) -> bool:
        return (
            street.is_green(t)
            and street.id not in crossed
            and street.is_head_of_queue(car.ticket)
        )

    def _cross(self, car: Car, street: Street, t: int, crossed: Set[int]) -> None:
        crossed.add(street.id)
        street.last_crossed_ticket = car.ticket
        if self.record_crossings:
            self.crossings.append(Crossing(t, street.id, car.id, car.ticket))
        car.route_index += 1
        car.remaining = self.city.streets[car.street_id].duration
