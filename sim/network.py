"""
sim/network.py
==============
City model for the traffic-signaling judge.

Defines :class:`SimulationConfig`, :class:`Street`, :class:`Car` and
:class:`CityModel`, an index-stable street table (list of streets plus a
name → index lookup built once) together with every car's fixed route.

:func:`parse_dataset` builds a :class:`CityModel` from the dataset text.
Contest datasets are trusted: apart from numeric conversion nothing is
validated here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from sim.clock import GreenWindow, in_window

log = logging.getLogger("network")


# ── Simulation header ─────────────────────────────────────────────────────────

@dataclass(frozen=True)
class SimulationConfig:
    """First line of the dataset.

    Parameters
    ----------
    duration : int
        Last simulated tick (inclusive); the loop runs ``duration + 1`` ticks.
    num_intersections, num_streets, num_cars : int
        Declared entity counts.
    bonus : int
        Points awarded to every car that reaches its destination in time.
    """

    duration: int
    num_intersections: int
    num_streets: int
    num_cars: int
    bonus: int


# ── Street ────────────────────────────────────────────────────────────────────

@dataclass
class Street:
    """A one-way street ending at intersection ``end``.

    The crossing queue is virtual: every car that reaches the end of the
    street draws a ticket from ``issued_tickets`` and may only cross once
    ``last_crossed_ticket`` is exactly one below its own ticket.
    """

    id: int
    name: str
    start: int
    end: int
    duration: int

    # Compiled schedule (written by sim.schedule)
    green_window: Optional[GreenWindow] = None
    cycle_length: int = 0

    # Runtime queue state (mutated by World)
    issued_tickets: int = field(default=0, repr=False)
    last_crossed_ticket: int = field(default=0, repr=False)

    @property
    def is_scheduled(self) -> bool:
        return self.green_window is not None

    def issue_ticket(self) -> int:
        """Hand out the next queuing number for this street."""
        self.issued_tickets += 1
        return self.issued_tickets

    def is_green(self, tick: int) -> bool:
        return in_window(tick, self.green_window, self.cycle_length)

    def is_head_of_queue(self, ticket: int) -> bool:
        return ticket == self.last_crossed_ticket + 1

    def clear_schedule(self) -> None:
        self.green_window = None
        self.cycle_length = 0

    def reset_queue(self) -> None:
        self.issued_tickets = 0
        self.last_crossed_ticket = 0


# ── Car ───────────────────────────────────────────────────────────────────────

@dataclass
class Car:
    """A car following a fixed route of street ids.

    Attributes
    ----------
    id : int
        Position of the car in the dataset; also its processing order.
    route : tuple of int
        Street ids, first to last.  Never empty.
    route_index : int
        Index into ``route`` of the street the car is currently on.
    remaining : int
        Ticks left before the car reaches the end of its current street.
    ticket : int
        Queuing number held on the current street.
    arrived : bool
        Terminal flag, set once the end of the last street is reached.
    score, commute_time : int
        Filled in on arrival.
    """

    id: int
    route: Tuple[int, ...]
    route_index: int = 0
    remaining: int = 0
    ticket: int = 0
    arrived: bool = False
    score: int = 0
    commute_time: int = 0

    @property
    def street_id(self) -> int:
        return self.route[self.route_index]

    @property
    def on_last_street(self) -> bool:
        return self.route_index == len(self.route) - 1

    def reset(self) -> None:
        self.route_index = 0
        self.remaining = 0
        self.ticket = 0
        self.arrived = False
        self.score = 0
        self.commute_time = 0


# ── City model ────────────────────────────────────────────────────────────────

class CityModel:
    """Street table, name lookup and car list for one dataset.

    The model is created once by :func:`parse_dataset`; afterwards only the
    schedule fields (by :mod:`sim.schedule`) and the runtime fields (by
    :class:`~sim.world.World`) change.
    """

    def __init__(
        self,
        config: SimulationConfig,
        streets: Sequence[Street],
        cars: Sequence[Car],
    ) -> None:
        self.config = config
        self.streets: List[Street] = list(streets)
        self.cars: List[Car] = list(cars)
        self.street_index: Dict[str, int] = {
            s.name: s.id for s in self.streets
        }
        self._enqueue_starting_cars()

    # ── queries ───────────────────────────────────────────────────────────

    def street(self, name: str) -> Optional[Street]:
        """Look a street up by name; ``None`` if the city has no such street."""
        idx = self.street_index.get(name)
        return None if idx is None else self.streets[idx]

    def route_names(self, car: Car) -> List[str]:
        return [self.streets[sid].name for sid in car.route]

    def scheduled_streets(self) -> List[Street]:
        return [s for s in self.streets if s.is_scheduled]

    # ── runtime state ─────────────────────────────────────────────────────

    def reset(self) -> None:
        """Restore queues and car progress; the compiled schedule is kept."""
        for street in self.streets:
            street.reset_queue()
        for car in self.cars:
            car.reset()
        self._enqueue_starting_cars()

    def _enqueue_starting_cars(self) -> None:
        # Cars start at the end of their first street, queued in file order.
        for car in self.cars:
            car.ticket = self.streets[car.route[0]].issue_ticket()


# ── Parsing ───────────────────────────────────────────────────────────────────

def parse_dataset(text: str) -> CityModel:
    """Build a :class:`CityModel` from dataset *text*.

    Parameters
    ----------
    text : str
        ``D I S C F`` header, ``S`` lines ``B E NAME L`` and ``C`` lines
        ``P name1 … nameP``.

    Returns
    -------
    CityModel
    """
    lines = text.splitlines()
    duration, num_intersections, num_streets, num_cars, bonus = (
        int(tok) for tok in lines[0].split()[:5]
    )
    config = SimulationConfig(
        duration=duration,
        num_intersections=num_intersections,
        num_streets=num_streets,
        num_cars=num_cars,
        bonus=bonus,
    )

    streets: List[Street] = []
    street_index: Dict[str, int] = {}
    for street_id in range(num_streets):
        start, end, name, length = lines[1 + street_id].split()[:4]
        streets.append(Street(
            id=street_id,
            name=name,
            start=int(start),
            end=int(end),
            duration=int(length),
        ))
        street_index[name] = street_id

    cars: List[Car] = []
    first_car_line = 1 + num_streets
    for car_id in range(num_cars):
        tok = lines[first_car_line + car_id].split()
        route_length = int(tok[0])
        route = tuple(street_index[name] for name in tok[1:1 + route_length])
        cars.append(Car(id=car_id, route=route))

    log.debug(
        "Parsed dataset: duration=%d intersections=%d streets=%d cars=%d bonus=%d",
        duration, num_intersections, num_streets, num_cars, bonus,
    )
    return CityModel(config, streets, cars)


def read_dataset(path: str, encoding: str = "utf-8") -> CityModel:
    """Read and parse the dataset file at *path*."""
    with open(path, "r", encoding=encoding) as fh:
        return parse_dataset(fh.read())
