#!/usr/bin/env python3
"""
sim/clock.py
============
Tick arithmetic shared by :mod:`sim.world` and :mod:`sim.schedule`.

Keeping these in a separate module avoids circular imports and makes unit
testing straightforward.
"""

from __future__ import annotations

from typing import Optional, Tuple

GreenWindow = Tuple[int, int]


def ticks_remaining(duration: int, tick: int) -> int:
    """Ticks left in the horizon after *tick* (``duration`` on tick 0)."""
    return duration - tick


def cycle_offset(tick: int, cycle_length: int) -> int:
    """Position of *tick* inside a repeating cycle of *cycle_length*."""
    return tick % cycle_length


def in_window(tick: int, window: Optional[GreenWindow], cycle_length: int) -> bool:
    """True when *tick* falls inside the inclusive green *window*.

    Parameters
    ----------
    tick : int
        Absolute simulation tick.
    window : (int, int) or None
        ``(first, last)`` offsets within the cycle.  ``None`` means the
        street was never scheduled and its light is permanently red.
    cycle_length : int
        Period of the intersection's schedule.
    """
    if window is None or cycle_length <= 0:
        return False
    first, last = window
    offset = cycle_offset(tick, cycle_length)
    return first <= offset <= last
