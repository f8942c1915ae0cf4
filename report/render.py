"""
report/render.py
================
Plain-text rendering of :class:`~report.insights.Insights`.

The report has three blank-line separated paragraphs: the score and its
decomposition, the arrived cars, and the schedule averages.  Values can be
wrapped in an ANSI highlight for terminal output.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, List

import config
from report.insights import Insights


def _highlighter(color: bool) -> Callable[[str], str]:
    if not color:
        return lambda text: text
    return lambda text: f"{config.HIGHLIGHT_ANSI}{text}{config.RESET_ANSI}"


def format_int(value: int) -> str:
    """``1234567`` → ``'1,234,567'``."""
    return f"{value:,}"


def to_fixed(value: float, digits: int) -> str:
    """Round half away from zero on the exact binary value of *value*."""
    if math.isnan(value):
        return "NaN"
    quantum = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def format_decimal(value: float) -> str:
    """Two decimals; ``nan`` renders as ``'NaN'``."""
    return to_fixed(value, 2)


def format_percentage(value: float) -> str:
    return f"{to_fixed(value * 100, 0)}%"


def render_report(insights: Insights, color: bool = True) -> str:
    """Render *insights* as the three-paragraph text report.

    Parameters
    ----------
    insights : Insights
        Aggregated figures.
    color : bool
        Wrap every value in the terminal highlight.
    """
    hl = _highlighter(color)

    def num(value: int) -> str:
        return hl(format_int(value))

    score_paragraph = " ".join([
        f"The submission scored {num(insights.total_score)} points. This is the sum of",
        f"{num(insights.bonus_score)} bonus points",
        f"for cars arriving before the deadline ({num(insights.bonus)}",
        f"points each) and {num(insights.early_arrival_score)} points for early arrival times.",
    ])

    arrived: List[str] = [
        f"{num(insights.num_arrived)} of {num(insights.num_cars)}",
        f"cars arrived before the deadline ({hl(format_percentage(insights.arrived_fraction))}).",
    ]
    if insights.any_arrived:
        arrived.extend([
            f"The earliest car arrived at its destination after {num(insights.earliest_commute)}",
            f"seconds scoring {num(insights.earliest_score)} points, whereas the last",
            f"car arrived at its destination after {num(insights.latest_commute)}",
            f"seconds scoring {num(insights.latest_score)} points.",
            "Cars that arrived within the deadline drove for an average of "
            f"{hl(format_decimal(insights.average_commute_time))}",
            "seconds to arrive at their destination.",
        ])

    schedule_paragraph = " ".join([
        f"The schedules for the {num(insights.num_intersections)}",
        "traffic lights had an average total cycle length of",
        f"{hl(format_decimal(insights.average_cycle_length))} seconds.",
        "A traffic light that turned green was scheduled to stay green for",
        f"{hl(format_decimal(insights.average_green_duration))} seconds on average.",
    ])

    return "\n\n".join([
        score_paragraph,
        " ".join(arrived),
        schedule_paragraph,
    ]) + "\n"
