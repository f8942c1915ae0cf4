"""
report: Scoring report for an evaluated submission
==================================================

Modules
-------
insights
    :class:`Insights` and :func:`collect_insights` aggregation.
render
    :func:`render_report` three-paragraph text report.
tables
    :func:`car_frame` per-car pandas table and CSV export.
diagnostics
    :class:`ElapsedTimer` and memory usage helpers.
"""

from .insights import Insights, collect_insights
from .render import render_report
from .tables import car_frame, write_car_csv
from .diagnostics import ElapsedTimer, memory_usage, memory_usage_message

__all__ = [
    "Insights",
    "collect_insights",
    "render_report",
    "car_frame",
    "write_car_csv",
    "ElapsedTimer",
    "memory_usage",
    "memory_usage_message",
]
