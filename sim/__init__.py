"""
sim: Judge core
===============

Modules
-------
network
    :class:`CityModel` street table, cars and :func:`parse_dataset`.
schedule
    Submission validation and green-window compilation.
errors
    :class:`SubmissionError` hierarchy.
world
    :class:`World` tick loop.
clock
    Tick arithmetic helpers.
judge
    :func:`evaluate` end-to-end pipeline.
"""
