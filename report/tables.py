"""
report/tables.py
================
Per-car results as a :class:`pandas.DataFrame`, for CSV export and ad-hoc
analysis of a simulated run.
"""

from __future__ import annotations

import pandas as pd

from sim.network import CityModel

CAR_COLUMNS = [
    "car",
    "route_length",
    "streets_travelled",
    "arrived",
    "commute_time",
    "score",
]


def car_frame(city: CityModel) -> pd.DataFrame:
    """One row per car in dataset order.

    ``commute_time`` is empty (``NA``) for cars that did not arrive;
    ``streets_travelled`` counts the streets the car has entered beyond the
    first.
    """
    rows = [
        {
            "car": car.id,
            "route_length": len(car.route),
            "streets_travelled": car.route_index,
            "arrived": car.arrived,
            "commute_time": car.commute_time if car.arrived else None,
            "score": car.score,
        }
        for car in city.cars
    ]
    df = pd.DataFrame(rows, columns=CAR_COLUMNS)
    df["commute_time"] = df["commute_time"].astype("Int64")
    return df


def write_car_csv(city: CityModel, path: str) -> None:
    """Write :func:`car_frame` to *path* without the index column."""
    car_frame(city).to_csv(path, index=False)
