"""
Time Series View for DJI SRT Metrology

This module flattens a Metrology into a pandas DataFrame, adds travelled
distance between fixes, and condenses a flight into summary figures.
"""

from dataclasses import asdict
from typing import Dict

import numpy as np
import pandas as pd

from . import geo
from . import utils
from .model import Metrology

FRAME_COLUMNS = [
    "id", "start_s", "end_s", "f_stop", "shutter", "iso", "ev", "zoom",
    "latitude", "longitude", "satellite_count", "bearing", "distance_to_home",
    "altitude", "horizontal_speed", "vertical_speed",
    "segment_distance_m", "distance_along_m",
]


def metrology_to_frame(metrology: Metrology) -> pd.DataFrame:
    """
    Flatten a Metrology into a DataFrame with one row per sample.

    Start and end offsets become float seconds (start_s, end_s). Distances
    between consecutive fixes are computed with the Haversine formula.

    Args:
        metrology: Parsed samples, in input order.

    Returns:
        DataFrame with FRAME_COLUMNS. Empty (with those columns) for an
        empty Metrology.
    """
    if not metrology:
        return pd.DataFrame(columns=FRAME_COLUMNS)

    rows = []
    for sample in metrology:
        row = asdict(sample)
        row["start_s"] = row.pop("start").total_seconds()
        row["end_s"] = row.pop("end").total_seconds()
        rows.append(row)

    df = pd.DataFrame(rows)

    # Segment distances and cumulative distance
    segment_dist = geo.haversine_m(
        df["latitude"].shift(), df["longitude"].shift(),
        df["latitude"], df["longitude"],
    )
    df["segment_distance_m"] = segment_dist.fillna(0)
    df["distance_along_m"] = df["segment_distance_m"].cumsum()

    return df[FRAME_COLUMNS]


def summarize_flight(metrology: Metrology) -> Dict:
    """
    Compute summary figures for a whole flight.

    Args:
        metrology: Parsed samples, in input order.

    Returns:
        Dictionary with sample_count, duration_s, altitude range, top
        horizontal speed, furthest distance to home, travelled distance and
        first/last positions. Figures are None when there are no samples.
    """
    df = metrology_to_frame(metrology)
    if df.empty:
        return {
            "sample_count": 0,
            "duration_s": 0.0,
            "max_altitude_m": None,
            "min_altitude_m": None,
            "max_horizontal_speed_mps": None,
            "max_distance_to_home_m": None,
            "travelled_distance_m": 0.0,
            "first_position": None,
            "last_position": None,
        }

    first = df.iloc[0]
    last = df.iloc[-1]

    return {
        "sample_count": int(len(df)),
        "duration_s": utils.round_float(df["end_s"].max() - df["start_s"].min()),
        "max_altitude_m": utils.round_float(df["altitude"].max(), digits=2),
        "min_altitude_m": utils.round_float(df["altitude"].min(), digits=2),
        "max_horizontal_speed_mps": utils.round_float(df["horizontal_speed"].max(), digits=2),
        "max_distance_to_home_m": utils.round_float(np.abs(df["distance_to_home"]).max(), digits=2),
        "travelled_distance_m": utils.round_float(df["distance_along_m"].iloc[-1], digits=2),
        "first_position": {"lat": float(first["latitude"]), "lon": float(first["longitude"])},
        "last_position": {"lat": float(last["latitude"]), "lon": float(last["longitude"])},
    }
