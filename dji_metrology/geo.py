"""
Geodesy Helpers for DJI SRT Metrology

This module computes the heading between two GPS fixes and great-circle
distances, both on a spherical Earth approximation.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Point:
    """A geographic point in decimal degrees."""

    lat: float
    lng: float


def bearing_to(p1: Point, p2: Point) -> float:
    """
    Calculate the initial bearing (forward azimuth) from p1 to p2.

    Args:
        p1: Starting point.
        p2: Destination point.

    Returns:
        Bearing in degrees, 0 = north, in the range (-180, 180].
        Identical points yield 0.
    """
    d_lon = (p2.lng - p1.lng) * np.pi / 180.0

    lat1 = p1.lat * np.pi / 180.0
    lat2 = p2.lat * np.pi / 180.0

    y = np.sin(d_lon) * np.cos(lat2)
    x = np.cos(lat1) * np.sin(lat2) - np.sin(lat1) * np.cos(lat2) * np.cos(d_lon)

    return float(np.arctan2(y, x) * 180.0 / np.pi)


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the great-circle distance between two points on Earth.

    Uses the Haversine formula to compute distance along the surface of a sphere.

    Args:
        lat1, lon1: Latitude and longitude of first point in degrees.
        lat2, lon2: Latitude and longitude of second point in degrees.

    Returns:
        Distance in meters between the two points.
    """
    R = 6371000.0  # Earth radius in meters
    lat1_rad, lon1_rad = np.deg2rad(lat1), np.deg2rad(lon1)
    lat2_rad, lon2_rad = np.deg2rad(lat2), np.deg2rad(lon2)

    dlat = lat2_rad - lat1_rad
    dlon = lon2_rad - lon1_rad

    a = np.sin(dlat / 2) ** 2 + np.cos(lat1_rad) * np.cos(lat2_rad) * np.sin(dlon / 2) ** 2
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))

    return R * c
