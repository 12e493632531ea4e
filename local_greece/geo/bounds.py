"""
Local Greece - Coordinate Normalizer

Maps latitude/longitude onto the 0-100 plane of a fixed bounding box. The
plane is used for on-screen positioning and marker clustering only; it is a
linear stretch, not a projection, so real-world distances are computed with
haversine in `local_greece.geo.proximity` instead.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from local_greece.shared.errors import ConfigurationError

PLANE_SIZE = 100.0


@dataclass(frozen=True)
class Coords:
    """A latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class NormalizedPoint:
    """A position on the 0-100 map plane (x grows east, y grows south)."""

    x: float
    y: float

    def distance_to(self, other: NormalizedPoint) -> float:
        """Euclidean distance in plane units."""
        return math.hypot(self.x - other.x, self.y - other.y)


def normalize(value: float, min_value: float, max_value: float) -> float:
    """
    Linearly rescale value from [min_value, max_value] onto [0, 100].

    Raises:
        ConfigurationError: If the range is empty (min_value == max_value).
    """
    if max_value == min_value:
        raise ConfigurationError(f"Cannot normalize over an empty range [{min_value}, {max_value}]")
    return ((value - min_value) / (max_value - min_value)) * PLANE_SIZE


@dataclass(frozen=True)
class BoundingBox:
    """
    Geographic extent of the rendered map.

    Construction fails fast on degenerate or non-finite bounds so that bad
    configuration surfaces at startup instead of as NaN marker positions.
    """

    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    def __post_init__(self) -> None:
        for axis, low, high in (
            ("latitude", self.min_lat, self.max_lat),
            ("longitude", self.min_lon, self.max_lon),
        ):
            if not (math.isfinite(low) and math.isfinite(high)):
                raise ConfigurationError(f"Non-finite {axis} bounds: {low}..{high}")
            if low >= high:
                raise ConfigurationError(
                    f"Degenerate {axis} bounds: min {low} must be below max {high}"
                )

    def project(self, lat: float, lon: float) -> NormalizedPoint:
        """Project degrees onto the plane; higher latitude renders nearer the top."""
        return NormalizedPoint(
            x=normalize(lon, self.min_lon, self.max_lon),
            y=PLANE_SIZE - normalize(lat, self.min_lat, self.max_lat),
        )

    def project_many(self, lats: np.ndarray, lons: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """Vectorised `project` returning (xs, ys) arrays."""
        lats = np.asarray(lats, dtype=float)
        lons = np.asarray(lons, dtype=float)
        xs = (lons - self.min_lon) / (self.max_lon - self.min_lon) * PLANE_SIZE
        ys = PLANE_SIZE - (lats - self.min_lat) / (self.max_lat - self.min_lat) * PLANE_SIZE
        return xs, ys

    def contains(self, lat: float, lon: float) -> bool:
        """Check whether a coordinate lies inside the box (edges included)."""
        return self.min_lat <= lat <= self.max_lat and self.min_lon <= lon <= self.max_lon


GREECE_BOUNDS = BoundingBox(min_lat=34.8, max_lat=41.8, min_lon=19.5, max_lon=29.7)
