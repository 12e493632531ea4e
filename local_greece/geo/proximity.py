"""
Local Greece - Proximity filter

Real-world distances for the "near me" filter. Works on raw degrees only;
plane coordinates from `local_greece.geo.bounds` are never used here.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

import numpy as np

from local_greece.geo.bounds import Coords
from local_greece.geo.validators import Locatable, valid_listings

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0
MAX_DISTANCE_KM = 50.0

T = TypeVar("T", bound=Locatable)


@dataclass(frozen=True)
class NearbyListing(Generic[T]):
    """A listing together with its distance from the user."""

    listing: T
    distance_km: float


def haversine_distance(a: Coords, b: Coords, radius_km: float = EARTH_RADIUS_KM) -> float:
    """Great-circle distance in kilometres between two points."""
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    dlat = lat2 - lat1
    dlon = math.radians(b.longitude - a.longitude)

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    return radius_km * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def haversine_many(
    origin: Coords,
    lats: np.ndarray,
    lons: np.ndarray,
    radius_km: float = EARTH_RADIUS_KM,
) -> np.ndarray:
    """Vectorised haversine from one origin to many points."""
    lat1 = np.radians(origin.latitude)
    lat2 = np.radians(np.asarray(lats, dtype=float))
    dlat = lat2 - lat1
    dlon = np.radians(np.asarray(lons, dtype=float) - origin.longitude)

    h = np.sin(dlat / 2) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin(dlon / 2) ** 2
    return radius_km * 2 * np.arctan2(np.sqrt(h), np.sqrt(1 - h))


def filter_nearby(
    listings: Sequence[T],
    origin: Coords,
    max_distance_km: float = MAX_DISTANCE_KM,
    radius_km: float = EARTH_RADIUS_KM,
) -> list[NearbyListing[T]]:
    """
    Keep listings closer than max_distance_km to origin, nearest first.

    The sort is stable: listings at equal distance keep their input order.
    """
    valid = valid_listings(listings)
    if not valid:
        return []

    distances = haversine_many(
        origin,
        np.array([float(item.lat) for item in valid]),
        np.array([float(item.lon) for item in valid]),
        radius_km=radius_km,
    )

    within = np.flatnonzero(distances < max_distance_km)
    order = within[np.argsort(distances[within], kind="stable")]

    logger.debug(
        f"{len(order)} of {len(valid)} listings within {max_distance_km} km",
        extra={"within": len(order), "total": len(valid), "max_distance_km": max_distance_km},
    )

    return [NearbyListing(listing=valid[i], distance_km=float(distances[i])) for i in order]
