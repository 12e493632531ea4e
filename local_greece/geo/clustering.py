"""
Local Greece - Map marker clustering

Groups listings that would overlap on the map into a single marker.

Grouping is greedy and single-link: listings are visited in input order, and
each unassigned listing claims every other unassigned listing that lies
strictly within `radius` plane units of it. Claimed neighbours do not pull in
further listings, so a chain A-B-C where only A-B and B-C are close may
still end up split, or grouped around whichever point is visited first.

Usage:
    from local_greece.geo.clustering import cluster_listings

    points = cluster_listings(listings, config.bounding_box(), config.map.cluster_radius)
    for point in points:
        if point.kind == "cluster":
            ...
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, Literal, TypeVar, Union

import numpy as np

from local_greece.geo.bounds import BoundingBox, NormalizedPoint
from local_greece.geo.validators import Locatable, valid_listings

logger = logging.getLogger(__name__)

CLUSTER_RADIUS_NORMALIZED = 6.0

T = TypeVar("T", bound=Locatable)


@dataclass(frozen=True)
class ListingPoint(Generic[T]):
    """A single listing rendered as its own pin."""

    listing: T
    kind: Literal["listing"] = "listing"

    @property
    def lat(self) -> float:
        return float(self.listing.lat)

    @property
    def lon(self) -> float:
        return float(self.listing.lon)


@dataclass(frozen=True)
class Cluster(Generic[T]):
    """Several nearby listings rendered as one counted marker."""

    key: str
    listings: tuple[T, ...]
    lat: float
    lon: float
    kind: Literal["cluster"] = "cluster"

    @property
    def count(self) -> int:
        return len(self.listings)

    @property
    def listing_ids(self) -> frozenset[int]:
        return frozenset(listing.id for listing in self.listings)


MapPoint = Union[ListingPoint, Cluster]


def _make_cluster(key: str, members: list[T]) -> Cluster[T]:
    # Centre is the mean of raw degrees, not of plane positions
    lat = float(np.mean([float(m.lat) for m in members]))
    lon = float(np.mean([float(m.lon) for m in members]))
    return Cluster(key=key, listings=tuple(members), lat=lat, lon=lon)


def cluster_listings(
    listings: Sequence[T],
    bounds: BoundingBox,
    radius: float = CLUSTER_RADIUS_NORMALIZED,
) -> list[MapPoint]:
    """
    Partition listings into clusters and standalone points.

    Args:
        listings: Listing-like records exposing id, lat and lon
        bounds: Bounding box used to project onto the 0-100 plane
        radius: Grouping threshold in plane units (strictly-less-than)

    Returns:
        Clusters first, then single ListingPoints. Listings without finite
        coordinates are left out entirely.
    """
    valid = valid_listings(listings)
    if not valid:
        return []

    lats = np.array([float(item.lat) for item in valid])
    lons = np.array([float(item.lon) for item in valid])
    xs, ys = bounds.project_many(lats, lons)

    assigned = np.zeros(len(valid), dtype=bool)
    clusters: list[Cluster[T]] = []

    for i in range(len(valid)):
        if assigned[i]:
            continue

        distances = np.hypot(xs - xs[i], ys - ys[i])
        close = (distances < radius) & ~assigned
        close[i] = False
        neighbours = [i, *np.flatnonzero(close).tolist()]

        if len(neighbours) > 1:
            assigned[neighbours] = True
            members = [valid[j] for j in neighbours]
            clusters.append(_make_cluster(f"cluster-{len(clusters) + 1}", members))

    singles = [ListingPoint(listing=valid[i]) for i in range(len(valid)) if not assigned[i]]

    logger.debug(
        f"Clustered {len(valid)} listings into {len(clusters)} clusters "
        f"and {len(singles)} single points",
        extra={"listings": len(valid), "clusters": len(clusters), "singles": len(singles)},
    )

    return [*clusters, *singles]


def map_position(point: MapPoint, bounds: BoundingBox) -> NormalizedPoint:
    """Where a map point is drawn (top = y, left = x, both in percent)."""
    return bounds.project(point.lat, point.lon)
