"""
Local Greece - Geographic Utilities

Geographic processing for listings on the Greece map:
- Coordinate validation
- Normalization onto the 0-100 map plane
- Marker clustering
- Haversine proximity filtering
"""

from local_greece.geo.bounds import (
    GREECE_BOUNDS,
    BoundingBox,
    Coords,
    NormalizedPoint,
    normalize,
)
from local_greece.geo.clustering import (
    CLUSTER_RADIUS_NORMALIZED,
    Cluster,
    ListingPoint,
    MapPoint,
    cluster_listings,
    map_position,
)
from local_greece.geo.proximity import (
    EARTH_RADIUS_KM,
    MAX_DISTANCE_KM,
    NearbyListing,
    filter_nearby,
    haversine_distance,
)
from local_greece.geo.validators import has_valid_coordinates, valid_listings

__all__ = [
    "GREECE_BOUNDS",
    "BoundingBox",
    "Coords",
    "NormalizedPoint",
    "normalize",
    "CLUSTER_RADIUS_NORMALIZED",
    "Cluster",
    "ListingPoint",
    "MapPoint",
    "cluster_listings",
    "map_position",
    "EARTH_RADIUS_KM",
    "MAX_DISTANCE_KM",
    "NearbyListing",
    "filter_nearby",
    "haversine_distance",
    "has_valid_coordinates",
    "valid_listings",
]
