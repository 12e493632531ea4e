"""
Local Greece - Discovery

Browsing approved listings: filter bar state, list paging and map markers.
"""

from local_greece.discovery.controller import VIEW_MODES, DiscoveryController, ViewMode
from local_greece.discovery.filters import (
    FilterState,
    Page,
    apply_filters,
    filter_by_categories,
    paginate,
    search_listings,
)
from local_greece.discovery.location import (
    LocationProvider,
    LocationState,
    StaticLocationProvider,
    coords_from_values,
)

__all__ = [
    "DiscoveryController",
    "ViewMode",
    "VIEW_MODES",
    "FilterState",
    "Page",
    "apply_filters",
    "filter_by_categories",
    "paginate",
    "search_listings",
    "LocationProvider",
    "LocationState",
    "StaticLocationProvider",
    "coords_from_values",
]
