"""
Local Greece - Listing filters

Category, text search, proximity and pagination over the in-memory listing
set. Filters never mutate their input.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from local_greece.datasets.listings.models import Listing
from local_greece.geo.bounds import Coords
from local_greece.geo.proximity import EARTH_RADIUS_KM, MAX_DISTANCE_KM, NearbyListing, filter_nearby

T = TypeVar("T")


@dataclass(frozen=True)
class FilterState:
    """What the user has selected in the filter bar."""

    categories: frozenset[str] = field(default_factory=frozenset)
    search_term: str = ""
    near_me: bool = False


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results."""

    items: list[T]
    page: int
    total_pages: int
    total_items: int

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def filter_by_categories(listings: Iterable[Listing], selected: Iterable[str]) -> list[Listing]:
    """Keep listings in any of the selected categories (all if none selected)."""
    selected = set(selected)
    listings = list(listings)
    if not selected:
        return listings
    return [listing for listing in listings if listing.category_id in selected]


def search_listings(listings: Iterable[Listing], term: str) -> list[Listing]:
    """Case-insensitive substring match on titles and descriptions in both languages."""
    listings = list(listings)
    if not term:
        return listings
    needle = term.lower()
    return [
        listing
        for listing in listings
        if any(
            needle in text.lower()
            for text in (
                listing.title_en,
                listing.title_gr,
                listing.description_en,
                listing.description_gr,
            )
        )
    ]


def apply_filters(
    listings: Sequence[Listing],
    state: FilterState,
    user_location: Coords | None = None,
    max_distance_km: float = MAX_DISTANCE_KM,
    radius_km: float = EARTH_RADIUS_KM,
) -> list[Listing] | list[NearbyListing[Listing]]:
    """
    Apply category, search and proximity filters in that order.

    Proximity only runs when near_me is on and a location is known; then the
    result is a nearest-first list of NearbyListing. Otherwise the input
    order is kept and plain Listings are returned.
    """
    result = filter_by_categories(listings, state.categories)
    result = search_listings(result, state.search_term)

    if state.near_me and user_location is not None:
        return filter_nearby(
            result, user_location, max_distance_km=max_distance_km, radius_km=radius_km
        )

    return result


def paginate(items: Sequence[T], page: int, per_page: int = 9) -> Page[T]:
    """
    Slice out one page.

    Page numbers start at 1 and are clamped into the valid range.
    """
    if per_page < 1:
        raise ValueError(f"per_page must be positive, got {per_page}")

    total_pages = math.ceil(len(items) / per_page)
    page = min(max(page, 1), max(total_pages, 1))
    start = (page - 1) * per_page

    return Page(
        items=list(items[start : start + per_page]),
        page=page,
        total_pages=total_pages,
        total_items=len(items),
    )
