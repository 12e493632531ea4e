"""
Local Greece - Coordinate validation

Listings come from an external store and may carry missing or garbage
coordinates. Anything without a finite numeric lat/lon is kept off the map.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from numbers import Real
from typing import Any, Protocol, TypeVar

logger = logging.getLogger(__name__)


class Locatable(Protocol):
    """Anything the geo pipeline can place: an id and raw coordinates."""

    @property
    def id(self) -> int: ...

    @property
    def lat(self) -> Any: ...

    @property
    def lon(self) -> Any: ...


T = TypeVar("T", bound=Locatable)


def is_valid_coordinate(value: Any) -> bool:
    """True for finite real numbers; bools, strings and None are rejected."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value)


def has_valid_coordinates(item: Locatable) -> bool:
    """True if both lat and lon of the item are finite numbers."""
    return is_valid_coordinate(getattr(item, "lat", None)) and is_valid_coordinate(
        getattr(item, "lon", None)
    )


def valid_listings(items: Iterable[T]) -> list[T]:
    """Keep items with valid coordinates, preserving order."""
    items = list(items)
    valid = [item for item in items if has_valid_coordinates(item)]
    skipped = len(items) - len(valid)
    if skipped:
        logger.debug(
            f"Skipped {skipped} records with invalid coordinates",
            extra={"skipped": skipped, "total": len(items)},
        )
    return valid
