"""
Local Greece - User location

The user's position comes from outside (a browser geolocation result posted
by the client, a fixed position for kiosks, ...). Providers raise
LocationUnavailableError when there is nothing to report; callers treat that
as "near me" being unavailable, not as a failure.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from local_greece.geo.bounds import Coords
from local_greece.geo.validators import is_valid_coordinate
from local_greece.shared.errors import LocationUnavailableError


class LocationProvider(Protocol):
    """Single-shot source of the user's position."""

    async def current_location(self) -> Coords: ...


class StaticLocationProvider:
    """A fixed position, or none at all."""

    def __init__(self, coords: Coords | None = None, reason: str | None = None):
        self.coords = coords
        self.reason = reason or "Geolocation is not supported by your browser."

    async def current_location(self) -> Coords:
        if self.coords is None:
            raise LocationUnavailableError(self.reason)
        return self.coords


@dataclass(frozen=True)
class LocationState:
    """Outcome of the last location lookup."""

    loading: bool = True
    location: Coords | None = None
    error: str | None = None


def coords_from_values(latitude: object, longitude: object) -> Coords:
    """
    Build Coords from untrusted input (query parameters, JSON).

    Raises:
        LocationUnavailableError: If either value is missing or not a finite number.
    """
    try:
        lat = float(latitude)  # type: ignore[arg-type]
        lon = float(longitude)  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise LocationUnavailableError(f"Invalid location: {latitude}, {longitude}") from e
    if not (is_valid_coordinate(lat) and is_valid_coordinate(lon)):
        raise LocationUnavailableError(f"Invalid location: {latitude}, {longitude}")
    if not (-90 <= lat <= 90 and -180 <= lon <= 180):
        raise LocationUnavailableError(f"Location out of range: {lat}, {lon}")
    return Coords(latitude=lat, longitude=lon)
