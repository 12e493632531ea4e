"""
Local Greece - Discovery controller

State behind the main discovery page: the loaded listings, the filter bar
selections, the view mode and paging. Derived views (filtered list, current
page, map points) are recomputed from scratch on every call.

Loading listings and resolving the user location are asynchronous. Each call
takes a generation token; results from a superseded call are dropped and a
superseded listing load is cancelled and its caller gets the newest result.

Usage:
    controller = DiscoveryController(config, client=DirectoryClient.from_config(config))
    await asyncio.gather(controller.load_listings(), controller.locate())

    controller.toggle_category("2")
    page = controller.current_page_listings()
    points = controller.map_points()
"""

from __future__ import annotations

import asyncio
import logging
from typing import Literal

from local_greece.backend.client import DirectoryClient
from local_greece.datasets.listings.ingest import fetch_listing_frame
from local_greece.datasets.listings.models import Listing
from local_greece.datasets.listings.preprocess import ListingPreprocessor
from local_greece.datasets.listings.sample import SAMPLE_LISTINGS
from local_greece.discovery.filters import FilterState, Page, apply_filters, paginate
from local_greece.discovery.location import LocationProvider, LocationState, StaticLocationProvider
from local_greece.geo.bounds import Coords
from local_greece.geo.clustering import MapPoint, cluster_listings
from local_greece.geo.proximity import NearbyListing
from local_greece.shared.config import Settings, get_config
from local_greece.shared.errors import BackendError, LocationUnavailableError
from local_greece.shared.generation import GenerationGuard
from local_greece.shared.i18n import Language, translations_for

logger = logging.getLogger(__name__)

ViewMode = Literal["list", "map", "split"]
VIEW_MODES: tuple[ViewMode, ...] = ("list", "map", "split")


class DiscoveryController:
    """State and derived views for browsing listings."""

    def __init__(
        self,
        config: Settings | None = None,
        client: DirectoryClient | None = None,
        location_provider: LocationProvider | None = None,
    ):
        """
        Initialize the controller.

        Args:
            config: Configuration object (uses default if not provided)
            client: Backend handle; None means "not configured" and sample data is shown
            location_provider: Source of the user's position

        Raises:
            ConfigurationError: If the configured map bounds are degenerate.
        """
        self.config = config or get_config()
        self.client = client
        self.location_provider = location_provider or StaticLocationProvider()
        self.bounds = self.config.bounding_box()

        self.language: Language = "en"
        self.listings: list[Listing] = []
        self.loading = True
        self.notification: str | None = None
        self.location_state = LocationState()

        self.filters = FilterState()
        self.view_mode: ViewMode = "list"
        self.current_page = 1
        self.hovered_id: int | None = None

        self._load_guard = GenerationGuard()
        self._location_guard = GenerationGuard()
        self._load_task: asyncio.Future[list[Listing]] | None = None
        self._current_load: asyncio.Future[list[Listing] | None] | None = None

    @property
    def t(self) -> dict[str, str]:
        """Translations for the current language."""
        return translations_for(self.language)

    @property
    def user_location(self) -> Coords | None:
        return self.location_state.location

    def set_language(self, language: str) -> None:
        translations_for(language)
        self.language = language  # type: ignore[assignment]

    # ==========================================================================
    # Async loading
    # ==========================================================================

    def _fetch_listings(self) -> list[Listing]:
        """Blocking fetch + clean; runs in a worker thread."""
        df = fetch_listing_frame(self.client, self.config)
        preprocessor = ListingPreprocessor(self.config)
        result = preprocessor.run(df)
        if not result.success:
            raise BackendError(f"Listing data could not be processed: {result.error_message}")
        return preprocessor.get_listings()

    async def load_listings(self) -> list[Listing]:
        """
        Load approved listings, falling back to sample data.

        A load superseded by a newer call waits for the newest load instead,
        so every caller gets the listings that were actually installed.

        Returns:
            The listings held once the newest load has finished
        """
        load = asyncio.ensure_future(self._load(self._load_guard.begin()))
        self._current_load = load
        listings = await load
        while listings is None:
            listings = await self._current_load
        return listings

    async def _load(self, token: int) -> list[Listing] | None:
        """One load attempt; None when a newer load has taken over."""
        if self._load_task is not None and not self._load_task.done():
            self._load_task.cancel()

        self.loading = True
        self.notification = None

        if self.client is None:
            logger.warning("Backend not connected, falling back to sample data")
            listings = list(SAMPLE_LISTINGS)
            notice: str | None = self.t["sampleDataNotConfigured"]
        else:
            task = asyncio.ensure_future(asyncio.to_thread(self._fetch_listings))
            self._load_task = task
            try:
                listings = await task
                notice = None
            except asyncio.CancelledError:
                if self._load_guard.is_current(token):
                    raise
                logger.debug("Listing load superseded", extra={"generation": token})
                return None
            except BackendError as e:
                logger.error(
                    f"Failed to fetch listings, falling back to sample data: {e}",
                    extra={"error": str(e)},
                )
                listings = list(SAMPLE_LISTINGS)
                notice = self.t["sampleDataUnavailable"]

        if not self._load_guard.is_current(token):
            logger.debug("Discarding stale listing load", extra={"generation": token})
            return None

        self.listings = listings
        self.notification = notice
        self.loading = False
        self.current_page = 1

        logger.info(
            f"Loaded {len(listings)} listings",
            extra={"listings": len(listings), "sample_data": notice is not None},
        )
        return self.listings

    async def locate(self) -> Coords | None:
        """Resolve the user location; absence is recorded, not raised."""
        token = self._location_guard.begin()
        self.location_state = LocationState(loading=True)

        try:
            coords = await self.location_provider.current_location()
            state = LocationState(loading=False, location=coords)
        except LocationUnavailableError as e:
            logger.info(f"Location unavailable: {e}")
            state = LocationState(loading=False, error=f"Error: {e}")

        if self._location_guard.is_current(token):
            self.location_state = state
        return self.location_state.location

    def set_location(self, coords: Coords | None) -> None:
        """Record a position obtained elsewhere; supersedes pending lookups."""
        self._location_guard.invalidate()
        if coords is None:
            self.location_state = LocationState(
                loading=False, error="Geolocation is not supported by your browser."
            )
        else:
            self.location_state = LocationState(loading=False, location=coords)

    # ==========================================================================
    # Filter bar
    # ==========================================================================

    def toggle_category(self, category_id: str) -> None:
        categories = set(self.filters.categories)
        categories ^= {category_id}
        self.filters = FilterState(
            categories=frozenset(categories),
            search_term=self.filters.search_term,
            near_me=self.filters.near_me,
        )
        self.current_page = 1

    def set_search_term(self, term: str) -> None:
        self.filters = FilterState(
            categories=self.filters.categories, search_term=term, near_me=self.filters.near_me
        )
        self.current_page = 1

    def toggle_near_me(self) -> str | None:
        """
        Toggle the "near me" filter.

        Returns:
            A prompt asking the user to enable location services when no
            location is known (the filter then has no effect), else None.
        """
        prompt = None if self.user_location is not None else self.t["enableLocation"]
        self.filters = FilterState(
            categories=self.filters.categories,
            search_term=self.filters.search_term,
            near_me=not self.filters.near_me,
        )
        self.current_page = 1
        return prompt

    def set_view_mode(self, mode: ViewMode) -> None:
        if mode not in VIEW_MODES:
            raise ValueError(f"Invalid view mode: {mode}. Must be one of: {VIEW_MODES}")
        if mode != self.view_mode:
            self.hovered_id = None
            self.view_mode = mode

    def set_page(self, page: int) -> None:
        self.current_page = self.current_page_listings(page).page

    def hover(self, listing_id: int | None) -> None:
        self.hovered_id = listing_id

    # ==========================================================================
    # Derived views
    # ==========================================================================

    def results(self) -> list[Listing] | list[NearbyListing[Listing]]:
        """Filtered listings; NearbyListings (nearest first) while "near me" applies."""
        return apply_filters(
            self.listings,
            self.filters,
            user_location=self.user_location,
            max_distance_km=self.config.proximity.max_distance_km,
            radius_km=self.config.proximity.earth_radius_km,
        )

    def filtered_listings(self) -> list[Listing]:
        return [r.listing if isinstance(r, NearbyListing) else r for r in self.results()]

    def current_page_listings(self, page: int | None = None) -> Page[Listing]:
        return paginate(
            self.filtered_listings(),
            self.current_page if page is None else page,
            per_page=self.config.listings.per_page,
        )

    def visible_listings(self) -> list[Listing]:
        """What the list panel shows: one page in list mode, everything in split mode."""
        if self.view_mode == "list":
            return self.current_page_listings().items
        if self.view_mode == "split":
            return self.filtered_listings()
        return []

    def map_points(self) -> list[MapPoint]:
        """Clustered markers for the filtered listings (none while loading)."""
        if self.loading:
            return []
        return cluster_listings(
            self.filtered_listings(), self.bounds, radius=self.config.map.cluster_radius
        )
