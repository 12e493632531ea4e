"""
Unit tests for DiscoveryController.
"""

import asyncio
import threading
from unittest.mock import MagicMock

import pytest

from local_greece.datasets.listings.sample import SAMPLE_LISTINGS
from local_greece.discovery.controller import DiscoveryController
from local_greece.discovery.location import StaticLocationProvider
from local_greece.geo.bounds import Coords
from local_greece.geo.clustering import Cluster
from local_greece.geo.proximity import NearbyListing
from local_greece.shared.errors import BackendError
from local_greece.shared.i18n import TRANSLATIONS

ATHENS = Coords(37.9838, 23.7275)


class SlowLocationProvider:
    """Resolves only once released."""

    def __init__(self, coords):
        self.coords = coords
        self.release = asyncio.Event()

    async def current_location(self):
        await self.release.wait()
        return self.coords


@pytest.fixture
def mock_client(listing_records):
    client = MagicMock()
    client.listings_table = "listings"
    client.select.return_value = listing_records
    return client


@pytest.fixture
def loaded_controller(test_config):
    controller = DiscoveryController(test_config)
    asyncio.run(controller.load_listings())
    return controller


class TestLoadListings:
    """Tests for loading listings from the backend."""

    def test_initial_state(self, test_config):
        controller = DiscoveryController(test_config)

        assert controller.loading
        assert controller.listings == []
        assert controller.map_points() == []

    def test_loads_from_backend(self, test_config, mock_client):
        controller = DiscoveryController(test_config, client=mock_client)

        listings = asyncio.run(controller.load_listings())

        assert [listing.id for listing in listings] == [1, 2, 3]
        assert not controller.loading
        assert controller.notification is None

    def test_not_configured_uses_sample_data(self, test_config):
        controller = DiscoveryController(test_config)

        asyncio.run(controller.load_listings())

        assert controller.listings == list(SAMPLE_LISTINGS)
        assert controller.notification == TRANSLATIONS["en"]["sampleDataNotConfigured"]

    def test_backend_error_uses_sample_data(self, test_config, mock_client):
        mock_client.select.side_effect = BackendError("HTTP 500", 500)
        controller = DiscoveryController(test_config, client=mock_client)

        asyncio.run(controller.load_listings())

        assert controller.listings == list(SAMPLE_LISTINGS)
        assert controller.notification == TRANSLATIONS["en"]["sampleDataUnavailable"]
        assert not controller.loading

    def test_superseded_load_returns_newest(self, test_config, mock_client, make_listing):
        controller = DiscoveryController(test_config, client=mock_client)
        old, new = make_listing(1), make_listing(2)
        first_started = threading.Event()
        release = threading.Event()
        calls = []

        def fetch():
            calls.append(len(calls))
            if len(calls) == 1:
                first_started.set()
                release.wait(5)
                return [old]
            return [new]

        controller._fetch_listings = fetch

        async def scenario():
            first = asyncio.create_task(controller.load_listings())
            await asyncio.to_thread(first_started.wait, 5)
            second = await controller.load_listings()
            release.set()
            return await first, second

        first_result, second_result = asyncio.run(scenario())

        assert first_result == [new]
        assert second_result == [new]
        assert controller.listings == [new]
        assert not controller.loading

    def test_superseded_first_load_waits_for_newest(self, test_config, mock_client, make_listing):
        controller = DiscoveryController(test_config, client=mock_client)
        first_started = threading.Event()
        second_started = threading.Event()
        release_first = threading.Event()
        release_second = threading.Event()
        calls = []

        def fetch():
            calls.append(len(calls))
            if len(calls) == 1:
                first_started.set()
                release_first.wait(5)
                return [make_listing(1)]
            second_started.set()
            release_second.wait(5)
            return [make_listing(2)]

        controller._fetch_listings = fetch

        async def scenario():
            first = asyncio.create_task(controller.load_listings())
            await asyncio.to_thread(first_started.wait, 5)
            second = asyncio.create_task(controller.load_listings())
            await asyncio.to_thread(second_started.wait, 5)
            release_first.set()
            await asyncio.sleep(0.05)
            assert not first.done()
            release_second.set()
            return await first, await second

        first_result, second_result = asyncio.run(scenario())

        assert [listing.id for listing in first_result] == [2]
        assert [listing.id for listing in second_result] == [2]


class TestLocate:
    def test_locate(self, test_config):
        controller = DiscoveryController(
            test_config, location_provider=StaticLocationProvider(ATHENS)
        )

        assert asyncio.run(controller.locate()) == ATHENS
        assert controller.location_state.error is None
        assert not controller.location_state.loading

    def test_locate_unavailable(self, test_config):
        controller = DiscoveryController(
            test_config,
            location_provider=StaticLocationProvider(reason="User denied Geolocation"),
        )

        assert asyncio.run(controller.locate()) is None
        assert controller.location_state.error == "Error: User denied Geolocation"
        assert not controller.location_state.loading

    def test_stale_location_is_discarded(self, test_config):
        provider = SlowLocationProvider(Coords(40.6401, 22.9444))
        controller = DiscoveryController(test_config, location_provider=provider)

        async def scenario():
            pending = asyncio.create_task(controller.locate())
            await asyncio.sleep(0)
            controller.set_location(ATHENS)
            provider.release.set()
            await pending

        asyncio.run(scenario())

        assert controller.user_location == ATHENS


class TestFilterBar:
    """Tests for filter bar interactions."""

    def test_toggle_category(self, loaded_controller):
        loaded_controller.toggle_category("4")

        assert {listing.id for listing in loaded_controller.filtered_listings()} == {5, 7}

        loaded_controller.toggle_category("4")

        assert len(loaded_controller.filtered_listings()) == len(SAMPLE_LISTINGS)

    def test_search(self, loaded_controller):
        loaded_controller.set_search_term("santorini")

        assert [listing.id for listing in loaded_controller.filtered_listings()] == [7]

    def test_filter_changes_reset_page(self, loaded_controller):
        loaded_controller.current_page = 2

        loaded_controller.set_search_term("a")

        assert loaded_controller.current_page == 1

    def test_near_me_without_location_prompts(self, loaded_controller):
        prompt = loaded_controller.toggle_near_me()

        assert prompt == TRANSLATIONS["en"]["enableLocation"]
        assert loaded_controller.filters.near_me
        assert len(loaded_controller.filtered_listings()) == len(SAMPLE_LISTINGS)

    def test_near_me_with_location(self, loaded_controller):
        loaded_controller.set_location(ATHENS)

        assert loaded_controller.toggle_near_me() is None

        results = loaded_controller.results()
        assert all(isinstance(item, NearbyListing) for item in results)
        assert [listing.id for listing in loaded_controller.filtered_listings()][0] == 3

    def test_configured_earth_radius_is_used(self, test_config):
        proximity = test_config.proximity.model_copy(update={"earth_radius_km": 1.0})
        config = test_config.model_copy(update={"proximity": proximity})
        controller = DiscoveryController(config)
        asyncio.run(controller.load_listings())
        controller.set_location(ATHENS)
        controller.toggle_near_me()

        ids = [listing.id for listing in controller.filtered_listings()]

        assert 4 in ids
        assert len(ids) == len(SAMPLE_LISTINGS)

    def test_prompt_follows_language(self, loaded_controller):
        loaded_controller.set_language("gr")

        assert loaded_controller.toggle_near_me() == TRANSLATIONS["gr"]["enableLocation"]

    def test_unknown_language(self, loaded_controller):
        with pytest.raises(ValueError):
            loaded_controller.set_language("de")


class TestViews:
    """Tests for derived views."""

    def test_view_mode_change_clears_hover(self, loaded_controller):
        loaded_controller.hover(3)

        loaded_controller.set_view_mode("map")

        assert loaded_controller.hovered_id is None

    def test_same_view_mode_keeps_hover(self, loaded_controller):
        loaded_controller.hover(3)

        loaded_controller.set_view_mode("list")

        assert loaded_controller.hovered_id == 3

    def test_invalid_view_mode(self, loaded_controller):
        with pytest.raises(ValueError):
            loaded_controller.set_view_mode("grid")

    def test_visible_listings(self, loaded_controller):
        assert len(loaded_controller.visible_listings()) == len(SAMPLE_LISTINGS)

        loaded_controller.set_view_mode("map")
        assert loaded_controller.visible_listings() == []

        loaded_controller.set_view_mode("split")
        assert loaded_controller.visible_listings() == loaded_controller.filtered_listings()

    def test_pagination(self, test_config, make_listing):
        controller = DiscoveryController(test_config)
        controller.listings = [make_listing(i) for i in range(1, 21)]
        controller.loading = False

        controller.set_page(3)

        page = controller.current_page_listings()
        assert page.page == 3
        assert [listing.id for listing in page.items] == [19, 20]

        controller.set_page(99)
        assert controller.current_page == 3

    def test_map_points(self, loaded_controller):
        points = loaded_controller.map_points()

        clusters = [point for point in points if isinstance(point, Cluster)]
        assert {cluster.listing_ids for cluster in clusters} == {
            frozenset({1, 2, 3}),
            frozenset({5, 6}),
        }
        assert [point.kind for point in points] == [
            "cluster",
            "cluster",
            "listing",
            "listing",
            "listing",
        ]

    def test_map_points_follow_filters(self, loaded_controller):
        loaded_controller.toggle_category("1")

        points = loaded_controller.map_points()

        assert [point.kind for point in points] == ["listing", "listing"]
