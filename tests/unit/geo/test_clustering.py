"""
Unit tests for map marker clustering.
"""

import math

import pytest

from local_greece.geo.bounds import GREECE_BOUNDS
from local_greece.geo.clustering import Cluster, ListingPoint, cluster_listings, map_position

# One plane unit along x in degrees of longitude for GREECE_BOUNDS
X_UNIT = (29.7 - 19.5) / 100


class TestClusterListings:
    """Tests for cluster_listings."""

    def test_empty_input(self):
        assert cluster_listings([], GREECE_BOUNDS) == []

    def test_single_listing_is_a_point(self, make_listing):
        listing = make_listing(1)

        result = cluster_listings([listing], GREECE_BOUNDS)

        assert result == [ListingPoint(listing=listing)]
        assert result[0].kind == "listing"

    def test_identical_coordinates_always_cluster(self, make_listing):
        a = make_listing(1, lat=37.0, lon=22.0)
        b = make_listing(2, lat=37.0, lon=22.0)

        result = cluster_listings([a, b], GREECE_BOUNDS)

        assert len(result) == 1
        assert isinstance(result[0], Cluster)
        assert result[0].listings == (a, b)

    def test_nearby_listings_cluster_with_mean_centre(self, make_listing):
        a = make_listing(1, lat=38.0, lon=23.7)
        b = make_listing(2, lat=38.01, lon=23.71)

        result = cluster_listings([a, b], GREECE_BOUNDS)

        assert len(result) == 1
        cluster = result[0]
        assert cluster.kind == "cluster"
        assert cluster.key == "cluster-1"
        assert cluster.count == 2
        assert cluster.lat == pytest.approx(38.005)
        assert cluster.lon == pytest.approx(23.705)

    def test_far_apart_listings_never_merge(self, make_listing):
        athens = make_listing(1, lat=37.9838, lon=23.7275)
        thessaloniki = make_listing(2, lat=40.6401, lon=22.9444)

        result = cluster_listings([athens, thessaloniki], GREECE_BOUNDS)

        assert result == [ListingPoint(listing=athens), ListingPoint(listing=thessaloniki)]

    def test_radius_threshold(self, make_listing):
        a = make_listing(1, lat=38.0, lon=20.0)
        b = make_listing(2, lat=38.0, lon=20.0 + 4 * X_UNIT)

        assert len(cluster_listings([a, b], GREECE_BOUNDS, radius=8.0)) == 1
        assert len(cluster_listings([a, b], GREECE_BOUNDS, radius=2.0)) == 2

    def test_zero_distance_does_not_meet_zero_radius(self, make_listing):
        a = make_listing(1, lat=37.0, lon=22.0)
        b = make_listing(2, lat=37.0, lon=22.0)

        assert len(cluster_listings([a, b], GREECE_BOUNDS, radius=0.0)) == 2

    def test_grouping_is_not_transitive(self, make_listing):
        a = make_listing(1, lat=38.0, lon=20.0)
        b = make_listing(2, lat=38.0, lon=20.0 + 5 * X_UNIT)
        c = make_listing(3, lat=38.0, lon=20.0 + 10 * X_UNIT)

        result = cluster_listings([a, b, c], GREECE_BOUNDS)

        assert len(result) == 2
        assert result[0].listing_ids == frozenset({1, 2})
        assert result[1] == ListingPoint(listing=c)

    def test_grouping_depends_on_input_order(self, make_listing):
        a = make_listing(1, lat=38.0, lon=20.0)
        b = make_listing(2, lat=38.0, lon=20.0 + 5 * X_UNIT)
        c = make_listing(3, lat=38.0, lon=20.0 + 10 * X_UNIT)

        result = cluster_listings([b, a, c], GREECE_BOUNDS)

        assert len(result) == 1
        assert result[0].listing_ids == frozenset({1, 2, 3})

    def test_each_listing_appears_exactly_once(self, make_listing):
        listings = [
            make_listing(1, lat=37.9838, lon=23.7275),
            make_listing(2, lat=37.9715, lon=23.7257),
            make_listing(3, lat=37.9755, lon=23.7348),
            make_listing(4, lat=40.6401, lon=22.9444),
            make_listing(5, lat=35.3387, lon=25.1442),
            make_listing(6, lat=35.3400, lon=25.1500),
        ]

        result = cluster_listings(listings, GREECE_BOUNDS)

        ids = []
        for point in result:
            if isinstance(point, Cluster):
                assert point.count >= 2
                ids.extend(listing.id for listing in point.listings)
            else:
                ids.append(point.listing.id)
        assert sorted(ids) == [1, 2, 3, 4, 5, 6]

    def test_clusters_come_before_singles(self, make_listing):
        single = make_listing(1, lat=40.6401, lon=22.9444)
        a = make_listing(2, lat=35.3387, lon=25.1442)
        b = make_listing(3, lat=35.3400, lon=25.1500)

        result = cluster_listings([single, a, b], GREECE_BOUNDS)

        assert [point.kind for point in result] == ["cluster", "listing"]

    def test_cluster_keys_are_unique(self, make_listing):
        listings = [
            make_listing(1, lat=37.98, lon=23.72),
            make_listing(2, lat=37.98, lon=23.72),
            make_listing(3, lat=35.34, lon=25.14),
            make_listing(4, lat=35.34, lon=25.14),
        ]

        result = cluster_listings(listings, GREECE_BOUNDS)

        assert [point.key for point in result] == ["cluster-1", "cluster-2"]

    def test_idempotent(self, make_listing):
        listings = [make_listing(i, lat=37.9 + i * 0.01, lon=23.7) for i in range(1, 6)]

        assert cluster_listings(listings, GREECE_BOUNDS) == cluster_listings(
            listings, GREECE_BOUNDS
        )

    @pytest.mark.parametrize(
        "lat,lon",
        [
            (math.nan, 23.7),
            (38.0, math.inf),
            (None, 23.7),
            (38.0, None),
            ("38.0", "23.7"),
        ],
    )
    def test_invalid_coordinates_are_skipped(self, make_listing, lat, lon):
        bad = make_listing(1, lat=lat, lon=lon)
        good = make_listing(2, lat=38.0, lon=23.7)

        result = cluster_listings([bad, good], GREECE_BOUNDS)

        assert result == [ListingPoint(listing=good)]

    def test_input_is_not_mutated(self, make_listing):
        listings = [make_listing(1), make_listing(2)]
        snapshot = list(listings)

        cluster_listings(listings, GREECE_BOUNDS)

        assert listings == snapshot


class TestMapPosition:
    def test_cluster_positioned_at_centre(self, make_listing):
        a = make_listing(1, lat=38.0, lon=23.7)
        b = make_listing(2, lat=38.01, lon=23.71)
        (cluster,) = cluster_listings([a, b], GREECE_BOUNDS)

        position = map_position(cluster, GREECE_BOUNDS)

        assert position == GREECE_BOUNDS.project(cluster.lat, cluster.lon)

    def test_single_positioned_at_listing(self, make_listing):
        listing = make_listing(1, lat=41.8, lon=19.5)

        position = map_position(ListingPoint(listing=listing), GREECE_BOUNDS)

        assert position.x == pytest.approx(0)
        assert position.y == pytest.approx(0)
