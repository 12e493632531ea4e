"""
Unit tests for ListingIngester.
"""

from unittest.mock import MagicMock

import pandas as pd
import pytest

from local_greece.datasets.listings.ingest import ListingIngester, fetch_listing_frame
from local_greece.shared.errors import BackendError


@pytest.fixture
def mock_client(listing_records):
    client = MagicMock()
    client.listings_table = "listings"
    client.select.return_value = listing_records
    return client


class TestListingIngester:
    """Test cases for ListingIngester class."""

    @pytest.fixture
    def ingester(self, mock_client, test_config):
        return ListingIngester(mock_client, test_config)

    def test_get_dataset_name(self, ingester):
        assert ingester.get_dataset_name() == "listings"

    def test_get_primary_key(self, ingester):
        assert ingester.get_primary_key() == "id"

    def test_fetch_data_approved_only(self, ingester, mock_client):
        df = ingester.fetch_data()

        assert isinstance(df, pd.DataFrame)
        assert len(df) == 3
        mock_client.select.assert_called_once_with("listings", filters={"approved": True})

    def test_fetch_data_pending_only(self, mock_client, test_config):
        ingester = ListingIngester(mock_client, test_config, approved_only=False, pending_only=True)

        ingester.fetch_data()

        assert mock_client.select.call_args.kwargs["filters"] == {"approved": False}

    def test_fetch_data_all_rows(self, mock_client, test_config):
        ingester = ListingIngester(mock_client, test_config, approved_only=False)

        ingester.fetch_data()

        assert mock_client.select.call_args.kwargs["filters"] == {}

    def test_fetch_data_empty(self, ingester, mock_client):
        mock_client.select.return_value = []

        df = ingester.fetch_data()

        assert df.empty

    def test_run_success(self, ingester):
        result = ingester.run()

        assert result.success
        assert result.rows_fetched == 3
        assert result.metadata["primary_key"] == "id"
        assert len(ingester.get_data()) == 3

    def test_run_fetches_old_approved_listings(self, ingester, mock_client, listing_records):
        old = dict(listing_records[0], id=10, created_at="2015-01-01T00:00:00+00:00")
        mock_client.select.return_value = [old, *listing_records]

        result = ingester.run()

        assert result.rows_fetched == 4
        assert mock_client.select.call_args.args == ("listings",)
        assert mock_client.select.call_args.kwargs == {"filters": {"approved": True}}
        assert 10 in list(ingester.get_data()["id"])

    def test_run_failure_is_reported(self, ingester, mock_client):
        mock_client.select.side_effect = BackendError("boom", status_code=500)

        result = ingester.run()

        assert not result.success
        assert "boom" in result.error_message
        assert ingester.get_data() is None

    def test_result_to_dict(self, ingester):
        result = ingester.run().to_dict()

        assert result["dataset"] == "listings"
        assert result["rows_fetched"] == 3
        assert result["success"] is True


class TestFetchListingFrame:
    def test_returns_frame(self, mock_client, test_config):
        df = fetch_listing_frame(mock_client, test_config)

        assert list(df["id"]) == [1, 2, 3]

    def test_raises_backend_error(self, mock_client, test_config):
        mock_client.select.side_effect = BackendError("unreachable")

        with pytest.raises(BackendError, match="unreachable"):
            fetch_listing_frame(mock_client, test_config)
