"""
Local Greece - Listing Ingester

Fetches listing rows from the hosted backend into a DataFrame.

Usage:
    from local_greece.datasets.listings.ingest import ListingIngester

    ingester = ListingIngester(client)
    result = ingester.run()
    df = ingester.get_data()
"""

from __future__ import annotations

import logging
from typing import Any

import pandas as pd

from local_greece.backend.client import DirectoryClient
from local_greece.datasets.base import BaseIngester
from local_greece.shared.config import Settings
from local_greece.shared.errors import BackendError

logger = logging.getLogger(__name__)


class ListingIngester(BaseIngester):
    """
    Ingester for directory listings.

    By default only approved listings are fetched, which is what the public
    discovery views show. Admin review uses approved_only=False with
    pending_only=True instead.
    """

    def __init__(
        self,
        client: DirectoryClient,
        config: Settings | None = None,
        approved_only: bool = True,
        pending_only: bool = False,
    ):
        """Initialize listing ingester around an existing backend handle."""
        super().__init__(config)
        self.client = client
        self.approved_only = approved_only
        self.pending_only = pending_only

    def get_dataset_name(self) -> str:
        """Return dataset name."""
        return "listings"

    def get_primary_key(self) -> str:
        """Return the primary key field."""
        return "id"

    def fetch_data(self) -> pd.DataFrame:
        """
        Fetch every listing row matching the approval filter.

        Returns:
            DataFrame with one row per listing
        """
        filters: dict[str, Any] = {}
        if self.pending_only:
            filters["approved"] = False
        elif self.approved_only:
            filters["approved"] = True

        records = self.client.select(self.client.listings_table, filters=filters)

        logger.info(
            f"Fetched {len(records)} listing records",
            extra={"rows": len(records), "filters": filters},
        )

        if not records:
            return pd.DataFrame()

        return pd.DataFrame(records)


def fetch_listing_frame(
    client: DirectoryClient,
    config: Settings | None = None,
    approved_only: bool = True,
) -> pd.DataFrame:
    """
    Convenience function: fetch listings, raising on failure.

    Raises:
        BackendError: If the backend request failed.
    """
    ingester = ListingIngester(client, config, approved_only=approved_only)
    result = ingester.run()
    if not result.success:
        raise BackendError(result.error_message or "Listing ingestion failed")
    data = ingester.get_data()
    return data if data is not None else pd.DataFrame()
