"""
Local Greece - Admin review queue

Submitted listings stay unapproved until an admin approves them. Rejecting a
listing deletes it.

Usage:
    queue = ReviewQueue(client.with_access_token(token), user)
    for listing in queue.pending(category="2", sort_by="oldest"):
        queue.approve(listing.id)
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Literal

from local_greece.backend.auth import User, require_admin
from local_greece.backend.client import DirectoryClient
from local_greece.datasets.listings.models import Listing

logger = logging.getLogger(__name__)

SortOrder = Literal["newest", "oldest"]

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def _created(listing: Listing) -> datetime:
    created = listing.created_at
    if created is None:
        return _EPOCH
    return created if created.tzinfo else created.replace(tzinfo=UTC)


class ReviewQueue:
    """Pending listings, visible to admins only."""

    def __init__(self, client: DirectoryClient, user: User | None):
        self.user = require_admin(user)
        self.client = client

    def pending(self, category: str = "all", sort_by: SortOrder = "newest") -> list[Listing]:
        """
        Pending listings, optionally for one category.

        Listings without a creation date sort as if created at the epoch.
        """
        listings = [Listing.from_record(r) for r in self.client.fetch_pending_listings()]
        if category != "all":
            listings = [listing for listing in listings if listing.category_id == category]
        listings.sort(key=_created, reverse=sort_by == "newest")
        return listings

    def approve(self, listing_id: int) -> None:
        self.client.approve_listing(listing_id)
        logger.info(
            f"Listing {listing_id} approved",
            extra={"listing_id": listing_id, "admin": self.user.id},
        )

    def reject(self, listing_id: int) -> None:
        """Reject and permanently delete a listing."""
        self.client.delete_listing(listing_id)
        logger.info(
            f"Listing {listing_id} rejected",
            extra={"listing_id": listing_id, "admin": self.user.id},
        )
