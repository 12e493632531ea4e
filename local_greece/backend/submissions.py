"""
Local Greece - Business listing submissions

Business users create and edit their own listings. Every create or edit
resets approval, so changes go back through admin review.

Usage:
    submissions = ListingSubmissions(client.with_access_token(token), user)
    form = ListingSubmission(title_en="...", ..., lat=37.97, lon=23.72)
    submissions.submit(form)
"""

from __future__ import annotations

import logging
import math
from typing import Any

from pydantic import BaseModel, Field, field_validator

from local_greece.backend.auth import User, require_user
from local_greece.backend.client import DirectoryClient
from local_greece.datasets.listings.models import Listing
from local_greece.shared.i18n import CATEGORY_IDS

logger = logging.getLogger(__name__)


class ContactForm(BaseModel):
    """Contact block of a submission."""

    phone: str = ""
    whatsapp: str = ""
    email: str = ""
    facebook: str | None = None
    instagram: str | None = None
    twitter: str | None = None


class ListingSubmission(BaseModel):
    """A listing as entered by a business user."""

    title_en: str = Field(min_length=1)
    title_gr: str = Field(min_length=1)
    description_en: str = Field(min_length=1)
    description_gr: str = Field(min_length=1)
    category_id: str
    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)
    images: list[str] = Field(default_factory=list)
    contact: ContactForm = Field(default_factory=ContactForm)

    @field_validator("title_en", "title_gr", "description_en", "description_gr")
    @classmethod
    def strip_text(cls, v: str) -> str:
        """Reject whitespace-only text."""
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("category_id")
    @classmethod
    def validate_category(cls, v: str) -> str:
        """Only the static categories are accepted."""
        if v not in CATEGORY_IDS:
            raise ValueError(f"Unknown category: {v}. Must be one of: {sorted(CATEGORY_IDS)}")
        return v

    @field_validator("lat", "lon")
    @classmethod
    def validate_finite(cls, v: float) -> float:
        """Coordinates must be finite so the listing can be placed on the map."""
        if not math.isfinite(v):
            raise ValueError("must be a finite number")
        return v

    @field_validator("images")
    @classmethod
    def drop_blank_images(cls, v: list[str]) -> list[str]:
        """The form always shows an empty image slot; ignore it."""
        return [url.strip() for url in v if url and url.strip()]

    @classmethod
    def from_listing(cls, listing: Listing) -> ListingSubmission:
        """Prefill an edit form from an existing listing."""
        contact = listing.contact.to_record() if listing.contact else {}
        return cls(
            title_en=listing.title_en,
            title_gr=listing.title_gr,
            description_en=listing.description_en,
            description_gr=listing.description_gr,
            category_id=listing.category_id,
            lat=listing.lat if listing.lat is not None else 0.0,
            lon=listing.lon if listing.lon is not None else 0.0,
            images=list(listing.images),
            contact=ContactForm(**contact),
        )


class ListingSubmissions:
    """A signed-in business user's own listings."""

    def __init__(self, client: DirectoryClient, user: User | None):
        self.user = require_user(user)
        self.client = client

    def _payload(self, form: ListingSubmission) -> dict[str, Any]:
        payload = form.model_dump()
        payload["user_id"] = self.user.id
        payload["approved"] = False
        return payload

    def mine(self) -> list[Listing]:
        """The user's listings, newest first."""
        return [Listing.from_record(r) for r in self.client.fetch_user_listings(self.user.id)]

    def get(self, listing_id: int) -> Listing:
        """
        One of the user's own listings.

        Raises:
            NotFoundError: If it does not exist or belongs to someone else.
        """
        record = self.client.select_one(
            self.client.listings_table, {"id": listing_id, "user_id": self.user.id}
        )
        return Listing.from_record(record)

    def submit(self, form: ListingSubmission) -> Listing | None:
        """Create a new listing pending review."""
        record = self.client.create_listing(self._payload(form))
        logger.info(
            "Listing submitted for review",
            extra={"user_id": self.user.id, "listing_id": record.get("id") if record else None},
        )
        return Listing.from_record(record) if record else None

    def update(self, listing_id: int, form: ListingSubmission) -> Listing | None:
        """
        Edit an owned listing; it goes back to pending review.

        Raises:
            NotFoundError: If the listing is not the user's.
        """
        self.get(listing_id)
        record = self.client.update_listing(listing_id, self._payload(form))
        logger.info(
            f"Listing {listing_id} updated and resubmitted for review",
            extra={"user_id": self.user.id, "listing_id": listing_id},
        )
        return Listing.from_record(record) if record else None

    def remove(self, listing_id: int) -> None:
        """
        Delete an owned listing.

        Raises:
            NotFoundError: If the listing is not the user's.
        """
        self.get(listing_id)
        self.client.delete_listing(listing_id)
        logger.info(
            f"Listing {listing_id} deleted by owner",
            extra={"user_id": self.user.id, "listing_id": listing_id},
        )
