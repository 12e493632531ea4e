"""
Unit tests for business listing submissions.
"""

import math
from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from local_greece.backend.auth import User
from local_greece.backend.submissions import ListingSubmission, ListingSubmissions
from local_greece.datasets.listings.models import Contact, Listing
from local_greece.shared.errors import NotFoundError, PermissionDeniedError

OWNER = User(id="biz-1", metadata={"role": "business"})


@pytest.fixture
def form_values():
    return {
        "title_en": "Olive Oil Workshop",
        "title_gr": "Εργαστήρι Ελαιολάδου",
        "description_en": "Learn how olive oil is made.",
        "description_gr": "Μάθετε πώς φτιάχνεται το ελαιόλαδο.",
        "category_id": "2",
        "lat": 37.0,
        "lon": 22.1,
        "images": ["https://example.com/oil.jpg", "", "  "],
        "contact": {"phone": "+30 27210 00000"},
    }


class TestListingSubmission:
    """Validation of the submission form."""

    def test_valid(self, form_values):
        form = ListingSubmission(**form_values)

        assert form.images == ["https://example.com/oil.jpg"]
        assert form.contact.phone == "+30 27210 00000"

    def test_text_is_stripped(self, form_values):
        form_values["title_en"] = "  Olive Oil Workshop  "

        assert ListingSubmission(**form_values).title_en == "Olive Oil Workshop"

    def test_blank_title_rejected(self, form_values):
        form_values["title_gr"] = "   "

        with pytest.raises(ValidationError):
            ListingSubmission(**form_values)

    def test_unknown_category_rejected(self, form_values):
        form_values["category_id"] = "9"

        with pytest.raises(ValidationError):
            ListingSubmission(**form_values)

    @pytest.mark.parametrize(
        "lat,lon", [(91, 22.1), (37.0, -181), (math.nan, 22.1), (37.0, math.inf)]
    )
    def test_bad_coordinates_rejected(self, form_values, lat, lon):
        form_values.update(lat=lat, lon=lon)

        with pytest.raises(ValidationError):
            ListingSubmission(**form_values)

    def test_from_listing(self):
        listing = Listing(
            id=5,
            title_en="Hike",
            title_gr="Πεζοπορία",
            description_en="Gorge hike",
            description_gr="Πεζοπορία φαραγγιού",
            category_id="4",
            lat=35.3,
            lon=23.9,
            images=("a.jpg",),
            contact=Contact(phone="1", instagram="@hike"),
        )

        form = ListingSubmission.from_listing(listing)

        assert form.category_id == "4"
        assert form.images == ["a.jpg"]
        assert form.contact.instagram == "@hike"


class TestListingSubmissions:
    """Test cases for ListingSubmissions class."""

    @pytest.fixture
    def client(self):
        client = MagicMock()
        client.listings_table = "listings"
        client.select_one.return_value = {"id": 7, "user_id": OWNER.id}
        return client

    @pytest.fixture
    def submissions(self, client):
        return ListingSubmissions(client, OWNER)

    def test_requires_sign_in(self, client):
        with pytest.raises(PermissionDeniedError):
            ListingSubmissions(client, None)

    def test_mine(self, submissions, client):
        client.fetch_user_listings.return_value = [{"id": 7}, {"id": 3}]

        assert [listing.id for listing in submissions.mine()] == [7, 3]
        client.fetch_user_listings.assert_called_once_with("biz-1")

    def test_submit_is_pending_and_owned(self, submissions, client, form_values):
        client.create_listing.return_value = {"id": 10, **form_values, "approved": False}

        listing = submissions.submit(ListingSubmission(**form_values))

        payload = client.create_listing.call_args.args[0]
        assert payload["approved"] is False
        assert payload["user_id"] == "biz-1"
        assert listing.id == 10

    def test_update_resets_approval(self, submissions, client, form_values):
        client.update_listing.return_value = {"id": 7, "approved": False}

        submissions.update(7, ListingSubmission(**form_values))

        listing_id, payload = client.update_listing.call_args.args
        assert listing_id == 7
        assert payload["approved"] is False
        client.select_one.assert_called_once_with("listings", {"id": 7, "user_id": "biz-1"})

    def test_update_someone_elses_listing(self, submissions, client, form_values):
        client.select_one.side_effect = NotFoundError("no row", 404)

        with pytest.raises(NotFoundError):
            submissions.update(7, ListingSubmission(**form_values))

        client.update_listing.assert_not_called()

    def test_remove(self, submissions, client):
        submissions.remove(7)

        client.delete_listing.assert_called_once_with(7)
