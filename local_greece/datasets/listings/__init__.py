from local_greece.datasets.listings.models import Contact, Listing, listings_from_frame
from local_greece.datasets.listings.sample import SAMPLE_LISTINGS

__all__ = [
    "Contact",
    "Listing",
    "listings_from_frame",
    "SAMPLE_LISTINGS",
]
