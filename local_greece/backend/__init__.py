"""
Local Greece - Backend access

Hosted backend (Supabase) client plus the business-user and admin
workflows built on it.
"""

from local_greece.backend.auth import User, current_user, require_admin, require_user
from local_greece.backend.client import DirectoryClient
from local_greece.backend.review import ReviewQueue
from local_greece.backend.submissions import ListingSubmission, ListingSubmissions

__all__ = [
    "DirectoryClient",
    "User",
    "current_user",
    "require_admin",
    "require_user",
    "ReviewQueue",
    "ListingSubmission",
    "ListingSubmissions",
]
