"""
Local Greece - Static categories and translations

The directory is bilingual. Every user-facing string lives in TRANSLATIONS,
keyed by language code, and every category carries both names.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Language = Literal["en", "gr"]

LANGUAGES: tuple[Language, ...] = ("en", "gr")


@dataclass(frozen=True)
class Category:
    """A listing category with names in both languages."""

    id: str
    name_en: str
    name_gr: str
    icon: str

    def name(self, language: Language) -> str:
        return self.name_en if language == "en" else self.name_gr


CATEGORIES: tuple[Category, ...] = (
    Category(id="1", name_en="Wellness & Beauty", name_gr="Ευεξία & Ομορφιά", icon="Wellness"),
    Category(
        id="2", name_en="Workshops & Classes", name_gr="Εργαστήρια & Μαθήματα", icon="Workshop"
    ),
    Category(
        id="3", name_en="Cultural Experiences", name_gr="Πολιτιστικές Εμπειρίες", icon="Culture"
    ),
    Category(
        id="4", name_en="Outdoor Adventures", name_gr="Υπαίθριες Περιπέτειες", icon="Adventure"
    ),
)

CATEGORY_IDS = frozenset(c.id for c in CATEGORIES)

TRANSLATIONS: dict[str, dict[str, str]] = {
    "en": {
        "headerTitle": "Local Greece",
        "searchPlaceholder": "Search for experiences, workshops, tours...",
        "allCategories": "Categories",
        "nearMe": "Near Me",
        "list": "List",
        "map": "Map",
        "split": "Split",
        "noListings": "No listings found matching your criteria.",
        "call": "Call",
        "whatsapp": "WhatsApp",
        "email": "Email",
        "directions": "Get Directions",
        "listingsInArea": "Listings in this area",
        "defaultView": "Default",
        "satellite": "Satellite",
        "enableLocation": "Please enable location services to use this feature.",
        "sampleDataNotConfigured": (
            "The directory backend is not configured. Displaying sample data."
        ),
        "sampleDataUnavailable": "Could not connect to the database. Displaying sample data.",
    },
    "gr": {
        "headerTitle": "Ελλάδα Τοπικά",
        "searchPlaceholder": "Αναζήτηση για εμπειρίες, εργαστήρια, περιηγήσεις...",
        "allCategories": "Κατηγορίες",
        "nearMe": "Κοντά μου",
        "list": "Λίστα",
        "map": "Χάρτης",
        "split": "Διαίρεση",
        "noListings": "Δεν βρέθηκαν καταχωρήσεις που να ταιριάζουν με τα κριτήριά σας.",
        "call": "Κλήση",
        "whatsapp": "WhatsApp",
        "email": "Email",
        "directions": "Λήψη οδηγιών",
        "listingsInArea": "Καταχωρήσεις σε αυτήν την περιοχή",
        "defaultView": "Προεπιλογή",
        "satellite": "Δορυφόρος",
        "enableLocation": "Ενεργοποιήστε τις υπηρεσίες τοποθεσίας για αυτή τη λειτουργία.",
        "sampleDataNotConfigured": (
            "Ο κατάλογος δεν έχει ρυθμιστεί. Εμφανίζονται δείγματα δεδομένων."
        ),
        "sampleDataUnavailable": (
            "Δεν ήταν δυνατή η σύνδεση με τη βάση δεδομένων. Εμφανίζονται δείγματα δεδομένων."
        ),
    },
}


def translations_for(language: str) -> dict[str, str]:
    """Get the translation table for a language code."""
    if language not in TRANSLATIONS:
        raise ValueError(f"Unsupported language: {language}. Must be one of: {LANGUAGES}")
    return TRANSLATIONS[language]


def get_category(category_id: str) -> Category | None:
    """Look up a static category by id."""
    return next((c for c in CATEGORIES if c.id == category_id), None)
