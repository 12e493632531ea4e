"""
Local Greece - Sample listings

Shown when the backend is not configured or cannot be reached, so the
directory still has something to browse.
"""

from __future__ import annotations

from local_greece.datasets.listings.models import Contact, Listing

_PLACEHOLDER = "https://picsum.photos/seed/{id}/400/300"


def _sample(
    id: int,
    category_id: str,
    lat: float,
    lon: float,
    title_en: str,
    title_gr: str,
    description_en: str,
    description_gr: str,
    phone: str,
) -> Listing:
    return Listing(
        id=id,
        title_en=title_en,
        title_gr=title_gr,
        description_en=description_en,
        description_gr=description_gr,
        category_id=category_id,
        lat=lat,
        lon=lon,
        approved=True,
        images=(_PLACEHOLDER.format(id=id),),
        contact=Contact(phone=phone, whatsapp=phone, email=f"hello{id}@example.gr"),
    )


SAMPLE_LISTINGS: tuple[Listing, ...] = (
    _sample(
        1, "3", 37.9715, 23.7257,
        "Acropolis Sunset Walk", "Βόλτα στην Ακρόπολη το Ηλιοβασίλεμα",
        "Guided evening walk around the Acropolis slopes and Plaka.",
        "Ξενάγηση το σούρουπο γύρω από την Ακρόπολη και την Πλάκα.",
        "+30 210 000 0001",
    ),
    _sample(
        2, "2", 37.9784, 23.7311,
        "Monastiraki Pottery Workshop", "Εργαστήρι Κεραμικής στο Μοναστηράκι",
        "Shape and glaze your own Attic-style vase.",
        "Φτιάξτε και υαλώστε το δικό σας αγγείο αττικού ρυθμού.",
        "+30 210 000 0002",
    ),
    _sample(
        3, "1", 37.9838, 23.7275,
        "Athens Hammam Retreat", "Χαμάμ στην Αθήνα",
        "Traditional steam bath and massage in the city centre.",
        "Παραδοσιακό χαμάμ και μασάζ στο κέντρο της πόλης.",
        "+30 210 000 0003",
    ),
    _sample(
        4, "3", 40.6401, 22.9444,
        "Thessaloniki Food Tour", "Γαστρονομική Περιήγηση Θεσσαλονίκης",
        "Taste bougatsa, koulouri and meze at the Modiano market.",
        "Γευτείτε μπουγάτσα, κουλούρι και μεζέδες στη Μοδιάνο.",
        "+30 231 000 0004",
    ),
    _sample(
        5, "4", 35.3387, 25.1442,
        "Heraklion Sea Kayaking", "Θαλάσσιο Καγιάκ στο Ηράκλειο",
        "Paddle the Cretan coast to hidden coves.",
        "Κωπηλατήστε στις ακτές της Κρήτης ως κρυφούς κολπίσκους.",
        "+30 281 000 0005",
    ),
    _sample(
        6, "2", 35.3400, 25.1350,
        "Cretan Cooking Class", "Μάθημα Κρητικής Μαγειρικής",
        "Cook dakos and kalitsounia with a local family.",
        "Μαγειρέψτε ντάκο και καλιτσούνια με μια ντόπια οικογένεια.",
        "+30 281 000 0006",
    ),
    _sample(
        7, "4", 36.4618, 25.3753,
        "Santorini Caldera Hike", "Πεζοπορία στην Καλντέρα της Σαντορίνης",
        "Fira to Oia along the caldera rim.",
        "Από τα Φηρά στην Οία πάνω στο χείλος της καλντέρας.",
        "+30 228 600 0007",
    ),
    _sample(
        8, "1", 39.6243, 19.9217,
        "Corfu Olive Oil Spa", "Σπα Ελαιολάδου στην Κέρκυρα",
        "Treatments with cold-pressed Corfiot olive oil.",
        "Περιποιήσεις με ψυχρής έκθλιψης κερκυραϊκό ελαιόλαδο.",
        "+30 266 100 0008",
    ),
)
