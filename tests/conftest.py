"""
Local Greece - Pytest Configuration and Fixtures

Shared fixtures for all tests:
- Configuration fixtures
- Sample listings
- Mock fixtures for external services
"""

import os
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest

# Set test environment
os.environ["LG_ENVIRONMENT"] = "dev"

# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture
def project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def configs_dir(project_root: Path) -> Path:
    """Get the configs directory."""
    return project_root / "configs"


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def test_config() -> Any:
    """Get test configuration."""
    from local_greece.shared.config import get_config, reload_config

    # Ensure fresh config for tests
    reload_config("dev")
    return get_config("dev")


@pytest.fixture
def sample_coordinates() -> list[tuple[float, float]]:
    """Sample Greek coordinates for testing."""
    return [
        (37.9838, 23.7275),  # Athens
        (40.6401, 22.9444),  # Thessaloniki
        (35.3387, 25.1442),  # Heraklion
        (39.6243, 19.9217),  # Corfu
    ]


# =============================================================================
# Listing Fixtures
# =============================================================================


@pytest.fixture
def make_listing() -> Any:
    """Factory for Listing records with sensible defaults."""
    from local_greece.datasets.listings.models import Listing

    def _make(id: int, lat: Any = 38.0, lon: Any = 23.7, **overrides: Any) -> Listing:
        values: dict[str, Any] = {
            "title_en": f"Listing {id}",
            "title_gr": f"Καταχώρηση {id}",
            "description_en": "A place to visit",
            "description_gr": "Ένα μέρος για επίσκεψη",
            "category_id": "1",
            "approved": True,
        }
        values.update(overrides)
        return Listing(id=id, lat=lat, lon=lon, **values)

    return _make


@pytest.fixture
def listing_records() -> list[dict[str, Any]]:
    """Raw backend rows as returned by the REST API."""
    return [
        {
            "id": 1,
            "title_en": "Acropolis Museum Tours",
            "title_gr": "Ξεναγήσεις Μουσείου Ακρόπολης",
            "description_en": "Guided tours of the museum.",
            "description_gr": "Ξεναγήσεις στο μουσείο.",
            "category_id": "3",
            "lat": 37.9684,
            "lon": 23.7285,
            "approved": True,
            "images": ["https://example.com/1.jpg"],
            "contact": {"phone": "+30 210 000 0000", "whatsapp": "", "email": "a@example.com"},
            "user_id": "user-1",
            "created_at": "2024-03-01T10:00:00+00:00",
        },
        {
            "id": 2,
            "title_en": "Ladadika Taverna",
            "title_gr": "Ταβέρνα Λαδάδικα",
            "description_en": "Traditional food.",
            "description_gr": "Παραδοσιακό φαγητό.",
            "category_id": "2",
            "lat": "40.6355",
            "lng": "22.9386",
            "approved": True,
            "images": [],
            "contact": None,
            "user_id": "user-2",
            "created_at": "2024-03-02T10:00:00+00:00",
        },
        {
            "id": 3,
            "title_en": "Mobile Guide",
            "title_gr": "Κινητός Οδηγός",
            "description_en": None,
            "description_gr": None,
            "category_id": "3",
            "lat": None,
            "lon": None,
            "approved": True,
            "images": None,
            "contact": None,
            "user_id": "user-1",
            "created_at": None,
        },
    ]


# =============================================================================
# Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_session(mocker: Any) -> Any:
    """Mock requests session for the backend client."""
    session = mocker.MagicMock()
    response = mocker.MagicMock()
    response.status_code = 200
    response.content = b"[]"
    response.json.return_value = []
    session.request.return_value = response
    return session


@pytest.fixture
def mock_genai_client(mocker: Any) -> Any:
    """Mock Gemini client."""
    return mocker.MagicMock()


# =============================================================================
# Cleanup Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def cleanup_env() -> Generator[None, None, None]:
    """Clean up environment variables after each test."""
    original_env = os.environ.copy()
    yield
    # Restore original environment
    os.environ.clear()
    os.environ.update(original_env)
