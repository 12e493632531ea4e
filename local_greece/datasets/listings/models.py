"""
Local Greece - Listing records

Listings are owned by the hosted backend; here they are immutable values
built from backend rows (dicts) or from a preprocessed DataFrame.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import pandas as pd

from local_greece.shared.i18n import Language


@dataclass(frozen=True)
class Contact:
    """Contact details shown on a listing card."""

    phone: str = ""
    whatsapp: str = ""
    email: str = ""
    facebook: str | None = None
    instagram: str | None = None
    twitter: str | None = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any] | None) -> Contact | None:
        if not record:
            return None
        return cls(
            phone=record.get("phone") or "",
            whatsapp=record.get("whatsapp") or "",
            email=record.get("email") or "",
            facebook=record.get("facebook") or None,
            instagram=record.get("instagram") or None,
            twitter=record.get("twitter") or None,
        )

    def to_record(self) -> dict[str, Any]:
        record: dict[str, Any] = {
            "phone": self.phone,
            "whatsapp": self.whatsapp,
            "email": self.email,
        }
        for key in ("facebook", "instagram", "twitter"):
            value = getattr(self, key)
            if value:
                record[key] = value
        return record


@dataclass(frozen=True)
class Listing:
    """A business or experience shown in the directory."""

    id: int
    title_en: str
    title_gr: str
    description_en: str
    description_gr: str
    category_id: str
    lat: float | None = None
    lon: float | None = None
    approved: bool = False
    images: tuple[str, ...] = field(default_factory=tuple)
    contact: Contact | None = None
    user_id: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Listing:
        """
        Build a Listing from a backend row.

        Coordinates are coerced to float where possible and left as None
        otherwise; the geo pipeline decides what is placeable.
        """
        return cls(
            id=int(record["id"]),
            title_en=_text(record.get("title_en")),
            title_gr=_text(record.get("title_gr")),
            description_en=_text(record.get("description_en")),
            description_gr=_text(record.get("description_gr")),
            category_id=str(record.get("category_id") or ""),
            lat=_coordinate(record.get("lat")),
            lon=_coordinate(record.get("lon")),
            approved=bool(record.get("approved", False)),
            images=tuple(record.get("images") or ()),
            contact=Contact.from_record(record.get("contact")),
            user_id=record.get("user_id") or None,
            created_at=_timestamp(record.get("created_at")),
        )

    def to_record(self) -> dict[str, Any]:
        """Serialize back to a backend/JSON row."""
        return {
            "id": self.id,
            "title_en": self.title_en,
            "title_gr": self.title_gr,
            "description_en": self.description_en,
            "description_gr": self.description_gr,
            "category_id": self.category_id,
            "lat": self.lat,
            "lon": self.lon,
            "approved": self.approved,
            "images": list(self.images),
            "contact": self.contact.to_record() if self.contact else None,
            "user_id": self.user_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def title(self, language: Language) -> str:
        return self.title_en if language == "en" else self.title_gr

    def description(self, language: Language) -> str:
        return self.description_en if language == "en" else self.description_gr


def _text(value: Any) -> str:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return ""
    return str(value)


def _coordinate(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _timestamp(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return None if pd.isna(value) else value
    parsed = pd.to_datetime(value, errors="coerce", utc=True)
    return None if pd.isna(parsed) else parsed.to_pydatetime()


def listings_from_frame(df: pd.DataFrame) -> list[Listing]:
    """Convert a preprocessed listings DataFrame into Listing records."""
    # NaN -> None so optional fields come through as missing
    records = df.astype(object).where(df.notna(), None).to_dict(orient="records")
    return [Listing.from_record(record) for record in records]
