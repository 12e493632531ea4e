"""
Local Greece - Listing Preprocessor

Cleans raw listing rows from the backend.

Transformations:
    - Id and coordinate type coercion
    - Missing text filled with empty strings
    - Placeholder image for listings without pictures
    - created_at parsing
    - Duplicate id removal

Usage:
    from local_greece.datasets.listings.preprocess import ListingPreprocessor

    preprocessor = ListingPreprocessor()
    result = preprocessor.run(raw_df)
    listings = preprocessor.get_listings()
"""

from __future__ import annotations

import logging

import pandas as pd

from local_greece.datasets.base import BasePreprocessor
from local_greece.datasets.listings.models import Listing, listings_from_frame
from local_greece.shared.config import Settings

logger = logging.getLogger(__name__)


class ListingPreprocessor(BasePreprocessor):
    """Preprocessor for directory listings."""

    # Older rows used "lng"/"longitude"; the directory uses "lon"
    COLUMN_MAPPINGS = {
        "lng": "lon",
        "longitude": "lon",
        "latitude": "lat",
    }

    DTYPE_MAPPINGS = {
        "id": "int",
        "created_at": "datetime",
        "approved": "bool",
    }

    REQUIRED_COLUMNS = [
        "id",
        "title_en",
        "title_gr",
        "description_en",
        "description_gr",
        "category_id",
        "lat",
        "lon",
        "images",
    ]

    TEXT_COLUMNS = ["title_en", "title_gr", "description_en", "description_gr", "category_id"]

    def __init__(self, config: Settings | None = None):
        """Initialize listing preprocessor."""
        super().__init__(config)

    def get_dataset_name(self) -> str:
        """Return dataset name."""
        return "listings"

    def get_required_columns(self) -> list[str]:
        """Return required output columns."""
        return self.REQUIRED_COLUMNS

    def get_column_mappings(self) -> dict[str, str]:
        """Return column name mappings."""
        return self.COLUMN_MAPPINGS

    def get_dtype_mappings(self) -> dict[str, str]:
        """Return data type mappings."""
        return self.DTYPE_MAPPINGS

    def transform(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Apply listing-specific transformations.

        Args:
            df: Raw DataFrame with renamed columns

        Returns:
            Cleaned DataFrame
        """
        if df.empty:
            return pd.DataFrame(columns=self.REQUIRED_COLUMNS)

        df = self._drop_missing_ids(df)
        df = self.standardize_coordinates(df, lat_col="lat", lon_col="lon")
        df = self._fill_text(df)
        df = self._fill_images(df)
        df = self.drop_duplicates(df, subset=["id"], keep="last")

        return df.reset_index(drop=True)

    def _drop_missing_ids(self, df: pd.DataFrame) -> pd.DataFrame:
        """Rows without an id cannot be linked to or clustered."""
        if "id" not in df.columns:
            raise ValueError("Missing required columns: {'id'}")
        missing = df["id"].isna()
        if missing.any():
            self.log_dropped_rows("missing_id", int(missing.sum()))
            df = df[~missing].copy()
        df["id"] = df["id"].astype("int64")
        return df

    def _fill_text(self, df: pd.DataFrame) -> pd.DataFrame:
        """Missing titles/descriptions become empty strings."""
        for col in self.TEXT_COLUMNS:
            df = self.fill_missing(df, col, "")
            df[col] = df[col].astype(str)
        return df

    def _fill_images(self, df: pd.DataFrame) -> pd.DataFrame:
        """Give listings without images a deterministic placeholder."""
        template = self.config.listings.placeholder_image
        if "images" not in df.columns:
            df["images"] = None

        def _images(row: pd.Series) -> list[str]:
            images = row["images"]
            if isinstance(images, (list, tuple)):
                images = [img for img in images if img]
                if images:
                    return list(images)
            return [template.format(id=row["id"])]

        df["images"] = df.apply(_images, axis=1)
        self.log_transformation("fill_placeholder_images")
        return df

    def get_listings(self) -> list[Listing]:
        """Get the most recently processed data as Listing records."""
        df = self.get_data()
        if df is None or df.empty:
            return []
        return listings_from_frame(df)
