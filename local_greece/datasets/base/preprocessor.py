"""
Local Greece - Base Preprocessor

Abstract base class for dataset preprocessors. Provides a consistent interface
for data cleaning with:
- Column standardization
- Data type conversion
- Coordinate coercion
- Duplicate handling

Usage:
    class ListingPreprocessor(BasePreprocessor):
        def transform(self, df: pd.DataFrame) -> pd.DataFrame:
            ...
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

import numpy as np
import pandas as pd

from local_greece.shared.config import Settings, get_config

logger = logging.getLogger(__name__)


@dataclass
class PreprocessingResult:
    """Result of a preprocessing operation."""

    dataset: str
    rows_input: int
    rows_output: int
    rows_dropped: int
    duration_seconds: float = 0.0
    success: bool = True
    error_message: str | None = None
    transformations_applied: list[str] = field(default_factory=list)
    drop_reasons: dict[str, int] = field(default_factory=dict)
    invalid_coordinates: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert result to dictionary for logging."""
        return {
            "dataset": self.dataset,
            "rows_input": self.rows_input,
            "rows_output": self.rows_output,
            "rows_dropped": self.rows_dropped,
            "duration_seconds": self.duration_seconds,
            "success": self.success,
            "error_message": self.error_message,
            "transformations_applied": self.transformations_applied,
            "drop_reasons": self.drop_reasons,
            "invalid_coordinates": self.invalid_coordinates,
        }


class BasePreprocessor(ABC):
    """
    Abstract base class for dataset preprocessing.

    Subclasses must implement:
    - transform(): Apply dataset-specific transformations
    - get_dataset_name(): Return the dataset name
    - get_required_columns(): Return list of required output columns
    """

    def __init__(self, config: Settings | None = None):
        """
        Initialize the preprocessor.

        Args:
            config: Configuration object (uses default if not provided)
        """
        self.config = config or get_config()
        self._transformations: list[str] = []
        self._drop_reasons: dict[str, int] = {}
        self._invalid_coordinates = 0

    @abstractmethod
    def transform(self, df: pd.DataFrame) -> pd.DataFrame:
        """Apply dataset-specific transformations."""

    @abstractmethod
    def get_dataset_name(self) -> str:
        """Dataset name (e.g. "listings")."""

    @abstractmethod
    def get_required_columns(self) -> list[str]:
        """Columns that must be present after preprocessing."""

    def get_column_mappings(self) -> dict[str, str]:
        """Column renames (old -> new). Override to rename during preprocessing."""
        return {}

    def get_dtype_mappings(self) -> dict[str, str]:
        """Target dtypes per column. Override to convert during preprocessing."""
        return {}

    def run(self, df: pd.DataFrame) -> PreprocessingResult:
        """
        Run the preprocessing pipeline.

        Args:
            df: Raw DataFrame to preprocess

        Returns:
            PreprocessingResult with details about the preprocessing
        """
        start_time = time.time()
        dataset_name = self.get_dataset_name()
        rows_input = len(df)

        logger.info(
            f"Starting preprocessing for {dataset_name}",
            extra={"dataset": dataset_name, "rows_input": rows_input},
        )

        try:
            self._transformations = []
            self._drop_reasons = {}
            self._invalid_coordinates = 0

            df = self._apply_column_mappings(df.copy())
            df = self._apply_dtype_conversions(df)
            df = self.transform(df)
            self._validate_required_columns(df)

            rows_output = len(df)
            result = PreprocessingResult(
                dataset=dataset_name,
                rows_input=rows_input,
                rows_output=rows_output,
                rows_dropped=rows_input - rows_output,
                duration_seconds=time.time() - start_time,
                success=True,
                transformations_applied=self._transformations,
                drop_reasons=self._drop_reasons,
                invalid_coordinates=self._invalid_coordinates,
            )

            logger.info(
                f"Preprocessing complete for {dataset_name}: {rows_input} -> {rows_output} rows",
                extra=result.to_dict(),
            )

            self._data = df

            return result

        except Exception as e:
            logger.error(
                f"Preprocessing failed for {dataset_name}: {e}",
                extra={"dataset": dataset_name, "error": str(e)},
                exc_info=True,
            )

            return PreprocessingResult(
                dataset=dataset_name,
                rows_input=rows_input,
                rows_output=0,
                rows_dropped=rows_input,
                duration_seconds=time.time() - start_time,
                success=False,
                error_message=str(e),
            )

    def get_data(self) -> pd.DataFrame | None:
        """Get the most recently processed data."""
        return getattr(self, "_data", None)

    def _apply_column_mappings(self, df: pd.DataFrame) -> pd.DataFrame:
        """Apply column name mappings, merging into the target column if it already exists."""
        mappings = self.get_column_mappings()
        present = {old: new for old, new in mappings.items() if old in df.columns}
        for old, new in present.items():
            if new in df.columns:
                df[new] = df[new].combine_first(df[old])
                df = df.drop(columns=[old])
            else:
                df = df.rename(columns={old: new})
        if present:
            self._transformations.append(f"renamed_columns: {list(present.keys())}")
        return df

    def _apply_dtype_conversions(self, df: pd.DataFrame) -> pd.DataFrame:
        """Apply data type conversions."""
        for col, dtype in self.get_dtype_mappings().items():
            if col not in df.columns:
                continue
            try:
                if dtype == "datetime":
                    df[col] = pd.to_datetime(df[col], errors="coerce", utc=True)
                elif dtype == "int":
                    df[col] = pd.to_numeric(df[col], errors="coerce").astype("Int64")
                elif dtype == "float":
                    df[col] = pd.to_numeric(df[col], errors="coerce")
                elif dtype == "bool":
                    df[col] = df[col].fillna(False).astype(bool)
                else:
                    df[col] = df[col].astype(dtype)
                self._transformations.append(f"converted_{col}_to_{dtype}")
            except (ValueError, TypeError) as e:
                logger.warning(f"Failed to convert {col} to {dtype}: {e}")
        return df

    def _validate_required_columns(self, df: pd.DataFrame) -> None:
        """Validate that all required columns are present."""
        missing = set(self.get_required_columns()) - set(df.columns)
        if missing:
            raise ValueError(f"Missing required columns: {missing}")

    def log_transformation(self, name: str) -> None:
        """Log a transformation that was applied."""
        self._transformations.append(name)

    def log_dropped_rows(self, reason: str, count: int) -> None:
        """Log rows that were dropped."""
        self._drop_reasons[reason] = self._drop_reasons.get(reason, 0) + count

    # ==========================================================================
    # Common Preprocessing Utilities
    # ==========================================================================

    def standardize_coordinates(
        self,
        df: pd.DataFrame,
        lat_col: str = "lat",
        lon_col: str = "lon",
    ) -> pd.DataFrame:
        """
        Coerce coordinates to floats.

        Unparseable and infinite values become NaN. Rows are kept: a listing
        without coordinates still belongs in the list view, it just never
        reaches the map.
        """
        for col in (lat_col, lon_col):
            if col not in df.columns:
                df[col] = np.nan
            df[col] = pd.to_numeric(df[col], errors="coerce").astype(float)
            df[col] = df[col].where(np.isfinite(df[col]))

        invalid_count = int((df[lat_col].isna() | df[lon_col].isna()).sum())
        if invalid_count > 0:
            logger.warning(f"Found {invalid_count} records with missing or invalid coordinates")
        self._invalid_coordinates += invalid_count

        self.log_transformation("standardize_coordinates")
        return df

    def drop_duplicates(
        self,
        df: pd.DataFrame,
        subset: list[str] | None = None,
        keep: str = "last",
    ) -> pd.DataFrame:
        """Drop duplicate rows."""
        before_count = len(df)
        df = df.drop_duplicates(subset=subset, keep=keep)
        dropped = before_count - len(df)

        if dropped > 0:
            self.log_dropped_rows("duplicates", dropped)
            self.log_transformation("drop_duplicates")

        return df

    def fill_missing(self, df: pd.DataFrame, col: str, value: Any) -> pd.DataFrame:
        """Fill missing values in a column (creating it if absent)."""
        if col not in df.columns:
            df[col] = value
            self.log_transformation(f"fill_missing_{col}")
            return df

        missing_count = df[col].isna().sum()
        if missing_count > 0:
            df[col] = df[col].fillna(value)
            self.log_transformation(f"fill_missing_{col}")
        return df
