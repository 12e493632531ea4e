"""
Local Greece - Base Ingester

Abstract base class for dataset ingesters. Every run fetches the full row
set matching the subclass's filters and reports:
- Row count and timing
- Errors as a failed result instead of an exception
- Structured `extra=` log fields

Usage:
    class ListingIngester(BaseIngester):
        def fetch_data(self) -> pd.DataFrame:
            ...
        def get_primary_key(self) -> str:
            return "id"
        def get_dataset_name(self) -> str:
            return "listings"
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

import pandas as pd

from local_greece.shared.config import Settings, get_config

logger = logging.getLogger(__name__)


@dataclass
class IngestionResult:
    """Result of a data ingestion operation."""

    dataset: str
    rows_fetched: int
    duration_seconds: float = 0.0
    success: bool = True
    error_message: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert result to dictionary for logging."""
        return {
            "dataset": self.dataset,
            "rows_fetched": self.rows_fetched,
            "duration_seconds": self.duration_seconds,
            "success": self.success,
            "error_message": self.error_message,
            "metadata": self.metadata,
        }


class BaseIngester(ABC):
    """
    Abstract base class for dataset ingestion.

    Subclasses must implement:
    - fetch_data(): Fetch rows from the source
    - get_primary_key(): Return the primary key field
    - get_dataset_name(): Return the dataset name
    """

    def __init__(self, config: Settings | None = None):
        self.config = config or get_config()
        self._data: pd.DataFrame | None = None

    @abstractmethod
    def fetch_data(self) -> pd.DataFrame:
        """Fetch every matching row from the source."""

    @abstractmethod
    def get_primary_key(self) -> str:
        """Column that uniquely identifies each row."""

    @abstractmethod
    def get_dataset_name(self) -> str:
        """Dataset name (e.g. "listings")."""

    def run(self) -> IngestionResult:
        """
        Run the ingestion process.

        Never raises; failures are reported through the result.

        Returns:
            IngestionResult with details about the ingestion
        """
        start_time = time.time()
        dataset_name = self.get_dataset_name()
        self._data = None

        logger.info(f"Starting ingestion for {dataset_name}", extra={"dataset": dataset_name})

        try:
            df = self.fetch_data()
        except Exception as e:
            logger.error(
                f"Ingestion failed for {dataset_name}: {e}",
                extra={"dataset": dataset_name, "error": str(e)},
                exc_info=True,
            )
            return IngestionResult(
                dataset=dataset_name,
                rows_fetched=0,
                duration_seconds=time.time() - start_time,
                success=False,
                error_message=str(e),
            )

        self._data = df
        result = IngestionResult(
            dataset=dataset_name,
            rows_fetched=len(df),
            duration_seconds=time.time() - start_time,
            metadata={"primary_key": self.get_primary_key(), "columns": list(df.columns)},
        )
        logger.info(
            f"Ingestion complete for {dataset_name}: {len(df)} rows",
            extra=result.to_dict(),
        )
        return result

    def get_data(self) -> pd.DataFrame | None:
        """Get the most recently fetched data."""
        return self._data
