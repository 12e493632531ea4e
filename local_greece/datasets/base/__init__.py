"""
Local Greece - Base Classes for Datasets

Abstract base classes that dataset implementations inherit from:
- Data ingestion (BaseIngester)
- Data preprocessing (BasePreprocessor)

Usage:
    from local_greece.datasets.base import BaseIngester, BasePreprocessor
"""

from local_greece.datasets.base.ingester import BaseIngester, IngestionResult
from local_greece.datasets.base.preprocessor import BasePreprocessor, PreprocessingResult

__all__ = [
    "BaseIngester",
    "IngestionResult",
    "BasePreprocessor",
    "PreprocessingResult",
]
