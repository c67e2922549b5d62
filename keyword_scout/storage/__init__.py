"""Data storage and persistence layer"""

from .models import (
    Keyword,
    KeywordInput,
    KeywordMetrics,
    KeywordRecord,
    KeywordRelationship,
    MetricsSnapshot,
    NicheCategory,
    TrendAnalysis,
    TrendSnapshot,
)
from .repository import KeywordRepository
from .database import Database

__all__ = [
    "Keyword",
    "KeywordInput",
    "KeywordMetrics",
    "KeywordRecord",
    "KeywordRelationship",
    "MetricsSnapshot",
    "NicheCategory",
    "TrendAnalysis",
    "TrendSnapshot",
    "KeywordRepository",
    "Database",
]
