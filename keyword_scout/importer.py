"""Import and sanitization of raw keyword data."""

from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml
from loguru import logger
from pydantic import ValidationError

from .errors import InvalidInputError
from .storage.database import Database
from .storage.models import (
    KeywordInput,
    KeywordRecord,
    MetricsSnapshot,
    NicheCategory,
    RelationshipType,
    TrendSnapshot,
)

RELATIONSHIP_TYPES = ("cross_appeal", "trend_combo", "seasonal_combo")


def _clamp(value: float, low: float = 0, high: float = 100) -> float:
    return max(low, min(high, value))


def load_keywords_file(path: Union[str, Path]) -> List[KeywordInput]:
    """Load a YAML or JSON list of keyword records.

    Args:
        path: Path to the keyword file

    Returns:
        Validated keyword inputs
    """
    with open(path, "r") as f:
        data = yaml.safe_load(f) or []

    if isinstance(data, dict):
        data = data.get("keywords", [])

    if not isinstance(data, list):
        raise InvalidInputError(f"{path}: expected a list of keyword records")

    try:
        return [KeywordInput.model_validate(item) for item in data]
    except ValidationError as e:
        raise InvalidInputError(f"{path}: {e}") from e


class DataImporter:
    """Sanitizes raw keyword data and writes it to the database."""

    def __init__(self, db: Database):
        self.db = db

    def import_keywords(self, keywords: List[KeywordInput]) -> List[KeywordRecord]:
        """Normalize and upsert keywords, matching on keyword text.

        - keyword and category are lower-cased and stripped
        - search volume is floored at 0
        - competition index is clamped to 0-100
        - trend status defaults to "stable"
        """
        sanitized = []
        for k in keywords:
            text = k.keyword.lower().strip()
            if not text:
                raise InvalidInputError("Keyword text must not be empty")

            sanitized.append(
                {
                    "keyword": text,
                    "search_volume": max(0, k.search_volume),
                    "competition_index": int(_clamp(k.competition_index)),
                    "category": k.category.lower().strip(),
                    "trend_status": k.trend_status or "stable",
                }
            )

        stored = self.db.upsert_keywords(sanitized)
        logger.info(f"Imported {len(stored)} keywords")
        return stored

    def add_metrics(self, keyword_id: int, metrics: Dict) -> MetricsSnapshot:
        """Record a metrics snapshot.

        Missing fields default to 0. Click volume is floored at 0 and the
        percentage signals are clamped to 0-100.
        """
        return self.db.add_metrics(
            keyword_id,
            {
                "click_volume": max(0, metrics.get("click_volume", 0)),
                "conversion_potential": _clamp(metrics.get("conversion_potential", 0)),
                "niche_saturation": _clamp(metrics.get("niche_saturation", 0)),
                "commercial_intent": _clamp(metrics.get("commercial_intent", 0)),
            },
        )

    def add_trend_analysis(self, keyword_id: int, analysis: Dict) -> TrendSnapshot:
        """Record a trend analysis snapshot; velocity is clamped to -100..100."""
        peak_month = analysis.get("peak_month")
        if peak_month is not None and not 1 <= peak_month <= 12:
            raise InvalidInputError(f"peak_month must be between 1 and 12, got {peak_month}")

        return self.db.add_trend_analysis(
            keyword_id,
            {
                "velocity_score": _clamp(analysis.get("velocity_score", 0), -100, 100),
                "seasonality_pattern": analysis.get("seasonality_pattern", "stable"),
                "peak_month": peak_month,
                "growth_7d": analysis.get("growth_7d", 0),
                "growth_30d": analysis.get("growth_30d", 0),
            },
        )

    def create_or_update_niche(self, name: str, description: Optional[str] = None) -> NicheCategory:
        return self.db.upsert_niche(name.lower().strip(), description)

    def add_keyword_relationship(
        self,
        keyword_id: int,
        related_keyword_id: int,
        correlation_strength: int,
        relationship_type: RelationshipType,
    ) -> bool:
        """Link two keywords. Duplicate edges are ignored."""
        if relationship_type not in RELATIONSHIP_TYPES:
            raise InvalidInputError(f"Unknown relationship type: {relationship_type}")

        return self.db.add_relationship(
            keyword_id,
            related_keyword_id,
            int(_clamp(correlation_strength)),
            relationship_type,
        )
