"""General SEO score for a keyword."""

from typing import Optional

from ..storage.models import KeywordRecord, MetricsSnapshot
from .opportunity import round_half_up

DEFAULT_CONVERSION_POTENTIAL = 50


class SEOScorer:
    """Blend volume, competition and conversion potential into an SEO score.

    - Volume: search_volume / 20, capped at 50
    - Competition: (100 - competition_index) * 0.3
    - Conversion: conversion_potential * 0.2 (50 when no metrics)

    The total is rounded but never clamped.
    """

    def calculate(self, keyword: KeywordRecord, metrics: Optional[MetricsSnapshot]) -> int:
        base_score = min(keyword.search_volume / 20, 50)
        competitive_score = (100 - keyword.competition_index) * 0.3
        conversion_potential = (
            metrics.conversion_potential if metrics is not None else DEFAULT_CONVERSION_POTENTIAL
        )
        conversion_score = conversion_potential * 0.2

        return round_half_up(base_score + competitive_score + conversion_score)
