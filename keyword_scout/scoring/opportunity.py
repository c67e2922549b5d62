"""Opportunity scoring for individual keywords."""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..storage.models import KeywordRecord, MetricsSnapshot, TrendSnapshot

DEFAULT_NICHE_SATURATION = 50
DEFAULT_VELOCITY_SCORE = 0

# Historical constant, do not re-derive from the weights.
NORMALIZATION_DIVISOR = 1.7


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 always rounding towards +inf."""
    return int(math.floor(value + 0.5))


def resolve_signals(
    metrics: Optional[MetricsSnapshot], trend: Optional[TrendSnapshot]
) -> Tuple[float, float]:
    """Substitute neutral priors for snapshots that were never recorded.

    Returns:
        (niche_saturation, velocity_score)
    """
    niche_saturation = metrics.niche_saturation if metrics is not None else DEFAULT_NICHE_SATURATION
    velocity_score = trend.velocity_score if trend is not None else DEFAULT_VELOCITY_SCORE
    return niche_saturation, velocity_score


@dataclass
class OpportunityScore:
    """Final opportunity assessment for a keyword."""

    keyword: str
    opportunity_score: int
    search_volume: int
    competition_index: int
    category: str
    reason: str
    potential_revenue_tier: str  # "low", "medium", "high", "very_high"


class OpportunityScorer:
    """Combine volume, competition, momentum and saturation into one score.

    Partial terms:
    - Volume: search_volume / 100, capped at 100, weighted 0.2
    - Competition: (100 - competition_index) * 0.4
    - Trend: positive velocity only, * 0.3
    - Saturation: (100 - niche_saturation) * 0.2

    The sum is divided by 1.7, rounded and clamped to 0-100.

    Revenue tiers (first match wins):
    - very_high: score > 80, volume > 1000, competition < 30
    - high: score > 70, volume > 500
    - medium: score > 50
    - low: everything else
    """

    def calculate(
        self,
        keyword: KeywordRecord,
        metrics: Optional[MetricsSnapshot],
        trend: Optional[TrendSnapshot],
    ) -> OpportunityScore:
        """Score a keyword from its latest metrics and trend snapshots.

        Args:
            keyword: Keyword snapshot
            metrics: Most recent metrics, or None if never recorded
            trend: Most recent trend analysis, or None if never recorded

        Returns:
            OpportunityScore instance
        """
        search_volume = keyword.search_volume
        competition_index = keyword.competition_index
        niche_saturation, velocity_score = resolve_signals(metrics, trend)

        volume_score = min(search_volume / 100, 100)
        competition_score = (100 - competition_index) * 0.4
        trend_score = max(0, velocity_score) * 0.3
        saturation_score = (100 - niche_saturation) * 0.2

        raw = (volume_score * 0.2 + competition_score + trend_score + saturation_score) / NORMALIZATION_DIVISOR
        opportunity_score = min(100, max(0, round_half_up(raw)))

        return OpportunityScore(
            keyword=keyword.keyword,
            opportunity_score=opportunity_score,
            search_volume=search_volume,
            competition_index=competition_index,
            category=keyword.category,
            reason=self.generate_reason(keyword, metrics, trend),
            potential_revenue_tier=self.categorize_revenue_tier(
                opportunity_score, search_volume, competition_index
            ),
        )

    def generate_reason(
        self,
        keyword: KeywordRecord,
        metrics: Optional[MetricsSnapshot],
        trend: Optional[TrendSnapshot],
    ) -> str:
        """Explain which factors made the keyword attractive (or not)."""
        factors: List[str] = []

        if keyword.search_volume > 500:
            factors.append(f"High search volume ({keyword.search_volume} searches)")

        if keyword.competition_index < 40:
            factors.append("Low competition")
        elif keyword.competition_index > 70:
            factors.append("High competition market")

        if trend is not None:
            if trend.velocity_score > 50:
                factors.append("Rapidly rising trend")
            elif trend.velocity_score > 20:
                factors.append("Growing trend")

        if keyword.trend_status == "peak":
            factors.append("Currently at peak popularity")
        elif keyword.trend_status == "rising":
            factors.append("Trending upward")

        if metrics is not None and metrics.commercial_intent > 70:
            factors.append("High buyer intent")

        return ". ".join(factors) if factors else "Moderate opportunity"

    def categorize_revenue_tier(
        self, opportunity_score: int, search_volume: int, competition_index: int
    ) -> str:
        if opportunity_score > 80 and search_volume > 1000 and competition_index < 30:
            return "very_high"
        if opportunity_score > 70 and search_volume > 500:
            return "high"
        if opportunity_score > 50:
            return "medium"
        return "low"
