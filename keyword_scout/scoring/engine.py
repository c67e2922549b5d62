"""Scoring engine facade over the individual keyword scorers."""

from typing import Optional

from ..storage.models import KeywordRecord, MetricsSnapshot, TrendSnapshot
from .opportunity import OpportunityScore, OpportunityScorer
from .seo import SEOScorer
from .velocity import TrendVelocityScorer


class ScoringEngine:
    """Stateless entry point for all keyword scoring.

    Every method is a pure function of its arguments.
    """

    def __init__(self):
        self.opportunity_scorer = OpportunityScorer()
        self.seo_scorer = SEOScorer()
        self.velocity_scorer = TrendVelocityScorer()

    def calculate_opportunity_score(
        self,
        keyword: KeywordRecord,
        metrics: Optional[MetricsSnapshot] = None,
        trend: Optional[TrendSnapshot] = None,
    ) -> OpportunityScore:
        return self.opportunity_scorer.calculate(keyword, metrics, trend)

    def calculate_seo_score(
        self, keyword: KeywordRecord, metrics: Optional[MetricsSnapshot] = None
    ) -> int:
        return self.seo_scorer.calculate(keyword, metrics)

    def calculate_trend_velocity(self, growth_7d: float, growth_30d: float) -> float:
        return self.velocity_scorer.calculate(growth_7d, growth_30d)
