"""Scoring engine for keyword opportunity analysis"""

from .opportunity import OpportunityScore, OpportunityScorer, resolve_signals, round_half_up
from .seo import SEOScorer
from .velocity import TrendVelocityScorer
from .engine import ScoringEngine

__all__ = [
    "OpportunityScore",
    "OpportunityScorer",
    "SEOScorer",
    "TrendVelocityScorer",
    "ScoringEngine",
    "resolve_signals",
    "round_half_up",
]
