"""Analysis orchestration"""

from .coordinator import (
    AnalysisCoordinator,
    CompetitionSummary,
    MonthPeak,
    SeasonalSummary,
    TrendingKeyword,
)

__all__ = [
    "AnalysisCoordinator",
    "CompetitionSummary",
    "MonthPeak",
    "SeasonalSummary",
    "TrendingKeyword",
]
