"""Analysis coordination for Keyword Scout."""

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np
from loguru import logger

from ..errors import EmptyCategoryError, InvalidInputError
from ..scoring.engine import ScoringEngine
from ..scoring.opportunity import OpportunityScore, round_half_up
from ..storage.models import KeywordRecord
from ..storage.repository import KeywordRepository

CANDIDATE_LIMIT = 100

# Competition buckets: low < 33 <= medium < 66 <= high
LOW_COMPETITION_BOUND = 33
HIGH_COMPETITION_BOUND = 66

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


def normalize_category(category: str) -> str:
    """Categories are stored lower-cased and stripped."""
    return category.lower().strip()


@dataclass
class TrendingKeyword:
    """Rising keyword enriched with its latest velocity."""

    keyword: str
    search_volume: int
    competition_index: int
    trend_status: str
    velocity_score: float
    category: str


@dataclass
class CompetitionSummary:
    """Distribution of competition indices within a category."""

    low_competition: int
    medium_competition: int
    high_competition: int
    average: int
    median: int


@dataclass
class MonthPeak:
    month: str
    peak_keywords_count: int


@dataclass
class SeasonalSummary:
    """Peak-month histogram for a category."""

    category: str
    months: List[MonthPeak] = field(default_factory=list)


class AnalysisCoordinator:
    """Coordinates candidate retrieval, scoring, and set-level aggregation."""

    def __init__(
        self,
        repository: KeywordRepository,
        scoring_engine: Optional[ScoringEngine] = None,
        candidate_limit: int = CANDIDATE_LIMIT,
    ):
        """Initialize analysis coordinator.

        Args:
            repository: Keyword storage to read candidates and snapshots from
            scoring_engine: Optional scoring engine (a fresh one by default)
            candidate_limit: Maximum candidates scored per opportunity search
        """
        self.repository = repository
        self.scoring = scoring_engine or ScoringEngine()
        self.candidate_limit = candidate_limit

    def find_opportunities(
        self, min_volume: int = 100, max_competition: int = 50
    ) -> List[OpportunityScore]:
        """Score high-volume, low-competition keywords and rank them.

        Args:
            min_volume: Minimum search volume (inclusive)
            max_competition: Maximum competition index (inclusive)

        Returns:
            Opportunity scores, best first. Equal scores keep volume order.
        """
        candidates = self.repository.list_keywords(
            min_volume=min_volume,
            max_competition=max_competition,
            limit=self.candidate_limit,
        )

        if not candidates:
            logger.info(
                f"No keywords with volume >= {min_volume} and competition <= {max_competition}"
            )
            return []

        opportunities = []
        for keyword in candidates:
            metrics = self.repository.latest_metrics(keyword.id)
            trend = self.repository.latest_trend(keyword.id)

            opportunity = self.scoring.calculate_opportunity_score(keyword, metrics, trend)
            logger.debug(
                f"Scored '{keyword.keyword}': {opportunity.opportunity_score} "
                f"({opportunity.potential_revenue_tier})"
            )
            opportunities.append(opportunity)

        logger.info(f"Scored {len(opportunities)} opportunity candidates")
        return sorted(opportunities, key=lambda o: o.opportunity_score, reverse=True)

    def get_trending_keywords(
        self, category: Optional[str] = None, limit: int = 50
    ) -> List[TrendingKeyword]:
        """Get rising keywords by search volume, with their latest velocity.

        Args:
            category: Optional category filter
            limit: Maximum number of keywords

        Returns:
            Trending keywords in volume order
        """
        if limit < 0:
            raise InvalidInputError(f"limit must not be negative, got {limit}")
        if category is not None:
            category = normalize_category(category)

        keywords = self.repository.list_keywords(
            category=category, trend_status="rising", limit=limit
        )

        trending = []
        for keyword in keywords:
            trend = self.repository.latest_trend(keyword.id)
            trending.append(
                TrendingKeyword(
                    keyword=keyword.keyword,
                    search_volume=keyword.search_volume,
                    competition_index=keyword.competition_index,
                    trend_status=keyword.trend_status,
                    velocity_score=trend.velocity_score if trend is not None else 0,
                    category=keyword.category,
                )
            )

        logger.info(f"Found {len(trending)} rising keywords" + (f" in '{category}'" if category else ""))
        return trending

    def get_competition_analysis(self, category: str) -> CompetitionSummary:
        """Bucket a category's competition indices and compute average and median.

        The median is the lower median, ``sorted[n // 2]``.

        Raises:
            EmptyCategoryError: if the category has no keywords
        """
        category = normalize_category(category)
        indices = np.sort(np.asarray(self.repository.competition_indices(category), dtype=int))

        if indices.size == 0:
            raise EmptyCategoryError(category)

        low = int(np.count_nonzero(indices < LOW_COMPETITION_BOUND))
        high = int(np.count_nonzero(indices >= HIGH_COMPETITION_BOUND))

        summary = CompetitionSummary(
            low_competition=low,
            medium_competition=int(indices.size) - low - high,
            high_competition=high,
            average=round_half_up(float(indices.mean())),
            median=int(indices[indices.size // 2]),
        )
        logger.info(f"Competition analysis for '{category}': {summary}")
        return summary

    def get_seasonal_trends(self, category: str) -> SeasonalSummary:
        """Count trend analyses per peak month for a category.

        Analyses without a peak month are left out of every count.
        """
        category = normalize_category(category)
        counts = [0] * 12
        for peak_month in self.repository.trend_peaks_for_category(category):
            if peak_month is None:
                continue
            if not 1 <= peak_month <= 12:
                logger.warning(f"Ignoring out-of-range peak month {peak_month} in '{category}'")
                continue
            counts[peak_month - 1] += 1

        months = [
            MonthPeak(month=MONTH_NAMES[i], peak_keywords_count=count)
            for i, count in enumerate(counts)
            if count > 0
        ]
        return SeasonalSummary(category=category, months=months)

    def get_keywords_by_category(self, category: str) -> List[KeywordRecord]:
        """Get every keyword in a category, highest volume first."""
        return self.repository.list_keywords(category=normalize_category(category))

    def get_related_keywords(self, keyword_id: int) -> List[KeywordRecord]:
        return self.repository.related_keywords(keyword_id)

    def search_keyword(self, text: str) -> Optional[KeywordRecord]:
        return self.repository.search_keyword(text.lower().strip())
