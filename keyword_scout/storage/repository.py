"""Read interface the analysis layer needs from keyword storage."""

from typing import List, Optional, Protocol

from .models import KeywordRecord, MetricsSnapshot, TrendSnapshot


class KeywordRepository(Protocol):
    """Keyword storage as seen by the analysis coordinator.

    Implementations raise ``RepositoryError`` when a read cannot be answered.
    ``list_keywords`` always orders by search volume, highest first.
    """

    def list_keywords(
        self,
        min_volume: Optional[int] = None,
        max_competition: Optional[int] = None,
        category: Optional[str] = None,
        trend_status: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[KeywordRecord]:
        ...

    def latest_metrics(self, keyword_id: int) -> Optional[MetricsSnapshot]:
        ...

    def latest_trend(self, keyword_id: int) -> Optional[TrendSnapshot]:
        ...

    def competition_indices(self, category: str) -> List[int]:
        ...

    def trend_peaks_for_category(self, category: str) -> List[Optional[int]]:
        ...

    def related_keywords(self, keyword_id: int) -> List[KeywordRecord]:
        ...

    def search_keyword(self, text: str) -> Optional[KeywordRecord]:
        ...
