"""Shared pytest fixtures for Keyword Scout tests."""

from typing import Dict, List, Optional

import pytest

from keyword_scout.errors import RepositoryError
from keyword_scout.importer import DataImporter
from keyword_scout.storage import Database
from keyword_scout.storage.models import KeywordRecord, MetricsSnapshot, TrendSnapshot


class FakeRepository:
    """In-memory keyword repository.

    Methods named in ``failing`` raise RepositoryError when called.
    """

    def __init__(
        self,
        keywords: Optional[List[KeywordRecord]] = None,
        metrics: Optional[Dict[int, MetricsSnapshot]] = None,
        trends: Optional[Dict[int, TrendSnapshot]] = None,
        competition: Optional[Dict[str, List[int]]] = None,
        peaks: Optional[Dict[str, List[Optional[int]]]] = None,
        related: Optional[Dict[int, List[int]]] = None,
        failing: tuple = (),
    ):
        self.keywords = keywords or []
        self.metrics = metrics or {}
        self.trends = trends or {}
        self.competition = competition or {}
        self.peaks = peaks or {}
        self.related = related or {}
        self.failing = failing
        self.calls = []

    def _record(self, name, *args):
        self.calls.append((name, args))
        if name in self.failing:
            raise RepositoryError(f"{name} unavailable")

    def list_keywords(
        self, min_volume=None, max_competition=None, category=None, trend_status=None, limit=None
    ):
        self._record("list_keywords", min_volume, max_competition, category, trend_status, limit)
        rows = [
            k
            for k in self.keywords
            if (min_volume is None or k.search_volume >= min_volume)
            and (max_competition is None or k.competition_index <= max_competition)
            and (category is None or k.category == category)
            and (trend_status is None or k.trend_status == trend_status)
        ]
        rows = sorted(rows, key=lambda k: k.search_volume, reverse=True)
        return rows[:limit] if limit is not None else rows

    def latest_metrics(self, keyword_id):
        self._record("latest_metrics", keyword_id)
        return self.metrics.get(keyword_id)

    def latest_trend(self, keyword_id):
        self._record("latest_trend", keyword_id)
        return self.trends.get(keyword_id)

    def competition_indices(self, category):
        self._record("competition_indices", category)
        return list(self.competition.get(category, []))

    def trend_peaks_for_category(self, category):
        self._record("trend_peaks_for_category", category)
        return list(self.peaks.get(category, []))

    def related_keywords(self, keyword_id):
        self._record("related_keywords", keyword_id)
        ids = self.related.get(keyword_id, [])
        return [k for k in self.keywords if k.id in ids]

    def search_keyword(self, text):
        self._record("search_keyword", text)
        return next((k for k in self.keywords if text in k.keyword), None)


def make_keyword(
    id: int,
    keyword: str,
    search_volume: int,
    competition_index: int,
    category: str = "fitness",
    trend_status: str = "stable",
) -> KeywordRecord:
    return KeywordRecord(
        id=id,
        keyword=keyword,
        search_volume=search_volume,
        competition_index=competition_index,
        category=category,
        trend_status=trend_status,
    )


@pytest.fixture
def db():
    """Fresh in-memory SQLite database."""
    return Database("sqlite:///:memory:")


@pytest.fixture
def importer(db):
    return DataImporter(db)
