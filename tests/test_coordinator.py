import pytest
from loguru import logger

from keyword_scout.errors import EmptyCategoryError, InvalidInputError, RepositoryError
from keyword_scout.orchestrator import AnalysisCoordinator, MonthPeak
from keyword_scout.storage.models import MetricsSnapshot, TrendSnapshot

from conftest import FakeRepository, make_keyword


def _candidates():
    return [
        make_keyword(1, "alpha", 5000, 10),  # 33
        make_keyword(2, "beta", 3000, 40, trend_status="rising"),  # 38 with velocity 80
        make_keyword(3, "gamma", 2000, 10),  # 29
        make_keyword(4, "delta", 1000, 20),  # 26
        make_keyword(5, "epsilon", 900, 20),  # 26
        make_keyword(6, "crowded", 8000, 60),  # filtered out by competition
        make_keyword(7, "tiny", 50, 5),  # filtered out by volume
    ]


def test_find_opportunities_sorts_by_score_descending():
    repo = FakeRepository(keywords=_candidates(), trends={2: TrendSnapshot(velocity_score=80)})
    coordinator = AnalysisCoordinator(repo)

    results = coordinator.find_opportunities(min_volume=100, max_competition=50)

    assert [r.keyword for r in results] == ["beta", "alpha", "gamma", "delta", "epsilon"]
    assert [r.opportunity_score for r in results] == [38, 33, 29, 26, 26]


def test_find_opportunities_keeps_candidate_order_on_ties():
    keywords = [
        make_keyword(1, "first", 1000, 20),
        make_keyword(2, "second", 990, 20),
        make_keyword(3, "third", 980, 20),
    ]
    coordinator = AnalysisCoordinator(FakeRepository(keywords=keywords))

    results = coordinator.find_opportunities()

    assert len({r.opportunity_score for r in results}) == 1
    assert [r.keyword for r in results] == ["first", "second", "third"]


def test_find_opportunities_uses_latest_snapshots():
    keyword = make_keyword(1, "smart ring", 2000, 20, trend_status="rising")
    repo = FakeRepository(
        keywords=[keyword],
        metrics={1: MetricsSnapshot(niche_saturation=10, commercial_intent=90)},
        trends={1: TrendSnapshot(velocity_score=30)},
    )

    [result] = AnalysisCoordinator(repo).find_opportunities()

    assert result.reason == (
        "High search volume (2000 searches). Low competition. Growing trend. "
        "Trending upward. High buyer intent"
    )
    assert ("latest_metrics", (1,)) in repo.calls
    assert ("latest_trend", (1,)) in repo.calls


def test_find_opportunities_requests_bounded_candidates():
    repo = FakeRepository(keywords=_candidates())
    coordinator = AnalysisCoordinator(repo, candidate_limit=2)

    results = coordinator.find_opportunities(min_volume=100, max_competition=50)

    assert repo.calls[0] == ("list_keywords", (100, 50, None, None, 2))
    assert sorted(r.keyword for r in results) == ["alpha", "beta"]


def test_default_candidate_limit_is_100():
    repo = FakeRepository()
    AnalysisCoordinator(repo).find_opportunities()

    assert repo.calls[0] == ("list_keywords", (100, 50, None, None, 100))


def test_find_opportunities_empty_candidate_set():
    repo = FakeRepository(keywords=[make_keyword(1, "crowded", 5000, 90)])

    assert AnalysisCoordinator(repo).find_opportunities(100, 50) == []


def test_find_opportunities_propagates_repository_errors():
    repo = FakeRepository(keywords=_candidates(), failing=("latest_trend",))

    with pytest.raises(RepositoryError):
        AnalysisCoordinator(repo).find_opportunities()


def test_get_trending_keywords_keeps_volume_order():
    keywords = [
        make_keyword(1, "slow riser", 4000, 60, trend_status="rising"),
        make_keyword(2, "fast riser", 1000, 10, trend_status="rising"),
        make_keyword(3, "flat", 9000, 10),
        make_keyword(4, "other niche", 3000, 10, category="pets", trend_status="rising"),
    ]
    repo = FakeRepository(keywords=keywords, trends={2: TrendSnapshot(velocity_score=90)})
    coordinator = AnalysisCoordinator(repo)

    trending = coordinator.get_trending_keywords()

    assert [t.keyword for t in trending] == ["slow riser", "other niche", "fast riser"]
    assert [t.velocity_score for t in trending] == [0, 0, 90]
    assert all(t.trend_status == "rising" for t in trending)


def test_get_trending_keywords_category_and_limit():
    keywords = [
        make_keyword(1, "a", 4000, 60, trend_status="rising"),
        make_keyword(2, "b", 3000, 10, trend_status="rising"),
        make_keyword(3, "c", 2000, 10, category="pets", trend_status="rising"),
    ]
    coordinator = AnalysisCoordinator(FakeRepository(keywords=keywords))

    assert [t.keyword for t in coordinator.get_trending_keywords("fitness", limit=1)] == ["a"]
    assert [t.keyword for t in coordinator.get_trending_keywords("pets")] == ["c"]


def test_competition_analysis_uses_lower_median():
    repo = FakeRepository(competition={"fitness": [40, 10, 30, 20]})

    summary = AnalysisCoordinator(repo).get_competition_analysis("fitness")

    assert summary.median == 30
    assert summary.average == 25
    assert (summary.low_competition, summary.medium_competition, summary.high_competition) == (
        3,
        1,
        0,
    )


def test_competition_analysis_bucket_boundaries():
    repo = FakeRepository(competition={"fitness": [66, 33, 65, 32]})

    summary = AnalysisCoordinator(repo).get_competition_analysis("fitness")

    assert summary.low_competition == 1
    assert summary.medium_competition == 2
    assert summary.high_competition == 1
    assert summary.average == 49
    assert summary.median == 65


def test_competition_average_rounds_half_up():
    repo = FakeRepository(competition={"fitness": [2, 3]})

    summary = AnalysisCoordinator(repo).get_competition_analysis("fitness")

    assert summary.average == 3
    assert summary.median == 3


def test_competition_analysis_empty_category():
    with pytest.raises(EmptyCategoryError):
        AnalysisCoordinator(FakeRepository()).get_competition_analysis("nothing")


def test_seasonal_trends_exclude_missing_peak_months():
    repo = FakeRepository(peaks={"fitness": [6, None, 1, 6, None, 12]})

    summary = AnalysisCoordinator(repo).get_seasonal_trends("fitness")

    assert summary.category == "fitness"
    assert summary.months == [
        MonthPeak(month="January", peak_keywords_count=1),
        MonthPeak(month="June", peak_keywords_count=2),
        MonthPeak(month="December", peak_keywords_count=1),
    ]


def test_seasonal_trends_for_category_without_peaks():
    repo = FakeRepository(peaks={"fitness": [None, None]})

    assert AnalysisCoordinator(repo).get_seasonal_trends("fitness").months == []


def test_related_and_search_pass_through():
    keywords = [make_keyword(1, "yoga mat", 500, 10), make_keyword(2, "yoga blocks", 300, 10)]
    repo = FakeRepository(keywords=keywords, related={1: [2]})
    coordinator = AnalysisCoordinator(repo)

    assert [k.keyword for k in coordinator.get_related_keywords(1)] == ["yoga blocks"]
    assert coordinator.get_related_keywords(2) == []
    assert coordinator.search_keyword("  BLOCKS ").keyword == "yoga blocks"
    assert coordinator.search_keyword("kettlebell") is None


def test_trending_limit_zero_returns_nothing():
    keywords = [
        make_keyword(1, "a", 4000, 60, trend_status="rising"),
        make_keyword(2, "b", 3000, 10, trend_status="rising"),
        make_keyword(3, "c", 2000, 10, trend_status="rising"),
    ]
    repo = FakeRepository(keywords=keywords)

    assert AnalysisCoordinator(repo).get_trending_keywords(limit=0) == []
    assert repo.calls[0] == ("list_keywords", (None, None, None, "rising", 0))


def test_trending_rejects_negative_limit():
    with pytest.raises(InvalidInputError):
        AnalysisCoordinator(FakeRepository()).get_trending_keywords(limit=-1)


def test_category_arguments_are_normalized():
    keywords = [
        make_keyword(1, "a", 4000, 20, trend_status="rising"),
        make_keyword(2, "b", 3000, 70),
    ]
    repo = FakeRepository(
        keywords=keywords,
        competition={"fitness": [20, 70]},
        peaks={"fitness": [3]},
    )
    coordinator = AnalysisCoordinator(repo)

    assert [t.keyword for t in coordinator.get_trending_keywords(" Fitness ")] == ["a"]
    assert coordinator.get_competition_analysis("FITNESS").high_competition == 1
    seasonal = coordinator.get_seasonal_trends("Fitness")
    assert seasonal.category == "fitness"
    assert seasonal.months == [MonthPeak(month="March", peak_keywords_count=1)]
    assert [k.keyword for k in coordinator.get_keywords_by_category("Fitness")] == ["a", "b"]


@pytest.mark.parametrize(
    "method, failing, args",
    [
        ("get_trending_keywords", "list_keywords", ()),
        ("get_trending_keywords", "latest_trend", ()),
        ("get_competition_analysis", "competition_indices", ("fitness",)),
        ("get_seasonal_trends", "trend_peaks_for_category", ("fitness",)),
    ],
)
def test_aggregates_propagate_repository_errors(method, failing, args):
    repo = FakeRepository(
        keywords=[make_keyword(1, "a", 4000, 20, trend_status="rising")],
        competition={"fitness": [20]},
        peaks={"fitness": [1]},
        failing=(failing,),
    )

    with pytest.raises(RepositoryError):
        getattr(AnalysisCoordinator(repo), method)(*args)


def test_seasonal_trends_skip_out_of_range_months_with_warning():
    repo = FakeRepository(peaks={"fitness": [0, 13, 2, -4]})
    warnings = []
    sink = logger.add(warnings.append, level="WARNING", format="{message}")
    try:
        summary = AnalysisCoordinator(repo).get_seasonal_trends("fitness")
    finally:
        logger.remove(sink)

    assert summary.months == [MonthPeak(month="February", peak_keywords_count=1)]
    assert len(warnings) == 3
    assert "13" in warnings[1]
