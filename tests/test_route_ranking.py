"""
Tests for route ranking and recommendation.
"""

import pytest

from airtrace.models.scoring_models import RouteAQISummary
from airtrace.services.route_ranking import pick_recommended, rank_routes


def summaries(*means):
    return [
        RouteAQISummary(route_id=i, mean_aqi=m, min_aqi=m, max_aqi=m, sample_count=0 if m is None else 1)
        for i, m in enumerate(means)
    ]


class TestRankRoutes:
    """Test suite for rank_routes."""

    def test_lowest_mean_recommended_order_unchanged(self):
        ranked = rank_routes(summaries(80.0, 45.0))
        assert [r.route_id for r in ranked] == [0, 1]
        assert [r.is_recommended for r in ranked] == [False, True]

    def test_tie_goes_to_first(self):
        ranked = rank_routes(summaries(50.0, 30.0, 30.0))
        assert [r.is_recommended for r in ranked] == [False, True, False]

    def test_null_means_are_skipped(self):
        ranked = rank_routes(summaries(None, 60.0, 40.0, None))
        assert [r.is_recommended for r in ranked] == [False, False, True, False]

    def test_all_null_recommends_nothing(self):
        ranked = rank_routes(summaries(None, None))
        assert not any(r.is_recommended for r in ranked)

    def test_empty(self):
        assert rank_routes([]) == []

    @pytest.mark.parametrize(
        "means",
        [(10.0,), (3.0, 2.0, 1.0), (1.0, 1.0, 1.0), (None, 5.0), (7.5, None, 7.5)],
    )
    def test_exactly_one_recommended_when_any_mean(self, means):
        ranked = rank_routes(summaries(*means))
        assert sum(r.is_recommended for r in ranked) == 1

    def test_summary_carried_through(self):
        s = summaries(12.0)
        assert rank_routes(s)[0].summary == s[0]

    def test_pick_recommended_index(self):
        assert pick_recommended(summaries(9.0, 3.0, 4.0)) == 1
        assert pick_recommended(summaries(None)) is None
