"""
Tests for safest/fastest route ranking.
"""

from safe_walk_routing.algorithms.optimization.route_ranker import RouteRanker

from conftest import make_scored


class TestRouteRanker:

    def test_safest_options(self):
        routes = [make_scored(safety_score=s) for s in (10, 90, 50, 70, 30)]

        result = RouteRanker().rank(routes)

        assert result.safest_options == (1, 3, 2)
        assert result.recommended == 1

    def test_fastest_options(self):
        routes = [make_scored(duration=d) for d in (300, 100, 250, 400, 50)]

        result = RouteRanker().rank(routes)

        assert result.fastest_options == (4, 1, 2)
        assert result.fastest == 4

    def test_fastest_uses_whole_second_durations(self):
        # 100.4s and 99.6s both report as 100s, so input order decides
        routes = [make_scored(duration=d) for d in (120.0, 100.4, 99.6)]

        result = RouteRanker().rank(routes)

        assert result.fastest_options == (1, 2, 0)
        assert result.fastest == 1

    def test_ties_keep_original_order(self):
        routes = [make_scored(safety_score=50, duration=120) for _ in range(4)]

        result = RouteRanker().rank(routes)

        assert result.safest_options == (0, 1, 2)
        assert result.fastest_options == (0, 1, 2)

    def test_single_route(self):
        result = RouteRanker().rank([make_scored()])

        assert result.safest_options == (0,)
        assert result.fastest_options == (0,)
        assert result.recommended == 0
        assert result.fastest == 0

    def test_empty_list(self):
        result = RouteRanker().rank([])

        assert result.routes == ()
        assert result.safest_options == ()
        assert result.fastest_options == ()
        assert result.recommended == 0
        assert result.fastest == 0

    def test_routes_are_kept_in_input_order(self):
        routes = [make_scored(safety_score=s) for s in (20, 80)]

        result = RouteRanker().rank(routes)

        assert result.routes == tuple(routes)
