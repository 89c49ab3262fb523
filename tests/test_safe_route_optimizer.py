"""
End-to-end tests for the safe route optimizer with a scripted routing provider.
"""

import pytest

from safe_walk_routing.algorithms.optimization.safe_route_optimizer import SafeRouteOptimizer
from safe_walk_routing.config.routing_config import RoutingConfig
from safe_walk_routing.data.grid_store import DensityGrid, GridStore
from safe_walk_routing.data.models import Coordinate
from safe_walk_routing.errors import NoRouteFoundError, RoutingProviderError
from safe_walk_routing.mapping.cache.route_cache import RouteCache

from conftest import CELL_CENTRE, GRID_SIZE, FakeProvider, cell_of, make_route

START = Coordinate(49.26305, -123.16795)
END = Coordinate(49.26395, -123.16705)


@pytest.fixture
def hotspot_store(config):
    return GridStore.from_grids(
        DensityGrid({cell_of(CELL_CENTRE): 10}, GRID_SIZE),
        DensityGrid.empty(GRID_SIZE),
        config
    )


def routes_for_ranking():
    # Through the hotspot cell, fast
    hot = make_route(distance=120, duration=90, geometry=(START, END))
    # Away from any crime, slower
    quiet = make_route(distance=900, duration=700,
                       geometry=(Coordinate(49.2700, -123.1600), Coordinate(49.2708, -123.1600)))
    return hot, quiet


class TestSafeRouteOptimizer:

    def test_ranks_safe_and_fast_routes(self, config, hotspot_store):
        hot, quiet = routes_for_ranking()
        provider = FakeProvider(direct=[hot], via=[[quiet], []])
        optimizer = SafeRouteOptimizer(hotspot_store, provider, config)

        result = optimizer.find_routes(START, END, night=False)

        assert [r.route for r in result.routes] == [hot, quiet]
        assert result.routes[0].safety_score == 0
        assert result.routes[1].safety_score == 60
        assert result.recommended == 1
        assert result.fastest == 0
        assert result.safest_options == (1, 0)
        assert result.fastest_options == (0, 1)

    def test_no_route_propagates(self, config, hotspot_store):
        optimizer = SafeRouteOptimizer(hotspot_store, FakeProvider(direct=[]), config)

        with pytest.raises(NoRouteFoundError):
            optimizer.find_routes(START, END)

    def test_provider_failure_propagates_as_no_route(self, config, hotspot_store):
        provider = FakeProvider(direct=RoutingProviderError("down"))
        optimizer = SafeRouteOptimizer(hotspot_store, provider, config)

        with pytest.raises(NoRouteFoundError):
            optimizer.find_routes(START, END)

    def test_unavailable_data_gives_neutral_scores(self, config, tmp_path):
        hot, quiet = routes_for_ranking()
        store = GridStore(str(tmp_path / 'crime-grid.json'), str(tmp_path / 'lighting.json'), config)
        provider = FakeProvider(direct=[hot, quiet, make_route(distance=1500)])
        optimizer = SafeRouteOptimizer(store, provider, config)

        result = optimizer.find_routes(START, END, night=True)

        assert [(r.safety_score, r.crime_score, r.lighting_score) for r in result.routes] == [(50, 50, 50)] * 3
        assert result.recommended == 0

    def test_cache_avoids_second_provider_query(self, hotspot_store):
        config = RoutingConfig(scoring_workers=1)
        hot, quiet = routes_for_ranking()
        provider = FakeProvider(direct=[hot, quiet, make_route(distance=1500)])
        optimizer = SafeRouteOptimizer(hotspot_store, provider, config, cache=RouteCache(config))

        first = optimizer.find_routes(START, END)
        second = optimizer.find_routes(START, END, night=True)

        assert len(provider.calls) == 1
        assert [r.route for r in second.routes] == [r.route for r in first.routes]

    def test_cache_disabled_by_config(self, config, hotspot_store):
        optimizer = SafeRouteOptimizer(hotspot_store, FakeProvider(direct=[make_route()]), config)
        assert optimizer.cache is None

    def test_invalid_config_is_rejected(self, hotspot_store):
        with pytest.raises(ValueError):
            SafeRouteOptimizer(hotspot_store, FakeProvider(), RoutingConfig(day_crime_weight=1.5))
