"""
Tests for the command line interface.
"""

from safe_walk_routing import main as cli
from safe_walk_routing.errors import NoRouteFoundError
from safe_walk_routing.data.models import RankedResult, ScoredRoute

from conftest import make_route


class StubOptimizer:

    def __init__(self, result=None, error=None, config=None):
        self.result = result
        self.error = error
        self.config = config
        self.grid_store = type('Store', (), {'data_unavailable': True})()

    def find_routes(self, start, end, night=False):
        if self.error is not None:
            raise self.error
        return self.result


def test_invalid_coordinates_exit_code(capsys):
    assert cli.main(['--from', 'abc', '--to', '49.263,-123.15']) == 2
    assert "❌" in capsys.readouterr().out


def test_no_route_exit_code(monkeypatch, capsys):
    monkeypatch.setattr(cli, 'SafeRouteOptimizer',
                        lambda config=None: StubOptimizer(error=NoRouteFoundError(), config=config))

    assert cli.main(['--from', '49.263,-123.168', '--to', '49.263,-123.15']) == 1
    assert "No route found" in capsys.readouterr().out


def test_prints_ranked_routes(monkeypatch, tmp_path, capsys):
    scored = ScoredRoute(make_route(distance=1390, duration=1000), 50, 50, 50)
    result = RankedResult((scored,), 0, 0, (0,), (0,))
    created = []

    def build(config=None):
        created.append(config)
        return StubOptimizer(result=result, config=config)

    monkeypatch.setattr(cli, 'SafeRouteOptimizer', build)

    code = cli.main(['--from', '49.263,-123.168', '--to', '49.263,-123.15',
                     '--night', '--data-dir', str(tmp_path)])

    out = capsys.readouterr().out
    assert code == 0
    assert "Route 1 (recommended, fastest)" in out
    assert "Distance: 1390m" in out
    assert "Safety data unavailable" in out
    assert created[0].data_dir == str(tmp_path)
    assert created[0].enable_cache is False
