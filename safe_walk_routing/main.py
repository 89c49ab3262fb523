#!/usr/bin/env python3
"""
Safe Walk Routing - Command Line Interface

Prints the ranked walking routes between two points.

Usage:
    python -m safe_walk_routing.main --from 49.263,-123.168 --to 49.263,-123.150 --night
"""

import argparse
import logging
import sys

from .config import RoutingConfig
from .algorithms import SafeRouteOptimizer
from .data import Coordinate
from .errors import InvalidCoordinateError, NoRouteFoundError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Rank walking routes by safety and duration")
    parser.add_argument('--from', dest='start', required=True, help="Start as 'lat,lng'")
    parser.add_argument('--to', dest='end', required=True, help="Destination as 'lat,lng'")
    parser.add_argument('--night', action='store_true', help="Use night-time safety weights")
    parser.add_argument('--data-dir', help="Directory holding crime-grid.json and lighting.json")
    parser.add_argument('--log-level', default='warning',
                        choices=['debug', 'info', 'warning', 'error'], help="Log level")
    return parser


def main(argv=None) -> int:
    """
    Calculate and print ranked routes.
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        start = Coordinate.parse(args.start)
        end = Coordinate.parse(args.end)
    except InvalidCoordinateError as e:
        print(f"❌ {e}")
        return 2

    config = RoutingConfig.from_env()
    if args.data_dir:
        config.data_dir = args.data_dir
    config.enable_cache = False

    print("🚶 Safe Walk Routing")
    print("=" * 50)
    print(f"   Start: {start.lat}, {start.lng}")
    print(f"   End:   {end.lat}, {end.lng}")
    print(f"   Mode:  {'night' if args.night else 'day'}")

    optimizer = SafeRouteOptimizer(config=config)

    try:
        result = optimizer.find_routes(start, end, night=args.night)
    except NoRouteFoundError as e:
        print(f"❌ {e}")
        return 1

    if optimizer.grid_store.data_unavailable:
        print("⚠ Safety data unavailable - showing neutral scores")

    for index, route in enumerate(result.routes):
        summary = route.get_summary()
        tags = []
        if index == result.recommended:
            tags.append('recommended')
        if index == result.fastest:
            tags.append('fastest')
        label = f" ({', '.join(tags)})" if tags else ""

        print(f"\n📊 Route {index + 1}{label}:")
        print(f"   Distance: {summary['distance_m']:.0f}m")
        print(f"   Duration: {summary['duration_s'] / 60:.1f} min")
        print(f"   Safety: {summary['safety_score']}  Crime: {summary['crime_score']}  "
              f"Lighting: {summary['lighting_score']}")
        print(f"   Hotspots: {summary['danger_point_count']}")

    print(f"\n🛡 Safest options: {[i + 1 for i in result.safest_options]}")
    print(f"⏱ Fastest options: {[i + 1 for i in result.fastest_options]}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
