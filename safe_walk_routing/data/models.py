"""
Route and score containers shared by the scoring, augmentation and ranking stages.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

import geojson

from ..errors import InvalidCoordinateError


@dataclass(frozen=True)
class Coordinate:
    """A WGS84 position in degrees."""

    lat: float
    lng: float

    @classmethod
    def parse(cls, text: str) -> 'Coordinate':
        """
        Parse a "lat,lng" string.

        Args:
            text: Coordinate text such as "49.263,-123.168"

        Returns:
            Parsed Coordinate

        Raises:
            InvalidCoordinateError: If the text is not two finite numbers in range
        """
        if not text:
            raise InvalidCoordinateError("Coordinate is missing")

        parts = text.split(',')
        if len(parts) != 2:
            raise InvalidCoordinateError(f"Expected 'lat,lng', got {text!r}")

        try:
            lat, lng = float(parts[0].strip()), float(parts[1].strip())
        except ValueError:
            raise InvalidCoordinateError(f"Coordinate is not numeric: {text!r}")

        if not (math.isfinite(lat) and math.isfinite(lng)):
            raise InvalidCoordinateError(f"Coordinate is not finite: {text!r}")
        if not (-90 <= lat <= 90 and -180 <= lng <= 180):
            raise InvalidCoordinateError(f"Coordinate out of range: {text!r}")

        return cls(lat, lng)

    def to_lng_lat(self) -> List[float]:
        return [self.lng, self.lat]


RouteGeometry = Tuple[Coordinate, ...]


@dataclass(frozen=True)
class CandidateRoute:
    """A route returned by the routing provider."""

    geometry: RouteGeometry
    duration_seconds: float
    distance_meters: float

    @property
    def is_degenerate(self) -> bool:
        return len(self.geometry) < 2

    def to_geojson(self) -> geojson.LineString:
        """Render the geometry as a GeoJSON LineString ([lng, lat] order)."""
        return geojson.LineString([coord.to_lng_lat() for coord in self.geometry])


@dataclass(frozen=True)
class ScoredPoint:
    """Per-sample scoring result (ephemeral)."""

    lat: float
    lng: float
    normalized_crime: float
    normalized_light: float
    local_safety: float


@dataclass(frozen=True)
class SegmentScore:
    """Safety score for the stretch between two adjacent sample points."""

    start: Coordinate
    end: Coordinate
    score: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'coords': [self.start.to_lng_lat(), self.end.to_lng_lat()],
            'score': self.score
        }


@dataclass(frozen=True)
class DangerPoint:
    """A sample point whose normalized crime density exceeds the hotspot threshold."""

    lat: float
    lng: float
    intensity: float

    def to_dict(self) -> Dict[str, float]:
        return {'lat': self.lat, 'lng': self.lng, 'intensity': self.intensity}


@dataclass(frozen=True)
class ScoredRoute:
    """A candidate route with its safety scores, segment scores and hotspots."""

    route: CandidateRoute
    safety_score: int
    crime_score: int
    lighting_score: int
    segments: Tuple[SegmentScore, ...] = ()
    danger_points: Tuple[DangerPoint, ...] = ()

    @property
    def duration_seconds(self) -> float:
        return self.route.duration_seconds

    @property
    def distance_meters(self) -> float:
        return self.route.distance_meters

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics for the route."""
        return {
            'distance_m': round(self.distance_meters, 1),
            'duration_s': round(self.duration_seconds, 1),
            'safety_score': self.safety_score,
            'crime_score': self.crime_score,
            'lighting_score': self.lighting_score,
            'segment_count': len(self.segments),
            'danger_point_count': len(self.danger_points)
        }


@dataclass(frozen=True)
class RankedResult:
    """Scored routes plus the safest and fastest selections (indices into routes)."""

    routes: Tuple[ScoredRoute, ...]
    recommended: int
    fastest: int
    safest_options: Tuple[int, ...] = field(default_factory=tuple)
    fastest_options: Tuple[int, ...] = field(default_factory=tuple)
