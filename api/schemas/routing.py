"""
Pydantic schemas for the safe walk routing API.

Response field names follow the camelCase JSON contract used by the web
client (``safetyScore``, ``dangerPoints``, ``safestOptions`` ...).
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SegmentModel(BaseModel):
    """Scored stretch between two adjacent sample points."""
    coords: List[List[float]] = Field(..., description="Two [lng, lat] endpoints")
    score: int = Field(..., ge=0, le=100, description="Segment safety score")


class DangerPointModel(BaseModel):
    """Crime hotspot along a route."""
    lat: float = Field(..., description="Latitude")
    lng: float = Field(..., description="Longitude")
    intensity: float = Field(..., gt=0.0, le=1.0, description="Normalized crime density")


class ScoredRouteModel(BaseModel):
    """A candidate route with its safety scores."""
    model_config = ConfigDict(populate_by_name=True)

    geometry: Dict[str, Any] = Field(..., description="Route as a GeoJSON LineString")
    duration: int = Field(..., description="Walking time in seconds")
    distance: int = Field(..., description="Route length in meters")
    safety_score: int = Field(..., alias="safetyScore", ge=0, le=100, description="Safety score (100 = safest)")
    crime_score: int = Field(..., alias="crimeScore", ge=0, le=100, description="Crime avoidance sub-score")
    lighting_score: int = Field(..., alias="lightingScore", ge=0, le=100, description="Lighting sub-score")
    segments: List[SegmentModel] = Field(default_factory=list, description="Per-segment scores")
    danger_points: List[DangerPointModel] = Field(default_factory=list, alias="dangerPoints",
                                                  description="Crime hotspots along the route")


class RouteResponse(BaseModel):
    """Ranked routes between two points."""
    model_config = ConfigDict(populate_by_name=True)

    routes: List[ScoredRouteModel] = Field(..., description="Scored routes in provider order")
    recommended: int = Field(..., description="Index of the safest route")
    fastest: int = Field(..., description="Index of the fastest route")
    safest_options: List[int] = Field(..., alias="safestOptions", description="Up to 3 safest route indices")
    fastest_options: List[int] = Field(..., alias="fastestOptions", description="Up to 3 fastest route indices")


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(..., description="Service status")
    version: str = Field(..., description="API version")
    safety_data_loaded: bool = Field(..., description="Whether crime and lighting grids are loaded")
    crime_cells: int = Field(..., description="Number of non-empty crime grid cells")
    lighting_cells: int = Field(..., description="Number of non-empty lighting grid cells")


class ErrorResponse(BaseModel):
    """Error response model."""
    error: str = Field(..., description="Error message")
    details: Optional[Any] = Field(None, description="Additional error details")
