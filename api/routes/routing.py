"""
FastAPI routes for safe walk routing endpoints.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from safe_walk_routing.data.models import Coordinate
from safe_walk_routing.errors import InvalidCoordinateError, NoRouteFoundError
from api.schemas.routing import ErrorResponse, HealthResponse, RouteResponse
from api.services import routing_service as service_module

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/api", tags=["routing"])

TRUTHY_FLAGS = ("true", "1")


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump(exclude_none=True))


@router.get("/health", response_model=HealthResponse, summary="Health Check")
def health_check():
    """
    Check the health status of the routing service.

    Returns:
        HealthResponse: Service health information ("degraded" when safety data is missing)
    """
    return service_module.routing_service.get_health_status()


@router.get(
    "/route",
    response_model=RouteResponse,
    summary="Ranked Safe Walking Routes",
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
def get_routes(
    from_: Optional[str] = Query(None, alias="from", description="Start as 'lat,lng'"),
    to: Optional[str] = Query(None, description="Destination as 'lat,lng'"),
    night: str = Query("false", description="'true' or '1' for night-time weights")
):
    """
    Calculate walking routes between two points ranked by safety and duration.

    Example:
        ``GET /api/route?from=49.263,-123.168&to=49.263,-123.150&night=true``

    Returns:
        RouteResponse: Scored routes plus the safest and fastest selections
    """
    try:
        start = Coordinate.parse(from_)
        end = Coordinate.parse(to)
    except InvalidCoordinateError as e:
        logger.warning(f"Rejected route request: {e}")
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            "Missing or invalid from/to. Use: ?from=lat,lng&to=lat,lng"
        )

    is_night = night.strip().lower() in TRUTHY_FLAGS

    try:
        return service_module.routing_service.calculate_routes(start, end, is_night)
    except NoRouteFoundError as e:
        logger.info(f"No route found from {from_} to {to}")
        return error_response(status.HTTP_404_NOT_FOUND, str(e))
    except Exception as e:
        logger.error(f"Route calculation failed with unexpected error: {e}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Routing failed")


@router.get("/", summary="API Information")
def get_api_info():
    """
    Get information about the Safe Walk Routing API.

    Returns:
        dict: API information and available endpoints
    """
    return {
        "api": "Safe Walk Routing API",
        "description": "Walking routes ranked by crime and street-lighting density",
        "endpoints": {
            "GET /api/route?from=lat,lng&to=lat,lng&night=true|false": "Ranked safe walking routes",
            "GET /api/health": "Check service health status",
            "GET /api/": "This information endpoint"
        }
    }
