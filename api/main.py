"""
Safe Walk Routing API - FastAPI Main Application

Walking routes ranked by safety (crime and street-lighting density) and duration.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from safe_walk_routing import __version__
from api.routes.routing import router as routing_router
from api.services import routing_service as service_module

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle - startup and shutdown events.
    """
    logger.info("Starting Safe Walk Routing API...")

    if service_module.routing_service.warm_up():
        health = service_module.routing_service.get_health_status()
        logger.info(f"✓ Safety grids ready ({health.crime_cells} crime cells, "
                    f"{health.lighting_cells} lighting cells)")
    else:
        logger.warning("⚠ Routing service running in degraded mode - safety data not loaded")

    yield

    logger.info("Shutting down Safe Walk Routing API...")


app = FastAPI(
    title="Safe Walk Routing API",
    description="""
    **Walking routes ranked by safety**

    Routes come from an OSRM walking profile. When OSRM offers fewer than three
    alternatives, detours through synthetic via-points are added. Each route is
    scored against crime-incident and street-lighting density grids, weighted
    for day or night, and the response lists the safest and fastest options.

    ## Quick Start

    1. Check service health: `GET /api/health`
    2. Rank routes: `GET /api/route?from=lat,lng&to=lat,lng&night=true`
    """,
    version=__version__,
    lifespan=lifespan
)

# Add CORS middleware for web applications
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handle request validation errors with detailed information.
    """
    logger.warning(f"Validation error for {request.url}: {exc}")
    return JSONResponse(
        status_code=422,
        content={
            "error": "Request validation failed",
            "details": exc.errors()
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """
    Handle unexpected errors gracefully.
    """
    logger.error(f"Unexpected error for {request.url}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "An unexpected error occurred"}
    )


app.include_router(routing_router)


@app.get("/", tags=["general"])
async def root():
    """
    API root endpoint with basic information.
    """
    return {
        "api": "Safe Walk Routing API",
        "version": __version__,
        "status": "operational",
        "documentation": "/docs",
        "health_check": "/api/health"
    }


@app.get("/health", tags=["general"])
async def api_health():
    """
    Simple health check endpoint.
    """
    service_health = service_module.routing_service.get_health_status()
    return {
        "api_status": "healthy",
        "service_status": service_health.status
    }
