"""
FastAPI application initialization and configuration
Sets up middleware, exception handlers, and core endpoints
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import uuid

import httpx

from flixai.api.routes import router
from flixai.core.config import settings
from flixai.core.logger import get_logger
from flixai.schemas.recommendation import ErrorResponse, HealthCheckResponse

logger = get_logger("app")


# Lifecycle management
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle"""
    # Startup
    logger.info("Starting Flix.AI API...")
    logger.info(f"✓ Using Concentrate AI gateway: {settings.CONCENTRATE_BASE_URL}")
    logger.info(f"✓ Model: {settings.DEFAULT_MODEL}, attempts per request: {settings.RECOMMENDATION_ATTEMPTS}")
    if not settings.has_api_key:
        logger.warning("✗ CONCENTRATE_API_KEY is missing - every request will return the fallback record")

    yield

    # Shutdown
    logger.info("Shutting down Flix.AI API...")


# Initialize FastAPI app
app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    lifespan=lifespan
)


# === CORS Middleware ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# === Exception Handlers ===
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc):
    """Handle validation errors with structured response"""
    logger.warning(f"Validation error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=422,
        content=ErrorResponse(
            error="Request validation failed",
            error_code="VALIDATION_ERROR",
            request_id=request.headers.get("x-request-id") or str(uuid.uuid4()),
            details=[err.get("msg", "") for err in exc.errors()],
        ).model_dump(mode="json")
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc):
    """Catch-all exception handler"""
    request_id = str(uuid.uuid4())
    logger.error(f"Unhandled exception (ID: {request_id}): {exc}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal server error",
            error_code="INTERNAL_ERROR",
            request_id=request_id
        ).model_dump(mode="json")
    )


app.include_router(router, prefix="/api/v1")


# === Health Check ===
@app.get("/health", response_model=HealthCheckResponse)
async def health_check():
    """System health status endpoint - reports configuration and gateway reachability"""
    components = {
        "api": "operational",
        "configuration": "unknown",
        "concentrate_ai": "unknown"
    }

    overall_status = "healthy"

    if not settings.has_api_key:
        components["configuration"] = "degraded: CONCENTRATE_API_KEY missing"
        components["concentrate_ai"] = "not_configured"
        overall_status = "degraded"
        return HealthCheckResponse(status=overall_status, components=components)

    components["configuration"] = "operational"

    try:
        async with httpx.AsyncClient(timeout=5) as client:
            await client.get(
                settings.CONCENTRATE_BASE_URL.replace("/v1", "/health"),
                headers={"Authorization": f"Bearer {settings.CONCENTRATE_API_KEY}"}
            )
        components["concentrate_ai"] = "operational"
        logger.debug("✓ Concentrate AI health check passed")
    except httpx.HTTPError as e:
        components["concentrate_ai"] = "assumed_operational"
        logger.debug(f"Concentrate AI health check: {e}")

    return HealthCheckResponse(
        status=overall_status,
        components=components
    )


@app.get("/")
async def root():
    """Welcome endpoint with API information"""
    return {
        "name": settings.API_TITLE,
        "version": settings.API_VERSION,
        "status": "operational",
        "docs": "/docs",
        "health": "/health"
    }
