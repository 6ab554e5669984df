"""
FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from pollen_paw.config import settings
from pollen_paw.middleware.error_handler import ErrorHandlerMiddleware
from pollen_paw.api.v1.routers import analysis, environmental, pets, symptoms

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

# Rate limiter
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[f"{settings.rate_limit_requests}/minute"],
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events using the modern FastAPI pattern.
    """
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Log level: {settings.log_level}")
    logger.info(f"Pollen config: forecast_days={settings.pollen_forecast_days}, "
                f"treat_zero_as_missing={settings.pollen_treat_zero_as_missing}")
    logger.info(f"Correlation config: min_days={settings.correlation_min_days}")
    logger.info(f"Rate limit: {settings.rate_limit_requests} requests/minute")
    if not settings.google_api_key:
        logger.warning("GOOGLE_API_KEY is not set; environmental lookups will fail")

    yield

    # Shutdown
    from pollen_paw.infrastructure.google_api_client import get_api_client
    logger.info("Shutting down application...")
    client = get_api_client()
    await client.close()
    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Pet Allergy Tracking API

    Log daily symptoms for your pets and find out which pollen drives them.

    ## Features

    - **Pollen Forecasts**: Tree, grass and weed pollen values per day with a
      LOW / MODERATE / HIGH / VERY_HIGH level and merged health recommendations
    - **Symptom Logging**: Eye, fur, skin and respiratory scores on a 1-5 scale
    - **Trigger Analysis**: Pearson correlation between symptom severity and each
      pollen category, with the strongest one reported as the top trigger
    - **Robust Error Handling**: Automatic retries with exponential backoff for
      external API calls
    - **Rate Limiting**: Protects the API from abuse

    ## Analysis Algorithm

    1. Joins each symptom log with the pollen values for its postal code and day
    2. Averages the symptom scores that were actually recorded into one severity
    3. Requires at least 3 logged days
    4. Computes Pearson's r against tree, grass and weed pollen
    5. Selects the category with the largest absolute r as the top trigger
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

# Add CORS middleware with configurable origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add global error handling middleware
app.add_middleware(ErrorHandlerMiddleware)

# Include routers
app.include_router(environmental.router, prefix="/api/v1")
app.include_router(pets.router, prefix="/api/v1")
app.include_router(symptoms.router, prefix="/api/v1")
app.include_router(analysis.router, prefix="/api/v1")


@app.get("/", tags=["health"])
@limiter.exempt
async def root():
    """
    Root endpoint for health check.

    Returns:
        Status message
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
    }


@app.get("/health", tags=["health"])
@limiter.exempt
async def health_check():
    """
    Health check endpoint.

    Returns:
        Health status
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
    }
