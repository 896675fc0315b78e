"""
FastAPI application entry point.
Atlas Life Quoting API
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from atlas_quote import __version__
from atlas_quote.config import get_settings
from atlas_quote.api.routes import router
from atlas_quote.core.reference_data import (
    get_company_profile,
    get_condition_catalog,
    reset_reference_data,
)


# Configure logging
logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Loads reference data on startup and releases it on shutdown.
    """
    # Startup
    logger.info("Starting Atlas Life Quoting API...")
    settings = get_settings()
    logger.info(f"API Version: {__version__}")
    logger.info(f"Reference data directory: {settings.data_dir}")

    catalog = get_condition_catalog()
    company = get_company_profile()
    logger.info(f"{len(catalog)} conditions loaded for {company.brand.name}")

    yield

    # Shutdown
    logger.info("Shutting down Atlas Life Quoting API...")
    reset_reference_data()
    logger.info("Cleanup complete")


# Create FastAPI application
app = FastAPI(
    title="Atlas Life Quoting API",
    description="""
    Life insurance premium quoting

    This API prices a client profile with a deterministic engine:
    - **Health assessment** from height and weight
    - **Underwriting class** from selected conditions and build
    - **Premium** from product rates, rating factors, riders and policy fee
    - **Death-benefit solver** for target-premium quotes

    ## Features

    - Price term, whole, UL, IUL, GUL and final expense products
    - Solve for death benefit from a target premium
    - Compare Bronze, Silver and Gold plans
    - Export client inputs and copy a plain-text plan summary

    ## Quick Start

    1. GET `/api/reference/options` and `/api/reference/conditions`
    2. POST a client profile to `/api/quotes`
    """,
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routes
app.include_router(router)


# Root endpoint
@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Atlas Life Quoting API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "atlas_quote.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
    )
