# Main FastAPI application file
# File: api/main.py

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from typing import Dict
from api.utils.config import Config
from api.utils.logging import api_logger as logger
from api.utils.sessions import session_store
from src.curtain_wall.utils.logging_config import CurtainWallLogger
from api.endpoints.designs import router as designs_router
from api.endpoints.presets import router as presets_router
from api.endpoints.quotes import router as quotes_router


# Define lifespan context manager (replaces on_event)
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup code (runs before application starts)
    logger.info("Run on application startup.")
    Config.validate()
    log_file = CurtainWallLogger.configure(
        debug_mode=Config.DEBUG,
        log_dir=Config.LOG_DIR,
        service_mode=True,
    )
    if log_file:
        logger.info(f"Designer and pricing logs go to {log_file}")

    yield  # This is where the application runs

    # Shutdown code (runs when application is shutting down)
    logger.info(f"Application shutting down; discarding {len(session_store)} design sessions.")
    session_store.clear()

# Log startup information
logger.info("==== API INITIALIZATION STARTING ====")

# Create FastAPI application with lifespan
app = FastAPI(
    title="Curtain Wall Designer API",
    description="""
    # Curtain Wall Designer API

    This API hosts interactive curtain-wall panel designs and prices quotes.

    ## Features

    - Panel grid sessions: paint windows and doors, merge and split panels
    - Ratio-weighted column and row sizes with per-cell dimensions
    - Undo/redo history and built-in layout presets
    - Frame material, glass type and frame color with a material cost estimate
    - Design aggregates (frame meters, glass area, corners) for pricing
    - Quote pricing for curtain walls, windows, doors and skylights

    ## Workflow

    1. Create a design with `POST /designs` (optionally from a preset)
    2. Pick a tool with `PUT /designs/{id}/tool` and click cells
    3. Select cells with the structure tool and `POST /designs/{id}/merge`
    4. Read the aggregates from `GET /designs/{id}/metrics`
    5. Price the wall with `POST /quotes/price`, referencing the design by `designId`

    Designs live in server memory and are discarded on restart.
    """,
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {
            "name": "Designs",
            "description": "Curtain-wall panel grid design sessions"
        },
        {
            "name": "Presets",
            "description": "Built-in grid layouts"
        },
        {
            "name": "Quotes",
            "description": "Quote item pricing and totals"
        },
        {
            "name": "Status",
            "description": "API status and health check endpoints"
        }
    ],
    lifespan=lifespan,
)


# Root endpoint
@app.get("/", tags=["Status"])
async def root():
    logger.info("Root endpoint called")
    return {"status": "online", "message": "Curtain Wall Designer API is running"}


# Health check endpoint (general API health)
@app.get("/health", tags=["Status"], response_model=Dict[str, str])
async def health_check():
    """Check if the API service is healthy."""
    logger.info("Health check requested")
    return {
        "status": "healthy",
        "message": "Curtain Wall Designer API is running",
        "environment": Config.ENVIRONMENT,
        "sessions": str(len(session_store)),
    }

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ORIGINS,
    allow_credentials="*" not in Config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(designs_router, prefix="/designs", tags=["Designs"])
logger.info("Included designs router with prefix /designs")

app.include_router(presets_router, prefix="/presets", tags=["Presets"])
app.include_router(quotes_router, prefix="/quotes", tags=["Quotes"])

# Log completion
logger.info("==== API INITIALIZATION COMPLETE ====")

# Run with: uvicorn api.main:app --reload
