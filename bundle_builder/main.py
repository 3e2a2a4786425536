"""
Main application for Bundle Builder
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bundle_builder.core.config.settings import settings
from bundle_builder.core.database import close_engine, create_all_tables
from bundle_builder.core.logging import get_logger, setup_logging
from bundle_builder.core.logging.config import LoggingConfig

from bundle_builder.api.v1.bundles import router as bundles_router
from bundle_builder.api.v1.feedback import router as feedback_router
from bundle_builder.api.v1.health import router as health_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    setup_logging(LoggingConfig.from_settings(settings.logging))

    try:
        await create_all_tables()
    except Exception as e:
        logger.error(f"❌ Failed to initialize database: {e}")
        raise
    logger.info("✅ Bundle Builder started", environment=settings.ENVIRONMENT)

    yield

    await close_engine()
    logger.info("Bundle Builder stopped")


# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Create Shopify bundle products from existing products",
    version=settings.VERSION,
    lifespan=lifespan,
)

# Include API routers
app.include_router(bundles_router)
app.include_router(feedback_router)
app.include_router(health_router)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies are a 400, matching the admin UI's expectations"""
    logger.warning("Invalid request body", path=request.url.path, errors=len(exc.errors()))
    return JSONResponse(status_code=400, content={"message": "Invalid data"})


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": f"{settings.PROJECT_NAME} is running",
        "version": settings.VERSION,
        "docs": "/docs",
        "health": "/health",
    }
