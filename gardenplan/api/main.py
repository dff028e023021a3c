from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from sqlalchemy import text
import logging
import time

from gardenplan.api.core.database import engine
from gardenplan.api.core.errors import GardenPlanError, InvalidInputError
from gardenplan.api.config import settings
from gardenplan.utils.logger import setup_logging

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    # Startup
    setup_logging(settings.LOG_LEVEL, settings.LOG_DIR)
    logger.info("Starting Garden Plan API...")

    # Test database connection
    try:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            logger.info("✅ Database connected")
    except Exception as e:
        logger.error(f"❌ Database connection failed: {e}")
        # Don't raise - allow API to start even if DB is temporarily unavailable

    yield

    # Shutdown
    logger.info("Shutting down Garden Plan API...")
    await engine.dispose()


# Initialize FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="Bed placement and succession planting scheduler for home gardens",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan
)

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# GZip compression for responses
app.add_middleware(GZipMiddleware, minimum_size=1000)


# Request timing middleware
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    logger.info(f"{request.method} {request.url.path} - {process_time:.3f}s")
    return response


def _describe_validation_error(error: dict) -> str:
    loc = [str(part) for part in error.get("loc", ()) if part != "body"]
    field = ".".join(loc)
    error_type = error.get("type", "")

    if not field:
        return "Request body must be a JSON object"
    if error_type == "missing":
        return f"{field} is required"
    if error_type.startswith("int_"):
        return f"{field} must be an integer"
    return f"{field}: {error.get('msg', 'invalid value')}"


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    messages = [_describe_validation_error(e) for e in exc.errors()]
    error = InvalidInputError("; ".join(messages) or None)
    return JSONResponse(
        status_code=error.status_code,
        content=error.to_dict()
    )


@app.exception_handler(GardenPlanError)
async def garden_plan_exception_handler(request: Request, exc: GardenPlanError):
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=headers
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Unexpected",
            "detail": str(exc) if settings.DEBUG else "An error occurred"
        }
    )


# Health check endpoint
@app.get("/health", tags=["System"])
async def health_check():
    """Health check endpoint for monitoring"""
    db_status = "connected"

    # Test database
    try:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception:
        db_status = "disconnected"

    return {
        "status": "healthy" if db_status == "connected" else "degraded",
        "version": "1.0.0",
        "database": db_status
    }


# API version prefix
API_V1_PREFIX = settings.API_V1_STR

# Import routers
from gardenplan.api.routers import succession, placements

# Include routers
app.include_router(
    succession.router,
    prefix=f"{API_V1_PREFIX}/succession",
    tags=["Succession"]
)
app.include_router(
    placements.router,
    prefix=f"{API_V1_PREFIX}/placements",
    tags=["Placements"]
)


# Root endpoint
@app.get("/", tags=["Root"])
async def root():
    """API root endpoint"""
    return {
        "message": "Welcome to Garden Plan API",
        "docs": "/api/docs",
        "version": "1.0.0",
        "endpoints": {
            "health": "/health",
            "docs": "/api/docs",
            "succession": f"{API_V1_PREFIX}/succession",
            "placements": f"{API_V1_PREFIX}/placements"
        }
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "gardenplan.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="info"
    )
