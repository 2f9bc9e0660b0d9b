"""
Main FastAPI application for the Kanban Board API
"""
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from app.config import settings
from app.core.exceptions import APIException
from app.api.v1.router import api_router
from app.core.database import init_db, close_db, async_session_factory
from app.core.logging import setup_logging, get_logger
from app.services.websocket_manager import manager

# Configure structured logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    # Startup
    logger.info("Starting Kanban Board API...")
    await init_db()
    logger.info("Database initialized successfully")

    yield

    # Shutdown
    logger.info("Shutting down Kanban Board API...")
    await manager.drain()
    await close_db()


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Collaborative kanban boards with realtime card updates",
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan,
)

# Add CORS middleware with proper dev/prod configuration
logger.info(f"CORS allowed origins: {settings.allowed_origins}")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Add processing time header to responses"""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    return response


def _error_response(status_code: int, code: str, message: str, details=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": {
                "code": code,
                "message": message,
                "details": details
            },
            "message": message,
            "timestamp": time.time()
        }
    )


@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    """Handle custom API exceptions"""
    return _error_response(exc.status_code, exc.error_code, exc.message, exc.details)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Request body and parameter validation failures are client errors"""
    errors = exc.errors()
    message = errors[0].get("msg", "Validation failed") if errors else "Validation failed"
    details = {
        "errors": [
            {"field": ".".join(str(part) for part in error.get("loc", ())), "message": error.get("msg")}
            for error in errors
        ]
    }
    return _error_response(400, "VAL_001", message, details)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions"""
    logger.error(
        f"Unhandled exception: {exc}",
        exc_info=True,
        extra={"request_path": str(request.url.path), "request_method": request.method}
    )
    details = {"exception_type": type(exc).__name__, "exception_message": str(exc)} if settings.debug else None
    return _error_response(500, "SYS_001", "Internal server error", details)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "success": True,
        "data": {
            "message": "Welcome to the Kanban Board API",
            "version": settings.app_version,
            "environment": settings.environment
        },
        "timestamp": time.time()
    }


@app.get("/health")
async def health_check():
    """Health check endpoint with database status"""
    db_status = "unknown"
    db_error = None

    try:
        async with async_session_factory() as db:
            await db.execute(text("SELECT 1"))
        db_status = "healthy"
    except Exception as e:
        db_status = "unhealthy"
        db_error = str(e)

    return {
        "success": True,
        "data": {
            "status": "healthy" if db_status == "healthy" else "degraded",
            "version": settings.app_version,
            "environment": settings.environment,
            "database": {
                "status": db_status,
                "error": db_error
            },
            "realtime": manager.get_connection_stats()
        },
        "timestamp": time.time()
    }


# Include API routes
app.include_router(api_router, prefix="/api")
