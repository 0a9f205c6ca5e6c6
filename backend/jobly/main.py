"""
Jobly Main Application
======================

FastAPI application for the job board:
- Jobs search, detail and admin-only writes
- JWT authentication
- Central error responder
- Prometheus monitoring
- Rate limiting on credential endpoints
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
import logging
from sqlalchemy import text

from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from jobly.core.errors import ErrorKind, JoblyError, format_validation_errors
from jobly.core.limiter import limiter
from jobly.core.settings import settings
from jobly.instrumentation.metrics import router as metrics_router
from jobly.api.router import api_router
from jobly.db.database import init_db

VERSION = "1.0.0"

# Logging configuration
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.NOT_FOUND: 404,
}


# ============================================================================
# Lifespan Events
# ============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan events - startup and shutdown.
    """
    logger.info("Jobly starting up...")

    try:
        logger.info("Initializing database...")
        init_db()
        logger.info("Database initialized")

    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")

    yield

    logger.info("Jobly shutting down...")


# ============================================================================
# FastAPI App
# ============================================================================

app = FastAPI(
    title="Jobly API",
    version=VERSION,
    description="Job board API: companies post jobs, users search them.",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ============================================================================
# Middleware
# ============================================================================

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)


# ============================================================================
# Error Responder
# ============================================================================

def error_response(message, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"message": message, "status": status_code}},
    )


@app.exception_handler(JoblyError)
async def jobly_error_handler(request: Request, exc: JoblyError):
    return error_response(exc.message, STATUS_BY_KIND.get(exc.kind, 400))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return error_response(format_validation_errors(exc.errors()), 400)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.detail, exc.status_code)


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler for unhandled errors.
    """
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    return error_response(str(exc) if settings.DEBUG else "Internal server error", 500)


# ============================================================================
# Routers
# ============================================================================

app.include_router(api_router)

# Metrics (monitoring)
app.include_router(metrics_router, tags=["Monitoring"])

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


# ============================================================================
# Health Checks
# ============================================================================

@app.get("/health", tags=["Health"])
def health():
    """
    Health check endpoint.

    Returns system status and readiness.
    """
    db_healthy = True
    try:
        from jobly.db.database import SessionLocal
        db = SessionLocal()
        db.execute(text("SELECT 1"))
        db.close()
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        db_healthy = False

    return {
        "status": "healthy" if db_healthy else "degraded",
        "version": VERSION,
        "services": {
            "database": "healthy" if db_healthy else "unhealthy",
        },
    }


@app.get("/", tags=["Root"])
def root():
    """
    Root endpoint - API information.
    """
    return {
        "name": "Jobly API",
        "version": VERSION,
        "documentation": "/docs",
        "health": "/health",
        "metrics": "/metrics",
    }
