"""
FastAPI application entry point.
Main application instance with middleware, error handlers and route configuration.
"""
from fastapi import FastAPI, Request, status, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import text
import logging

from photogallery.config import settings
from photogallery.database import get_db, init_db, close_db
from photogallery.exceptions import GalleryServiceError, InternalError
from photogallery.routes import auth, galleries
from photogallery.utils.rate_limit import limiter

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
)

app.state.limiter = limiter

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    max_age=3600,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every request with its response status."""
    method = request.method
    path = request.url.path
    logger.debug(f"Incoming {method} request to {path}")

    try:
        response = await call_next(request)
    except Exception as e:
        logger.error(
            f"Error processing {method} {path}: {str(e)}\n"
            f"  Error type: {type(e).__name__}",
            exc_info=True
        )
        raise

    logger.info(f"Response status: {response.status_code} for {method} {path}")
    return response


app.include_router(galleries.router, prefix="/api")
app.include_router(auth.router, prefix="/api")


# Exception Handlers
@app.exception_handler(GalleryServiceError)
async def gallery_service_error_handler(request: Request, exc: GalleryServiceError):
    """Render engine errors as {"error", "detail"} with their status code."""
    if isinstance(exc, InternalError):
        logger.error(f"Internal error on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(
            f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}"
        )

    content = {"error": exc.message}
    if exc.detail is not None:
        content["detail"] = jsonable_encoder(exc.detail)

    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle framework HTTP exceptions (unknown route, wrong method)."""
    logger.info(f"HTTPException on {request.method} {request.url.path}: {exc.status_code} {exc.detail}")

    if isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = {"error": exc.detail}

    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors raised by FastAPI itself."""
    logger.info(f"Validation error on {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Validation error",
            "detail": jsonable_encoder(exc.errors())
        }
    )


app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions without leaking internal detail."""
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}:\n"
        f"  Error: {str(exc)}\n"
        f"  Error type: {type(exc).__name__}",
        exc_info=True
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": InternalError.default_message}
    )


# Root Endpoints
@app.get("/")
async def root():
    """Root endpoint - API health check."""
    return {
        "message": settings.API_TITLE,
        "status": "healthy",
        "version": settings.API_VERSION
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/health/db")
async def health_check_db(db: AsyncSession = Depends(get_db)):
    """
    Database health check endpoint.
    Tests database connection and returns status.
    """
    try:
        result = await db.execute(text("SELECT 1"))
        return {
            "database": "connected",
            "status": "healthy",
            "result": result.scalar()
        }
    except Exception as e:
        logger.error(f"Database health check failed: {str(e)}", exc_info=True)
        return {
            "database": "error",
            "status": "unhealthy",
            "error": "Database connection failed"
        }


@app.on_event("startup")
async def startup_event():
    """
    Initialize database connection on application startup.
    The app still starts if the database is unreachable; database endpoints will fail.
    """
    try:
        await init_db()
    except Exception as e:
        logger.error(
            f"Failed to initialize database on startup: {str(e)}\n"
            f"Please check your DATABASE_URL configuration and network connectivity."
        )


@app.on_event("shutdown")
async def shutdown_event():
    """Close database connections on application shutdown."""
    try:
        await close_db()
    except Exception as e:
        logger.warning(f"Error during database shutdown: {str(e)}")
