# Main application entry point
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .api import (
    auth_router,
    health_router,
    resources_router,
    sharing_router,
    templates_router,
    versions_router,
)
from .config import get_settings
from .core.exceptions import OnboardHubError, RequiresConfirmationError
from .core.logging import LoggingMiddleware, get_logger, setup_logging
from .core.redis_client import get_redis_client
from .database import create_tables

# Setup logging first
setup_logging()
logger = get_logger("main")

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info(
        "Starting OnboardHub application",
        extra={"version": __version__, "environment": settings.environment, "debug": settings.debug},
    )

    redis_client = get_redis_client()
    try:
        await redis_client.connect()
        logger.info("Redis connection established")
    except Exception as e:
        logger.warning(f"Redis connection failed: {e}. Continuing without Redis...")

    # tests run against their own SQLite engine
    if os.getenv("ONBOARDHUB_SKIP_LIFESPAN_DB") == "1":
        logger.info("Skipping DB table creation due to ONBOARDHUB_SKIP_LIFESPAN_DB=1")
    else:
        try:
            await create_tables()
            logger.info("Database tables created/verified")
        except Exception as e:
            logger.error("Failed to create database tables", exc_info=e)
            raise

    yield

    logger.info("Shutting down OnboardHub application")
    await redis_client.disconnect()


app = FastAPI(
    title=settings.app_name,
    description="Onboarding checklists and resource libraries with invite-link sharing",
    version=__version__,
    lifespan=lifespan,
)


@app.exception_handler(RequiresConfirmationError)
async def confirmation_required_handler(request: Request, exc: RequiresConfirmationError):
    return JSONResponse(
        status_code=200,
        content={
            "success": False,
            "requires_confirmation": True,
            "message": exc.message,
            "existing_data": exc.existing_data,
        },
    )


@app.exception_handler(OnboardHubError)
async def domain_error_handler(request: Request, exc: OnboardHubError):
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"success": False, "error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": f"{location}: {message}" if location else message,
        },
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(status_code=500, content={"success": False, "error": "Internal server error"})


app.add_middleware(LoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router, prefix="/api")
app.include_router(templates_router, prefix="/api")
app.include_router(resources_router, prefix="/api")
app.include_router(versions_router, prefix="/api")
app.include_router(sharing_router, prefix="/api")
app.include_router(health_router, prefix="/api")


@app.get("/")
async def root():
    return {"message": "OnboardHub API"}


@app.get("/api/")
async def api_root():
    return {
        "message": "OnboardHub API",
        "version": __version__,
        "documentation": {
            "swagger_ui": "/docs",
            "redoc": "/redoc",
            "openapi_json": "/openapi.json",
        },
        "endpoints": {
            "authentication": "/api/auth/",
            "templates": "/api/templates",
            "resources": "/api/resources",
            "versions": "/api/versions",
            "sharing": "/api/sharing/",
            "health": "/api/health/",
        },
    }


# unprefixed liveness check
@app.get("/health")
async def basic_health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("onboardhub.main:app", host=settings.host, port=settings.port, reload=settings.reload)
