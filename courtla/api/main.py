"""
CourtLA API Server

FastAPI server that provides REST endpoints for basketball courts, pickup
games, user profiles and statistics backed by an in-memory store.
"""

from contextlib import asynccontextmanager
from typing import Optional
import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded  # type: ignore
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from courtla.api.routes import router, limiter as routes_limiter
from courtla.database.seed_data import seed_store
from courtla.database.store import InMemoryStore
from courtla.models.schemas import HealthResponse
from courtla.services import settings_service
from courtla.utils.datetime_utils import utcnow

# Set up logging
# Allow log level to be configured via environment variable (default: INFO)
log_level = settings_service.get_log_level()
numeric_level = getattr(logging, log_level, logging.INFO)
logging.basicConfig(
    level=numeric_level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)
access_logger = logging.getLogger("courtla.access")

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan handler for startup and shutdown events."""
    prefix = settings_service.get_api_prefix()
    logger.info("Starting up CourtLA API (%s)...", settings_service.get_environment())
    logger.info("API base path: %s, store: %s", prefix or "/", app.state.store.counts())

    yield  # App is running

    logger.info("Shutting down CourtLA API...")


def _error_response(status_code: int, error: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": error, **extra})


def _is_routing_error(exc: StarletteHTTPException) -> bool:
    """True for the router's own 404/405, not a 404 raised by a handler."""
    if exc.status_code == 405:
        return True
    return exc.status_code == 404 and exc.detail == "Not Found"


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 405 and request.method == "OPTIONS":
            return Response(status_code=204, headers=exc.headers)
        if _is_routing_error(exc):
            # No route matched the path or the method
            return _error_response(404, "Endpoint not found", path=request.url.path)
        response = _error_response(exc.status_code, str(exc.detail))
        if getattr(exc, "headers", None):
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        details = []
        for err in exc.errors():
            loc = [str(part) for part in err.get("loc", ())]
            details.append(
                {
                    "field": ".".join(loc[1:]) or (loc[0] if loc else ""),
                    "location": loc[0] if loc else "",
                    "message": err.get("msg", "Invalid value"),
                }
            )
        return _error_response(400, "Validation failed", details=details)

    @app.exception_handler(RateLimitExceeded)
    def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
        logger.warning("Rate limit exceeded for %s on %s", request.client, request.url.path)
        response = _error_response(429, RATE_LIMIT_MESSAGE)
        view_rate_limit = getattr(request.state, "view_rate_limit", None)
        if view_rate_limit is not None:
            response = request.app.state.limiter._inject_headers(response, view_rate_limit)
        return response

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        message = "Something went wrong" if settings_service.is_production() else str(exc)
        return _error_response(500, "Internal server error", message=message)


def create_app(
    store: Optional[InMemoryStore] = None, limiter: Optional[Limiter] = None
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        store: Store to serve; a freshly seeded one is created when omitted
        limiter: Rate limiter; defaults to the shared routes limiter

    Returns:
        Configured FastAPI application
    """
    if store is None:
        store = InMemoryStore()
        seed_store(store)
    active_limiter = limiter or routes_limiter
    api_prefix = settings_service.get_api_prefix()

    app = FastAPI(
        title="CourtLA API",
        description="API for basketball court discovery, pickup games and player statistics",
        version=settings_service.API_VERSION,
        lifespan=lifespan,
    )
    app.state.store = store

    # Setup rate limiter
    app.state.limiter = active_limiter
    app.add_middleware(SlowAPIMiddleware)

    # Add CORS middleware; origins configured via CORS_ORIGIN env var
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings_service.get_allowed_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        access_logger.info(
            "%s %s %s %d %.1fms",
            request.client.host if request.client else "-",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    _register_exception_handlers(app)

    @app.get("/health", response_model=HealthResponse)
    @active_limiter.exempt
    def health_check(request: Request):
        """Liveness probe; never rate limited."""
        return HealthResponse(
            success=True,
            message="CourtLA API is running",
            timestamp=utcnow().isoformat(),
            version=settings_service.API_VERSION,
        )

    # Include API routes
    app.include_router(router, prefix=api_prefix)

    @app.get("/", include_in_schema=False)
    async def root():
        """API root: lists the available resource paths."""
        return {
            "success": True,
            "message": "Welcome to CourtLA API",
            "version": settings_service.API_VERSION,
            "endpoints": {
                "courts": f"{api_prefix}/courts",
                "games": f"{api_prefix}/games",
                "statistics": f"{api_prefix}/statistics",
                "profile": f"{api_prefix}/profile",
                "health": "/health",
            },
        }

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=settings_service.get_host(), port=settings_service.get_port())
