from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import time
from typing import Callable, Optional
from redis.asyncio import Redis

from portal.core.config.settings import Settings, get_settings
from portal.core.config.logging_config import setup_logging
from portal.core.errors import ApiError
from portal.db.session import Database
from portal.routers import admin, user
from portal.utils.responses import api_response


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ())[1:])
        parts.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    return "; ".join(parts) or "Invalid request data."


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    # Setup logging
    logger = setup_logging(settings.LOG_DIR, settings.LOG_LEVEL)
    error_logger = logging.getLogger("portal.errors")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        debug=settings.DEBUG,
        openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
        docs_url=f"{settings.API_V1_PREFIX}/docs",
        redoc_url=f"{settings.API_V1_PREFIX}/redoc",
    )
    app.state.settings = settings
    app.state.db = Database(settings.DATABASE_URL)
    app.state.redis = None

    @app.on_event("startup")
    async def startup_event():
        # Initialize Redis if URL is configured
        if settings.REDIS_URL:
            try:
                redis = Redis.from_url(
                    settings.REDIS_URL,
                    encoding="utf-8",
                    decode_responses=True
                )
                await redis.ping()
                app.state.redis = redis
                logger.info("Redis connection established")
            except Exception as e:
                error_logger.error(f"Failed to connect to Redis: {str(e)}")

        app.state.db.init()

    @app.on_event("shutdown")
    async def shutdown_event():
        if app.state.redis:
            await app.state.redis.close()
            app.state.redis = None
            logger.info("Redis connection closed")
        app.state.db.dispose()

    # Middleware for request logging
    @app.middleware("http")
    async def log_requests(request: Request, call_next: Callable):
        start_time = time.time()
        response = await call_next(request)
        duration = time.time() - start_time
        logger.info(
            f"Method: {request.method} Path: {request.url.path} "
            f"Status: {response.status_code} Duration: {duration:.2f}s"
        )
        return response

    # Rate limiting middleware
    @app.middleware("http")
    async def rate_limit(request: Request, call_next: Callable):
        redis = app.state.redis
        if redis:
            client_ip = request.client.host if request.client else "unknown"
            key = f"rate_limit:{client_ip}"
            requests = await redis.incr(key)

            if requests == 1:
                await redis.expire(key, 60)  # Reset after 60 seconds

            if requests > settings.RATE_LIMIT_PER_MINUTE:
                return api_response(status.HTTP_429_TOO_MANY_REQUESTS, None, "Too many requests")

        return await call_next(request)

    # CORS Middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers with prefix
    app.include_router(admin.router, prefix=settings.API_V1_PREFIX)
    app.include_router(user.router, prefix=settings.API_V1_PREFIX)

    # Exception handlers
    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        if exc.status_code >= 500:
            error_logger.error(f"API Error: {exc.message}")
        else:
            logger.warning(f"API Error {exc.status_code}: {exc.message}")
        return api_response(exc.status_code, None, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        message = _validation_message(exc)
        logger.warning(f"Validation error: {message}")
        return api_response(status.HTTP_400_BAD_REQUEST, None, message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code >= 500:
            error_logger.error(f"HTTP Exception: {exc.detail}")
        else:
            logger.warning(f"HTTP Exception {exc.status_code}: {exc.detail}")
        return api_response(exc.status_code, None, str(exc.detail))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        error_logger.error(f"Unhandled Exception: {str(exc)}", exc_info=True)
        return api_response(status.HTTP_500_INTERNAL_SERVER_ERROR, None, "Internal Server Error")

    @app.get("/")
    async def root():
        return api_response(status.HTTP_200_OK, None, f"Welcome to {settings.PROJECT_NAME}")

    # Health check endpoint with additional status info
    @app.get("/health")
    async def health_check():
        status_info = {
            "status": "healthy",
            "timestamp": time.time(),
            "database": "connected",
            "redis": "connected" if app.state.redis else "not configured"
        }

        if not app.state.db.ping():
            status_info["database"] = "disconnected"
            status_info["status"] = "unhealthy"

        if app.state.redis:
            try:
                await app.state.redis.ping()
            except Exception as e:
                status_info["redis"] = "disconnected"
                status_info["status"] = "unhealthy"
                error_logger.error(f"Redis health check failed: {str(e)}")

        return api_response(status.HTTP_200_OK, status_info, status_info["status"])

    return app


app = create_app()
