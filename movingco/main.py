from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from starlette.responses import JSONResponse, Response
from starlette.middleware.base import BaseHTTPMiddleware
from movingco.api import auth, catalog, quotes, service_areas, users
from movingco.core.config import settings, DEFAULT_SECRET_KEY
from movingco.core.exceptions import register_exception_handlers
from movingco.core.redis import init_redis, close_redis, get_redis
from movingco.core.metrics import request_count, request_duration, db_connected, redis_connected, get_metrics_text
from movingco.db.base import create_tables
from movingco.db.session import dispose_engine, ping_database
import time
import logging

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


class MetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        status = 500

        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            # Label by route template so /quotes/1 and /quotes/2 share a series.
            route = request.scope.get("route")
            endpoint = getattr(route, "path", "unmatched")
            request_count.labels(
                method=request.method,
                endpoint=endpoint,
                status=status
            ).inc()
            request_duration.labels(
                method=request.method,
                endpoint=endpoint
            ).observe(time.time() - start_time)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    logger.info("Application starting...")

    if settings.SECRET_KEY == DEFAULT_SECRET_KEY:
        logger.warning("SECRET_KEY is using the default value. Set it in production!")

    logger.info("Initializing Redis connection...")
    try:
        client = await init_redis()
        redis_connected.set(1 if client is not None else 0)
    except Exception as e:
        logger.error(f"Redis connection failed: {e}")
        redis_connected.set(0)

    try:
        await ping_database()
        await create_tables()
        db_connected.set(1)
        logger.info("Database connected")
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        db_connected.set(0)

    yield

    logger.info("Application shutting down...")
    await close_redis()
    redis_connected.set(0)
    await dispose_engine()
    db_connected.set(0)
    logger.info("Shutdown complete")


app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    lifespan=lifespan
)

app.add_middleware(MetricsMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(auth.router)
app.include_router(catalog.router)
app.include_router(service_areas.router)
app.include_router(quotes.router)
app.include_router(users.router)


@app.get("/metrics", tags=["monitoring"])
async def metrics():
    return Response(
        content=get_metrics_text(),
        media_type="text/plain; version=0.0.4; charset=utf-8"
    )


@app.get("/health", tags=["monitoring"])
async def health_check():
    return {
        "success": True,
        "statusCode": 200,
        "message": "Server is running",
        "data": {
            "service": settings.API_TITLE,
            "version": settings.API_VERSION,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "dependencies": {
                "redis": "connected" if get_redis() is not None else "disabled",
            },
        },
    }


@app.get("/readiness", tags=["monitoring"])
async def readiness_check():
    try:
        await ping_database()
    except Exception as e:
        logger.warning(f"Readiness check failed: {e}")
        return JSONResponse(
            status_code=503,
            content={"success": False, "statusCode": 503, "message": "Database not available", "data": None},
        )

    return {
        "success": True,
        "statusCode": 200,
        "message": "Ready",
        "data": {"ready": True, "service": settings.API_TITLE},
    }


@app.get("/", tags=["root"])
async def root():
    return {
        "message": settings.API_TITLE,
        "version": settings.API_VERSION,
        "docs": "/docs",
        "health": "/health",
        "metrics": "/metrics"
    }
