"""Application factory helpers to keep farm_market/main.py lightweight."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.middleware import SlowAPIMiddleware

from farm_market.api.router import api_router
from farm_market.core.config import settings
from farm_market.core.error_handlers import register_exception_handlers
from farm_market.core.logging_config import setup_logging
from farm_market.core.middleware import LoggingMiddleware, limiter
from farm_market.core.monitoring import setup_monitoring
from farm_market.core.storage import store_manager

logger = logging.getLogger(__name__)


def _configure_app(app: FastAPI) -> None:
    if getattr(limiter, "enabled", False):
        app.add_middleware(SlowAPIMiddleware)

    app.add_middleware(LoggingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)


def _register_routes(app: FastAPI) -> None:
    # Liveness: is the process serving requests?
    @app.get("/livez", tags=["Health"])
    async def livez():
        return {"status": "ok"}

    # Readiness: can the key-value store be reached?
    @app.get("/readyz", tags=["Health"])
    async def readyz():
        store = store_manager.store
        details = {"store": "unknown"}
        try:
            if store is None:
                details["store"] = "not initialized"
                ready = False
            else:
                ready = await store.ping()
                details["store"] = (
                    f"{store.backend_name} connected" if ready else "unreachable"
                )
        except Exception as e:
            logger.error("Readiness check failed (store): %s", e)
            details["store"] = "disconnected"
            ready = False

        if not ready:
            return ORJSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "unavailable", "details": details},
            )
        return {"status": "ready", "details": details}


def _lifespan_factory():
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        await store_manager.init_store()
        app.state.store_degraded = store_manager.failed_init

        yield

        # Shutdown
        await store_manager.close()

    return lifespan


def create_app() -> FastAPI:
    """
    Application Factory to create and configure the FastAPI application.
    Integrates Logging, Error Handling, Rate Limiting, Monitoring and Middleware.
    """
    setup_logging(
        log_level=settings.log_level,
        log_dir=settings.log_dir,
        app_name=settings.app_name,
        max_bytes=10 * 1024 * 1024,  # 10 MB
        backup_count=5,
        use_json=settings.use_json_logs,
        use_colors=True,
    )

    app = FastAPI(
        title="Farm Market API",
        description="Farm-produce marketplace: listings, orders, chat, reviews and mandi rates",
        version="1.0.0",
        lifespan=_lifespan_factory(),
        default_response_class=ORJSONResponse,
    )

    app.state.environment = settings.environment
    app.state.limiter = limiter

    _configure_app(app)
    _register_routes(app)

    register_exception_handlers(app)

    if settings.enable_metrics:
        setup_monitoring(app)

    logger.info(
        "Application configured (env=%s, prefix=%s)",
        settings.environment,
        settings.api_prefix or "/",
    )
    return app


__all__ = ["create_app"]
