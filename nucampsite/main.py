#!/usr/bin/env python3
"""
NuCampsite - Main Entry Point

This is the thin orchestration layer that:
1. Loads configuration
2. Initializes modules
3. Mounts the routers and runs the API server

All business logic is in the modules, following black box principles.
"""

import logging
import logging.config as log_config
from contextlib import asynccontextmanager
from typing import Optional

import httpx
import redis.asyncio as redis
import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError

from nucampsite import __version__
from nucampsite.config.provider import ConfigProvider, EnvConfigProvider
from nucampsite.errors import NucampsiteError
from nucampsite.logging_config import get_logging_config
from nucampsite.modules.api.campsites import create_campsites_router
from nucampsite.modules.api.favorites import create_favorites_router
from nucampsite.modules.api.users import create_users_router
from nucampsite.modules.auth import AuthFactory
from nucampsite.modules.campsites import CampsiteModule
from nucampsite.modules.favorites import FavoriteModule
from nucampsite.modules.session import SessionModule
from nucampsite.modules.storage import StorageModule
from nucampsite.modules.users import UserStore

logger = logging.getLogger(__name__)

MODULE_NAMES = ("auth_service", "user_store", "session_module", "campsite_module", "favorite_module")


def create_app(
    config_provider: Optional[ConfigProvider] = None,
    redis_client=None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        config_provider: Configuration source (environment by default)
        redis_client: Async Redis client; created from configuration if omitted
        http_client: HTTP client for the identity provider; created if omitted

    Returns:
        Configured FastAPI application
    """
    config_provider = config_provider or EnvConfigProvider()
    api_config = config_provider.get_api_config()
    log_config.dictConfig(get_logging_config(api_config.log_level))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Manage application lifecycle - initialize and cleanup resources.
        """
        logger.info("Starting NuCampsite API...")

        storage = None
        client = redis_client
        if client is None:
            storage = StorageModule(config_provider.get_storage_config())
            client = await storage.connect()

        owns_http = http_client is None
        http = http_client or httpx.AsyncClient(
            timeout=config_provider.get_facebook_config().timeout_seconds
        )

        user_store = UserStore(client)
        app.state.redis_client = client
        app.state.user_store = user_store
        app.state.auth_service = AuthFactory.build(config_provider, user_store, client, http)
        app.state.session_module = SessionModule(client, default_ttl=api_config.session_ttl)
        app.state.campsite_module = CampsiteModule(client)
        app.state.favorite_module = FavoriteModule(client)
        logger.info("NuCampsite API started successfully")

        yield

        logger.info("Shutting down NuCampsite API...")
        for name in MODULE_NAMES + ("redis_client",):
            setattr(app.state, name, None)
        if owns_http:
            await http.aclose()
        if storage:
            await storage.disconnect()
        logger.info("NuCampsite API shutdown complete")

    app = FastAPI(
        title="NuCampsite API",
        description="Campsites, comments, favorites and user accounts",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=api_config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(create_users_router(api_config))
    app.include_router(create_campsites_router())
    app.include_router(create_favorites_router())

    # Root and Health/Monitoring Endpoints

    @app.get("/")
    async def index():
        return {"service": "NuCampsite API", "version": __version__}

    @app.get("/healthz")
    async def healthz():
        """
        Minimal health check endpoint for readiness/liveness probes.

        Returns:
            200: Service is running
        """
        return {"status": "ok"}

    @app.get("/health")
    async def health_check(request: Request):
        """
        Health check with storage and module status.

        Returns:
            200: Service healthy
            503: Service unhealthy
        """
        client = getattr(request.app.state, "redis_client", None)
        modules_ready = all(getattr(request.app.state, name, None) for name in MODULE_NAMES)
        try:
            if client is not None:
                await client.ping()
                redis_status = "connected"
            else:
                redis_status = "disconnected"
        except RedisError as e:
            logger.error(f"Health check failed: {e}")
            redis_status = "disconnected"

        content = {
            "status": "healthy",
            "redis": redis_status,
            "modules": "initialized" if modules_ready else "not initialized",
            "version": __version__,
        }
        if redis_status == "connected" and modules_ready:
            return content

        content["status"] = "unhealthy"
        return JSONResponse(status_code=503, content=content)

    @app.get("/metrics")
    async def metrics(request: Request):
        """
        Prometheus-compatible metrics endpoint.

        Returns basic metrics about the system.
        """
        session_module = getattr(request.app.state, "session_module", None)
        if not session_module:
            return Response(content="", status_code=503)

        active_sessions = await session_module.get_active_sessions()

        metrics_text = f"""# HELP nucampsite_active_sessions Number of active login sessions
# TYPE nucampsite_active_sessions gauge
nucampsite_active_sessions {len(active_sessions)}
"""

        return Response(content=metrics_text, media_type="text/plain")

    # Error handlers

    @app.exception_handler(NucampsiteError)
    async def service_error_handler(request: Request, exc: NucampsiteError):
        """Render service errors with their own status code."""
        if exc.status_code >= 500:
            logger.error(f"{exc.name} on {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(redis.ConnectionError)
    async def redis_error_handler(request: Request, exc: redis.ConnectionError):
        """Handle Redis connection errors."""
        logger.error(f"Redis connection error: {exc}")
        return JSONResponse(status_code=503, content={"error": "Database connection failed"})

    return app


app = create_app()


def run():
    """Run the API server with uvicorn."""
    api_config = EnvConfigProvider().get_api_config()
    uvicorn.run(
        "nucampsite.main:app",
        host=api_config.host,
        port=api_config.port,
        log_level=api_config.log_level.lower(),
        reload=api_config.debug,
        log_config=get_logging_config(api_config.log_level),
    )


if __name__ == "__main__":
    run()
