"""
wishlink/main.py

Purpose: Application entry point

- Initializes FastAPI app
- Loads configuration and logging
- Registers API routes
- Starts/stops the SMS poller with the app
- No business logic should be written here
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from typing import Optional
import time

from wishlink.core.config import settings, validate_settings
from wishlink.core.context import AppContext, build_context
from wishlink.core.errors import add_exception_handlers
from wishlink.core.logging import setup_logging, get_logger
from wishlink.api import auth, catalog, notifications, wishes

# Initialize logging first
setup_logging()
logger = get_logger(__name__)

APP_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    context: AppContext = app.state.context

    # Startup
    logger.info("🚀 Starting WishLink application...")

    try:
        logger.info("Validating configuration...")
        validate_settings(context.settings)
        logger.info("✅ Configuration validated")

        if context.store.ping():
            logger.info(f"✅ Storage ready ({context.store.backend})")
        else:
            logger.warning(f"⚠️ Storage health check failed during startup ({context.store.backend})")

        context.poller.pending_report()

        if context.settings.SCHEDULER_ENABLED:
            context.poller.start()
        else:
            logger.info("Notification poller disabled")

        logger.info("🎉 WishLink application started successfully!")
        logger.info(f"Environment: {context.settings.ENVIRONMENT}")

    except Exception as e:
        logger.critical(f"Failed to start application: {str(e)}", exc_info=True)
        raise

    yield  # Application runs here

    # Shutdown
    logger.info("🛑 Shutting down WishLink application...")

    try:
        await context.poller.stop()
        context.store.close()
        logger.info("👋 WishLink application shut down successfully")

    except Exception as e:
        logger.error(f"Error during shutdown: {str(e)}", exc_info=True)


def create_app(context: Optional[AppContext] = None) -> FastAPI:
    """
    Builds the FastAPI app around an application context.

    Args:
        context: Services to serve (built from settings when omitted)

    Returns:
        FastAPI app
    """
    context = context or build_context(settings)
    config = context.settings

    app = FastAPI(
        title="WishLink",
        description="Occasion wishes shared by short code, with occasion-day SMS",
        version=APP_VERSION,
        lifespan=lifespan,
        debug=config.DEBUG,
        docs_url="/docs" if config.is_development else None,
        redoc_url="/redoc" if config.is_development else None,
    )
    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        """Add processing time header to all responses."""
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)

        if process_time > 5.0:
            logger.warning(f"Slow request detected: {request.method} {request.url.path}")

        return response

    add_exception_handlers(app)

    app.include_router(wishes.router, prefix=config.API_PREFIX, tags=["Wishes"])
    app.include_router(auth.router, prefix=config.API_PREFIX, tags=["Auth"])
    app.include_router(notifications.router, prefix=config.API_PREFIX, tags=["Notifications"])
    app.include_router(catalog.router, prefix=config.API_PREFIX, tags=["Catalog"])

    @app.get("/", tags=["Health"])
    async def root():
        """Root endpoint - basic info."""
        return {
            "name": "WishLink API",
            "version": APP_VERSION,
            "description": "Create a wish, share its code, get an SMS on the day",
            "status": "running",
            "environment": config.ENVIRONMENT
        }

    @app.get("/health", tags=["Health"])
    async def health_check():
        """
        Health check endpoint.
        Checks storage and poller status.
        """
        health_status = {
            "status": "healthy",
            "timestamp": time.time(),
            "environment": config.ENVIRONMENT,
            "version": APP_VERSION,
            "checks": {}
        }

        try:
            store_healthy = context.store.ping()
            health_status["checks"]["storage"] = "healthy" if store_healthy else "unhealthy"
            if not store_healthy:
                health_status["status"] = "degraded"
        except Exception as e:
            logger.error(f"Storage health check failed: {str(e)}")
            health_status["checks"]["storage"] = "unhealthy"
            health_status["status"] = "unhealthy"

        if config.SCHEDULER_ENABLED:
            health_status["checks"]["scheduler"] = "running" if context.poller.is_running else "stopped"
        else:
            health_status["checks"]["scheduler"] = "disabled"

        status_code = 200 if health_status["status"] == "healthy" else 503
        return JSONResponse(content=health_status, status_code=status_code)

    @app.get("/ready", tags=["Health"])
    async def readiness_check():
        """
        Readiness probe - indicates if app is ready to receive traffic.
        """
        if context.store.ping():
            return {"status": "ready"}
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "reason": "storage_unavailable"}
        )

    @app.get("/live", tags=["Health"])
    async def liveness_check():
        """
        Liveness probe - indicates if app is alive.
        """
        return {"status": "alive"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "wishlink.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower()
    )
