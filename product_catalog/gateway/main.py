"""
==============================================================================
Product API Gateway - Application Entry Point
==============================================================================

FastAPI application in front of the catalog backend:
- Client-facing product API (/api/products)
- Gateway health with backend reachability (/api/health)

Usage:
------
    # Development
    uvicorn product_catalog.gateway.main:app --reload --port 3000

    # Production
    CATALOG_API_URL=http://catalog:8000/api \\
        uvicorn product_catalog.gateway.main:app --host 0.0.0.0 --port 3000

==============================================================================
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from product_catalog.config import get_settings
from product_catalog.core.exceptions import register_exception_handlers
from product_catalog.gateway.routes import health_router, products_router


# ============================================================================
# LOGGING SETUP
# ============================================================================

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)

logger = logging.getLogger(__name__)


# ============================================================================
# APPLICATION FACTORY
# ============================================================================

class GatewayApplication:
    """
    FastAPI application factory for the API gateway.

    Malformed request bodies are answered with 400, like the gateway's own
    field checks.
    """

    def __init__(self):
        self._settings = get_settings()
        self._app = self._create_app()

    def _create_app(self) -> FastAPI:
        app = FastAPI(
            title=self._settings.gateway_name,
            version="1.0.0",
            description="API gateway consuming the product catalog backend",
            lifespan=self._lifespan,
            docs_url="/api-docs",
            redoc_url="/redoc",
        )

        self._configure_middleware(app)
        register_exception_handlers(app, validation_status=400)
        self._register_routers(app)

        return app

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        logger.info("=" * 60)
        logger.info(f"🚀 Starting {self._settings.gateway_name}")
        logger.info(f"🔗 Catalog backend: {self._settings.catalog_api_url}")
        logger.info(
            f"⏱️ Timeouts: request={self._settings.request_timeout_ms} ms, "
            f"health={self._settings.health_check_timeout_ms} ms"
        )
        logger.info("=" * 60)
        yield
        logger.info("🛑 Gateway stopped")

    def _configure_middleware(self, app: FastAPI) -> None:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=self._settings.cors_origins_list,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    def _register_routers(self, app: FastAPI) -> None:
        api = APIRouter(prefix="/api")
        api.include_router(products_router)
        api.include_router(health_router)
        app.include_router(api)

    @property
    def app(self) -> FastAPI:
        """Get the FastAPI application instance."""
        return self._app


# ============================================================================
# APPLICATION INSTANCE
# ============================================================================

application = GatewayApplication()
app = application.app


# ============================================================================
# ENTRY POINT
# ============================================================================

def run() -> None:
    """Run the gateway with uvicorn."""
    import uvicorn

    uvicorn.run(
        "product_catalog.gateway.main:app",
        host=settings.host,
        port=settings.gateway_port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info"
    )


if __name__ == "__main__":
    run()
