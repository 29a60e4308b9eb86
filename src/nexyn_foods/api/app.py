"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from nexyn_foods.api.error_handlers import register_error_handlers
from nexyn_foods.api.foods import router as foods_router
from nexyn_foods.api.orders import router as orders_router
from nexyn_foods.app_logging import configure_logging
from nexyn_foods.config import parse_cors_origins
from nexyn_foods.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Nexyn Foods server starting: environment=%s",
            app.state.container.settings.environment,
        )
        yield
        logger.info("Nexyn Foods server stopping")

    app = FastAPI(title="Nexyn Foods", lifespan=lifespan)
    app.state.container = container

    origins = parse_cors_origins(container.settings.cors_allow_origins)
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_error_handlers(app)
    app.include_router(foods_router)
    app.include_router(orders_router)

    @app.get("/")
    async def root() -> dict[str, str]:
        """Liveness banner."""
        return {"message": "Nexyn Foods Server is running!"}

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
