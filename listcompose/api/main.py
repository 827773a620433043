"""Listcompose API - composed lists over HTTP.

Serves list pages and list actions for one host application:
- Index page (every list definition, refreshed)
- Refresh / search / filter of a single list
- Bulk delete and drag-and-drop reorder
"""

import importlib
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from listcompose import __version__, settings
from listcompose.api.routes import lists
from listcompose.api.routes.lists import ControllerFactory
from listcompose.errors import ConfigurationError

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def load_controller_factory(reference: str) -> ControllerFactory:
    """Import a "package.module:callable" controller factory.

    Raises:
        ConfigurationError: If the reference cannot be imported
    """
    module_name, _, attr = reference.partition(":")
    if not module_name or not attr:
        raise ConfigurationError(f"Controller factory '{reference}' must look like 'package.module:callable'")
    try:
        return getattr(importlib.import_module(module_name), attr)
    except (ImportError, AttributeError) as e:
        raise ConfigurationError(f"Controller factory '{reference}' not found: {e}") from e


def create_app(factory: Optional[ControllerFactory] = None) -> FastAPI:
    """Create the API app.

    Args:
        factory: Builds a ListController for a request's ListState. Defaults
            to the factory named by LISTCOMPOSE_CONTROLLER_FACTORY, if any.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        controller_factory = factory
        if controller_factory is None and settings.CONTROLLER_FACTORY:
            logger.info(f"Loading controller factory {settings.CONTROLLER_FACTORY}...")
            controller_factory = load_controller_factory(settings.CONTROLLER_FACTORY)

        lists.init_controller_factory(controller_factory)
        if controller_factory is None:
            logger.warning("No controller factory configured; list endpoints will return 503")
        else:
            logger.info("Listcompose API ready")
        yield
        # Shutdown
        lists.init_controller_factory(None)
        logger.info("Shutting down Listcompose API")

    app = FastAPI(
        title="Listcompose API",
        description="Composed, searchable, filterable and reorderable lists.",
        version=__version__,
        lifespan=lifespan,
    )
    app.include_router(lists.router)

    @app.get("/")
    async def root():
        """Root endpoint with API info."""
        return {
            "service": "Listcompose API",
            "version": __version__,
            "docs": "/docs",
            "endpoints": [
                "GET /lists",
                "POST /lists/refresh",
                "POST /lists/search",
                "POST /lists/filter",
                "POST /lists/delete",
                "POST /lists/reorder",
            ],
        }

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "controller_factory": lists._factory is not None}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "listcompose.api.main:app",
        host="0.0.0.0",
        port=8001,
        reload=True,
    )
