"""FastAPI application factory and configuration."""

from fastapi import FastAPI

from tire_scout import __version__
from tire_scout.api.routes import catalog, config, preferences, ranking


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    app = FastAPI(
        title="tire-scout API",
        description="Preference-weighted tire comparison API",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.include_router(ranking.router, prefix="/api/ranking", tags=["ranking"])
    app.include_router(preferences.router, prefix="/api/preferences", tags=["preferences"])
    app.include_router(catalog.router, prefix="/api/catalog", tags=["catalog"])
    app.include_router(config.router, prefix="/api/config", tags=["config"])

    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


# Create app instance for uvicorn
app = create_app()
