"""FastAPI application factory."""

from fastapi import FastAPI

from nutrition_progress.api.ketone import router as ketone_router
from nutrition_progress.api.profile import router as profile_router
from nutrition_progress.api.progress import router as progress_router
from nutrition_progress.app_logging import configure_logging
from nutrition_progress.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()

    app = FastAPI(title="Nutrition Progress")
    app.state.container = container

    app.include_router(progress_router)
    app.include_router(profile_router)
    app.include_router(ketone_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
