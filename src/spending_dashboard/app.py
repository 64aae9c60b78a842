from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from spending_dashboard.api.routes import config, dashboard, ignored, imports
from spending_dashboard.core import settings
from spending_dashboard.logger import get_logger, setup_logging
from spending_dashboard.manager import DashboardService
from spending_dashboard.storage.repository import DashboardRepository
from spending_dashboard.storage.store import JsonFileStore

logger = get_logger(__name__)


def create_app() -> FastAPI:
    setup_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("Initializing services...")
        settings.log_environment()

        store_path = settings.get_store_path()
        logger.info("[STORE] Using %s", store_path)
        repository = DashboardRepository(JsonFileStore(data_path=store_path))
        app.state.service = DashboardService(
            repository=repository,
            top_categories=settings.get_top_category_limit(),
        )

        logger.info("Services initialized.")
        yield
        logger.info("Service shutting down.")

    app = FastAPI(title="Spending Dashboard", lifespan=lifespan)

    app.include_router(imports.router)
    app.include_router(dashboard.router)
    app.include_router(ignored.router)
    app.include_router(config.router)

    return app


app = create_app()
