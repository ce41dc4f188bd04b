from __future__ import annotations

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from employee_api.core.config import Settings, get_settings
from employee_api.core.logging import configure_logging
from employee_api.repositories.json_storage import JsonStorage, PersistenceError
from employee_api.routers import employees as employees_router
from employee_api.routers import health as health_router
from employee_api.services.employee_service import EmployeeStore

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Factory compatible with uvicorn/gunicorn; the store is loaded on startup."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store = EmployeeStore.open(JsonStorage(settings.db_path))
        app.state.employee_store = store
        try:
            yield
        finally:
            try:
                await store.flush()
            except PersistenceError:
                logger.error("Shutting down with unsaved changes in %s", settings.db_path)

    app = FastAPI(title="Employee Registry API", lifespan=lifespan)
    app.state.settings = settings
    app.include_router(employees_router.router)
    app.include_router(health_router.router)
    return app
