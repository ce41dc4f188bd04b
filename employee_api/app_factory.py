"""Entry point for uvicorn: `uvicorn employee_api.app_factory:app`."""
from employee_api.app import create_app

app = create_app()

__all__ = ["app", "create_app"]
