"""Helpers shared by routers."""
from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse

from employee_api.repositories.json_storage import PersistenceError
from employee_api.services.employee_service import EmployeeStore


def get_store(request: Request) -> EmployeeStore:
    store = getattr(getattr(request.app, "state", None), "employee_store", None)
    if not store:
        raise RuntimeError("EmployeeStore not configured")
    return store


def persistence_error_response(err: PersistenceError) -> JSONResponse:
    return JSONResponse(
        {"ok": False, "error": "persistence_failed", "message": str(err)},
        status_code=503,
    )
