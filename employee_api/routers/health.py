from __future__ import annotations

from fastapi import APIRouter, Request

from employee_api.repositories.json_storage import PersistenceError
from employee_api.routers._deps import get_store, persistence_error_response
from employee_api.services.employee_service import EmployeeStore

router = APIRouter(prefix="/healthz", tags=["health"])


async def _status(store: EmployeeStore) -> dict:
    return {"ok": True, "employees": await store.count(), "pending_sync": store.pending_sync}


@router.get("")
async def health(request: Request):
    return await _status(get_store(request))


@router.post("/flush")
async def flush(request: Request):
    """Retry writing the snapshot after a failed save."""
    store = get_store(request)
    try:
        await store.flush()
    except PersistenceError as exc:
        return persistence_error_response(exc)
    return await _status(store)
