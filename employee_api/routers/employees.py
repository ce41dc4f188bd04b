from __future__ import annotations

from typing import List

from fastapi import APIRouter, HTTPException, Request, Response
from fastapi.responses import JSONResponse

from employee_api.domain.employees import Employee, NewEmployee
from employee_api.repositories.json_storage import PersistenceError
from employee_api.routers._deps import get_store, persistence_error_response
from employee_api.services.employee_service import EmployeeNotFoundError

router = APIRouter(prefix="/employees", tags=["employees"])


@router.post("", status_code=201)
async def add_employee(payload: NewEmployee, request: Request):
    store = get_store(request)
    try:
        emp_id = await store.create(payload.name, payload.age, payload.position)
    except PersistenceError as exc:
        return persistence_error_response(exc)
    return JSONResponse(
        {"id": emp_id, "message": f"Employee added with ID: {emp_id}"},
        status_code=201,
        headers={"Location": f"/employees/{emp_id}"},
    )


@router.get("", response_model=List[Employee])
async def list_employees(request: Request):
    return await get_store(request).list()


@router.get("/{emp_id}", response_model=Employee)
async def get_employee(emp_id: str, request: Request):
    try:
        return await get_store(request).get(emp_id)
    except EmployeeNotFoundError:
        raise HTTPException(404, "Employee not found")


@router.delete("/{emp_id}", status_code=204)
async def delete_employee(emp_id: str, request: Request):
    try:
        await get_store(request).delete(emp_id)
    except PersistenceError as exc:
        return persistence_error_response(exc)
    return Response(status_code=204)
