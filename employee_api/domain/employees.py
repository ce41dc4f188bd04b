"""Employee entity and the payload accepted when creating one."""
from __future__ import annotations

import uuid

from pydantic import BaseModel, Field

AGE_MIN = 0
AGE_MAX = 255


class NewEmployee(BaseModel):
    """Fields a client may send; the id is always assigned by the store."""

    name: str
    age: int = Field(ge=AGE_MIN, le=AGE_MAX)
    position: str


class Employee(NewEmployee):
    id: str


def new_employee_id() -> str:
    """Return a random UUID4 as text."""
    return str(uuid.uuid4())


def is_valid_age(value: int) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and AGE_MIN <= value <= AGE_MAX
