"""Authoritative employee store guarded by a single asyncio lock."""
from __future__ import annotations

import asyncio
import logging
from typing import List

from employee_api.domain.employees import Employee, is_valid_age, new_employee_id
from employee_api.repositories.json_storage import JsonStorage, PersistenceError

logger = logging.getLogger(__name__)


class EmployeeNotFoundError(LookupError):
    """Raised when looking up an id that is not in the store."""


class EmployeeStore:
    """
    In-memory map of id -> Employee mirrored to a JsonStorage.

    Every operation, reads included, runs under one lock. Mutations save the
    full snapshot before releasing it, so the file always matches the map as
    of the last completed mutation.
    """

    def __init__(self, storage: JsonStorage) -> None:
        self.storage = storage
        self._employees: dict[str, Employee] = {}
        self._lock = asyncio.Lock()
        self._pending_sync = False

    @classmethod
    def open(cls, storage: JsonStorage) -> "EmployeeStore":
        """Build a store and load it once from storage."""
        store = cls(storage)
        store._employees = storage.load()
        logger.info("Loaded %d employee(s) from %s", len(store._employees), storage.path)
        return store

    @property
    def pending_sync(self) -> bool:
        """True while the file lags behind the map after a failed save."""
        return self._pending_sync

    async def create(self, name: str, age: int, position: str) -> str:
        if not is_valid_age(age):
            raise ValueError(f"age must be between 0 and 255, got {age!r}")
        async with self._lock:
            emp_id = new_employee_id()
            while emp_id in self._employees:
                emp_id = new_employee_id()
            self._employees[emp_id] = Employee(id=emp_id, name=name, age=age, position=position)
            logger.debug("Created employee %s", emp_id)
            await self._save()
            return emp_id

    async def list(self) -> List[Employee]:
        async with self._lock:
            return [entity.model_copy() for entity in self._employees.values()]

    async def get(self, emp_id: str) -> Employee:
        async with self._lock:
            entity = self._employees.get(emp_id)
            if entity is None:
                raise EmployeeNotFoundError(emp_id)
            return entity.model_copy()

    async def delete(self, emp_id: str) -> bool:
        async with self._lock:
            removed = self._employees.pop(emp_id, None) is not None
            if removed:
                logger.debug("Deleted employee %s", emp_id)
            await self._save()
            return removed

    async def count(self) -> int:
        async with self._lock:
            return len(self._employees)

    async def flush(self) -> None:
        """Rewrite the file if an earlier save failed."""
        async with self._lock:
            if not self._pending_sync:
                return
            await self._save()
            logger.info("Store %s reconciled with memory", self.storage.path)

    async def _save(self) -> None:
        # Caller must hold self._lock.
        snapshot = dict(self._employees)
        write = asyncio.ensure_future(asyncio.to_thread(self.storage.save, snapshot))
        try:
            await asyncio.shield(write)
        except asyncio.CancelledError:
            # The worker thread cannot be stopped; keep the lock until it lands.
            await asyncio.wait({write})
            self._pending_sync = write.exception() is not None
            raise
        except PersistenceError:
            self._pending_sync = True
            logger.exception("Snapshot save failed; memory is ahead of %s", self.storage.path)
            raise
        self._pending_sync = False
