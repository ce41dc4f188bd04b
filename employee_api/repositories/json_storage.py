"""
JSON-file persistence adapter.

The whole store lives in one document, an object keyed by employee id:

    {"<id>": {"id": "<id>", "name": "...", "age": 30, "position": "..."}}

Every save rewrites the full document through a temporary file that is then
moved over the target, so a reader never sees a half-written file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping
import json
import logging
import os
import stat
import tempfile

from pydantic import ValidationError

from employee_api.domain.employees import Employee

logger = logging.getLogger(__name__)

_UMASK = os.umask(0)
os.umask(_UMASK)


class PersistenceError(Exception):
    """Raised when the snapshot could not be written to disk."""


class JsonStorage:
    """Loads and saves the full employee map at a single path."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> dict[str, Employee]:
        if not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError, RecursionError) as exc:
            logger.warning("Ignoring unreadable store %s: %s", self.path, exc)
            return {}
        if not isinstance(raw, dict):
            logger.warning("Ignoring store %s: expected a JSON object, got %s", self.path, type(raw).__name__)
            return {}
        employees: dict[str, Employee] = {}
        try:
            for record in raw.values():
                entity = Employee.model_validate(record)
                employees[entity.id] = entity
        except ValidationError as exc:
            logger.warning("Ignoring store %s: invalid record (%s)", self.path, exc.error_count())
            return {}
        return employees

    def save(self, snapshot: Mapping[str, Employee]) -> None:
        data = {emp_id: entity.model_dump() for emp_id, entity in snapshot.items()}
        payload = json.dumps(data, ensure_ascii=False, indent=2)
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                os.chmod(tmp_name, self._file_mode())
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
            tmp_name = None
            _fsync_dir(self.path.parent)
        except OSError as exc:
            raise PersistenceError(f"Failed to write {self.path}: {exc}") from exc
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass

    def _file_mode(self) -> int:
        # mkstemp creates 0600; keep the target's mode, or what open() would give.
        try:
            return stat.S_IMODE(self.path.stat().st_mode)
        except FileNotFoundError:
            return 0o666 & ~_UMASK


def _fsync_dir(directory: Path) -> None:
    """Make the rename durable; a no-op where directories cannot be opened."""
    if not hasattr(os, "O_DIRECTORY"):
        return
    fd = os.open(directory, os.O_RDONLY | os.O_DIRECTORY)
    try:
        os.fsync(fd)
    finally:
        os.close(fd)
