"""json-task-storage: JSON file persistence for workflow and activity state."""

from __future__ import annotations

import os
from typing import Optional

from .base import BaseTaskStorage
from .config import TaskStorageConfig, load_config
from .contracts import ActivitiesStorage, ReturnFn, TaskStorage, WorkflowStorage
from .inmemory import InMemoryTaskStorage
from .models import ActivityRecord, JsonValue, WorkflowRecord, WorkflowState
from .storage import JsonFileTaskStorage

__version__ = "0.1.0"

_storage_instance: BaseTaskStorage | None = None


def get_storage(
    base_path: Optional[str] = None,
    backend: Optional[str] = None,
    config: Optional[TaskStorageConfig] = None,
) -> BaseTaskStorage:
    """Factory function to obtain a task storage backend.

    The backend is selected from ``backend``, the ``JSON_TASK_STORAGE_BACKEND``
    environment variable or the loaded configuration, in that order. Calls
    without arguments share one process-wide instance; calls with any explicit
    argument build a fresh instance and leave the shared one untouched.
    """

    global _storage_instance
    shared = base_path is None and backend is None and config is None
    if shared and _storage_instance is not None:
        return _storage_instance

    config = config or load_config()
    backend = (
        backend or os.getenv("JSON_TASK_STORAGE_BACKEND") or config.storage.backend
    ).lower()

    storage: BaseTaskStorage
    if backend == "file":
        storage = JsonFileTaskStorage(base_path or config.storage.file.path)
    elif backend == "inmemory":
        storage = InMemoryTaskStorage()
    else:
        raise ValueError(f"Unsupported storage backend: {backend}")

    if shared:
        _storage_instance = storage
    return storage


__all__ = [
    "ActivitiesStorage",
    "ActivityRecord",
    "BaseTaskStorage",
    "InMemoryTaskStorage",
    "JsonFileTaskStorage",
    "JsonValue",
    "ReturnFn",
    "TaskStorage",
    "TaskStorageConfig",
    "WorkflowRecord",
    "WorkflowState",
    "WorkflowStorage",
    "get_storage",
    "load_config",
]
