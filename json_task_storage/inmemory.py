"""In-memory implementation of the task storage contract."""

from __future__ import annotations

from typing import Dict, Tuple

from .base import BaseTaskStorage
from .models import WorkflowRecord


class InMemoryTaskStorage(BaseTaskStorage):
    """Store workflow state in local memory.

    Useful for tests or when no storage directory is configured. Data is not
    persisted across process restarts.
    """

    def __init__(self) -> None:
        self._records: Dict[Tuple[str, str], WorkflowRecord] = {}

    # ------------------------------------------------------------------
    async def _load_record(
        self, workflow_name: str, workflow_id: str
    ) -> WorkflowRecord | None:
        record = self._records.get((workflow_name, workflow_id))
        return record.model_copy(deep=True) if record else None

    async def _save_record(
        self, workflow_name: str, workflow_id: str, record: WorkflowRecord
    ) -> None:
        self._records[(workflow_name, workflow_id)] = record.model_copy(deep=True)

    async def list_workflow_ids_without_result(self) -> list[str]:
        return [
            workflow_id
            for (_, workflow_id), record in self._records.items()
            if not record.is_finished
        ]
