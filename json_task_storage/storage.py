"""JSON file implementation of the task storage contract."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

from pydantic import ValidationError

from .base import BaseTaskStorage
from .models import WorkflowRecord

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_PATH = "./storage"


class JsonFileTaskStorage(BaseTaskStorage):
    """Persist each workflow as ``{workflow_name}_{workflow_id}.json``.

    One file holds the workflow's args, result and additional data together
    with all of its activities. Files are rewritten whole on every update;
    there is no locking and no atomic rename.
    """

    def __init__(self, base_path: str | Path = DEFAULT_STORAGE_PATH):
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)

    def path_for(self, workflow_name: str, workflow_id: str) -> Path:
        return self.base_path / f"{workflow_name}_{workflow_id}.json"

    # ------------------------------------------------------------------
    # Helper methods
    @staticmethod
    def _read(path: Path) -> WorkflowRecord:
        return WorkflowRecord.model_validate_json(path.read_text(encoding="utf-8"))

    @staticmethod
    def _write(path: Path, record: WorkflowRecord) -> None:
        document = json.dumps(record.to_document(), indent=2, ensure_ascii=False)
        path.write_text(document, encoding="utf-8")

    def _scan_incomplete(self) -> list[str]:
        workflow_ids: list[str] = []
        for path in self.base_path.iterdir():
            if not path.is_file():
                continue
            try:
                record = self._read(path)
            except (OSError, UnicodeDecodeError, ValidationError) as exc:
                logger.warning("Skipping unreadable workflow file %s: %s", path.name, exc)
                continue
            if record.is_finished:
                continue
            workflow_ids.append(record.workflow_id or _id_from_file_name(path))
        return workflow_ids

    async def _load_record(
        self, workflow_name: str, workflow_id: str
    ) -> WorkflowRecord | None:
        path = self.path_for(workflow_name, workflow_id)
        try:
            return await asyncio.to_thread(self._read, path)
        except (OSError, UnicodeDecodeError, ValidationError) as exc:
            logger.debug("No usable record at %s: %s", path, exc)
            return None

    async def _save_record(
        self, workflow_name: str, workflow_id: str, record: WorkflowRecord
    ) -> None:
        path = self.path_for(workflow_name, workflow_id)
        await asyncio.to_thread(self._write, path, record)
        logger.debug("Saved workflow record %s", path)

    # ------------------------------------------------------------------
    # Repository API
    async def list_workflow_ids_without_result(self) -> list[str]:
        return await asyncio.to_thread(self._scan_incomplete)


def _id_from_file_name(path: Path) -> str:
    # Files written without an embedded id only carry it in the name, and the
    # name cannot tell where a workflow name containing "_" ends.
    return path.stem.rsplit("_", 1)[-1]
