"""Shared read-merge-write logic for task storage backends."""

from __future__ import annotations

import abc
import logging
from typing import Any, Optional

from .contracts import ReturnFn, TaskStorage, apply_return
from .models import ActivityRecord, JsonValue, WorkflowRecord, WorkflowState

logger = logging.getLogger(__name__)


class BaseTaskStorage(TaskStorage, abc.ABC):
    """Implements the storage contract on top of whole-record load/save.

    Subclasses only decide where a :class:`WorkflowRecord` lives. Every
    ``set_*`` call loads the full record, merges the supplied fields and saves
    the full record back. Nothing serialises overlapping calls for the same
    key, so concurrent writers race and the last save wins.
    """

    @abc.abstractmethod
    async def _load_record(
        self, workflow_name: str, workflow_id: str
    ) -> WorkflowRecord | None:
        """Return the stored record, or ``None`` when missing or unreadable."""

    @abc.abstractmethod
    async def _save_record(
        self, workflow_name: str, workflow_id: str, record: WorkflowRecord
    ) -> None:
        """Replace the stored record. Failures propagate."""

    @abc.abstractmethod
    async def list_workflow_ids_without_result(self) -> list[str]:
        """Return ids of workflows that have no result yet."""

    async def _load_or_new(
        self, workflow_name: str, workflow_id: str
    ) -> WorkflowRecord:
        record = await self._load_record(workflow_name, workflow_id)
        if record is None:
            logger.debug("Creating record for %s/%s", workflow_name, workflow_id)
            record = WorkflowRecord(args={})
        record.workflow_name = workflow_name
        record.workflow_id = workflow_id
        return record

    async def get_record(
        self, workflow_name: str, workflow_id: str
    ) -> WorkflowRecord | None:
        """Return the whole stored record, activities included."""
        return await self._load_record(workflow_name, workflow_id)

    # ------------------------------------------------------------------
    # Workflow storage
    async def get_workflow(
        self,
        workflow_name: str,
        workflow_id: str,
        return_fn: Optional[ReturnFn] = None,
    ) -> Any:
        record = await self._load_record(workflow_name, workflow_id)
        if record is None:
            return None
        state = WorkflowState(args=record.args, result=record.result)
        return await apply_return(state, return_fn)

    async def set_workflow(
        self,
        workflow_name: str,
        workflow_id: str,
        args: JsonValue,
        result: JsonValue = None,
    ) -> None:
        record = await self._load_or_new(workflow_name, workflow_id)
        record.args = args
        record.result = result
        await self._save_record(workflow_name, workflow_id, record)

    async def get_workflow_additional_data(
        self,
        workflow_name: str,
        workflow_id: str,
        return_fn: Optional[ReturnFn] = None,
    ) -> Any:
        record = await self._load_record(workflow_name, workflow_id)
        if record is None or not record.additional_data:
            return None
        return await apply_return(record.additional_data, return_fn)

    async def set_workflow_additional_data(
        self, workflow_name: str, workflow_id: str, additional_data: JsonValue
    ) -> None:
        record = await self._load_or_new(workflow_name, workflow_id)
        record.additional_data = additional_data
        await self._save_record(workflow_name, workflow_id, record)

    # ------------------------------------------------------------------
    # Activities storage
    async def get_activity(
        self,
        workflow_name: str,
        workflow_id: str,
        activity_id: str,
        return_fn: Optional[ReturnFn] = None,
    ) -> Any:
        record = await self._load_record(workflow_name, workflow_id)
        activity = record.activities.get(activity_id) if record else None
        return await apply_return(activity, return_fn)

    async def set_activity(
        self,
        workflow_name: str,
        workflow_id: str,
        activity_id: str,
        provider_name: str,
        activity_name: str,
        args: JsonValue,
        result: JsonValue = None,
    ) -> None:
        record = await self._load_or_new(workflow_name, workflow_id)
        activity = record.activities.setdefault(activity_id, ActivityRecord())
        activity.provider_name = provider_name
        activity.activity_name = activity_name
        activity.args = args
        activity.result = result
        await self._save_record(workflow_name, workflow_id, record)

    async def get_activity_additional_data(
        self,
        workflow_name: str,
        workflow_id: str,
        activity_id: str,
        return_fn: Optional[ReturnFn] = None,
    ) -> Any:
        record = await self._load_record(workflow_name, workflow_id)
        activity = record.activities.get(activity_id) if record else None
        if activity is None or not activity.additional_data:
            return None
        return await apply_return(activity.additional_data, return_fn)

    async def set_activity_additional_data(
        self,
        workflow_name: str,
        workflow_id: str,
        activity_id: str,
        provider_name: str,
        activity_name: str,
        args: JsonValue,
        additional_data: JsonValue,
    ) -> None:
        record = await self._load_or_new(workflow_name, workflow_id)
        activity = record.activities.get(activity_id)
        if activity is None:
            record.activities[activity_id] = ActivityRecord(
                provider_name=provider_name,
                activity_name=activity_name,
                args=args,
                additional_data=additional_data,
            )
        else:
            activity.additional_data = additional_data
        await self._save_record(workflow_name, workflow_id, record)
