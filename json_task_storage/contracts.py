"""Storage contracts consumed by the orchestration engine."""

from __future__ import annotations

import inspect
from typing import Any, Awaitable, Callable, Optional, Protocol, TypeVar, Union

from .models import ActivityRecord, JsonValue, WorkflowState

T = TypeVar("T")

# Caller-supplied transform applied to loaded data before it is handed back.
ReturnFn = Callable[[Any], Union[Any, Awaitable[Any]]]


async def apply_return(value: T | None, return_fn: Optional[ReturnFn]) -> Any:
    """Run ``return_fn`` over ``value`` unless the value is absent."""
    if value is None or return_fn is None:
        return value
    transformed = return_fn(value)
    if inspect.isawaitable(transformed):
        transformed = await transformed
    return transformed


class WorkflowStorage(Protocol):
    """Protocol for workflow-level state persistence."""

    async def list_workflow_ids_without_result(self) -> list[str]:
        """Return ids of workflows that have no result yet."""

    async def get_workflow(
        self,
        workflow_name: str,
        workflow_id: str,
        return_fn: Optional[ReturnFn] = None,
    ) -> WorkflowState | Any | None:
        """Load the workflow's args and result."""

    async def set_workflow(
        self,
        workflow_name: str,
        workflow_id: str,
        args: JsonValue,
        result: JsonValue = None,
    ) -> None:
        """Persist the workflow's args and result."""

    async def get_workflow_additional_data(
        self,
        workflow_name: str,
        workflow_id: str,
        return_fn: Optional[ReturnFn] = None,
    ) -> Any:
        """Load auxiliary data attached to the workflow."""

    async def set_workflow_additional_data(
        self, workflow_name: str, workflow_id: str, additional_data: JsonValue
    ) -> None:
        """Persist auxiliary data attached to the workflow."""


class ActivitiesStorage(Protocol):
    """Protocol for activity-level state persistence."""

    async def get_activity(
        self,
        workflow_name: str,
        workflow_id: str,
        activity_id: str,
        return_fn: Optional[ReturnFn] = None,
    ) -> ActivityRecord | Any | None:
        """Load one activity record."""

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
        """Persist an activity's identity, args and result."""

    async def get_activity_additional_data(
        self,
        workflow_name: str,
        workflow_id: str,
        activity_id: str,
        return_fn: Optional[ReturnFn] = None,
    ) -> Any:
        """Load auxiliary data attached to an activity."""

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
        """Persist auxiliary data attached to an activity."""


class TaskStorage(WorkflowStorage, ActivitiesStorage, Protocol):
    """Both halves of the storage contract."""
