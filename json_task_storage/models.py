"""Data models for persisted workflow and activity state."""

from __future__ import annotations

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# Opaque payloads: whatever the orchestration engine hands us, as long as it
# survives a JSON round trip.
JsonValue = Union[Dict[str, Any], list, str, int, float, bool, None]


def _drop_absent(document: dict[str, Any], *keys: str) -> dict[str, Any]:
    """Remove optional keys whose value is ``None`` instead of writing null."""
    for key in keys:
        if document.get(key) is None:
            document.pop(key, None)
    return document


class ActivityRecord(BaseModel):
    """State of one activity invocation within a workflow."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    provider_name: Optional[str] = Field(default=None, alias="providerName")
    activity_name: Optional[str] = Field(default=None, alias="activityName")
    args: JsonValue = None
    result: JsonValue = None
    additional_data: JsonValue = Field(default=None, alias="additionalData")

    def to_document(self) -> dict[str, Any]:
        return _drop_absent(
            self.model_dump(by_alias=True),
            "providerName",
            "activityName",
            "result",
            "additionalData",
        )


class WorkflowRecord(BaseModel):
    """Everything stored for one ``(workflow_name, workflow_id)`` key."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    workflow_name: Optional[str] = Field(default=None, alias="workflowName")
    workflow_id: Optional[str] = Field(default=None, alias="workflowId")
    args: JsonValue = None
    result: JsonValue = None
    additional_data: JsonValue = Field(default=None, alias="additionalData")
    activities: Dict[str, ActivityRecord] = Field(default_factory=dict)

    @property
    def is_finished(self) -> bool:
        return self.result is not None

    def to_document(self) -> dict[str, Any]:
        document = _drop_absent(
            self.model_dump(by_alias=True, exclude={"activities"}),
            "workflowName",
            "workflowId",
            "result",
            "additionalData",
        )
        document["activities"] = {
            activity_id: activity.to_document()
            for activity_id, activity in self.activities.items()
        }
        return document


class WorkflowState(BaseModel):
    """The ``args``/``result`` projection of a workflow record."""

    args: JsonValue = None
    result: JsonValue = None
