"""Command line interface for inspecting stored workflow state."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer

from json_task_storage import BaseTaskStorage, get_storage

app = typer.Typer(help="CLI for inspecting JSON task storage")

# Command groups
workflow_app = typer.Typer(help="Commands for inspecting workflows")
activity_app = typer.Typer(help="Commands for inspecting activities")

app.add_typer(workflow_app, name="workflow")
app.add_typer(activity_app, name="activity")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """json-task-storage CLI entry point."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


def _open_storage(path: Optional[Path]) -> BaseTaskStorage:
    if path is None:
        return get_storage()
    return get_storage(base_path=str(path), backend="file")


def _format(value: Any) -> str:
    return json.dumps(value, sort_keys=True)


@workflow_app.command("incomplete")
def workflow_incomplete(path: Optional[Path] = None) -> None:
    """
    List workflow ids that have no result yet.

    Example:
        json-task-storage workflow incomplete --path ./storage
        # Output: id1
        #         id7
    """
    storage = _open_storage(path)
    workflow_ids = asyncio.run(storage.list_workflow_ids_without_result())
    if not workflow_ids:
        typer.echo("No incomplete workflows")
        return
    for workflow_id in workflow_ids:
        typer.echo(workflow_id)


@workflow_app.command("show")
def workflow_show(
    workflow_name: str, workflow_id: str, path: Optional[Path] = None
) -> None:
    """
    Show args, result, additional data and activities of one workflow.

    Example:
        json-task-storage workflow show orderFlow id1
        # Output: Workflow orderFlow/id1: pending
        #         Args: {"qty": 3}
        #         - a1 payments.charge: completed
    """
    storage = _open_storage(path)
    record = asyncio.run(storage.get_record(workflow_name, workflow_id))
    if record is None:
        typer.echo("Workflow not found")
        raise typer.Exit(code=1)
    status = "completed" if record.is_finished else "pending"
    typer.echo(f"Workflow {workflow_name}/{workflow_id}: {status}")
    typer.echo(f"Args: {_format(record.args)}")
    if record.result is not None:
        typer.echo(f"Result: {_format(record.result)}")
    if record.additional_data:
        typer.echo(f"Additional data: {_format(record.additional_data)}")
    for activity_id, activity in record.activities.items():
        activity_status = "completed" if activity.result is not None else "pending"
        typer.echo(
            f"- {activity_id} {activity.provider_name}.{activity.activity_name}: "
            f"{activity_status}"
        )


@activity_app.command("show")
def activity_show(
    workflow_name: str,
    workflow_id: str,
    activity_id: str,
    path: Optional[Path] = None,
) -> None:
    """
    Show one activity of a workflow.

    Example:
        json-task-storage activity show orderFlow id1 a1
        # Output: Activity a1 (payments.charge): completed
        #         Args: {"amount": 10}
        #         Result: {"ok": true}
    """
    storage = _open_storage(path)
    activity = asyncio.run(
        storage.get_activity(workflow_name, workflow_id, activity_id)
    )
    if activity is None:
        typer.echo("Activity not found")
        raise typer.Exit(code=1)
    status = "completed" if activity.result is not None else "pending"
    typer.echo(
        f"Activity {activity_id} ({activity.provider_name}.{activity.activity_name}): "
        f"{status}"
    )
    typer.echo(f"Args: {_format(activity.args)}")
    if activity.result is not None:
        typer.echo(f"Result: {_format(activity.result)}")
    if activity.additional_data:
        typer.echo(f"Additional data: {_format(activity.additional_data)}")


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    app()
