"""ITaskQueue: hand slow work from subscribers to the background."""

from __future__ import annotations

import uuid
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from ..correlation import get_correlation_id


class Task(BaseModel):
    """Base class for background tasks.

    Tasks are plain immutable messages; a handler registered on the queue
    for the concrete task type does the work. Handlers signal a transient
    failure by raising, which makes the queue retry the task.
    """

    model_config = ConfigDict(frozen=True)

    task_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    correlation_id: str | None = Field(default_factory=get_correlation_id)


@runtime_checkable
class ITaskQueue(Protocol):
    """Protocol for background task queues."""

    async def enqueue(self, task: Task) -> None:
        """Queue *task* for later execution."""
        ...


@runtime_checkable
class ITaskHandler(Protocol):
    async def handle(self, task: Any) -> None: ...
