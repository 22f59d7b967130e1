"""Exception hierarchy for task repository operations."""

from __future__ import annotations

from typing import Any


class LotarError(Exception):
    """Base class for errors raised by task repository operations."""

    label = "Error"

    def __init__(self, detail: Any) -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return f"{self.label}: {self.detail}"


class LotarIOError(LotarError):
    """A filesystem operation failed."""

    label = "IO error"


class SerializationError(LotarError):
    """Data could not be serialized or deserialized."""

    label = "Serialization error"


class TaskNotFoundError(LotarError):
    """No task exists with the requested identifier."""

    label = "Task not found"


class InvalidTaskIdError(LotarError):
    """A task identifier is malformed."""

    label = "Invalid task ID"


class ProjectNotFoundError(LotarError):
    """No project exists with the requested name."""

    label = "Project not found"


class ValidationError(LotarError):
    """A value failed validation."""

    label = "Validation error"


class TaskIndexError(LotarError):
    """The task index could not be read, written or updated."""

    label = "Index error"