import pytest

from lotar.errors import (
    InvalidTaskIdError,
    LotarError,
    LotarIOError,
    ProjectNotFoundError,
    SerializationError,
    TaskIndexError,
    TaskNotFoundError,
    ValidationError,
)


@pytest.mark.parametrize(
    ("error_class", "prefix"),
    [
        (LotarIOError, "IO error"),
        (SerializationError, "Serialization error"),
        (TaskNotFoundError, "Task not found"),
        (InvalidTaskIdError, "Invalid task ID"),
        (ProjectNotFoundError, "Project not found"),
        (ValidationError, "Validation error"),
        (TaskIndexError, "Index error"),
    ],
)
def test_message_format(error_class, prefix):
    error = error_class("AUTH-5")
    assert str(error) == f"{prefix}: AUTH-5"
    assert error.detail == "AUTH-5"


@pytest.mark.parametrize(
    "error_class",
    [
        LotarIOError,
        SerializationError,
        TaskNotFoundError,
        InvalidTaskIdError,
        ProjectNotFoundError,
        ValidationError,
        TaskIndexError,
    ],
)
def test_all_errors_caught_by_base(error_class):
    error = error_class("detail")
    assert isinstance(error, LotarError)
    assert str(error).endswith(": detail")
    assert error.detail == "detail"


def test_io_error_wraps_os_error():
    cause = OSError("disk full")
    error = LotarIOError(cause)
    assert str(error) == "IO error: disk full"
    assert error.detail is cause


def test_specific_error_not_caught_by_sibling():
    error = TaskNotFoundError("X-1")
    assert not isinstance(error, ProjectNotFoundError)
    assert str(error) == "Task not found: X-1"