"""Error hierarchy — status codes, codes and the REST envelope."""

from tracker.core.errors import (
    AuthorizationError, ConflictError, DatabaseError, PersistenceError,
    ProjectNotFoundError, RequestValidationFailure, ResourceNotFoundError,
    TaskNotFoundError, TrackerError,
)


def test_http_status_per_error_type():
    assert AuthorizationError().http_status == 401
    assert RequestValidationFailure("x", "f").http_status == 400
    assert ProjectNotFoundError("p").http_status == 404
    assert TaskNotFoundError("t").http_status == 404
    assert ConflictError("dup").http_status == 409
    assert PersistenceError("createProject").http_status == 500
    assert DatabaseError("boom", "commit").http_status == 503


def test_not_found_messages():
    assert ProjectNotFoundError("abc").message == "Project not found"
    assert TaskNotFoundError("abc").message == "Task not found for the given project"
    assert ResourceNotFoundError("User", "42").message == "User '42' not found"


def test_persistence_error_names_operation():
    err = PersistenceError("deleteTask")
    assert err.message == "Internal Server Error: deleteTask"
    assert err.context.operation == "deleteTask"
    assert err.code == "INTERNAL_ERROR"


def test_to_response_envelope():
    body = ProjectNotFoundError("abc").to_response()
    error = body["error"]
    assert error["code"] == "RESOURCE_NOT_FOUND"
    assert error["message"] == "Project not found"
    assert error["category"] == "resource_not_found"
    assert error["severity"] == "error"
    assert "timestamp" in error


def test_all_errors_share_base():
    for err in (
        AuthorizationError(), ConflictError("x"), PersistenceError("op"),
    ):
        assert isinstance(err, TrackerError)
