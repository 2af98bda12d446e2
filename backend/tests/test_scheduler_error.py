from timetabler.core.exceptions import AppError, ResourceNotFoundError, SchedulerError


def test_scheduler_error_structure():
    err = SchedulerError(message="Test error", details={"foo": "bar"})
    assert err.status_code == 400
    assert err.message == "Test error"
    assert err.details == {"foo": "bar"}
    assert isinstance(err, AppError)


def test_app_error_defaults():
    err = AppError("Generic error")
    assert err.status_code == 500
    assert err.details == {}


def test_not_found_error_carries_resource():
    err = ResourceNotFoundError("Conflict", "room-Monday-1-R1")
    assert err.status_code == 404
    assert err.message == "Conflict with id room-Monday-1-R1 not found"
    assert err.details == {"resource_type": "Conflict", "resource_id": "room-Monday-1-R1"}


def test_handler_renders_message_and_details(client):
    response = client.post("/api/unscheduled/missing/retry")
    assert response.status_code == 404
    assert response.json() == {
        "message": "Unscheduled session with id missing not found",
        "details": {"resource_type": "Unscheduled session", "resource_id": "missing"},
    }


def test_oversized_request_is_rejected(client):
    response = client.post(
        "/api/rooms/",
        content=b"x" * (3 * 1024 * 1024),
        headers={"content-type": "application/json"},
    )
    assert response.status_code == 413
