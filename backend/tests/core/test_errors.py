"""Error Hierarchy — tests for codes, HTTP status and envelopes.

Tests cover:
    - Each domain error carries its code, category and status
    - to_response() REST envelope shape
    - to_sse_event() marks warnings as recoverable
    - InternalError never carries exception text
    - ErrorContext.log_extra() keeps only the fields that are set
"""

from graphwalk.core.errors import (
    ErrorCategory, ErrorContext, ErrorSeverity, GraphwalkError, InternalError,
    ResourceNotFoundError, RunInProgressError, RunNotReadyError,
)


def test_resource_not_found_is_404():
    err = ResourceNotFoundError("Node", "7")
    assert err.http_status == 404
    assert err.code == "RESOURCE_NOT_FOUND"
    assert err.message == "Node '7' not found"


def test_run_in_progress_is_409_conflict():
    err = RunInProgressError(ErrorContext(session_id="s1", intent="add_node"))
    assert err.http_status == 409
    assert err.category == ErrorCategory.CONFLICT
    body = err.to_response()["error"]
    assert body["code"] == "RUN_IN_PROGRESS"
    assert body["context"]["intent"] == "add_node"
    assert body["context"]["session_id"] == "s1"


def test_run_not_ready_lists_missing_inputs():
    err = RunNotReadyError(["algorithm", "start_node"])
    assert err.http_status == 400
    assert err.missing == ["algorithm", "start_node"]
    assert "algorithm, start_node" in err.message


def test_sse_event_uses_user_message_when_present():
    err = GraphwalkError(
        "internal text", "X", ErrorCategory.INTERNAL,
        context=ErrorContext(user_message="friendly text"),
    )
    event = err.to_sse_event()
    assert event["type"] == "error"
    assert event["data"]["message"] == "friendly text"
    assert event["data"]["recoverable"] is False


def test_warning_errors_are_recoverable():
    event = RunInProgressError().to_sse_event()
    assert event["data"]["severity"] == ErrorSeverity.WARNING.value
    assert event["data"]["recoverable"] is True


def test_internal_error_is_critical_500():
    err = InternalError(ErrorContext(session_id="s1", intent="run"))
    assert err.http_status == 500
    assert err.category == ErrorCategory.INTERNAL
    event = err.to_sse_event()
    assert event["data"] == {
        "code": "INTERNAL_ERROR",
        "message": "An unexpected error occurred",
        "severity": "critical",
        "recoverable": False,
    }


def test_log_extra_drops_unset_fields():
    assert ErrorContext(session_id="s1", node_id=0).log_extra() == {
        "session_id": "s1", "node_id": 0,
    }
    assert ErrorContext().log_extra() == {}
