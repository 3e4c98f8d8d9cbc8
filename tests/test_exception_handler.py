"""
Global exception handler mapping.
"""
import json
import pytest
from starlette.requests import Request
from sqlalchemy.exc import OperationalError
from framework.config import settings
from framework.exceptions.handler import (
    BusinessException,
    RecordNotFoundException,
    global_exception_handler,
)


def _request(trace_id: str = "trace-abc") -> Request:
    request = Request({
        "type": "http",
        "method": "GET",
        "path": "/api/v1/persons/1",
        "headers": [],
        "query_string": b"",
    })
    request.state.trace_id = trace_id
    return request


def _body(response) -> dict:
    return json.loads(response.body)


def test_business_exception_keeps_status_and_code():
    response = global_exception_handler(_request(), BusinessException("Email already registered", status_code=409, code=409))
    assert response.status_code == 409
    assert _body(response) == {"code": 409, "message": "Email already registered", "data": None}


def test_record_not_found_is_404():
    response = global_exception_handler(_request(), RecordNotFoundException("Person", 7))
    assert response.status_code == 404
    body = _body(response)
    assert body["code"] == 404
    assert body["data"] == {"entity": "Person", "key": 7}


def test_database_error_is_500():
    exc = OperationalError("SELECT 1", {}, Exception("connection refused"))
    response = global_exception_handler(_request(), exc)
    assert response.status_code == 500
    assert _body(response) == {"code": 500, "message": "Service temporarily unavailable", "data": None}


def test_uncaught_exception_includes_trace_id_in_debug(monkeypatch):
    monkeypatch.setattr(settings, "DEBUG", True)
    response = global_exception_handler(_request("trace-debug"), RuntimeError("boom"))
    assert response.status_code == 500
    body = _body(response)
    assert body["code"] == 500
    assert body["data"] == {"trace_id": "trace-debug"}


def test_uncaught_exception_hides_trace_id_without_debug(monkeypatch):
    monkeypatch.setattr(settings, "DEBUG", False)
    response = global_exception_handler(_request("trace-prod"), RuntimeError("boom"))
    assert response.status_code == 500
    assert _body(response)["data"] is None
