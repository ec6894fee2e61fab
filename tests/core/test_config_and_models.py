"""
Tests for analysis constants and the Clockwork data models.
"""

import pytest
from pydantic import ValidationError

from clockwork_core import config
from clockwork_core.models import (
    ClockworkRequest,
    DatabaseQuery,
    LogEntry,
    RequestScope,
    TimelineEvent,
)


def test_policy_constants():
    assert config.MAX_REQUESTS == 100
    assert config.LOG_LEVELS == ("debug", "info", "warning", "error")
    assert config.DURATION_UNITS_MS["h"] == 3_600_000
    assert config.DEFAULT_ROUTE_GROUP_BY in config.ROUTE_GROUP_BY_OPTIONS


class TestClockworkRequest:
    def test_validates_camel_case_json(self):
        request = ClockworkRequest.model_validate(
            {
                "id": "abc",
                "time": 1.5,
                "responseStatus": 404,
                "memoryUsage": 2 * 1024 * 1024,
                "databaseQueries": [{"query": "select 1", "duration": None}],
                "timelineData": [{"description": "Controller", "start": 1.0, "end": 3.5}],
            }
        )
        assert request.response_status == 404
        assert request.memory_mb == 2
        assert request.database_queries[0].duration == 0.0
        assert request.timeline_data[0].duration == 2.5

    def test_snake_case_names_are_accepted(self):
        assert ClockworkRequest(id="x", response_duration=12).response_duration == 12

    def test_memory_mb_absent(self):
        assert ClockworkRequest(id="x").memory_mb is None

    def test_to_dict_uses_clockwork_keys_and_drops_none(self):
        data = ClockworkRequest(id="x", time=2, command_name="migrate").to_dict()
        assert data == {"id": "x", "time": 2, "commandName": "migrate"}

    def test_models_are_frozen(self):
        request = ClockworkRequest(id="x")
        with pytest.raises(ValidationError):
            request.uri = "/changed"

    def test_id_is_required(self):
        with pytest.raises(ValidationError):
            ClockworkRequest.model_validate({"time": 1})


def test_explicit_timeline_duration_wins():
    assert TimelineEvent(start=0, end=10, duration=4).duration == 4


def test_log_message_is_stringified():
    assert LogEntry(level="error", message=42).message == "42"
    assert LogEntry(level="info", message=None).message == ""


def test_database_query_keeps_unknown_fields():
    query = DatabaseQuery.model_validate({"query": "select 1", "trace": [{"file": "a.php"}]})
    assert query.to_dict()["trace"] == [{"file": "a.php"}]


def test_request_scope_defaults():
    scope = RequestScope()
    assert scope.request_id is None
    assert scope.count is None
    assert scope.all is False


def test_php_arrays_are_reshaped_per_field():
    request = ClockworkRequest.model_validate(
        {
            "id": "x",
            "getData": [],
            "headers": ["text/html"],
            "middleware": {"0": "web", "2": "auth"},
            "log": {"1": {"level": "error", "message": "boom", "context": []}},
            "commandName": None,
        }
    )
    assert request.get_data == {}
    assert request.headers == {"0": "text/html"}
    assert request.middleware == ["web", "auth"]
    assert request.log[0].context == {}
    assert request.command_name is None
