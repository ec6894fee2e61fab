"""Tool-level tests: JSON responses, argument validation and error mapping."""

import json
from unittest.mock import patch

import pytest

from conftest import FakeStorage, make_request, query

from clockwork_mcp.exceptions import StorageNotFoundError
from clockwork_mcp.tools import (
    analysis_tools,
    cache_tools,
    context_tools,
    database_tools,
    jobs_tools,
    performance_tools,
    requests_tools,
    traces_tools,
    utility_tools,
)

NOW = 1_700_000_000.0
MB = 1024 * 1024


def _payload(result):
    assert isinstance(result, list) and result[0]["type"] == "text"
    return json.loads(result[0]["text"])


@pytest.fixture
def storage():
    return FakeStorage(
        [
            make_request(
                "r1",
                time=NOW,
                method="GET",
                uri="/users",
                controller="UserController@index",
                response_status=200,
                response_duration=80,
                memory_usage=200 * MB,
                database_queries=[
                    query("SELECT * FROM users WHERE id = 1", 150),
                    query("SELECT * FROM posts WHERE user_id = 1", 2),
                    query("SELECT * FROM posts WHERE user_id = 2", 2),
                ],
                log=[
                    {"level": "info", "message": "hi"},
                    {"level": "error", "message": "Order 7 failed", "file": "app/Order.php", "line": 4},
                ],
                timeline_data=[{"description": "Total", "start": 0, "end": 80}],
            ),
            make_request("r2", time=NOW - 10, method="POST", uri="/orders", response_status=500,
                         response_duration=300, memory_usage=2 * MB),
            make_request("cmd", time=NOW - 20, type="command", command_name="migrate", command_exit_code=0),
        ]
    )


def _patch_storage(module, storage):
    return patch.object(module, "get_storage", return_value=storage)


class TestRequestTools:
    def test_list_requests(self, storage):
        with _patch_storage(requests_tools, storage):
            data = _payload(requests_tools.list_requests(type="request"))
        assert [e["id"] for e in data] == ["r1", "r2"]
        assert data[0]["responseStatus"] == 200

    def test_list_requests_time_window(self, storage):
        with _patch_storage(requests_tools, storage):
            data = _payload(requests_tools.list_requests(from_time=NOW - 15, to_time=NOW - 5))
        assert [e["id"] for e in data] == ["r2"]

    def test_negative_pagination_is_invalid_input(self, storage):
        with _patch_storage(requests_tools, storage):
            data = _payload(requests_tools.list_requests(limit=-1))
        assert data["error"] is True
        assert data["error_code"] == "INVALID_INPUT"
        assert data["details"]["field"] == "limit"

    def test_get_request_and_missing(self, storage):
        with _patch_storage(requests_tools, storage):
            assert _payload(requests_tools.get_request("r2"))["uri"] == "/orders"
            assert _payload(requests_tools.get_request("missing")) is None

    def test_get_request_requires_id(self, storage):
        with _patch_storage(requests_tools, storage):
            data = _payload(requests_tools.get_request(""))
        assert data["error_code"] == "INVALID_INPUT"
        assert data["details"]["field"] == "request_id"

    def test_latest_and_search(self, storage):
        with _patch_storage(requests_tools, storage):
            assert _payload(requests_tools.get_latest_request())["id"] == "r1"
            found = _payload(requests_tools.search_requests(min_duration=100))
        assert [e["id"] for e in found] == ["r2"]


class TestDatabaseTools:
    def test_get_queries_and_stats(self, storage):
        with _patch_storage(database_tools, storage):
            slow = _payload(database_tools.get_queries("r1", slow=True, threshold=100))
            stats = _payload(database_tools.get_query_stats("r1"))
        assert [q["duration"] for q in slow] == [150]
        assert stats["total_queries"] == 3
        assert stats["queries_by_type"]["select"] == 3
        assert stats["slowest_query"]["duration"] == 150

    def test_query_patterns(self, storage):
        with _patch_storage(database_tools, storage):
            groups = _payload(database_tools.get_query_patterns("r1"))
        assert groups[0]["pattern"] == "SELECT * FROM users WHERE id = ?"
        assert groups[1]["count"] == 2

    def test_analyze_slow_queries_default_scope(self, storage):
        with _patch_storage(database_tools, storage):
            data = _payload(database_tools.analyze_slow_queries())
        assert data["summary"]["requests_analyzed"] == 1
        assert data["summary"]["capped"] is True
        assert data["queries"][0]["affected_requests"][0]["id"] == "r1"

    def test_detect_n_plus_one_with_request_id(self, storage):
        with _patch_storage(database_tools, storage):
            data = _payload(database_tools.detect_n_plus_one(request_id="r1"))
        assert data["patterns"][0]["total_occurrences"] == 2
        assert data["summary"]["requests_with_n_plus_one"] == 1

    def test_empty_scope_strings_are_ignored(self, storage):
        with _patch_storage(database_tools, storage):
            data = _payload(database_tools.detect_n_plus_one(request_id="", since="", uri="", all_requests=True))
        assert data["summary"]["requests_analyzed"] == 2


class TestAnalysisTools:
    def test_analyze_exceptions(self, storage):
        with _patch_storage(analysis_tools, storage):
            data = _payload(analysis_tools.analyze_exceptions(all_requests=True))
        assert data["exceptions"][0]["normalized_message"] == "Order <ID> failed"
        assert data["meta"]["requests_analyzed"] == 2

    def test_route_performance_rejects_unknown_group_by(self, storage):
        with _patch_storage(analysis_tools, storage):
            data = _payload(analysis_tools.analyze_route_performance(group_by="host"))
        assert data["error_code"] == "INVALID_INPUT"
        assert data["details"]["provided_value"] == "host"

    def test_route_performance(self, storage):
        with _patch_storage(analysis_tools, storage):
            data = _payload(analysis_tools.analyze_route_performance(count=2))
        assert {r["route"] for r in data["routes"]} == {"/users", "/orders"}

    def test_memory_issues(self, storage):
        with _patch_storage(analysis_tools, storage):
            data = _payload(analysis_tools.detect_memory_issues(all_requests=True, threshold_mb=128))
        assert [i["request_id"] for i in data["issues"]] == ["r1"]


class TestInspectionTools:
    def test_performance_and_timeline(self, storage):
        with _patch_storage(performance_tools, storage):
            summary = _payload(performance_tools.get_performance_summary("r1"))
            timeline = _payload(performance_tools.get_timeline("r1"))
            diff = _payload(performance_tools.compare_requests("r1", "r2"))
        assert summary["memory_usage_mb"] == 200
        assert timeline[0]["duration"] == 80
        assert diff["duration_diff"] == 220

    def test_compare_requires_both_ids(self, storage):
        with _patch_storage(performance_tools, storage):
            data = _payload(performance_tools.compare_requests("r1", ""))
        assert data["details"]["field"] == "request_id2"

    def test_cache_tools_on_request_without_cache(self, storage):
        with _patch_storage(cache_tools, storage):
            assert _payload(cache_tools.get_cache_operations("r2")) == []
            assert _payload(cache_tools.get_cache_stats("r2"))["hit_ratio"] == 0
            assert _payload(cache_tools.get_redis_commands("r2")) == []

    def test_logs_level_filter_and_validation(self, storage):
        with _patch_storage(context_tools, storage):
            errors = _payload(context_tools.get_logs("r1", level="error"))
            invalid = _payload(context_tools.get_logs("r1", level="fatal"))
        assert [e["message"] for e in errors] == ["Order 7 failed"]
        assert invalid["error_code"] == "INVALID_INPUT"

    def test_route_details(self, storage):
        with _patch_storage(context_tools, storage):
            data = _payload(context_tools.get_route_details("r1"))
        assert data["controller"] == "UserController@index"

    def test_jobs_tools(self, storage):
        with _patch_storage(jobs_tools, storage):
            commands = _payload(jobs_tools.list_commands())
            bad_status = _payload(jobs_tools.list_queue_jobs(status="done"))
            not_a_job = _payload(jobs_tools.get_queue_job("r1"))
        assert [c["commandName"] for c in commands] == ["migrate"]
        assert bad_status["error_code"] == "INVALID_INPUT"
        assert not_a_job is None

    def test_trace_tools(self, storage):
        with _patch_storage(traces_tools, storage):
            graph = _payload(traces_tools.get_call_graph("r1"))
            log_trace = _payload(traces_tools.get_log_stack_trace("r1", 1))
            negative = _payload(traces_tools.get_query_stack_trace("r1", -1))
        assert graph[0]["description"] == "Total"
        assert log_trace["file"] == "app/Order.php"
        assert negative["error_code"] == "INVALID_INPUT"

    def test_explain_request_flow(self, storage):
        with _patch_storage(utility_tools, storage):
            data = _payload(utility_tools.explain_request_flow("r1"))
        assert data["query_count"] == 3


class TestErrorMapping:
    def test_missing_storage(self):
        with patch.object(requests_tools, "get_storage", side_effect=StorageNotFoundError("/nope")):
            data = _payload(requests_tools.get_latest_request())
        assert data["error_code"] == "STORAGE_NOT_FOUND"
        assert data["details"]["storage_path"] == "/nope"
        assert "CLOCKWORK_STORAGE_PATH" in data["recovery_suggestion"]

    def test_corrupt_request_file(self, tmp_path):
        from clockwork_core.storage import FileStorage

        (tmp_path / "bad.json").write_text("{", encoding="utf-8")
        with patch.object(requests_tools, "get_storage", return_value=FileStorage(tmp_path)):
            data = _payload(requests_tools.get_request("bad"))
        assert data["error_code"] == "STORAGE_READ_ERROR"
        assert data["details"]["error_type"] == "JSONDecodeError"


class TestClockworkStatusTool:
    def test_reports_missing_storage_without_error(self, tmp_path):
        missing = tmp_path / "missing"
        with patch.object(utility_tools, "get_storage_path", return_value=missing):
            data = _payload(utility_tools.get_clockwork_status())
        assert data["found"] is False
        assert data["storage_path"] == str(missing)

    def test_reports_found_storage(self, clockwork_dir):
        with patch.object(utility_tools, "get_storage_path", return_value=clockwork_dir):
            data = _payload(utility_tools.get_clockwork_status())
        assert data["found"] is True
        assert data["request_count"] == 3
