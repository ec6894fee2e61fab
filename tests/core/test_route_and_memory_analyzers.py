import pytest

from conftest import make_request

from clockwork_core.analyzers.memory import HIGH_USAGE, MEMORY_GROWTH, detect_memory_issues
from clockwork_core.analyzers.routes import analyze_route_performance

MB = 1024 * 1024


class TestRoutePerformance:
    def test_groups_by_uri_with_percentiles(self):
        requests = [
            make_request("a", uri="/users", response_duration=100),
            make_request("b", uri="/users", response_duration=200),
            make_request("c", uri="/users", response_duration=300),
        ]
        analysis = analyze_route_performance(requests)
        route = analysis.routes[0]
        assert route.route == "/users"
        assert route.samples == 3
        assert route.avg_duration == 200
        assert route.p50 == 200
        assert route.p95 == pytest.approx(290)
        assert route.min_duration == 100
        assert route.max_duration == 300

    def test_even_sample_count_interpolates_median(self):
        requests = [make_request(str(i), uri="/x", response_duration=d) for i, d in enumerate([10, 20, 30, 40])]
        assert analyze_route_performance(requests).routes[0].p50 == pytest.approx(25)

    def test_ignores_non_http_and_missing_durations(self):
        requests = [
            make_request("a", uri="/users", response_duration=100),
            make_request("b", type="command", command_name="migrate", response_duration=500),
            make_request("c", uri="/users"),
        ]
        analysis = analyze_route_performance(requests)
        assert analysis.summary.total_requests == 2
        assert analysis.routes[0].samples == 1

    def test_group_by_route_falls_back_to_uri(self):
        requests = [
            make_request("a", uri="/users/1", route="users.show", response_duration=10),
            make_request("b", uri="/health", response_duration=5),
        ]
        routes = {r.route for r in analyze_route_performance(requests, group_by="route").routes}
        assert routes == {"users.show", "/health"}

    def test_group_by_controller_and_min_samples(self):
        requests = [
            make_request("a", controller="A@x", response_duration=10),
            make_request("b", controller="A@x", response_duration=30),
            make_request("c", controller="B@y", response_duration=50),
        ]
        analysis = analyze_route_performance(requests, group_by="controller", min_samples=2)
        assert [r.route for r in analysis.routes] == ["A@x"]

    def test_sorted_slowest_first_and_memory_average(self):
        requests = [
            make_request("a", uri="/fast", response_duration=10, memory_usage=2 * MB),
            make_request("b", uri="/slow", response_duration=90, memory_usage=4 * MB),
            make_request("c", uri="/slow", response_duration=110),
        ]
        analysis = analyze_route_performance(requests)
        assert analysis.summary.slowest_route == "/slow"
        assert analysis.summary.fastest_route == "/fast"
        assert analysis.routes[0].avg_memory_mb == 4


class TestMemoryIssues:
    def test_flags_high_usage_at_threshold(self):
        requests = [
            make_request("a", uri="/big", memory_usage=128 * MB),
            make_request("b", uri="/small", memory_usage=10 * MB),
        ]
        analysis = detect_memory_issues(requests, threshold_mb=128, detect_growth=False)
        assert len(analysis.issues) == 1
        issue = analysis.issues[0]
        assert issue.type == HIGH_USAGE
        assert issue.request_id == "a"
        assert issue.details == "Memory usage (128.0 MB) exceeds threshold (128 MB)"

    def test_growth_above_twenty_percent_is_detected(self):
        requests = [
            make_request("a", time=1, memory_usage=100 * MB),
            make_request("b", time=2, memory_usage=100 * MB),
            make_request("c", time=3, memory_usage=121 * MB),
            make_request("d", time=4, memory_usage=121 * MB),
        ]
        analysis = detect_memory_issues(requests, threshold_mb=1000)
        assert analysis.summary.growth_detected is True
        growth = analysis.issues[0]
        assert growth.type == MEMORY_GROWTH
        assert growth.request_id == "c"
        assert "from 100.0 MB to 121.0 MB (+21%) over 4 requests" in growth.details

    def test_growth_of_exactly_twenty_percent_is_not_detected(self):
        requests = [
            make_request("a", time=1, memory_usage=100 * MB),
            make_request("b", time=2, memory_usage=100 * MB),
            make_request("c", time=3, memory_usage=120 * MB),
            make_request("d", time=4, memory_usage=120 * MB),
        ]
        assert detect_memory_issues(requests, threshold_mb=1000).summary.growth_detected is False

    def test_growth_needs_four_samples(self):
        requests = [
            make_request("a", time=1, memory_usage=10 * MB),
            make_request("b", time=2, memory_usage=50 * MB),
            make_request("c", time=3, memory_usage=90 * MB),
        ]
        assert detect_memory_issues(requests, threshold_mb=1000).summary.growth_detected is False

    def test_growth_uses_time_order_not_input_order(self):
        requests = [
            make_request("new", time=4, memory_usage=50 * MB),
            make_request("old", time=1, memory_usage=100 * MB),
            make_request("mid1", time=2, memory_usage=100 * MB),
            make_request("mid2", time=3, memory_usage=50 * MB),
        ]
        assert detect_memory_issues(requests, threshold_mb=1000).summary.growth_detected is False

    def test_summary_without_memory_data(self):
        analysis = detect_memory_issues([make_request("a")])
        assert analysis.summary.total_requests == 1
        assert analysis.summary.requests_with_memory_data == 0
        assert analysis.summary.avg_memory_mb is None
        assert analysis.issues == []
