import pytest

from conftest import FakeStorage, make_request

from clockwork_core.models import RequestScope
from clockwork_core.scope import parse_time_duration, resolve_scope, scope_limit

NOW = 1_700_000_000.0


def http_universe(n, start=NOW):
    # newest request is r0
    return FakeStorage(make_request(f"r{i}", time=start - i, uri=f"/item/{i}") for i in range(n))


class TestParseTimeDuration:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("30m", 30 * 60_000),
            ("2h", 2 * 3_600_000),
            ("1.5H", 1.5 * 3_600_000),
            (" 1d", 86_400_000),
            ("1 w", 604_800_000),
        ],
    )
    def test_valid(self, value, expected):
        assert parse_time_duration(value) == expected

    @pytest.mark.parametrize("value", ["", None, "10", "5s", "h", "1d ago", "-1h", "1h\n", "2d\n\n"])
    def test_invalid_means_no_filter(self, value):
        assert parse_time_duration(value) is None


class TestScopeLimit:
    def test_defaults_to_latest_only(self):
        assert scope_limit(RequestScope()) == 1

    def test_count_is_capped(self):
        assert scope_limit(RequestScope(count=500)) == 100
        assert scope_limit(RequestScope(count=7)) == 7

    def test_negative_count_selects_nothing(self):
        assert scope_limit(RequestScope(count=-3)) == 0

    def test_all_and_since_use_the_cap(self):
        assert scope_limit(RequestScope(all=True)) == 100
        assert scope_limit(RequestScope(since="1h")) == 100
        assert scope_limit(RequestScope(since="garbage")) == 100


class TestResolveScope:
    def test_request_id_short_circuits(self):
        storage = http_universe(3)
        resolution = resolve_scope(RequestScope(request_id="x", count=5), storage)
        assert resolution.ids == ["x"]
        assert resolution.total_matched == 1
        assert resolution.capped is False

    def test_default_is_latest_http_request(self):
        resolution = resolve_scope(RequestScope(), http_universe(5))
        assert resolution.ids == ["r0"]
        assert resolution.total_matched == 5
        assert resolution.capped is True

    def test_all_is_capped_at_one_hundred(self):
        resolution = resolve_scope(RequestScope(all=True), http_universe(150))
        assert len(resolution.ids) == 100
        assert resolution.ids[0] == "r0"
        assert resolution.capped is True
        assert resolution.total_matched == 150

    def test_count(self):
        resolution = resolve_scope(RequestScope(count=3), http_universe(10))
        assert resolution.ids == ["r0", "r1", "r2"]

    def test_non_http_entries_never_count(self):
        storage = FakeStorage(
            [
                make_request("cmd", time=NOW, type="command", command_name="migrate"),
                make_request("job", time=NOW - 1, type="queue-job"),
                make_request("web", time=NOW - 2, uri="/home"),
                make_request("untyped", time=NOW - 3, type=None, uri="/other"),
            ]
        )
        resolution = resolve_scope(RequestScope(all=True), storage)
        assert resolution.ids == ["web", "untyped"]

    def test_uri_filter_is_case_insensitive_substring(self):
        storage = FakeStorage(
            [
                make_request("a", time=NOW, uri="/API/users"),
                make_request("b", time=NOW - 1, uri="/orders"),
                make_request("c", time=NOW - 2),
            ]
        )
        assert resolve_scope(RequestScope(all=True, uri="api"), storage).ids == ["a"]

    def test_since_window(self):
        storage = FakeStorage(
            [
                make_request("recent", time=NOW - 60),
                make_request("edge", time=NOW - 3600),
                make_request("old", time=NOW - 7200),
            ]
        )
        resolution = resolve_scope(RequestScope(since="1h"), storage, now=NOW)
        assert resolution.ids == ["recent", "edge"]
        assert resolution.capped is False

    def test_invalid_since_applies_no_filter_but_raises_limit(self):
        resolution = resolve_scope(RequestScope(since="yesterday"), http_universe(5), now=NOW)
        assert len(resolution.ids) == 5
