from clockwork_core.analyzers.call_graph import build_call_graph
from clockwork_core.models import TimelineEvent


def ev(description, start, end):
    return TimelineEvent(description=description, start=start, end=end)


def test_nests_contained_events():
    roots = build_call_graph([ev("request", 0, 100), ev("controller", 10, 40), ev("view", 50, 90)])
    assert [r.description for r in roots] == ["request"]
    assert [c.description for c in roots[0].children] == ["controller", "view"]


def test_partial_overlap_becomes_sibling_root():
    roots = build_call_graph([ev("request", 0, 100), ev("overlap", 60, 140)])
    assert [r.description for r in roots] == ["request", "overlap"]
    assert roots[0].children == []


def test_input_order_does_not_matter():
    roots = build_call_graph([ev("inner", 10, 20), ev("outer", 0, 100)])
    assert roots[0].description == "outer"
    assert roots[0].children[0].description == "inner"


def test_same_start_longer_event_is_parent():
    roots = build_call_graph([ev("short", 0, 10), ev("long", 0, 50)])
    assert roots[0].description == "long"
    assert roots[0].children[0].description == "short"


def test_deep_nesting_attaches_to_nearest_container():
    roots = build_call_graph([ev("a", 0, 100), ev("b", 10, 80), ev("c", 20, 30)])
    assert roots[0].children[0].description == "b"
    assert roots[0].children[0].children[0].description == "c"


def test_duration_is_derived_when_missing():
    event = TimelineEvent.model_validate({"description": "x", "start": 5, "end": 12})
    assert event.duration == 7
    assert build_call_graph([event])[0].to_dict()["duration"] == 7


def test_empty():
    assert build_call_graph([]) == []
