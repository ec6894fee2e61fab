"""Call hierarchy reconstruction from flat timeline intervals.

Clockwork timeline events carry only ``start``/``end`` offsets, no parent
pointers. Nesting is recovered with a single sweep over the events ordered
by start time (longest first on ties), keeping a stack of still-open
intervals: each event is attached to the nearest open interval that fully
contains it, then becomes open itself.

Intervals that only partially overlap an open interval are not nested under
it; they end up as a sibling of that interval (or a root).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from ..models import TimelineEvent


@dataclass
class CallGraphNode:
    description: str
    duration: float
    start: float
    end: float
    children: List["CallGraphNode"] = field(default_factory=list)

    def contains(self, other: "CallGraphNode") -> bool:
        return self.start <= other.start and self.end >= other.end

    def to_dict(self) -> Dict[str, Any]:
        return {
            "description": self.description,
            "duration": self.duration,
            "start": self.start,
            "end": self.end,
            "children": [child.to_dict() for child in self.children],
        }


def sort_timeline(events: Sequence[TimelineEvent]) -> List[TimelineEvent]:
    """Order events by start ascending, then duration descending."""
    return sorted(events, key=lambda e: (e.start, -e.duration))


def build_call_graph(events: Sequence[TimelineEvent]) -> List[CallGraphNode]:
    """Build the call forest for a request's timeline events."""
    roots: List[CallGraphNode] = []
    open_nodes: List[CallGraphNode] = []

    for event in sort_timeline(events):
        node = CallGraphNode(
            description=event.description,
            duration=event.duration,
            start=event.start,
            end=event.end,
        )

        # close everything that finished before this event started
        while open_nodes and open_nodes[-1].end < node.start:
            open_nodes.pop()

        parent = None
        for candidate in reversed(open_nodes):
            if candidate.contains(node):
                parent = candidate
                break

        if parent is not None:
            parent.children.append(node)
        else:
            roots.append(node)

        open_nodes.append(node)

    return roots
