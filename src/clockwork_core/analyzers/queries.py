"""Database query analysis for a single request.

Queries are compared through their *pattern*: the SQL text with literal
values masked, so that ``WHERE id = 1`` and ``WHERE id = 2`` fall into the
same bucket.
"""

import re
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Sequence

from ..config import DEFAULT_N_PLUS_ONE_THRESHOLD
from ..models import DatabaseQuery

_STRING_LITERAL = re.compile(r"'[^']*'")
_NUMERIC_LITERAL = re.compile(r"\b\d+\b")
_IN_CLAUSE = re.compile(r"IN\s*\([^)]+\)", re.IGNORECASE)


def normalize_query(query: str) -> str:
    """Replace literal values in a SQL string with ``?``.

    Order matters: string literals first (so digits inside strings vanish
    with them), then bare numbers, then whole ``IN (...)`` lists. This is
    plain regex substitution and never fails on malformed SQL.
    """
    normalized = _STRING_LITERAL.sub("?", query)
    normalized = _NUMERIC_LITERAL.sub("?", normalized)
    return _IN_CLAUSE.sub("IN (?)", normalized)


def analyze_slow_queries(queries: Sequence[DatabaseQuery], threshold: float) -> List[DatabaseQuery]:
    """Queries taking at least ``threshold`` ms, slowest first.

    Queries with equal durations keep their execution order.
    """
    slow = [q for q in queries if q.duration >= threshold]
    return sorted(slow, key=lambda q: q.duration, reverse=True)


@dataclass
class NPlusOnePattern:
    pattern: str
    count: int
    total_duration: float
    examples: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def detect_n_plus_one(
    queries: Sequence[DatabaseQuery], threshold: int = DEFAULT_N_PLUS_ONE_THRESHOLD
) -> List[NPlusOnePattern]:
    """Find query patterns repeated at least ``threshold`` times.

    Returns patterns sorted by count descending; equal counts keep the order
    in which their pattern was first seen.
    """
    patterns: Dict[str, NPlusOnePattern] = {}

    for query in queries:
        normalized = normalize_query(query.query)
        if normalized not in patterns:
            patterns[normalized] = NPlusOnePattern(pattern=normalized, count=0, total_duration=0.0)
        pattern = patterns[normalized]
        pattern.count += 1
        pattern.total_duration += query.duration
        pattern.examples.append(query.query)

    results = [p for p in patterns.values() if p.count >= threshold]
    results.sort(key=lambda p: p.count, reverse=True)
    return results


@dataclass
class QueryGroup:
    pattern: str
    count: int
    total_duration: float
    avg_duration: float
    max_duration: float
    examples: List[DatabaseQuery] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pattern": self.pattern,
            "count": self.count,
            "total_duration": self.total_duration,
            "avg_duration": self.avg_duration,
            "max_duration": self.max_duration,
            "examples": [q.to_dict() for q in self.examples],
        }


def group_queries_by_pattern(queries: Sequence[DatabaseQuery]) -> List[QueryGroup]:
    """Group queries by normalized pattern, most expensive pattern first."""
    grouped: Dict[str, List[DatabaseQuery]] = {}
    for query in queries:
        grouped.setdefault(normalize_query(query.query), []).append(query)

    results = []
    for pattern, members in grouped.items():
        total = sum(q.duration for q in members)
        results.append(
            QueryGroup(
                pattern=pattern,
                count=len(members),
                total_duration=total,
                avg_duration=total / len(members),
                max_duration=max(q.duration for q in members),
                examples=members,
            )
        )

    results.sort(key=lambda g: g.total_duration, reverse=True)
    return results
