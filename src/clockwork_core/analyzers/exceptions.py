"""Exception clustering over error-level log entries."""

import re
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from ..config import DEFAULT_EXCEPTION_LIMIT, EXCEPTION_EXAMPLES_PER_GROUP, EXCEPTION_LEVELS
from ..models import LogEntry

# Applied in order; each mask sees the output of the previous one.
_MESSAGE_MASKS = [
    (re.compile(r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}", re.IGNORECASE), "<UUID>"),
    (re.compile(r"\b\d+\b"), "<ID>"),
    (re.compile(r'"[^"]*"'), '"<STRING>"'),
    (re.compile(r"'[^']*'"), "'<STRING>'"),
    (re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}"), "<EMAIL>"),
    (re.compile(r"\b\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}\b"), "<IP>"),
    (re.compile(r"/[^\s:]+\.\w+"), "<PATH>"),
]
_WHITESPACE = re.compile(r"\s+")


def normalize_exception_message(message: str) -> str:
    """Mask dynamic values (ids, strings, emails, paths...) in an error message."""
    normalized = message
    for pattern, replacement in _MESSAGE_MASKS:
        normalized = pattern.sub(replacement, normalized)
    return _WHITESPACE.sub(" ", normalized).strip()


def extract_exceptions(logs: Sequence[LogEntry]) -> List[LogEntry]:
    """Log entries that represent exceptions (error or critical level)."""
    return [entry for entry in logs if entry.level in EXCEPTION_LEVELS]


@dataclass
class ExceptionOccurrence:
    """A single exception log entry, tagged with the request it came from."""

    level: str
    message: str
    file: Optional[str] = None
    line: Optional[int] = None
    time: Optional[float] = None
    request_id: Optional[str] = None

    @classmethod
    def from_log(cls, entry: LogEntry, request_id: Optional[str] = None) -> "ExceptionOccurrence":
        return cls(
            level=entry.level,
            message=entry.message,
            file=entry.file,
            line=entry.line,
            time=entry.time,
            request_id=request_id,
        )

    def example(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "file": self.file,
            "line": self.line,
            "time": self.time,
            "request_id": self.request_id,
        }


@dataclass
class ExceptionGroup:
    normalized_message: str
    count: int
    level: str
    examples: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class ExceptionSummary:
    total_exceptions: int
    unique_patterns: int
    most_common: Optional[str]


@dataclass
class ExceptionAnalysis:
    exceptions: List[ExceptionGroup]
    summary: ExceptionSummary

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def group_exceptions(
    occurrences: Sequence[ExceptionOccurrence],
    group_by_message: bool = True,
    limit: int = DEFAULT_EXCEPTION_LIMIT,
) -> ExceptionAnalysis:
    """Cluster exceptions by normalized message and rank clusters by size.

    With ``group_by_message=False`` every exception is reported as its own
    group, message untouched.
    """
    if not group_by_message:
        singles = [
            ExceptionGroup(
                normalized_message=occ.message,
                count=1,
                level=occ.level,
                examples=[occ.example()],
            )
            for occ in occurrences[:limit]
        ]
        return ExceptionAnalysis(
            exceptions=singles,
            summary=ExceptionSummary(
                total_exceptions=len(occurrences),
                unique_patterns=len(occurrences),
                most_common=singles[0].normalized_message if singles else None,
            ),
        )

    buckets: Dict[str, List[ExceptionOccurrence]] = {}
    for occ in occurrences:
        buckets.setdefault(normalize_exception_message(occ.message), []).append(occ)

    groups = [
        ExceptionGroup(
            normalized_message=normalized,
            count=len(members),
            level=members[0].level,
            examples=[m.example() for m in members[:EXCEPTION_EXAMPLES_PER_GROUP]],
        )
        for normalized, members in buckets.items()
    ]
    groups.sort(key=lambda g: g.count, reverse=True)
    limited = groups[:limit]

    return ExceptionAnalysis(
        exceptions=limited,
        summary=ExceptionSummary(
            total_exceptions=len(occurrences),
            unique_patterns=len(buckets),
            most_common=limited[0].normalized_message if limited else None,
        ),
    )
