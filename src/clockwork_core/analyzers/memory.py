"""Memory usage analysis: high-usage requests and growth across requests."""

import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Sequence

from ..config import (
    BYTES_PER_MB,
    DEFAULT_MEMORY_THRESHOLD_MB,
    MEMORY_GROWTH_MIN_SAMPLES,
    MEMORY_GROWTH_PERCENT,
)
from ..models import ClockworkRequest

HIGH_USAGE = "high_usage"
MEMORY_GROWTH = "memory_growth"


@dataclass
class MemoryIssue:
    request_id: str
    uri: Optional[str]
    memory_mb: float
    threshold_mb: float
    type: str
    details: str


@dataclass
class MemorySummary:
    total_requests: int
    requests_with_memory_data: int
    issues_found: int
    avg_memory_mb: Optional[float]
    max_memory_mb: Optional[float]
    growth_detected: bool


@dataclass
class MemoryAnalysis:
    issues: List[MemoryIssue]
    summary: MemorySummary

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class _MemorySample:
    request_id: str
    uri: Optional[str]
    memory_mb: float
    time: float


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def _detect_growth(samples: List[_MemorySample], threshold_mb: float) -> Optional[MemoryIssue]:
    """Compare the average of the older half of the samples with the newer half.

    The newer half takes the extra sample when the count is odd. Growth of
    more than MEMORY_GROWTH_PERCENT is reported against the heaviest request
    of the newer half.
    """
    ordered = sorted(samples, key=lambda s: s.time)
    midpoint = len(ordered) // 2
    first_half = ordered[:midpoint]
    second_half = ordered[midpoint:]

    first_avg = _mean([s.memory_mb for s in first_half])
    second_avg = _mean([s.memory_mb for s in second_half])

    if first_avg == 0:
        growth_percent = math.inf if second_avg > 0 else 0.0
    else:
        growth_percent = (second_avg - first_avg) / first_avg * 100

    if not growth_percent > MEMORY_GROWTH_PERCENT:
        return None

    peak = second_half[0]
    for sample in second_half[1:]:
        if sample.memory_mb > peak.memory_mb:
            peak = sample

    return MemoryIssue(
        request_id=peak.request_id,
        uri=peak.uri,
        memory_mb=peak.memory_mb,
        threshold_mb=threshold_mb,
        type=MEMORY_GROWTH,
        details=(
            f"Memory growth detected: average increased from {first_avg:.1f} MB "
            f"to {second_avg:.1f} MB (+{growth_percent:.0f}%) over {len(ordered)} requests"
        ),
    )


def detect_memory_issues(
    requests: Sequence[ClockworkRequest],
    threshold_mb: float = DEFAULT_MEMORY_THRESHOLD_MB,
    detect_growth: bool = True,
) -> MemoryAnalysis:
    """Flag requests at or above ``threshold_mb`` and a rising memory trend."""
    threshold_bytes = threshold_mb * BYTES_PER_MB
    issues: List[MemoryIssue] = []
    samples: List[_MemorySample] = []

    for request in requests:
        if request.memory_usage is None:
            continue

        memory_mb = request.memory_usage / BYTES_PER_MB
        samples.append(
            _MemorySample(request_id=request.id, uri=request.uri, memory_mb=memory_mb, time=request.time)
        )

        if request.memory_usage >= threshold_bytes:
            issues.append(
                MemoryIssue(
                    request_id=request.id,
                    uri=request.uri,
                    memory_mb=memory_mb,
                    threshold_mb=threshold_mb,
                    type=HIGH_USAGE,
                    details=f"Memory usage ({memory_mb:.1f} MB) exceeds threshold ({threshold_mb:g} MB)",
                )
            )

    growth_detected = False
    if detect_growth and len(samples) >= MEMORY_GROWTH_MIN_SAMPLES:
        growth_issue = _detect_growth(samples, threshold_mb)
        if growth_issue is not None:
            growth_detected = True
            issues.append(growth_issue)

    avg_memory_mb = None
    max_memory_mb = None
    if samples:
        avg_memory_mb = _mean([s.memory_mb for s in samples])
        max_memory_mb = max(s.memory_mb for s in samples)

    issues.sort(key=lambda i: i.memory_mb, reverse=True)

    return MemoryAnalysis(
        issues=issues,
        summary=MemorySummary(
            total_requests=len(requests),
            requests_with_memory_data=len(samples),
            issues_found=len(issues),
            avg_memory_mb=avg_memory_mb,
            max_memory_mb=max_memory_mb,
            growth_detected=growth_detected,
        ),
    )
