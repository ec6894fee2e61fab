"""Cache and Redis inspection."""

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from .models import CacheQuery, RedisCommand
from .storage import Storage


@dataclass
class CacheStats:
    hits: int = 0
    misses: int = 0
    writes: int = 0
    deletes: int = 0
    total_operations: int = 0
    hit_ratio: float = 0.0
    total_duration: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def get_cache_operations(storage: Storage, request_id: str) -> List[CacheQuery]:
    request = storage.find(request_id)
    if request is None or not request.cache_queries:
        return []
    return list(request.cache_queries)


def get_cache_stats(storage: Storage, request_id: Optional[str]) -> CacheStats:
    """Operation counts for a request; the hit ratio is taken over reads (hits + misses)."""
    stats = CacheStats()
    if not request_id:
        return stats

    request = storage.find(request_id)
    if request is None or not request.cache_queries:
        return stats

    for op in request.cache_queries:
        stats.total_duration += op.duration or 0.0
        if op.type == "hit":
            stats.hits += 1
        elif op.type == "miss":
            stats.misses += 1
        elif op.type == "write":
            stats.writes += 1
        elif op.type == "delete":
            stats.deletes += 1

    reads = stats.hits + stats.misses
    stats.total_operations = len(request.cache_queries)
    stats.hit_ratio = stats.hits / reads if reads > 0 else 0.0
    return stats


def get_redis_commands(storage: Storage, request_id: str) -> List[RedisCommand]:
    request = storage.find(request_id)
    if request is None or not request.redis_commands:
        return []
    return list(request.redis_commands)
