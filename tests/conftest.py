import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

import pytest

from clockwork_core.models import ClockworkRequest, IndexEntry


class FakeStorage:
    """In-memory Storage; ``list()`` is derived from the requests, newest first."""

    def __init__(self, requests: Iterable[ClockworkRequest] = ()):
        self.requests: Dict[str, ClockworkRequest] = {r.id: r for r in requests}
        self.find_calls: List[str] = []
        self.loaded: List[str] = []

    def find(self, request_id: str) -> Optional[ClockworkRequest]:
        self.find_calls.append(request_id)
        return self.requests.get(request_id)

    def find_many(self, request_ids: Sequence[str]) -> List[ClockworkRequest]:
        self.loaded.extend(request_ids)
        return [self.requests[i] for i in request_ids if i in self.requests]

    def latest(self) -> Optional[ClockworkRequest]:
        entries = self.list()
        return self.requests[entries[0].id] if entries else None

    def list(self) -> List[IndexEntry]:
        entries = [
            IndexEntry(
                id=r.id,
                time=r.time,
                type=r.type,
                method=r.method,
                uri=r.uri,
                controller=r.controller,
                response_status=r.response_status,
                response_duration=r.response_duration,
                command_name=r.command_name,
            )
            for r in self.requests.values()
        ]
        return sorted(entries, key=lambda e: e.time, reverse=True)


def make_request(request_id: str, time: float = 1_700_000_000.0, **fields: Any) -> ClockworkRequest:
    fields.setdefault("type", "request")
    return ClockworkRequest(id=request_id, time=time, **fields)


def query(sql: str, duration: float = 1.0, **fields: Any) -> Dict[str, Any]:
    return {"query": sql, "duration": duration, **fields}


def write_clockwork_storage(path: Path, requests: Sequence[Dict[str, Any]]) -> Path:
    """Write an index plus one JSON file per request, the way Clockwork lays them out."""
    path.mkdir(parents=True, exist_ok=True)
    lines = []
    for data in requests:
        (path / f"{data['id']}.json").write_text(json.dumps(data), encoding="utf-8")
        if data.get("type") == "command":
            columns = [data["id"], str(data["time"]), "", data.get("commandName", ""), "",
                       "", str(data.get("responseDuration", "")), "command"]
        else:
            columns = [
                data["id"],
                str(data["time"]),
                data.get("method", ""),
                data.get("uri", ""),
                data.get("controller", ""),
                str(data.get("responseStatus", "")),
                str(data.get("responseDuration", "")),
                data.get("type", "request"),
            ]
        lines.append("\t".join(columns))
    (path / "index").write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def clockwork_dir(tmp_path):
    """A small real Clockwork storage directory."""
    return write_clockwork_storage(
        tmp_path / "storage" / "clockwork",
        [
            {
                "id": "req-1",
                "time": 1_700_000_000.0,
                "type": "request",
                "method": "GET",
                "uri": "/users",
                "controller": "UserController@index",
                "responseStatus": 200,
                "responseDuration": 120.5,
                "memoryUsage": 8 * 1024 * 1024,
                "databaseQueries": [
                    {"query": "SELECT * FROM users WHERE id = 1", "duration": 150.0, "file": "app/User.php", "line": 12},
                    {"query": "SELECT * FROM users WHERE id = 2", "duration": 5.0},
                ],
                "log": [{"level": "error", "message": "User 42 not found", "file": "app/Http/Kernel.php", "line": 7}],
            },
            {
                "id": "req-2",
                "time": 1_700_000_100.0,
                "type": "request",
                "method": "POST",
                "uri": "/orders",
                "controller": "OrderController@store",
                "responseStatus": 500,
                "responseDuration": 340.0,
            },
            {
                "id": "cmd-1",
                "time": 1_700_000_050.0,
                "type": "command",
                "commandName": "migrate",
                "commandExitCode": 0,
                "responseDuration": 900.0,
            },
        ],
    )
