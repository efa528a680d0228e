"""Node status snapshots reported by judge and web nodes."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import psutil

JUDGER_REGISTRY_KEY = "status/judger.json"
STATUS_BUCKET = "didapipa-oj"


@dataclass
class NodeConfig:
    """Identity of a reporting node: a stable key and a display name."""

    key: str = ""
    name: str = ""


def _format_time(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.astimezone()
    text = moment.strftime("%Y-%m-%dT%H:%M:%S")
    if moment.microsecond:
        text += f".{moment.microsecond:06d}".rstrip("0")
    offset = moment.utcoffset()
    if not offset:
        return text + "Z"
    total = int(offset.total_seconds())
    sign = "+" if total >= 0 else "-"
    hours, minutes = divmod(abs(total) // 60, 60)
    return f"{text}{sign}{hours:02d}:{minutes:02d}"


@dataclass
class NodeStatus:
    """Load and memory snapshot of a node at a moment in time."""

    name: str = ""
    cpu_usage: float = 0.0
    mem_usage: int = 0
    mem_total: int = 0
    avg_message: str = ""
    update_time: datetime = field(
        default_factory=lambda: datetime(1, 1, 1, tzinfo=timezone.utc)
    )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready mapping of this snapshot."""
        return {
            "name": self.name,
            "cpu_usage": self.cpu_usage,
            "mem_usage": self.mem_usage,
            "mem_total": self.mem_total,
            "avg_message": self.avg_message,
            "update_time": _format_time(self.update_time),
        }

    def to_json(self) -> str:
        """Return the compact JSON document uploaded for this snapshot."""
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)


def _load_average_message() -> str:
    one, five, fifteen = psutil.getloadavg()
    return f"{one:.2f} {five:.2f} {fifteen:.2f}"


def collect_status(name: str, now: datetime | None = None) -> NodeStatus:
    """Take a snapshot of this machine's CPU, memory and load."""
    if now is None:
        now = datetime.now(timezone.utc)
    memory = psutil.virtual_memory()
    return NodeStatus(
        name=name,
        cpu_usage=float(psutil.cpu_percent(interval=None)),
        mem_usage=int(memory.used),
        mem_total=int(memory.total),
        avg_message=_load_average_message(),
        update_time=now,
    )


def status_key(kind: str, key: str) -> str:
    """Return the object key under which a node of the given kind reports."""
    if not kind or not key:
        raise ValueError("kind and key must both be non-empty")
    return f"status/{kind}/{key}.json"