"""Tracing and aggregate metrics for query evaluations."""

from __future__ import annotations

import time
import uuid
from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timezone

from hybrid_agent.types import ToolTrace


@dataclass(slots=True)
class TraceRecord:
    trace_id: str
    timestamp_utc: str
    query: str
    token_count: int
    planner_decision: str
    used_fallback: bool
    best_local_score: float
    final_score: float
    final_source: str
    tool_traces: list[ToolTrace]
    latency_ms: float
    fallback_error: str | None = None


class TraceStore:
    """In-memory trace storage for API-level observability."""

    def __init__(self, *, max_records: int = 1000) -> None:
        self._records: dict[str, TraceRecord] = {}
        self._max_records = max_records

    def create_record(
        self,
        *,
        query: str,
        token_count: int,
        planner_decision: str,
        used_fallback: bool,
        best_local_score: float,
        final_score: float,
        final_source: str,
        tool_traces: list[ToolTrace],
        latency_ms: float,
        fallback_error: str | None = None,
    ) -> TraceRecord:
        record = TraceRecord(
            trace_id=str(uuid.uuid4()),
            timestamp_utc=datetime.now(timezone.utc).isoformat(),
            query=query,
            token_count=token_count,
            planner_decision=planner_decision,
            used_fallback=used_fallback,
            best_local_score=best_local_score,
            final_score=final_score,
            final_source=final_source,
            tool_traces=tool_traces,
            latency_ms=latency_ms,
            fallback_error=fallback_error,
        )
        self._records[record.trace_id] = record
        while len(self._records) > self._max_records:
            del self._records[next(iter(self._records))]
        return record

    def get(self, trace_id: str) -> TraceRecord:
        record = self._records.get(trace_id)
        if record is None:
            raise KeyError(f"Trace not found: {trace_id}")
        return record

    def list_recent(self, limit: int = 20) -> list[TraceRecord]:
        if limit <= 0:
            return []
        return list(self._records.values())[-limit:]

    def __len__(self) -> int:
        return len(self._records)

    def summary(self) -> dict[str, float | int | dict[str, int]]:
        """Aggregate core observability metrics for dashboard display."""
        records = list(self._records.values())
        total = len(records)
        if total == 0:
            return {
                "total_requests": 0,
                "avg_latency_ms": 0.0,
                "p95_latency_ms": 0.0,
                "fallback_rate": 0.0,
                "fallback_errors": 0,
                "planner_decisions": {},
            }

        latencies = sorted(record.latency_ms for record in records)
        p95_index = max(0, int((len(latencies) * 0.95) - 1))
        fallbacks = sum(1 for record in records if record.used_fallback)
        decisions = Counter(record.planner_decision for record in records)

        return {
            "total_requests": total,
            "avg_latency_ms": sum(latencies) / total,
            "p95_latency_ms": latencies[p95_index],
            "fallback_rate": fallbacks / total,
            "fallback_errors": sum(1 for record in records if record.fallback_error),
            "planner_decisions": dict(decisions),
        }


class Timer:
    """Simple context timer used by the orchestrator."""

    def __init__(self) -> None:
        self._start = 0.0
        self.elapsed_ms = 0.0

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.elapsed_ms = (time.perf_counter() - self._start) * 1000.0
