"""In-memory telemetry for catalog curation commands."""

from __future__ import annotations

from collections import Counter, deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from threading import Lock
from typing import Deque, Dict, Tuple


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class CurationSnapshot:
    totals: Dict[str, int]
    operations: Dict[str, int]
    failures: Dict[str, int]
    recent: list[Tuple[str, int, int, datetime]]

    def as_dict(self) -> Dict[str, object]:
        return {
            "totals": self.totals,
            "operations": self.operations,
            "failures": self.failures,
            "recent": [
                {
                    "operation": operation,
                    "succeeded": succeeded,
                    "failed": failed,
                    "recorded_at": timestamp.isoformat(),
                }
                for operation, succeeded, failed, timestamp in self.recent
            ],
        }


@dataclass
class CurationObservabilityStore:
    _lock: Lock = field(default_factory=Lock)
    _totals: Counter = field(default_factory=Counter)
    _operations: Counter = field(default_factory=Counter)
    _failures: Counter = field(default_factory=Counter)
    _recent: Deque[Tuple[str, int, int, datetime]] = field(default_factory=lambda: deque(maxlen=25))

    def record_bulk_run(self, operation: str, *, succeeded: int, failed: int, reasons: list[str]) -> None:
        with self._lock:
            self._totals["bulk_runs"] += 1
            self._totals["items_succeeded"] += succeeded
            self._totals["items_failed"] += failed
            if failed and succeeded:
                self._totals["partial_runs"] += 1
            self._operations[operation] += 1
            for reason in reasons:
                self._failures[reason or "unknown"] += 1
            self._recent.appendleft((operation, succeeded, failed, _utcnow()))

    def record_validation_rejection(self, operation: str) -> None:
        with self._lock:
            self._totals["validation_rejections"] += 1
            self._failures[f"validation:{operation}"] += 1

    def record_stock_adjustment(self, *, succeeded: bool) -> None:
        with self._lock:
            key = "stock_adjustments" if succeeded else "stock_adjustment_failures"
            self._totals[key] += 1

    def snapshot(self) -> CurationSnapshot:
        with self._lock:
            totals = dict(self._totals)
            for key in (
                "bulk_runs",
                "items_succeeded",
                "items_failed",
                "partial_runs",
                "validation_rejections",
                "stock_adjustments",
                "stock_adjustment_failures",
            ):
                totals.setdefault(key, 0)
            operations = dict(self._operations)
            failures = dict(self._failures.most_common(10))
            recent = list(self._recent)
        return CurationSnapshot(totals=totals, operations=operations, failures=failures, recent=recent)

    def reset(self) -> None:
        with self._lock:
            self._totals.clear()
            self._operations.clear()
            self._failures.clear()
            self._recent.clear()


_CURATION_STORE = CurationObservabilityStore()


def get_curation_store() -> CurationObservabilityStore:
    return _CURATION_STORE


__all__ = ["CurationObservabilityStore", "CurationSnapshot", "get_curation_store"]
