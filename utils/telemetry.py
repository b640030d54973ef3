from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from typing import Dict, Iterator, List


class Telemetry:
    """In-process counters and timings for LLM calls and report extraction."""

    def __init__(self) -> None:
        self.counters: Dict[str, int] = {}
        self._samples_ms: Dict[str, List[float]] = {}
        self._lock = threading.Lock()

    def incr(self, name: str, value: int = 1) -> None:
        with self._lock:
            self.counters[name] = self.counters.get(name, 0) + value

    def observe_ms(self, name: str, ms: float) -> None:
        with self._lock:
            self._samples_ms.setdefault(name, []).append(ms)

    @contextmanager
    def timer(self, name: str) -> Iterator[None]:
        start = time.perf_counter()
        try:
            yield
        finally:
            self.observe_ms(name, (time.perf_counter() - start) * 1000.0)

    def summary(self) -> Dict[str, Dict[str, float]]:
        with self._lock:
            samples = {name: list(values) for name, values in self._samples_ms.items()}
        out: Dict[str, Dict[str, float]] = {}
        for name, values in samples.items():
            total = sum(values)
            out[name] = {
                "count": float(len(values)),
                "total_ms": round(total, 3),
                "avg_ms": round(total / len(values), 3) if values else 0.0,
                "min_ms": round(min(values), 3) if values else 0.0,
                "max_ms": round(max(values), 3) if values else 0.0,
            }
        return out

    def snapshot(self) -> Dict[str, object]:
        with self._lock:
            counters = dict(self.counters)
        return {"counters": counters, "timings": self.summary()}
