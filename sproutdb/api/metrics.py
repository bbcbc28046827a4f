"""
Request metrics collected by the HTTP middleware.
"""

import threading
import time
from datetime import datetime
from typing import Dict


class ServerMetrics:
    """Request counters and response-time totals for one application instance."""

    def __init__(self):
        self.total = 0
        self.by_method: Dict[str, int] = {}
        self.by_endpoint: Dict[str, int] = {}
        self.errors = 0
        self.total_response_time = 0.0
        self.start_time = datetime.now()
        self._started = time.monotonic()
        self._lock = threading.Lock()

    def record_request(self, method: str, path: str) -> None:
        with self._lock:
            self.total += 1
            self.by_method[method] = self.by_method.get(method, 0) + 1
            self.by_endpoint[path] = self.by_endpoint.get(path, 0) + 1

    def record_response(self, status_code: int, duration_ms: float) -> None:
        with self._lock:
            self.total_response_time += duration_ms
            if status_code >= 400:
                self.errors += 1

    @property
    def avg_response_time(self) -> float:
        if not self.total:
            return 0.0
        return self.total_response_time / self.total

    def uptime(self) -> float:
        """Milliseconds since the application started."""
        return (time.monotonic() - self._started) * 1000

    def snapshot(self) -> Dict:
        with self._lock:
            return {
                "requests": {
                    "total": self.total,
                    "byMethod": dict(self.by_method),
                    "byEndpoint": dict(self.by_endpoint),
                    "errors": self.errors,
                },
                "performance": {
                    "avgResponseTime": self.avg_response_time,
                    "totalResponseTime": self.total_response_time,
                },
                "startTime": self.start_time,
                "uptime": self.uptime(),
            }
