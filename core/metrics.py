# Nombre de archivo: metrics.py
# Ubicación de archivo: core/metrics.py
# Descripción: Acumulador en memoria de latencia y resultados de envíos de registros

from __future__ import annotations

import threading
from dataclasses import dataclass, field


@dataclass
class SubmissionMetrics:
    """Contadores básicos del servicio (por proceso, sin persistencia)."""

    total_requests: int = 0
    total_latency: float = 0.0
    submissions_created: int = 0
    submissions_rate_limited: int = 0
    submissions_rejected: int = 0
    notifications_failed: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def record(self, latency: float) -> None:
        """Registra una nueva solicitud y su latencia."""
        with self._lock:
            self.total_requests += 1
            self.total_latency += latency

    def incr(self, counter: str) -> None:
        with self._lock:
            setattr(self, counter, getattr(self, counter) + 1)

    def snapshot(self) -> dict[str, float]:
        """Devuelve un resumen con promedio de latencia en ms."""
        with self._lock:
            promedio = self.total_latency / self.total_requests if self.total_requests else 0.0
            return {
                "total_requests": self.total_requests,
                "average_latency_ms": promedio * 1000,
                "submissions_created": self.submissions_created,
                "submissions_rate_limited": self.submissions_rate_limited,
                "submissions_rejected": self.submissions_rejected,
                "notifications_failed": self.notifications_failed,
            }

    def reset(self) -> None:
        """Reinicia los contadores."""
        with self._lock:
            self.total_requests = 0
            self.total_latency = 0.0
            self.submissions_created = 0
            self.submissions_rate_limited = 0
            self.submissions_rejected = 0
            self.notifications_failed = 0
