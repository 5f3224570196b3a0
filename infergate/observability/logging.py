"""Per-request completion log line."""

from __future__ import annotations

import time

from infergate.util.logger import logger


def log_completion(*, request_id: str, route: str, mode: str, status: int, started: float) -> dict:
    """Emit one ``event=chat_completion`` line and return the logged fields."""

    fields = {
        "request_id": request_id,
        "route": route,
        "mode": mode,
        "status": status,
        "duration_ms": round((time.perf_counter() - started) * 1000.0, 2),
    }
    logger.info(
        "event=chat_completion request_id=%s route=%s mode=%s status=%s duration_ms=%s",
        fields["request_id"],
        fields["route"],
        fields["mode"],
        fields["status"],
        fields["duration_ms"],
    )
    return fields
