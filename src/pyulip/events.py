"""Upstream call events for structured logging sinks."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class UpstreamEvent:
    """One finished upstream attempt (login or sub-service call)."""

    operation: str
    """``"login"`` or ``"call"``."""
    path: str
    """Login URL or sub-service URL."""
    attempt: int
    duration_ms: int
    outcome: str
    """``"ok"`` or the failure's error code (e.g. ``"ULIP_TIMEOUT"``)."""
    status_code: int | None = None
    request_id: str | None = None


EventSink = Callable[[UpstreamEvent], None]


def emit_event(sink: EventSink | None, event: UpstreamEvent) -> None:
    """Deliver *event* to *sink*; sink failures never affect the call."""
    if sink is None:
        return
    try:
        sink(event)
    except Exception:
        _logger.debug("on_upstream_event callback failed", exc_info=True)
