"""Dispatch observers.

The dispatcher reports one DispatchEvent per tool call to an injected
observer instead of logging inline.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import structlog

from packages.mcp.src.types import DispatchEvent

logger = structlog.get_logger()


@runtime_checkable
class DispatchObserver(Protocol):
    """Receives one event per dispatch."""

    def record(self, event: DispatchEvent) -> None:
        """Record a completed dispatch."""
        ...


class LoggingDispatchObserver:
    """Writes dispatch events to the structured log."""

    def __init__(self) -> None:
        self._logger = logger.bind(component="tool_dispatcher")

    def record(self, event: DispatchEvent) -> None:
        if event.outcome == "success":
            self._logger.info("tool_dispatched", **event.model_dump())
        else:
            self._logger.warning("tool_dispatched", **event.model_dump())


class RecordingDispatchObserver:
    """Keeps events in memory (for tests and diagnostics)."""

    def __init__(self) -> None:
        self.events: list[DispatchEvent] = []

    def record(self, event: DispatchEvent) -> None:
        self.events.append(event)

    def clear(self) -> None:
        self.events = []
