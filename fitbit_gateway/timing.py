"""Named start/stop timers bracketing gateway operations."""

from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Deque, Dict, List, Optional, Protocol

import structlog

logger = structlog.get_logger(__name__)

DEFAULT_MAX_EVENTS = 256


class Timer(Protocol):
    """Instrumentation hooks used by the gateways."""

    def start(self, name: str, category: Optional[str] = None) -> None: ...

    def stop(self, name: str) -> Any: ...


@dataclass(frozen=True)
class TimerEvent:
    """A completed timer span."""

    name: str
    category: Optional[str]
    duration: float


class Stopwatch:
    """In-process timer keeping the most recent completed spans.

    Only the last ``max_events`` spans are kept; ``reset()`` drops them all.

    Spans with different names may nest. Starting a name that is already
    running restarts it.
    """

    def __init__(
        self,
        clock: Optional[Callable[[], float]] = None,
        *,
        max_events: int = DEFAULT_MAX_EVENTS,
    ) -> None:
        if max_events < 1:
            raise ValueError("max_events must be at least 1")
        self._clock = clock or time.perf_counter
        self._running: Dict[str, tuple[Optional[str], float]] = {}
        self._events: Deque[TimerEvent] = deque(maxlen=max_events)

    def start(self, name: str, category: Optional[str] = None) -> None:
        self._running[name] = (category, self._clock())

    def stop(self, name: str) -> TimerEvent:
        try:
            category, started = self._running.pop(name)
        except KeyError:
            raise LookupError(f'Event "{name}" is not started.') from None

        event = TimerEvent(name=name, category=category, duration=self._clock() - started)
        self._events.append(event)
        logger.debug(
            "timer_stopped",
            timer=name,
            category=category,
            duration=round(event.duration, 6),
        )
        return event

    def is_started(self, name: str) -> bool:
        return name in self._running

    def reset(self) -> None:
        """Forget completed spans. Running spans are kept."""
        self._events.clear()

    @property
    def events(self) -> List[TimerEvent]:
        """Completed spans, oldest first."""
        return list(self._events)
