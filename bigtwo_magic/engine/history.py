"""
Game event log.
Keeps every event of a run, and the last few messages for display.
"""

import logging
from collections import deque
from dataclasses import dataclass, asdict, field

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 8

# Shown in the recent log only, never kept in the run history
DISPLAY_ONLY_EVENTS = {"rejected"}


@dataclass
class GameEvent:
    """Single event in a run."""
    level: int
    event_type: str  # "play", "purchase", "level_cleared", "magic", etc.
    message: str
    data: dict = field(default_factory=dict)
    sequence: int = 0


class GameLog:
    """Event history for one run plus a bounded recent-message view."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        self.events: list[GameEvent] = []
        self._recent: deque[str] = deque(maxlen=capacity)
        self._event_counter = 0

    def add(self, level: int, event_type: str, message: str, **data) -> GameEvent:
        """
        Record an event; its message goes to the recent log.
        Display-only events (rejected intents) are not added to `events`.
        """
        event = GameEvent(
            level=level,
            event_type=event_type,
            message=message,
            data=data,
            sequence=self._event_counter
        )
        self._recent.append(message)
        if event_type not in DISPLAY_ONLY_EVENTS:
            self.events.append(event)
            self._event_counter += 1
        logger.info("[L%d %s] %s", level, event_type, message)
        return event

    @property
    def recent(self) -> list[str]:
        """Most recent messages, oldest first."""
        return list(self._recent)

    @property
    def capacity(self) -> int:
        return self._recent.maxlen

    def events_of(self, event_type: str) -> list[GameEvent]:
        return [e for e in self.events if e.event_type == event_type]

    def count(self, event_type: str) -> int:
        return len(self.events_of(event_type))

    def to_list(self) -> list[dict]:
        return [asdict(e) for e in self.events]
