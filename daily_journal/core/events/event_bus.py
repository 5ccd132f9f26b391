"""Simple in-process event bus."""

from __future__ import annotations

from typing import Callable, Dict, List

from daily_journal.core.events.event_models import DomainEvent

EventHandler = Callable[[DomainEvent], None]


class EventBus:
    def __init__(self) -> None:
        self._subscribers: Dict[str, List[EventHandler]] = {}

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        handlers = self._subscribers.setdefault(event_type, [])
        # create_app runs once per test; keep registration idempotent.
        if handler not in handlers:
            handlers.append(handler)

    def handlers_for(self, event_type: str) -> List[EventHandler]:
        return list(self._subscribers.get(event_type, []))

    def publish(self, event: DomainEvent) -> None:
        for handler in self._subscribers.get(event.event_type, []):
            handler(event)


# Global singleton
event_bus = EventBus()
