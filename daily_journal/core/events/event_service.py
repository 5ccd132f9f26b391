"""Event dispatch."""

from __future__ import annotations

import logging
from typing import Optional

from daily_journal.core.events.event_bus import event_bus
from daily_journal.core.events.event_models import DomainEvent

logger = logging.getLogger(__name__)


def publish_event(event_type: str, payload: dict, user_id: Optional[int] = None) -> DomainEvent:
    """Build an event and publish it to subscribers."""
    event = DomainEvent(event_type=event_type, payload=payload, user_id=user_id)
    logger.debug("publishing %s for user %s", event_type, user_id)
    event_bus.publish(event)
    return event
