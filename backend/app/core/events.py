"""
Simple Event System

In-process notifications for job board activity. Services emit, handlers
(logging, metrics) subscribe at startup.
"""

import asyncio
from typing import Dict, Any, List, Callable, Optional
from datetime import datetime, timezone
from dataclasses import dataclass, field

from app.utils.logger import get_logger

logger = get_logger(__name__)


class EventNames:
    """Events emitted by the service layer."""
    JOB_CREATED = "job.created"
    JOB_VIEWED = "job.viewed"
    CONTACT_REQUEST_SUBMITTED = "contact_request.submitted"
    CONTACT_REQUEST_STATUS_CHANGED = "contact_request.status_changed"
    WIZARD_STARTED = "wizard.started"
    WIZARD_COMPLETED = "wizard.completed"
    WIZARD_FAILED = "wizard.failed"


@dataclass
class Event:
    """Simple event class."""
    name: str
    data: Dict[str, Any]
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class EventManager:
    """Simple event manager for application events."""

    def __init__(self):
        self._handlers: Dict[str, List[Callable]] = {}

    async def emit(self, event_name: str, data: Optional[Dict[str, Any]] = None) -> None:
        """Emit an event to all registered handlers."""
        event = Event(name=event_name, data=data or {})

        for handler in self._handlers.get(event_name, []):
            try:
                if asyncio.iscoroutinefunction(handler):
                    await handler(event)
                else:
                    handler(event)
            except Exception as e:
                # Handlers are observers; a failing one must not fail the write
                logger.error("Error in event handler", event_name=event_name, error=str(e))

    def subscribe(self, event_name: str, handler: Callable) -> None:
        """Subscribe a handler to an event."""
        self._handlers.setdefault(event_name, []).append(handler)

    def unsubscribe(self, event_name: str, handler: Callable) -> None:
        """Unsubscribe a handler from an event."""
        if handler in self._handlers.get(event_name, []):
            self._handlers[event_name].remove(handler)

    def clear(self) -> None:
        self._handlers.clear()
