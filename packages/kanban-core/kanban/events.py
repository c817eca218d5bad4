"""
In-process event dispatch.

Services announce task changes here; listeners (notifications, webhooks,
activity streams) subscribe by event name.
"""

import inspect
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable

logger = logging.getLogger(__name__)

EVENT_CREATE = "task.create"
EVENT_MOVE_PROJECT = "task.move.project"


@dataclass
class TaskEvent:
    """
    Payload handed to listeners.

    Attributes:
        data: Task record merged with the changed values
    """

    data: dict[str, Any] = field(default_factory=dict)

    @property
    def task_id(self) -> Any:
        return self.data.get("task_id", self.data.get("id"))

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def get(self, key: str, default=None) -> Any:
        return self.data.get(key, default)


class EventDispatcher:
    """
    Registry of listeners keyed by event name.

    Listeners may be plain callables or coroutine functions. They run in
    registration order and exceptions raised by a listener propagate to the
    caller of dispatch().
    """

    def __init__(self):
        self._listeners: dict[str, list[Callable]] = defaultdict(list)

    def add_listener(self, event_name: str, listener: Callable) -> None:
        """Subscribe a listener to an event."""
        self._listeners[event_name].append(listener)
        logger.debug(f"Listener registered for {event_name}: {listener!r}")

    def remove_listener(self, event_name: str, listener: Callable) -> None:
        """Unsubscribe a listener; unknown listeners are ignored."""
        if listener in self._listeners.get(event_name, []):
            self._listeners[event_name].remove(listener)

    def get_listeners(self, event_name: str) -> list[Callable]:
        return list(self._listeners.get(event_name, []))

    async def dispatch(self, event_name: str, event: TaskEvent) -> TaskEvent:
        """
        Call every listener of event_name with the event.

        Args:
            event_name: e.g. "task.move.project"
            event: Payload

        Returns:
            The event, so callers may inspect it; most ignore it
        """
        listeners = self.get_listeners(event_name)
        logger.debug(f"Dispatching {event_name} to {len(listeners)} listener(s)")

        for listener in listeners:
            result = listener(event)
            if inspect.isawaitable(result):
                await result

        return event


# Shared dispatcher used when services are not given one explicitly
_dispatcher: EventDispatcher | None = None


def get_dispatcher() -> EventDispatcher:
    """Get or create the process-wide dispatcher."""
    global _dispatcher
    if _dispatcher is None:
        _dispatcher = EventDispatcher()
    return _dispatcher
