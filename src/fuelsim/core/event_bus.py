"""Event bus for synchronous event dispatch.

The simulation publishes a FuelStateEvent after every step. The step
runner listens for fuel exhaustion and the command line trace prints each
step, so neither needs to poll the simulation.

Typical usage example:
    from fuelsim.core.event_bus import EventBus, EventPriority

    bus = EventBus()
    subscription = bus.subscribe(FuelStateEvent, on_fuel_state, EventPriority.HIGH)
    bus.publish(FuelStateEvent(time_elapsed=1.0))
    bus.unsubscribe(subscription)
"""

import bisect
import itertools
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

Handler = Callable[[Any], None]


class EventPriority(IntEnum):
    """Handler priority. Lower values are called first."""

    CRITICAL = 0
    HIGH = 1
    NORMAL = 2
    LOW = 3


@dataclass
class Event:
    """Base class for all events.

    Attributes:
        timestamp: Wall clock time when the event was created.
    """

    timestamp: float = field(default_factory=time.time)


@dataclass(frozen=True)
class Subscription:
    """Handle returned by EventBus.subscribe.

    Attributes:
        event_type: Event class the handler receives.
        handler: Callable taking the event.
        priority: Dispatch priority.
        sequence: Registration order, breaks ties within a priority.
    """

    event_type: type[Event]
    handler: Handler
    priority: EventPriority
    sequence: int

    @property
    def order(self) -> tuple[int, int]:
        return (self.priority, self.sequence)


class EventBus:
    """Dispatches events to subscribers on the publishing thread.

    Handlers for an event type are called by priority, then by the order
    they subscribed in. A handler exception stops dispatch and reaches
    the publisher.
    """

    def __init__(self) -> None:
        self._subscriptions: dict[type[Event], list[Subscription]] = {}
        self._sequence = itertools.count()

    def subscribe(
        self,
        event_type: type[Event],
        handler: Handler,
        priority: EventPriority = EventPriority.NORMAL,
    ) -> Subscription:
        """Register a handler for an exact event type.

        Args:
            event_type: Event class to receive. Subclasses are not matched.
            handler: Callable that accepts the event.
            priority: Dispatch priority. Defaults to NORMAL.

        Returns:
            Subscription handle for unsubscribe().
        """
        subscription = Subscription(event_type, handler, priority, next(self._sequence))
        entries = self._subscriptions.setdefault(event_type, [])
        bisect.insort(entries, subscription, key=lambda s: s.order)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> bool:
        """Remove a subscription.

        Args:
            subscription: Handle returned by subscribe().

        Returns:
            True if it was registered, False if already removed.
        """
        entries = self._subscriptions.get(subscription.event_type)
        if not entries or subscription not in entries:
            return False

        entries.remove(subscription)
        if not entries:
            del self._subscriptions[subscription.event_type]
        return True

    def publish(self, event: Event) -> int:
        """Deliver an event to every handler of its type.

        Handlers may subscribe or unsubscribe during dispatch; the change
        applies from the next publish.

        Args:
            event: Event to deliver.

        Returns:
            Number of handlers called.
        """
        entries = list(self._subscriptions.get(type(event), ()))
        for subscription in entries:
            subscription.handler(event)
        return len(entries)
