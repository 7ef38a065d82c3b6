"""Public event bus API contracts."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, TypeVar

TEvent = TypeVar("TEvent")


@dataclass(frozen=True, slots=True)
class Subscription:
    """Token returned by ``subscribe``; pass it back to ``unsubscribe``."""

    id: int


class EventBus(Protocol):
    """Type-keyed publish/subscribe. A handler also receives subclasses of its type."""

    def subscribe(self, event_type: type[TEvent], handler: Callable[[TEvent], None]) -> Subscription:
        ...

    def unsubscribe(self, subscription: Subscription) -> None:
        ...

    def publish(self, event: object) -> int:
        """Deliver synchronously and return the number of handlers invoked."""


def create_event_bus() -> EventBus:
    from engine.runtime.events import RuntimeEventBus

    return RuntimeEventBus()
