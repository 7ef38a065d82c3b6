"""Synchronous event bus used to fan out game notifications."""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from engine.api.events import Subscription

TEvent = TypeVar("TEvent")

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _Registration:
    event_type: type[Any]
    handler: Callable[[Any], None]


class RuntimeEventBus:
    """Dispatches each published event to every handler whose type matches.

    Handlers run in subscription order on the caller's stack, so a publish
    completes before the command that raised it returns.
    """

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self._registrations: dict[int, _Registration] = {}

    def subscribe(self, event_type: type[TEvent], handler: Callable[[TEvent], None]) -> Subscription:
        token = Subscription(next(self._ids))
        self._registrations[token.id] = _Registration(event_type, handler)
        return token

    def unsubscribe(self, subscription: Subscription) -> None:
        self._registrations.pop(subscription.id, None)

    def publish(self, event: object) -> int:
        """Deliver ``event``; returns how many handlers received it."""
        matching = [
            registration.handler
            for registration in self._registrations.values()
            if isinstance(event, registration.event_type)
        ]
        for handler in matching:
            handler(event)
        logger.debug("event_published type=%s handlers=%d", type(event).__name__, len(matching))
        return len(matching)

    def subscriber_count(self) -> int:
        return len(self._registrations)
