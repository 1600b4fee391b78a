"""In-memory fan-out of new chat messages to channel subscribers."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict

SendCallable = Callable[[dict], Awaitable[None]]

NEW_MESSAGE_EVENT = "ChatChannelNewMessage"

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Subscriber:
    """Live connection listening on a channel topic."""

    subscriber_id: str
    send: SendCallable


class ChannelBroadcaster:
    """Track subscribers per topic and deliver events to them."""

    def __init__(self) -> None:
        self._topics: Dict[str, Dict[str, Subscriber]] = {}
        self._lock = asyncio.Lock()

    async def subscribe(self, topic: str, subscriber: Subscriber) -> int:
        """Register a subscriber and return the topic's subscriber count."""

        async with self._lock:
            subscribers = self._topics.setdefault(topic, {})
            subscribers[subscriber.subscriber_id] = subscriber
            return len(subscribers)

    async def unsubscribe(self, topic: str, subscriber_id: str) -> None:
        """Remove a subscriber, dropping the topic once it is empty."""

        async with self._lock:
            subscribers = self._topics.get(topic)
            if not subscribers:
                return
            subscribers.pop(subscriber_id, None)
            if not subscribers:
                self._topics.pop(topic, None)

    async def publish(self, topic: str, event: dict) -> int:
        """Send an event to every subscriber of the topic.

        Returns the number of subscribers that received it.
        """

        async with self._lock:
            subscribers = list(self._topics.get(topic, {}).values())

        if not subscribers:
            return 0

        results = await asyncio.gather(
            *(subscriber.send(event) for subscriber in subscribers), return_exceptions=True
        )
        delivered = 0
        for subscriber, result in zip(subscribers, results):
            if isinstance(result, Exception):
                logger.warning("Dropping event for %s on %s: %s", subscriber.subscriber_id, topic, result)
                continue
            delivered += 1
        return delivered


broadcaster = ChannelBroadcaster()
