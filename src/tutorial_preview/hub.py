"""Reload notifications for connected preview clients."""

import logging
import queue
import threading
from typing import Any, Callable, Iterator, Optional, Set

logger = logging.getLogger(__name__)

RELOAD_SENTINEL = "reload"

# Pushed into a subscription's queue to end its message stream.
_CLOSED = object()


class Subscription:
    """One open event stream, i.e. one browser tab waiting for reloads.

    Messages are handed over through a queue so the thread serving the
    stream can block on it while the watcher sends from elsewhere.
    """

    def __init__(self, on_close: Optional[Callable[["Subscription"], Any]] = None):
        self._queue: "queue.Queue[Any]" = queue.Queue()
        self._on_close = on_close
        self._closed = False
        self._lock = threading.Lock()

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, message: str) -> bool:
        """Queue a message. Returns False if the subscription is closed."""
        if self._closed:
            return False
        self._queue.put_nowait(message)
        return True

    def close(self):
        """Close the subscription and run the close callback once."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._queue.put_nowait(_CLOSED)
        if self._on_close is not None:
            self._on_close(self)

    def messages(self, keepalive: Optional[float] = None) -> Iterator[Optional[str]]:
        """Yield queued messages until closed.

        When ``keepalive`` is set, ``None`` is yielded after that many idle
        seconds so the caller can write something and notice a dead peer.
        """
        while True:
            try:
                item = self._queue.get(timeout=keepalive)
            except queue.Empty:
                yield None
                continue
            if item is _CLOSED:
                return
            yield item


class NotificationHub:
    """Tracks open subscriptions and fans out reload signals."""

    def __init__(self):
        self._subscriptions: Set[Any] = set()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    @property
    def subscriber_count(self) -> int:
        return len(self)

    def subscribe(self, subscription) -> None:
        with self._lock:
            self._subscriptions.add(subscription)
            total = len(self._subscriptions)
        logger.debug(f"Preview client connected ({total} total)")

    def unsubscribe(self, subscription) -> None:
        with self._lock:
            if subscription not in self._subscriptions:
                return
            self._subscriptions.discard(subscription)
            total = len(self._subscriptions)
        logger.debug(f"Preview client disconnected ({total} total)")

    def connect(self) -> Subscription:
        """Create a subscription that removes itself from the hub on close."""
        subscription = Subscription(on_close=self.unsubscribe)
        self.subscribe(subscription)
        return subscription

    def broadcast(self, message: str = RELOAD_SENTINEL) -> int:
        """Send ``message`` to every subscriber, returning how many got it."""
        with self._lock:
            targets = list(self._subscriptions)

        delivered = 0
        for subscription in targets:
            try:
                if subscription.send(message):
                    delivered += 1
            except Exception as e:
                logger.warning(f"Failed to notify preview client: {e}")
        return delivered

    def close_all(self) -> None:
        with self._lock:
            targets = list(self._subscriptions)
        for subscription in targets:
            try:
                subscription.close()
            except Exception as e:
                logger.debug(f"Error closing preview client: {e}")
            self.unsubscribe(subscription)
