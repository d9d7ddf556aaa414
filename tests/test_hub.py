"""Tests for the reload notification hub."""

import pytest

from tutorial_preview.hub import RELOAD_SENTINEL, NotificationHub, Subscription


class RecordingSubscription:
    """Stand-in connection that records what it was sent."""

    def __init__(self):
        self.received = []

    def send(self, message):
        self.received.append(message)
        return True

    def close(self):
        pass


class BrokenSubscription(RecordingSubscription):
    def send(self, message):
        raise BrokenPipeError("client went away")


class TestBroadcast:
    def test_broadcast_without_subscribers_is_noop(self):
        hub = NotificationHub()
        assert hub.broadcast() == 0
        assert len(hub) == 0

    def test_broadcast_reaches_every_subscriber(self):
        hub = NotificationHub()
        subscribers = [RecordingSubscription() for _ in range(5)]
        for subscriber in subscribers:
            hub.subscribe(subscriber)

        assert hub.broadcast() == 5
        for subscriber in subscribers:
            assert subscriber.received == [RELOAD_SENTINEL]

    def test_unsubscribed_connection_does_not_receive(self):
        hub = NotificationHub()
        staying = RecordingSubscription()
        leaving = RecordingSubscription()
        hub.subscribe(staying)
        hub.subscribe(leaving)

        hub.unsubscribe(leaving)
        hub.broadcast()

        assert staying.received == [RELOAD_SENTINEL]
        assert leaving.received == []

    def test_failure_on_one_connection_is_isolated(self):
        """A connection that raises must not stop delivery to the others."""
        hub = NotificationHub()
        healthy = [RecordingSubscription() for _ in range(3)]
        hub.subscribe(BrokenSubscription())
        for subscriber in healthy:
            hub.subscribe(subscriber)

        assert hub.broadcast() == 3
        for subscriber in healthy:
            assert subscriber.received == [RELOAD_SENTINEL]

    def test_repeated_broadcasts_arrive_in_order(self):
        hub = NotificationHub()
        subscriber = RecordingSubscription()
        hub.subscribe(subscriber)

        hub.broadcast("first")
        hub.broadcast("second")

        assert subscriber.received == ["first", "second"]


class TestMembership:
    def test_unsubscribe_is_idempotent(self):
        hub = NotificationHub()
        subscriber = RecordingSubscription()
        hub.subscribe(subscriber)

        hub.unsubscribe(subscriber)
        hub.unsubscribe(subscriber)

        assert len(hub) == 0

    def test_unsubscribe_unknown_connection(self):
        hub = NotificationHub()
        hub.unsubscribe(RecordingSubscription())
        assert hub.subscriber_count == 0

    def test_connect_removes_itself_on_close(self):
        hub = NotificationHub()
        subscription = hub.connect()
        assert len(hub) == 1

        subscription.close()

        assert len(hub) == 0
        assert subscription.closed

    def test_close_all(self):
        hub = NotificationHub()
        subscriptions = [hub.connect() for _ in range(3)]

        hub.close_all()

        assert len(hub) == 0
        assert all(s.closed for s in subscriptions)


class TestSubscription:
    def test_messages_are_yielded_in_order(self):
        subscription = Subscription()
        subscription.send("a")
        subscription.send("b")
        subscription.close()

        assert list(subscription.messages()) == ["a", "b"]

    def test_send_after_close_is_ignored(self):
        subscription = Subscription()
        subscription.close()

        assert subscription.send(RELOAD_SENTINEL) is False
        assert list(subscription.messages()) == []

    def test_close_callback_runs_once(self):
        calls = []
        subscription = Subscription(on_close=calls.append)

        subscription.close()
        subscription.close()

        assert calls == [subscription]

    def test_keepalive_yields_none_when_idle(self):
        subscription = Subscription()
        messages = subscription.messages(keepalive=0.01)

        assert next(messages) is None

        subscription.send(RELOAD_SENTINEL)
        assert next(messages) == RELOAD_SENTINEL

    @pytest.mark.parametrize("count", [1, 10])
    def test_closed_subscription_in_hub_is_skipped(self, count):
        hub = NotificationHub()
        open_ones = [hub.connect() for _ in range(count)]
        closed = Subscription()
        closed.close()
        hub.subscribe(closed)

        assert hub.broadcast() == count
        for subscription in open_ones:
            subscription.close()
            assert list(subscription.messages()) == [RELOAD_SENTINEL]
