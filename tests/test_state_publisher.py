"""Unit tests for StatePublisher."""

import threading
from unittest.mock import Mock

import pytest

from network_watchdog.core.types import NetworkState
from network_watchdog.services.state_publisher import StatePublisher


@pytest.fixture
def publisher():
    return StatePublisher()


class TestStatePublisher:
    """Test suite for StatePublisher."""

    def test_initial_value(self, publisher):
        """Test publisher starts DISCONNECTED."""
        assert publisher.value == NetworkState.DISCONNECTED
        assert publisher.observer_count == 0

    def test_attach_replays_current_value(self, publisher):
        """Test a new observer receives the held value immediately."""
        received = []
        publisher.attach(received.append)
        assert received == [NetworkState.DISCONNECTED]

    def test_late_attachment_gets_latest_first(self, publisher):
        """Test an observer attached after N publishes sees the N-th state first."""
        publisher.publish(NetworkState.CONNECTED)
        publisher.publish(NetworkState.NO_INTERNET_ACCESS)
        publisher.publish(NetworkState.VPN_CONNECTION)

        received = []
        publisher.attach(received.append)
        publisher.publish(NetworkState.DISCONNECTED)

        assert received == [NetworkState.VPN_CONNECTION, NetworkState.DISCONNECTED]

    def test_notifies_in_attachment_order(self, publisher):
        """Test observers are called in the order they attached."""
        order = []
        publisher.attach(lambda state: order.append(("first", state)))
        publisher.attach(lambda state: order.append(("second", state)))
        order.clear()

        publisher.publish(NetworkState.CONNECTED)

        assert order == [("first", NetworkState.CONNECTED), ("second", NetworkState.CONNECTED)]

    def test_repeated_state_is_republished(self, publisher):
        """Test publishing the same state twice notifies twice."""
        received = []
        publisher.attach(received.append)

        publisher.publish(NetworkState.CONNECTED)
        publisher.publish(NetworkState.CONNECTED)

        assert received == [NetworkState.DISCONNECTED, NetworkState.CONNECTED, NetworkState.CONNECTED]

    def test_detach_stops_delivery(self, publisher):
        """Test a detached observer receives nothing more."""
        observer = Mock()
        subscription = publisher.attach(observer)

        subscription.detach()
        subscription.detach()
        publisher.publish(NetworkState.CONNECTED)

        observer.assert_called_once_with(NetworkState.DISCONNECTED)
        assert subscription.active is False
        assert publisher.observer_count == 0

    def test_detach_during_callback_keeps_others(self, publisher):
        """Test self-detaching inside a callback does not skip later observers."""
        received = []
        subscriptions = {}

        def one_shot(state):
            if state == NetworkState.CONNECTED:
                subscriptions["one_shot"].detach()

        subscriptions["one_shot"] = publisher.attach(one_shot)
        publisher.attach(received.append)

        publisher.publish(NetworkState.CONNECTED)
        publisher.publish(NetworkState.DISCONNECTED)

        assert received == [NetworkState.DISCONNECTED, NetworkState.CONNECTED, NetworkState.DISCONNECTED]
        assert publisher.observer_count == 1

    def test_attach_during_callback(self, publisher):
        """Test an observer attached mid-publish receives the new value once."""
        late = []

        def attach_late(state):
            if state == NetworkState.CONNECTED:
                publisher.attach(late.append)

        publisher.attach(attach_late)
        publisher.publish(NetworkState.CONNECTED)

        assert late == [NetworkState.CONNECTED]

    def test_observer_error_does_not_block_others(self, publisher):
        """Test a failing observer is isolated."""
        publisher.attach(Mock(side_effect=RuntimeError("boom")))
        healthy = Mock()
        publisher.attach(healthy)

        publisher.publish(NetworkState.METERED_CONNECTION)

        healthy.assert_called_with(NetworkState.METERED_CONNECTION)
        assert publisher.value == NetworkState.METERED_CONNECTION

    def test_custom_initial_value(self):
        """Test the held value can start elsewhere."""
        assert StatePublisher(NetworkState.CONNECTED).value == NetworkState.CONNECTED

    def test_publish_does_not_wait_for_busy_observer(self, publisher):
        """Test a publish returns while the observer is busy on another thread, then arrives in order."""
        entered = threading.Event()
        release = threading.Event()
        received = []

        def slow_observer(state):
            received.append(state)
            if len(received) == 1:
                entered.set()
                release.wait(timeout=2)

        attaching = threading.Thread(target=publisher.attach, args=(slow_observer,))
        attaching.start()
        assert entered.wait(timeout=2)

        publisher.publish(NetworkState.CONNECTED)
        assert received == [NetworkState.DISCONNECTED]
        assert publisher.value == NetworkState.CONNECTED

        release.set()
        attaching.join(timeout=2)

        assert not attaching.is_alive()
        assert received == [NetworkState.DISCONNECTED, NetworkState.CONNECTED]

    def test_publish_from_observer_is_delivered_after_current(self, publisher):
        """Test re-entrant publishes are queued behind the state being handled."""
        received = []

        def chaining(state):
            received.append(state)
            if state == NetworkState.CONNECTED:
                publisher.publish(NetworkState.VPN_CONNECTION)
                received.append("returned")

        publisher.attach(chaining)
        publisher.publish(NetworkState.CONNECTED)

        assert received == [
            NetworkState.DISCONNECTED,
            NetworkState.CONNECTED,
            "returned",
            NetworkState.VPN_CONNECTION,
        ]
