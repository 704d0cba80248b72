"""Unit tests for NetworkStateStream."""

import threading

import pytest

from network_watchdog.core.types import NetworkState
from network_watchdog.services.state_stream import NetworkStateStream


def test_iterates_pushed_states_until_closed():
    stream = NetworkStateStream()
    stream.push(NetworkState.CONNECTED)
    stream.push(NetworkState.VPN_CONNECTION)
    stream.close()

    assert list(stream) == [NetworkState.CONNECTED, NetworkState.VPN_CONNECTION]


def test_stream_is_not_restartable():
    stream = NetworkStateStream()
    stream.push(NetworkState.CONNECTED)
    stream.close()

    assert list(stream) == [NetworkState.CONNECTED]
    assert list(stream) == []


def test_closed_stream_yields_nothing():
    stream = NetworkStateStream.closed_stream()
    assert stream.closed is True
    assert list(stream) == []


def test_push_after_close_is_discarded():
    stream = NetworkStateStream()
    stream.close()
    stream.close()

    assert stream.push(NetworkState.CONNECTED) is False
    assert list(stream) == []


def test_get_timeout_returns_none():
    stream = NetworkStateStream()
    assert stream.get(timeout=0.01) is None
    assert stream.closed is False


def test_full_buffer_drops_oldest():
    stream = NetworkStateStream(maxsize=2)
    stream.push(NetworkState.CONNECTED)
    stream.push(NetworkState.NO_INTERNET_ACCESS)
    stream.push(NetworkState.DISCONNECTED)
    stream.close()

    assert list(stream) == [NetworkState.NO_INTERNET_ACCESS, NetworkState.DISCONNECTED]
    assert stream.dropped == 1


def test_close_wakes_blocked_consumer():
    stream = NetworkStateStream()
    received = []
    consumer = threading.Thread(target=lambda: received.extend(stream))
    consumer.start()

    stream.push(NetworkState.CONNECTED)
    stream.close()
    consumer.join(2)

    assert not consumer.is_alive()
    assert received == [NetworkState.CONNECTED]


def test_invalid_maxsize():
    with pytest.raises(ValueError):
        NetworkStateStream(maxsize=0)
