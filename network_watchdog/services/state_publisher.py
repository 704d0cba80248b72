"""State Publisher - Broadcast holder for the current NetworkState."""

import threading
from collections import deque
from typing import Callable, Deque, List

from loguru import logger

from network_watchdog.core.types import NetworkState

StateObserver = Callable[[NetworkState], None]


class StateSubscription:
    """
    Handle returned by StatePublisher.attach().

    States are queued per subscription and handed to the observer one at a
    time. No lock is held while the observer runs, so an observer may call
    back into the watchdog (even stop it) without blocking the publishing
    thread.
    """

    def __init__(self, publisher: "StatePublisher", observer: StateObserver):
        self._publisher = publisher
        self._observer = observer
        self._lock = threading.Lock()
        self._pending: Deque[NetworkState] = deque()
        self._draining = False
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def detach(self):
        """Stop receiving states. Idempotent, safe to call from the observer itself."""
        with self._lock:
            if not self._active:
                return
            self._active = False
            self._pending.clear()
        self._publisher._remove(self)

    def _enqueue(self, state: NetworkState):
        with self._lock:
            if self._active:
                self._pending.append(state)

    def _drain(self):
        """
        Deliver queued states in order.

        Only one thread drains at a time. A thread that finds another one
        draining returns at once; the draining thread picks up its state.
        """
        with self._lock:
            if self._draining:
                return
            self._draining = True

        try:
            while True:
                with self._lock:
                    if not self._pending:
                        self._draining = False
                        return
                    state = self._pending.popleft()
                self._call(state)
        except BaseException:
            with self._lock:
                self._draining = False
            raise

    def _call(self, state: NetworkState):
        try:
            self._observer(state)
        except Exception as e:
            logger.error(f"[StatePublisher] Error in observer: {e}")


class StatePublisher:
    """
    Holds the current NetworkState and broadcasts every update.

    Observers are notified in attachment order, normally on the thread that
    publishes. If an observer is still busy with an earlier state on another
    thread, that thread delivers the new state right after, so each observer
    sees states in publish order and a late observer first receives the
    current value, then every later publish.
    """

    def __init__(self, initial: NetworkState = NetworkState.DISCONNECTED):
        self._lock = threading.Lock()
        self._value = initial
        self._subscriptions: List[StateSubscription] = []

    @property
    def value(self) -> NetworkState:
        return self._value

    @property
    def observer_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    def publish(self, state: NetworkState):
        """Update the held value and notify every attached observer."""
        with self._lock:
            self._value = state
            # Stable snapshot: observers may attach or detach while we deliver
            subscriptions = list(self._subscriptions)
            for subscription in subscriptions:
                subscription._enqueue(state)

        logger.debug(f"[StatePublisher] Publishing {state} to {len(subscriptions)} observer(s)")
        for subscription in subscriptions:
            subscription._drain()

    def attach(self, observer: StateObserver) -> StateSubscription:
        """Attach an observer; it immediately receives the current value."""
        subscription = StateSubscription(self, observer)
        with self._lock:
            self._subscriptions.append(subscription)
            subscription._enqueue(self._value)

        subscription._drain()
        return subscription

    def _remove(self, subscription: StateSubscription):
        with self._lock:
            try:
                self._subscriptions.remove(subscription)
            except ValueError:
                pass
