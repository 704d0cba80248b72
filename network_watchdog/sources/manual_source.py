"""In-memory signal source driven by explicit emit_* calls."""

import threading
from typing import Iterable, List

from loguru import logger

from network_watchdog.core.models import LinkMetadata, NetworkHandle
from network_watchdog.core.protocols import NetworkCallback
from network_watchdog.core.types import CapabilityLike, parse_capabilities


class ManualSignalSource:
    """
    Signal source for tests and trace replays.

    Events are delivered serially to every registered callback on the thread
    that calls emit_*. Registration follows the platform contract: the same
    callback cannot be registered twice and unknown callbacks cannot be
    unregistered.
    """

    def __init__(self):
        self._lock = threading.Lock()
        # Held for a whole delivery so events never interleave
        self._delivery_lock = threading.RLock()
        self._callbacks: List[NetworkCallback] = []

    @property
    def registered_count(self) -> int:
        with self._lock:
            return len(self._callbacks)

    def register(self, callback: NetworkCallback) -> None:
        with self._lock:
            if callback in self._callbacks:
                raise ValueError("NetworkCallback was already registered")
            self._callbacks.append(callback)
        logger.debug(f"[ManualSignalSource] Registered callback ({self.registered_count} active)")

    def unregister(self, callback: NetworkCallback) -> None:
        with self._lock:
            if callback not in self._callbacks:
                raise ValueError("NetworkCallback was not registered")
            self._callbacks.remove(callback)
        logger.debug(f"[ManualSignalSource] Unregistered callback ({self.registered_count} active)")

    def _deliver(self, method: str, *args):
        with self._delivery_lock:
            with self._lock:
                callbacks = list(self._callbacks)
            for callback in callbacks:
                getattr(callback, method)(*args)

    def emit_available(self, network: NetworkHandle):
        self._deliver("on_available", network)

    def emit_lost(self, network: NetworkHandle):
        self._deliver("on_lost", network)

    def emit_capabilities_changed(self, network: NetworkHandle, capabilities: Iterable[CapabilityLike]):
        self._deliver("on_capabilities_changed", network, parse_capabilities(capabilities))

    def emit_link_properties_changed(self, network: NetworkHandle, link_metadata: LinkMetadata):
        self._deliver("on_link_properties_changed", network, link_metadata)
