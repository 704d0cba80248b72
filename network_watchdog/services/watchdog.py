"""
Network Watchdog - Classifies raw network signals into published states.

The watchdog owns at most one registration with the signal source. Raw events
(available, lost, capabilities changed, link properties changed) update the
derived network parameters and are translated into NetworkState values that
are pushed into the session's stream and forwarded to the session's hooks.

Threading:
- Events arrive on the signal source's thread, not the caller's
- One re-entrant lock covers the session and the handling of an event
- stop() waits for an in-flight event; nothing is delivered once it returns
- Queries read an immutable snapshot and never take the lock
"""

import threading
from dataclasses import replace
from typing import FrozenSet, Iterable, Optional

from loguru import logger

from network_watchdog.core.constants import STREAM_BUFFER_SIZE
from network_watchdog.core.models import LinkMetadata, NetworkHandle, NetworkParams, WatchdogHooks
from network_watchdog.core.protocols import CapabilitySignalSource
from network_watchdog.core.types import Capability, CapabilityLike, NetworkState, parse_capabilities

from .state_stream import NetworkStateStream

_INITIAL_PARAMS = NetworkParams(
    connected=False,
    metered=False,
    internet_accessible=False,
    vpn_active=False,
    current_network=None,
    last_network=None,
    link_metadata=None,
)

_HOOK_NAMES = {
    NetworkState.CONNECTED: "on_connected",
    NetworkState.DISCONNECTED: "on_disconnected",
    NetworkState.NO_INTERNET_ACCESS: "on_no_internet_access",
    NetworkState.METERED_CONNECTION: "on_metered_connection",
    NetworkState.VPN_CONNECTION: "on_vpn_connection",
}


class _WatchdogCallback:
    """Callback registered with the signal source for one watching session."""

    def __init__(self, watchdog: "NetworkWatchdog"):
        self._watchdog = watchdog

    def on_available(self, network: NetworkHandle) -> None:
        self._watchdog._handle_available(self, network)

    def on_lost(self, network: NetworkHandle) -> None:
        self._watchdog._handle_lost(self, network)

    def on_capabilities_changed(self, network: NetworkHandle, capabilities: Iterable[CapabilityLike]) -> None:
        self._watchdog._handle_capabilities_changed(self, network, capabilities)

    def on_link_properties_changed(self, network: NetworkHandle, link_metadata: LinkMetadata) -> None:
        self._watchdog._handle_link_properties_changed(self, network, link_metadata)


class NetworkWatchdog:
    """
    Watches the default network through a signal source.

    After a network is lost, current_network keeps the handle of the lost
    network (and last_network points to it as well); is_connected() is the
    authoritative flag for whether a network is attached.
    """

    def __init__(self, source: CapabilitySignalSource, stream_buffer_size: int = STREAM_BUFFER_SIZE):
        """
        Args:
            source: Platform signal source to register with
            stream_buffer_size: States buffered per session before the oldest is dropped
        """
        self._source = source
        self._stream_buffer_size = stream_buffer_size

        self._lock = threading.RLock()
        self._callback: Optional[_WatchdogCallback] = None
        self._stream: Optional[NetworkStateStream] = None
        self._hooks = WatchdogHooks()

        self._params = _INITIAL_PARAMS

    # --- Session lifecycle ---

    def start(self, hooks: Optional[WatchdogHooks] = None) -> NetworkStateStream:
        """
        Start watching and return the session's live state stream.

        If a session is already active no registration is made and an already
        closed stream is returned.

        Raises:
            Whatever the signal source raises on registration (propagated as is)
        """
        with self._lock:
            if self._callback is not None:
                logger.warning("[NetworkWatchdog] Already watching, duplicate subscription closed")
                return NetworkStateStream.closed_stream()

            callback = _WatchdogCallback(self)
            stream = NetworkStateStream(maxsize=self._stream_buffer_size)
            self._callback = callback
            self._stream = stream
            self._hooks = hooks or WatchdogHooks()

            try:
                self._source.register(callback)
            except Exception as e:
                logger.error(f"[NetworkWatchdog] Failed to register network callback: {e}")
                self._end_session()
                raise

            logger.info("[NetworkWatchdog] Started watching")
            return stream

    def stop(self):
        """
        Stop watching. Idempotent.

        The session is invalidated before unregistering, so events the source
        still delivers to the old callback are ignored.
        """
        with self._lock:
            callback = self._callback
            if callback is None:
                return
            self._end_session()

        # Outside the lock: the source may be waiting on an in-flight delivery
        try:
            self._source.unregister(callback)
        except Exception as e:
            logger.error(f"[NetworkWatchdog] Failed to unregister network callback: {e}")
            raise

        logger.info("[NetworkWatchdog] Stopped watching")

    def _end_session(self):
        stream = self._stream
        self._callback = None
        self._stream = None
        self._hooks = WatchdogHooks()
        if stream is not None:
            stream.close()

    @property
    def is_watching(self) -> bool:
        return self._callback is not None

    # --- Queries ---

    def is_connected(self) -> bool:
        return self._params.connected

    def is_metered(self) -> bool:
        return self._params.metered

    def is_internet_accessible(self) -> bool:
        return self._params.internet_accessible

    def is_connected_to_vpn(self) -> bool:
        return self._params.vpn_active

    @property
    def current_network(self) -> Optional[NetworkHandle]:
        return self._params.current_network

    @property
    def last_network(self) -> Optional[NetworkHandle]:
        return self._params.last_network

    @property
    def link_metadata(self) -> Optional[LinkMetadata]:
        return self._params.link_metadata

    def snapshot(self) -> NetworkParams:
        """Return the latest consistent NetworkParams."""
        return self._params

    # --- Event handling ---

    def _is_current(self, callback: _WatchdogCallback, event: str) -> bool:
        if callback is not self._callback:
            logger.debug(f"[NetworkWatchdog] {event} ignored (not watching)")
            return False
        return True

    def _next_last_network(self) -> Optional[NetworkHandle]:
        """last_network after an update: the previous current network, if any."""
        current = self._params.current_network
        return current if current is not None else self._params.last_network

    def _handle_available(self, callback: _WatchdogCallback, network: NetworkHandle):
        with self._lock:
            if not self._is_current(callback, "available"):
                return

            self._params = replace(
                self._params,
                connected=True,
                last_network=self._next_last_network(),
                current_network=network,
            )
            logger.debug(f"[NetworkWatchdog] Network {network} is available")

            self._emit(callback, [NetworkState.CONNECTED])

    def _handle_lost(self, callback: _WatchdogCallback, network: NetworkHandle):
        with self._lock:
            if not self._is_current(callback, "lost"):
                return

            self._params = replace(
                self._params,
                connected=False,
                internet_accessible=False,
                vpn_active=False,
                metered=False,
                last_network=self._next_last_network(),
            )
            logger.debug(f"[NetworkWatchdog] Network {network} is lost")

            self._emit(callback, [NetworkState.DISCONNECTED])

    def _handle_capabilities_changed(
        self,
        callback: _WatchdogCallback,
        network: NetworkHandle,
        capabilities: Iterable[CapabilityLike],
    ):
        with self._lock:
            if not self._is_current(callback, "capabilities changed"):
                return

            flags: FrozenSet[Capability] = parse_capabilities(capabilities, strict=False)
            internet_accessible = Capability.VALIDATED in flags
            vpn_active = Capability.NOT_VPN not in flags
            metered = Capability.NOT_METERED not in flags

            self._params = replace(
                self._params,
                connected=True,
                internet_accessible=internet_accessible,
                vpn_active=vpn_active,
                metered=metered,
                last_network=self._next_last_network(),
                current_network=network,
            )
            logger.debug(
                f"[NetworkWatchdog] Capabilities of {network} changed: "
                f"internet={internet_accessible}, vpn={vpn_active}, metered={metered}"
            )

            # Base connectivity first, then modifiers
            states = [NetworkState.CONNECTED if internet_accessible else NetworkState.NO_INTERNET_ACCESS]
            if vpn_active:
                states.append(NetworkState.VPN_CONNECTION)
            if metered:
                states.append(NetworkState.METERED_CONNECTION)

            self._emit(callback, states)

    def _handle_link_properties_changed(
        self,
        callback: _WatchdogCallback,
        network: NetworkHandle,
        link_metadata: LinkMetadata,
    ):
        with self._lock:
            if not self._is_current(callback, "link properties changed"):
                return

            self._params = replace(self._params, link_metadata=link_metadata)
            logger.debug(f"[NetworkWatchdog] Link properties of {network} changed")

            self._invoke_hook("on_link_properties_changed", self._hooks.on_link_properties_changed)

    def _emit(self, callback: _WatchdogCallback, states):
        """Push states to the stream and run the matching hooks, in order."""
        for state in states:
            # A hook may have stopped the session mid fan-out
            if callback is not self._callback:
                return
            self._stream.push(state)
            hook_name = _HOOK_NAMES[state]
            self._invoke_hook(hook_name, getattr(self._hooks, hook_name))

    @staticmethod
    def _invoke_hook(name: str, hook):
        if hook is None:
            return
        try:
            hook()
        except Exception as e:
            logger.error(f"[NetworkWatchdog] Error in {name} hook: {e}")
