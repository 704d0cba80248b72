"""
Connectivity Monitor - Maps watchdog states onto caller hooks.

Architecture:
- NetworkWatchdog classifies raw signals and emits states (facts)
- This layer records every state in the StatePublisher, hooks or not
- Caller hooks are optional; only the registered ones are invoked
"""

from typing import Optional

from loguru import logger

from network_watchdog.core.models import Hook, NetworkParams, WatchdogHooks
from network_watchdog.core.types import NetworkState

from .state_publisher import StatePublisher
from .state_stream import NetworkStateStream
from .watchdog import NetworkWatchdog


class ConnectivityMonitor:
    """
    Consumer-facing facade over a NetworkWatchdog.

    Usage:
        with ConnectivityMonitor(watchdog) as monitor:
            monitor.start_watching(on_disconnected=show_offline_banner)
            monitor.network_state.attach(print)

    Leaving the `with` block (or calling close()) stops watching, so a torn
    down consumer never leaves a registration behind.
    """

    def __init__(self, watchdog: NetworkWatchdog, publisher: Optional[StatePublisher] = None):
        self._watchdog = watchdog
        self._publisher = publisher or StatePublisher()

        self.on_connected: Optional[Hook] = None
        self.on_disconnected: Optional[Hook] = None
        self.on_no_internet_access: Optional[Hook] = None
        self.on_metered_connection: Optional[Hook] = None
        self.on_vpn_connection: Optional[Hook] = None

    @property
    def network_state(self) -> StatePublisher:
        """Publisher holding the latest NetworkState."""
        return self._publisher

    def start_watching(
        self,
        on_connected: Optional[Hook] = None,
        on_disconnected: Optional[Hook] = None,
        on_no_internet_access: Optional[Hook] = None,
        on_metered_connection: Optional[Hook] = None,
        on_vpn_connection: Optional[Hook] = None,
    ) -> NetworkStateStream:
        """
        Watch for network changes.

        Hooks run on the signal source's thread and must return quickly;
        consumers that need another thread redispatch themselves.

        Args:
            on_connected: Invoked when a network with internet access is attached
            on_disconnected: Invoked when the network is lost
            on_no_internet_access: Invoked when connected but internet isn't reachable
            on_metered_connection: Invoked when a metered connection is detected
            on_vpn_connection: Invoked when a VPN connection is detected

        Returns:
            The watchdog's live state stream (closed if already watching)
        """
        hooks = WatchdogHooks(
            on_connected=lambda: self._dispatch(NetworkState.CONNECTED, on_connected),
            on_disconnected=lambda: self._dispatch(NetworkState.DISCONNECTED, on_disconnected),
            on_no_internet_access=lambda: self._dispatch(NetworkState.NO_INTERNET_ACCESS, on_no_internet_access),
            on_metered_connection=lambda: self._dispatch(NetworkState.METERED_CONNECTION, on_metered_connection),
            on_vpn_connection=lambda: self._dispatch(NetworkState.VPN_CONNECTION, on_vpn_connection),
        )
        stream = self._watchdog.start(hooks)
        if stream.closed:
            logger.debug("[ConnectivityMonitor] Already watching, hooks unchanged")
            return stream

        # Only the session that actually started owns the exposed hooks
        self.on_connected = on_connected
        self.on_disconnected = on_disconnected
        self.on_no_internet_access = on_no_internet_access
        self.on_metered_connection = on_metered_connection
        self.on_vpn_connection = on_vpn_connection
        return stream

    def _dispatch(self, state: NetworkState, hook: Optional[Hook]):
        self._publisher.publish(state)
        if hook is None:
            return
        try:
            hook()
        except Exception as e:
            logger.error(f"[ConnectivityMonitor] Error in {state} hook: {e}")

    def stop_watching(self):
        """
        Stop the watchdog from listening to network changes.

        Call this from the consumer's teardown path.
        """
        self._watchdog.stop()
        self._clear_hooks()

    def _clear_hooks(self):
        self.on_connected = None
        self.on_disconnected = None
        self.on_no_internet_access = None
        self.on_metered_connection = None
        self.on_vpn_connection = None

    def close(self):
        self.stop_watching()

    def __enter__(self) -> "ConnectivityMonitor":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def access_network_params(self) -> NetworkParams:
        """
        Access parameters about the connected network and last connected network.

        Returns:
            NetworkParams with connection status, network handles and link metadata
        """
        return self._watchdog.snapshot()
