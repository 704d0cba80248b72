"""network-watchdog - Classifies network-change signals into connectivity states."""

__version__ = "0.1.0"
__author__ = "network-watchdog contributors"
__description__ = "Connectivity-state watchdog with reactive state publishing and callback hooks"

from network_watchdog.core.models import LinkMetadata, NetworkHandle, NetworkParams, WatchdogHooks
from network_watchdog.core.types import Capability, NetworkState
from network_watchdog.services.connectivity_monitor import ConnectivityMonitor
from network_watchdog.services.state_publisher import StatePublisher
from network_watchdog.services.watchdog import NetworkWatchdog

__all__ = [
    "Capability",
    "ConnectivityMonitor",
    "LinkMetadata",
    "NetworkHandle",
    "NetworkParams",
    "NetworkState",
    "NetworkWatchdog",
    "StatePublisher",
    "WatchdogHooks",
    "__version__",
]
