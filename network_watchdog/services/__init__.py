"""
Services subpackage - Watchdog engine and state fan-out.

- NetworkWatchdog: Classifies raw network signals into NetworkState values
- NetworkStateStream: Live, cancellable sequence of a watching session's states
- StatePublisher: Broadcast holder replaying the latest state to late observers
- ConnectivityMonitor: Maps states onto optional caller hooks
- MonitorFactory: Builds monitors bound to one watchdog
"""

from network_watchdog.services.connectivity_monitor import ConnectivityMonitor
from network_watchdog.services.factory import MonitorFactory
from network_watchdog.services.state_publisher import StatePublisher, StateSubscription
from network_watchdog.services.state_stream import NetworkStateStream
from network_watchdog.services.watchdog import NetworkWatchdog

__all__ = [
    "ConnectivityMonitor",
    "MonitorFactory",
    "NetworkStateStream",
    "NetworkWatchdog",
    "StatePublisher",
    "StateSubscription",
]
