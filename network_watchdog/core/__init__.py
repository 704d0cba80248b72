"""Core types, configuration and logging for network-watchdog."""

from network_watchdog.core.config import Config
from network_watchdog.core.models import LinkMetadata, NetworkHandle, NetworkParams, WatchdogHooks
from network_watchdog.core.types import Capability, NetworkState

__all__ = [
    "Capability",
    "Config",
    "LinkMetadata",
    "NetworkHandle",
    "NetworkParams",
    "NetworkState",
    "WatchdogHooks",
]
