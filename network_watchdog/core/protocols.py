"""Protocols for the network signal source and its callbacks."""
from typing import FrozenSet, Protocol

from network_watchdog.core.models import LinkMetadata, NetworkHandle
from network_watchdog.core.types import Capability


class NetworkCallback(Protocol):
    """Callback surface a signal source delivers raw events to."""

    def on_available(self, network: NetworkHandle) -> None:
        """A network became the default network."""
        ...

    def on_lost(self, network: NetworkHandle) -> None:
        """The default network went away."""
        ...

    def on_capabilities_changed(self, network: NetworkHandle, capabilities: FrozenSet[Capability]) -> None:
        """The capability set of the default network changed."""
        ...

    def on_link_properties_changed(self, network: NetworkHandle, link_metadata: LinkMetadata) -> None:
        """Addresses, DNS or interface of the default network changed."""
        ...


class CapabilitySignalSource(Protocol):
    """
    Platform network stack.

    Delivers events for one registration serially, on a thread of its choosing.
    Registering the same callback twice, or unregistering an unknown one, is an
    error on the platform side.
    """

    def register(self, callback: NetworkCallback) -> None:
        ...

    def unregister(self, callback: NetworkCallback) -> None:
        ...
