"""Value objects shared by the watchdog engine and its consumers."""

from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

Hook = Callable[[], None]


@dataclass(frozen=True)
class NetworkHandle:
    """
    Reference to a network attachment owned by the OS.

    Two handles are the same network when the OS gives them the same id;
    the interface name is descriptive only.
    """

    network_id: int
    interface_name: Optional[str] = field(default=None, compare=False)

    def __str__(self):
        if self.interface_name:
            return f"{self.network_id} ({self.interface_name})"
        return str(self.network_id)


@dataclass(frozen=True)
class LinkMetadata:
    """Descriptive properties of the active link."""

    interface_name: Optional[str] = None
    addresses: Tuple[str, ...] = ()
    dns_servers: Tuple[str, ...] = ()
    domains: Optional[str] = None
    mtu: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LinkMetadata":
        """
        Build link metadata from a plain mapping.

        Unknown keys are rejected so that typos in event scripts surface early.
        """
        unknown = set(data) - {"interface_name", "addresses", "dns_servers", "domains", "mtu"}
        if unknown:
            raise ValueError(f"Unknown link metadata fields: {', '.join(sorted(unknown))}")

        mtu = data.get("mtu")
        return cls(
            interface_name=data.get("interface_name"),
            addresses=tuple(data.get("addresses") or ()),
            dns_servers=tuple(data.get("dns_servers") or ()),
            domains=data.get("domains"),
            mtu=int(mtu) if mtu is not None else None,
        )


@dataclass(frozen=True)
class NetworkParams:
    """Point-in-time snapshot of what the watchdog knows about the network."""

    connected: bool
    metered: bool
    internet_accessible: bool
    vpn_active: bool
    current_network: Optional[NetworkHandle]
    last_network: Optional[NetworkHandle]
    link_metadata: Optional[LinkMetadata]

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        # Handles are rendered by id, metadata tuples as lists
        data["current_network"] = self.current_network.network_id if self.current_network else None
        data["last_network"] = self.last_network.network_id if self.last_network else None
        if self.link_metadata:
            data["link_metadata"] = {
                key: list(value) if isinstance(value, tuple) else value
                for key, value in asdict(self.link_metadata).items()
            }
        return data


@dataclass(frozen=True)
class WatchdogHooks:
    """
    Optional callbacks invoked by the watchdog, one per condition.

    Any field left as None is skipped.
    """

    on_connected: Optional[Hook] = None
    on_disconnected: Optional[Hook] = None
    on_no_internet_access: Optional[Hook] = None
    on_metered_connection: Optional[Hook] = None
    on_vpn_connection: Optional[Hook] = None
    on_link_properties_changed: Optional[Hook] = None
