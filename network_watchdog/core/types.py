"""Core types and enums."""
from enum import Enum
from typing import FrozenSet, Iterable, Union

from loguru import logger


class NetworkState(Enum):
    """
    States published by the watchdog.

    CONNECTED, DISCONNECTED and NO_INTERNET_ACCESS describe base connectivity.
    METERED_CONNECTION and VPN_CONNECTION are modifiers: they are delivered as
    extra notifications after the base state, never instead of it.
    """

    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
    NO_INTERNET_ACCESS = "no_internet_access"
    METERED_CONNECTION = "metered_connection"
    VPN_CONNECTION = "vpn_connection"

    def __str__(self):
        return self.value


class Capability(Enum):
    """Capability flags reported by the network stack."""

    # Read by the classifier
    VALIDATED = "validated"  # path to the public internet confirmed
    NOT_VPN = "not-vpn"  # absence means traffic goes through a VPN
    NOT_METERED = "not-metered"  # absence means the link is data-limited

    # Informational only
    INTERNET = "internet"
    NOT_ROAMING = "not-roaming"
    TRUSTED = "trusted"

    def __str__(self):
        return self.value


CapabilityLike = Union[Capability, str]


def parse_capabilities(flags: Iterable[CapabilityLike], strict: bool = True) -> FrozenSet[Capability]:
    """
    Normalize an iterable of capability flags into a frozen set.

    Accepts Capability members or their string values ("validated", "not_vpn"
    and "NOT_VPN" are all understood).

    Args:
        flags: Flags to normalize
        strict: Raise on unknown names instead of skipping them

    Raises:
        ValueError: If strict and a flag name is not recognized
    """
    result = set()
    for flag in flags:
        if isinstance(flag, Capability):
            result.add(flag)
            continue
        key = str(flag).strip().lower().replace("_", "-")
        try:
            result.add(Capability(key))
        except ValueError:
            if strict:
                raise ValueError(f"Unknown capability flag: {flag!r}") from None
            logger.debug(f"Ignoring unknown capability flag: {flag!r}")
    return frozenset(result)
