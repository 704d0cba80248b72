"""
Event scripts - Recorded sequences of raw network events.

A script is a YAML or JSON document:

    events:
      - {type: available, network: 100, interface: wlan0}
      - {type: capabilities, network: 100, capabilities: [validated, not-vpn]}
      - {type: link, network: 100, link: {interface_name: wlan0, addresses: [10.0.0.2/24]}}
      - {type: lost, network: 100}
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Optional

import yaml
from loguru import logger

from network_watchdog.core.models import LinkMetadata, NetworkHandle
from network_watchdog.core.types import Capability, parse_capabilities

from .manual_source import ManualSignalSource

EVENT_TYPES = ("available", "lost", "capabilities", "link")


class EventScriptError(ValueError):
    """Raised when an event script cannot be parsed."""


@dataclass(frozen=True)
class ScriptedEvent:
    """One raw event of a script."""

    type: str
    network: NetworkHandle
    capabilities: FrozenSet[Capability] = frozenset()
    link_metadata: Optional[LinkMetadata] = None


def parse_event(index: int, entry: Any) -> ScriptedEvent:
    """Validate one script entry."""
    if not isinstance(entry, dict):
        raise EventScriptError(f"Event #{index}: expected a mapping, got {type(entry).__name__}")

    event_type = entry.get("type")
    if event_type not in EVENT_TYPES:
        raise EventScriptError(f"Event #{index}: unknown type {event_type!r} (expected one of {', '.join(EVENT_TYPES)})")

    network_id = entry.get("network")
    if isinstance(network_id, bool) or not isinstance(network_id, int):
        raise EventScriptError(f"Event #{index}: 'network' must be an integer id")
    network = NetworkHandle(network_id, entry.get("interface"))

    if event_type == "capabilities":
        flags = entry.get("capabilities")
        if not isinstance(flags, list):
            raise EventScriptError(f"Event #{index}: 'capabilities' must be a list of flag names")
        try:
            return ScriptedEvent(event_type, network, capabilities=parse_capabilities(flags))
        except ValueError as e:
            raise EventScriptError(f"Event #{index}: {e}") from e

    if event_type == "link":
        link = entry.get("link")
        if not isinstance(link, dict):
            raise EventScriptError(f"Event #{index}: 'link' must be a mapping")
        try:
            return ScriptedEvent(event_type, network, link_metadata=LinkMetadata.from_dict(link))
        except (TypeError, ValueError) as e:
            raise EventScriptError(f"Event #{index}: {e}") from e

    return ScriptedEvent(event_type, network)


def parse_events(document: Any) -> List[ScriptedEvent]:
    if not isinstance(document, dict) or not isinstance(document.get("events"), list):
        raise EventScriptError("Event script must be a mapping with an 'events' list")
    return [parse_event(index, entry) for index, entry in enumerate(document["events"])]


def load_event_script(path: Path) -> List[ScriptedEvent]:
    """
    Load and validate an event script.

    JSON is used for `.json` files, YAML for everything else.

    Raises:
        EventScriptError: If the file is unreadable or malformed
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                document: Dict[str, Any] = json.load(f)
            else:
                document = yaml.safe_load(f)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise EventScriptError(f"Cannot read event script {path}: {e}") from e

    events = parse_events(document)
    logger.debug(f"[EventScript] Loaded {len(events)} event(s) from {path}")
    return events


def replay_events(source: ManualSignalSource, events: List[ScriptedEvent]):
    """Deliver scripted events through a manual source, in order."""
    for event in events:
        if event.type == "available":
            source.emit_available(event.network)
        elif event.type == "lost":
            source.emit_lost(event.network)
        elif event.type == "capabilities":
            source.emit_capabilities_changed(event.network, event.capabilities)
        elif event.type == "link":
            source.emit_link_properties_changed(event.network, event.link_metadata)
