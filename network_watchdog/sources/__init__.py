"""Signal sources feeding the watchdog with raw network events."""

from network_watchdog.sources.event_script import EventScriptError, ScriptedEvent, load_event_script, replay_events
from network_watchdog.sources.manual_source import ManualSignalSource

__all__ = [
    "EventScriptError",
    "ManualSignalSource",
    "ScriptedEvent",
    "load_event_script",
    "replay_events",
]
