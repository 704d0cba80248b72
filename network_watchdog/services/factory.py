"""Factory creating consumer-facing monitors bound to one watchdog."""
from typing import Type, TypeVar

from .connectivity_monitor import ConnectivityMonitor
from .watchdog import NetworkWatchdog

T = TypeVar("T", bound=ConnectivityMonitor)


class MonitorFactory:
    """Creates ConnectivityMonitor instances sharing a NetworkWatchdog."""

    def __init__(self, watchdog: NetworkWatchdog):
        self._watchdog = watchdog

    def create(self, model_class: Type[T]) -> T:
        """
        Create a monitor of the requested class.

        Raises:
            ValueError: If model_class is not a ConnectivityMonitor type
        """
        if isinstance(model_class, type) and issubclass(model_class, ConnectivityMonitor):
            return model_class(self._watchdog)
        raise ValueError(f"Unknown monitor class: {getattr(model_class, '__name__', model_class)!r}")
