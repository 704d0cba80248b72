"""Live state stream - the watching session's sequence of published states."""

import queue
import threading
from typing import Iterator, Optional

from loguru import logger

from network_watchdog.core.types import NetworkState

_CLOSED = object()


class NetworkStateStream:
    """
    Cancellable, non-restartable sequence of NetworkState values.

    The watchdog pushes states from the signal-source thread; a consumer
    iterates on its own thread. Iteration blocks until a state arrives and ends
    once the stream is closed and the buffered states are drained.

    The buffer is bounded: when it is full the oldest state is dropped, so a
    consumer that never iterates cannot make the watchdog grow without limit.
    """

    def __init__(self, maxsize: int = 64):
        if maxsize < 1:
            raise ValueError("maxsize must be at least 1")
        self._maxsize = maxsize
        # One extra slot so the close marker always fits
        self._queue: queue.Queue = queue.Queue(maxsize=maxsize + 1)
        self._lock = threading.Lock()
        self._closed = False
        self._exhausted = False
        self._dropped = 0

    @classmethod
    def closed_stream(cls) -> "NetworkStateStream":
        """Create a stream that is already closed and yields nothing."""
        stream = cls(maxsize=1)
        stream.close()
        return stream

    def push(self, state: NetworkState) -> bool:
        """
        Append a state for the consumer.

        Returns:
            False if the stream is closed and the state was discarded
        """
        with self._lock:
            if self._closed:
                return False

            if self._queue.qsize() >= self._maxsize:
                try:
                    dropped = self._queue.get_nowait()
                    self._dropped += 1
                    logger.debug(f"[NetworkStateStream] Buffer full, dropped {dropped}")
                except queue.Empty:
                    pass

            self._queue.put_nowait(state)
            return True

    def close(self):
        """Close the stream. Buffered states remain readable. Idempotent."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._queue.put_nowait(_CLOSED)

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    @property
    def dropped(self) -> int:
        """Number of states discarded because the buffer was full."""
        with self._lock:
            return self._dropped

    def get(self, timeout: Optional[float] = None) -> Optional[NetworkState]:
        """
        Return the next state.

        Blocks up to `timeout` seconds (forever if None). Returns None when the
        timeout expires or the stream is closed and drained.
        """
        if self._exhausted:
            return None

        try:
            item = self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

        if item is _CLOSED:
            self._exhausted = True
            return None
        return item

    def __iter__(self) -> Iterator[NetworkState]:
        return self

    def __next__(self) -> NetworkState:
        item = self.get()
        if item is None:
            raise StopIteration
        return item
