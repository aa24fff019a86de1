"""A bounded, thread-safe FIFO for passing frames between pipeline stages."""

from __future__ import annotations

import enum
import queue
import threading
from collections import deque
from dataclasses import dataclass
from typing import Any

DEFAULT_CAPACITY = 8


class FrameType(enum.IntEnum):
    """Kind of payload a frame carries."""

    RAW_YUV = 0
    ENCODED = 1


@dataclass
class FrameData:
    """One raw or encoded video frame."""

    type: FrameType = FrameType.RAW_YUV
    data: bytes = b""
    pts: int = 0
    is_keyframe: bool = False
    width: int = 0
    height: int = 0
    extra: Any = None

    @property
    def size(self) -> int:
        """Payload length in bytes."""
        return len(self.data) if self.data is not None else 0


class QueueClosed(Exception):
    """The queue was closed: no more pushes, and no more pops once drained."""


def _wait_time(timeout: float | None) -> float | None:
    if timeout is None or timeout < 0:
        return None
    return timeout


class FrameQueue:
    """Bounded FIFO with blocking and non-blocking push and pop.

    Timeouts are in seconds; ``None`` (or a negative value) waits forever and
    ``0`` returns at once.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        self._capacity = capacity if capacity > 0 else DEFAULT_CAPACITY
        self._items: deque[FrameData] = deque()
        self._closed = False
        self._lock = threading.Lock()
        self._not_empty = threading.Condition(self._lock)
        self._not_full = threading.Condition(self._lock)

    @property
    def capacity(self) -> int:
        return self._capacity

    def push(self, frame: FrameData, timeout: float | None = None) -> None:
        """Append a frame, waiting for room.

        Raises queue.Full on timeout and QueueClosed if the queue is closed.
        """
        with self._not_full:
            ready = self._not_full.wait_for(
                lambda: len(self._items) < self._capacity or self._closed,
                _wait_time(timeout),
            )
            if not ready:
                raise queue.Full
            if self._closed:
                raise QueueClosed
            self._items.append(frame)
            self._not_empty.notify()

    def pop(self, timeout: float | None = None) -> FrameData:
        """Remove and return the oldest frame, waiting for one.

        Raises queue.Empty on timeout and QueueClosed once closed and drained.
        """
        with self._not_empty:
            ready = self._not_empty.wait_for(
                lambda: bool(self._items) or self._closed,
                _wait_time(timeout),
            )
            if not ready:
                raise queue.Empty
            if not self._items:
                raise QueueClosed
            frame = self._items.popleft()
            self._not_full.notify()
            return frame

    def try_push(self, frame: FrameData) -> bool:
        """Append a frame if there is room and the queue is open; report success."""
        with self._lock:
            if self._closed or len(self._items) >= self._capacity:
                return False
            self._items.append(frame)
            self._not_empty.notify()
            return True

    def try_pop(self) -> FrameData | None:
        """Remove and return the oldest frame, or None if there is none."""
        with self._lock:
            if not self._items:
                return None
            frame = self._items.popleft()
            self._not_full.notify()
            return frame

    def close(self) -> None:
        """Close the queue and wake every waiting thread."""
        with self._lock:
            self._closed = True
            self._not_empty.notify_all()
            self._not_full.notify_all()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def is_empty(self) -> bool:
        with self._lock:
            return not self._items

    def is_closed(self) -> bool:
        with self._lock:
            return self._closed