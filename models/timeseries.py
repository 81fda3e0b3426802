"""
Rolling-window time series storage.

A fixed-capacity FIFO of numeric samples that backs each live chart.
"""

from collections import deque
from typing import Callable, Iterable, List, Optional, Tuple


class TimeSeriesBuffer:
    """
    Fixed-capacity rolling window of samples, oldest first.

    Pushing beyond capacity evicts exactly the oldest sample. Listeners
    registered with subscribe() are called after every push and clear so
    that charts can repaint without polling.
    """

    def __init__(self, capacity: int = 60, values: Optional[Iterable[float]] = None):
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._capacity = int(capacity)
        self._samples: deque = deque(maxlen=self._capacity)
        self._listeners: List[Callable[[], None]] = []
        if values is not None:
            self._samples.extend(float(v) for v in values)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def latest(self) -> Optional[float]:
        """Most recent sample, or None when empty."""
        if self._samples:
            return self._samples[-1]
        return None

    def __len__(self) -> int:
        return len(self._samples)

    def push(self, value: float):
        """Append a sample, evicting the oldest one when full."""
        self._samples.append(float(value))
        self._notify()

    def clear(self):
        """Drop every sample."""
        self._samples.clear()
        self._notify()

    def values(self) -> Tuple[float, ...]:
        """Current samples, oldest first."""
        return tuple(self._samples)

    def subscribe(self, callback: Callable[[], None]):
        if callback not in self._listeners:
            self._listeners.append(callback)

    def unsubscribe(self, callback: Callable[[], None]):
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify(self):
        for callback in list(self._listeners):
            callback()
