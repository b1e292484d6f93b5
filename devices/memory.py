"""In-memory poller fed by the host

Lets hosts that read hardware themselves (or tests, or a dry run) push
control and axis state in, and hands out frame-accurate edges on the way out.
"""
import logging
from typing import Dict, Optional, Set

from core.reader import InputPoller, UnknownAxisError
from core.state import DigitalState

LOG = logging.getLogger("bindswitch.memory")


class MemoryInput(InputPoller):
    """Holds the pressed set and axis values written by the host.

    Writes land in a pending frame; ``update()`` publishes it and computes
    just-pressed / just-released against the previous frame.
    """

    def __init__(self):
        self._pending: Set[str] = set()
        self._current: Set[str] = set()
        self._previous: Set[str] = set()
        self._axes: Dict[str, float] = {}
        self._raw_axes: Dict[str, float] = {}
        self.frame = 0

    def press(self, control: str):
        self._pending.add(control)

    def release(self, control: str):
        self._pending.discard(control)

    def register_axis(self, axis: str, value: float = 0.0):
        self._axes.setdefault(axis, float(value))

    def set_axis(self, axis: str, value: float, raw: Optional[float] = None):
        """Set an axis; ``raw`` defaults to ``value`` when the host does no smoothing."""
        self._axes[axis] = float(value)
        self._raw_axes[axis] = float(value if raw is None else raw)

    def unregister_axis(self, axis: str):
        self._axes.pop(axis, None)
        self._raw_axes.pop(axis, None)

    def update(self):
        self._previous = self._current
        self._current = set(self._pending)
        self.frame += 1
        LOG.debug("frame %d pressed=%s", self.frame, sorted(self._current))

    def poll_digital(self, control: str) -> DigitalState:
        now = control in self._current
        before = control in self._previous
        return DigitalState(
            pressed=now,
            just_pressed=now and not before,
            just_released=before and not now,
        )

    def poll_analog(self, axis: str, raw: bool = False) -> float:
        if axis not in self._axes:
            raise UnknownAxisError(f"axis {axis!r} is not registered")
        if raw:
            return self._raw_axes.get(axis, self._axes[axis])
        return self._axes[axis]
