"""Resolved binding: a live handle on one physical control"""
import logging
from typing import Optional

from core.reader import InputPoller
from core.state import IDLE, BindKind, BindingSpec, DigitalState

LOG = logging.getLogger("bindswitch.binding")


class Binding:
    """One logical handle wired to a physical control or axis.

    The physical target can be reassigned at runtime; the handle and kind
    never change. A disabled binding, a kind mismatch or an unset target all
    answer with the inert value (False / 0.0).
    """

    def __init__(self, kind: BindKind, handle: str, control: Optional[str] = None,
                 axis: Optional[str] = None, poller: Optional[InputPoller] = None):
        self._kind = kind
        self._handle = handle
        self._control = control if kind is BindKind.DIGITAL else None
        self._axis = axis if kind is BindKind.ANALOG else None
        self._enabled = True
        self.poller = poller

    @classmethod
    def from_spec(cls, spec: BindingSpec, poller: Optional[InputPoller] = None) -> "Binding":
        return cls(spec.kind, spec.handle, control=spec.control, axis=spec.axis, poller=poller)

    @property
    def handle(self) -> str:
        return self._handle

    @property
    def kind(self) -> BindKind:
        return self._kind

    @property
    def physical_control(self) -> Optional[str]:
        return self._control

    @property
    def axis(self) -> Optional[str]:
        return self._axis

    def set_physical_control(self, control: Optional[str]):
        # ignored on analog bindings
        if self._kind is not BindKind.DIGITAL:
            return
        self._control = control

    def set_axis(self, axis: Optional[str]):
        # ignored on digital bindings
        if self._kind is not BindKind.ANALOG:
            return
        self._axis = axis

    def set_enabled(self, enabled: bool):
        self._enabled = bool(enabled)

    def is_enabled(self) -> bool:
        return self._enabled

    def _digital_state(self) -> DigitalState:
        if self._kind is not BindKind.DIGITAL or not self._control or not self._enabled:
            return IDLE
        if self.poller is None:
            return IDLE
        try:
            return self.poller.poll_digital(self._control)
        except Exception as e:
            LOG.debug("digital poll failed for %s (%s): %s", self._handle, self._control, e)
            return IDLE

    def _analog_value(self, raw: bool) -> float:
        if self._kind is not BindKind.ANALOG or not self._axis or not self._enabled:
            return 0.0
        if self.poller is None:
            return 0.0
        try:
            return float(self.poller.poll_analog(self._axis, raw=raw))
        except Exception as e:
            LOG.debug("analog poll failed for %s (%s): %s", self._handle, self._axis, e)
            return 0.0

    def is_pressed(self) -> bool:
        """True while the control is held, including the frame it went down."""
        st = self._digital_state()
        return st.pressed or st.just_pressed

    def is_pressed_down(self) -> bool:
        return self._digital_state().just_pressed

    def is_released(self) -> bool:
        return self._digital_state().just_released

    def get_axis_value(self) -> float:
        return self._analog_value(raw=False)

    def get_axis_raw_value(self) -> float:
        return self._analog_value(raw=True)

    def __repr__(self):
        target = self._control if self._kind is BindKind.DIGITAL else self._axis
        return f"Binding({self._handle!r}, {self._kind.value}, {target!r}, enabled={self._enabled})"
