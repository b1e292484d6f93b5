"""Keyboard / mouse / joystick poller using pygame

``PygameInput`` snapshots device state once per frame in ``update()`` and
answers digital and analog polls from the last two snapshots.

Control ids:
  key.<pygame key name>   e.g. key.space, key.left shift
  mouse.<1..5>            mouse buttons
  joy<N>.button.<M>       joystick N button M
Axis ids:
  joy<N>.axis.<M>         joystick N axis M, -1.0..1.0
"""
import logging
import re

from core.reader import InputPoller, UnknownAxisError
from core.state import IDLE, DigitalState

try:
    import pygame
except Exception:
    pygame = None

LOG = logging.getLogger("bindswitch.pygame")

_JOY_RE = re.compile(r"^joy(\d+)\.(button|axis)\.(\d+)$")
MOUSE_BUTTONS = 5


def apply_deadzone(val: float, deadzone: float) -> float:
    """Zero out values inside the deadzone and rescale the rest to -1..1."""
    if deadzone <= 0.0:
        return max(-1.0, min(1.0, val))
    mag = abs(val)
    if mag <= deadzone:
        return 0.0
    out = (mag - deadzone) / (1.0 - deadzone)
    out = min(1.0, out)
    return out if val > 0 else -out


class PygameInput(InputPoller):
    """Reads pygame device state. ``start()`` must run before the first ``update()``."""

    def __init__(self, deadzone: float = 0.1):
        self.deadzone = deadzone
        self._joysticks = {}
        self._current = None
        self._previous = None
        self._key_codes = {}

    def start(self):
        if pygame is None:
            LOG.warning("pygame not available, PygameInput disabled")
            return
        pygame.init()
        pygame.joystick.init()
        self._scan_joysticks()

    def _scan_joysticks(self):
        self._joysticks = {}
        for i in range(pygame.joystick.get_count()):
            js = pygame.joystick.Joystick(i)
            js.init()
            LOG.info("Found joystick: %s (index %d, axes=%d, buttons=%d)",
                     js.get_name(), i, js.get_numaxes(), js.get_numbuttons())
            self._joysticks[i] = js

    def _snapshot(self) -> dict:
        joy = {}
        for i, js in self._joysticks.items():
            joy[i] = tuple(bool(js.get_button(b)) for b in range(js.get_numbuttons()))
        return {
            "keys": pygame.key.get_pressed(),
            "mouse": tuple(pygame.mouse.get_pressed(num_buttons=MOUSE_BUTTONS)),
            "joy": joy,
        }

    def update(self):
        if pygame is None:
            return
        if pygame.joystick.get_count() != len(self._joysticks):
            LOG.info("joystick count changed, rescanning")
            self._scan_joysticks()
        self._previous = self._current
        self._current = self._snapshot()

    def _key_code(self, name: str) -> int:
        code = self._key_codes.get(name)
        if code is None:
            try:
                code = pygame.key.key_code(name)
            except ValueError:
                raise UnknownAxisError(f"unknown key name {name!r}") from None
            self._key_codes[name] = code
        return code

    def _is_down(self, control: str, snap) -> bool:
        if snap is None:
            return False
        if control.startswith("key."):
            return bool(snap["keys"][self._key_code(control[4:])])
        if control.startswith("mouse."):
            idx = int(control.split(".", 1)[1]) - 1
            if not 0 <= idx < MOUSE_BUTTONS:
                raise UnknownAxisError(f"unknown mouse button {control!r}")
            return snap["mouse"][idx]
        m = _JOY_RE.match(control)
        if m and m.group(2) == "button":
            buttons = snap["joy"].get(int(m.group(1)), ())
            idx = int(m.group(3))
            return buttons[idx] if idx < len(buttons) else False
        raise UnknownAxisError(f"unknown control {control!r}")

    def poll_digital(self, control: str) -> DigitalState:
        if pygame is None or self._current is None:
            return IDLE
        now = self._is_down(control, self._current)
        before = self._is_down(control, self._previous)
        return DigitalState(pressed=now, just_pressed=now and not before, just_released=before and not now)

    def poll_analog(self, axis: str, raw: bool = False) -> float:
        m = _JOY_RE.match(axis)
        if pygame is None or not m or m.group(2) != "axis":
            raise UnknownAxisError(f"unknown axis {axis!r}")
        js = self._joysticks.get(int(m.group(1)))
        idx = int(m.group(3))
        if js is None or idx >= js.get_numaxes():
            raise UnknownAxisError(f"axis {axis!r} is not connected")
        val = float(js.get_axis(idx))
        if raw:
            return val
        return apply_deadzone(val, self.deadzone)
