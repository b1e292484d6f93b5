import pytest
from core.binding import Binding
from core.reader import InputPoller
from core.state import BindKind, BindingSpec, DigitalState
from devices.memory import MemoryInput


class BrokenInput(InputPoller):
    def poll_digital(self, control):
        raise RuntimeError("device unplugged")

    def poll_analog(self, axis, raw=False):
        raise RuntimeError("axis not registered")


def test_digital_binding_follows_poller_edges():
    inp = MemoryInput()
    b = Binding.from_spec(BindingSpec.digital("Jump", "key.space"), inp)

    inp.press("key.space")
    inp.update()
    assert b.is_pressed() is True
    assert b.is_pressed_down() is True
    assert b.is_released() is False

    inp.update()
    assert b.is_pressed() is True
    assert b.is_pressed_down() is False

    inp.release("key.space")
    inp.update()
    assert b.is_pressed() is False
    assert b.is_released() is True


def test_kind_isolation():
    inp = MemoryInput()
    inp.press("key.space")
    inp.set_axis("joy0.axis.0", 0.8)
    inp.update()
    button = Binding.from_spec(BindingSpec.digital("Jump", "key.space"), inp)
    stick = Binding.from_spec(BindingSpec.analog("Steer", "joy0.axis.0"), inp)

    assert button.get_axis_value() == 0.0
    assert button.get_axis_raw_value() == 0.0
    assert stick.is_pressed() is False
    assert stick.is_pressed_down() is False
    assert stick.is_released() is False
    assert stick.get_axis_value() == pytest.approx(0.8)


def test_disabled_binding_is_inert():
    inp = MemoryInput()
    inp.press("key.space")
    inp.set_axis("joy0.axis.0", -1.0)
    inp.update()
    button = Binding.from_spec(BindingSpec.digital("Jump", "key.space"), inp)
    stick = Binding.from_spec(BindingSpec.analog("Steer", "joy0.axis.0"), inp)
    button.set_enabled(False)
    stick.set_enabled(False)

    assert button.is_enabled() is False
    assert button.is_pressed() is False
    assert button.is_pressed_down() is False
    assert stick.get_axis_value() == 0.0

    button.set_enabled(True)
    assert button.is_pressed() is True


def test_rebind_keeps_identity():
    inp = MemoryInput()
    b = Binding.from_spec(BindingSpec.digital("Jump", "key.space"), inp)
    b.set_enabled(False)
    b.set_physical_control("key.w")

    assert b.handle == "Jump"
    assert b.kind is BindKind.DIGITAL
    assert b.is_enabled() is False
    assert b.physical_control == "key.w"

    b.set_enabled(True)
    b.set_physical_control("key.e")
    assert b.is_enabled() is True

    inp.press("key.e")
    inp.update()
    assert b.is_pressed() is True


def test_rebind_kind_mismatch_is_ignored():
    button = Binding(BindKind.DIGITAL, "Jump", control="key.space")
    stick = Binding(BindKind.ANALOG, "Steer", axis="joy0.axis.0")

    button.set_axis("joy0.axis.1")
    stick.set_physical_control("key.a")

    assert button.axis is None
    assert button.physical_control == "key.space"
    assert stick.physical_control is None
    assert stick.axis == "joy0.axis.0"


def test_unset_target_is_inert():
    inp = MemoryInput()
    inp.press("key.space")
    inp.update()
    button = Binding.from_spec(BindingSpec.digital("Jump", "key.space"), inp)
    stick = Binding.from_spec(BindingSpec.analog("Steer", "joy0.axis.0"), inp)
    button.set_physical_control(None)
    stick.set_axis("")

    assert button.is_pressed() is False
    assert stick.get_axis_value() == 0.0


def test_poller_failures_are_absorbed():
    inp = MemoryInput()
    inp.update()
    stick = Binding.from_spec(BindingSpec.analog("Steer", "joy3.axis.9"), inp)
    assert stick.get_axis_value() == 0.0  # never registered

    broken = BrokenInput()
    assert Binding.from_spec(BindingSpec.analog("Steer", "joy0.axis.0"), broken).get_axis_raw_value() == 0.0
    assert Binding.from_spec(BindingSpec.digital("Jump", "key.space"), broken).is_pressed() is False


def test_smoothed_and_raw_axis_are_distinct():
    inp = MemoryInput()
    inp.set_axis("joy0.axis.0", 0.5, raw=0.62)
    b = Binding.from_spec(BindingSpec.analog("Steer", "joy0.axis.0"), inp)

    assert b.get_axis_value() == pytest.approx(0.5)
    assert b.get_axis_raw_value() == pytest.approx(0.62)


def test_binding_without_poller_is_inert():
    b = Binding(BindKind.DIGITAL, "Jump", control="key.space")
    assert b.is_pressed() is False
    assert Binding(BindKind.ANALOG, "Steer", axis="joy0.axis.0").get_axis_value() == 0.0
