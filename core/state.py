"""State models and lightweight DTOs"""
import enum
from dataclasses import dataclass
from typing import Optional


class BindKind(enum.Enum):
    DIGITAL = "digital"  # pressed / released
    ANALOG = "analog"  # continuous scalar

    @classmethod
    def parse(cls, value) -> "BindKind":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"unknown bind kind {value!r}") from None


@dataclass(frozen=True)
class DigitalState:
    """What a poller reports for one digital control this frame."""

    pressed: bool = False  # held this frame
    just_pressed: bool = False
    just_released: bool = False


IDLE = DigitalState()


@dataclass(frozen=True)
class BindingSpec:
    """Declarative request to map one logical handle to a physical control.

    Exactly one of ``control``/``axis`` is set and it has to agree with
    ``kind``.
    """

    kind: BindKind
    handle: str
    control: Optional[str] = None  # digital controls, e.g. 'key.space'
    axis: Optional[str] = None  # analog axes, e.g. 'joy0.axis.1'

    def __post_init__(self):
        if not self.handle:
            raise ValueError("binding handle must not be empty")
        if self.kind is BindKind.DIGITAL:
            if self.control is None or self.axis is not None:
                raise ValueError(f"digital binding {self.handle!r} needs a control and no axis")
        elif self.kind is BindKind.ANALOG:
            if self.axis is None or self.control is not None:
                raise ValueError(f"analog binding {self.handle!r} needs an axis and no control")
        else:
            raise ValueError(f"binding {self.handle!r} has invalid kind {self.kind!r}")

    @classmethod
    def digital(cls, handle: str, control: str) -> "BindingSpec":
        return cls(BindKind.DIGITAL, handle, control=control)

    @classmethod
    def analog(cls, handle: str, axis: str) -> "BindingSpec":
        return cls(BindKind.ANALOG, handle, axis=axis)

    @classmethod
    def from_dict(cls, data: dict) -> "BindingSpec":
        """Build a spec from a config entry like ``{handle: Jump, control: key.space}``.

        ``kind`` may be omitted, in which case it is inferred from whichever of
        ``control``/``axis`` is present.
        """
        if not isinstance(data, dict):
            raise ValueError(f"binding entry must be a mapping, got {type(data).__name__}")
        handle = data.get("handle")
        control = data.get("control")
        axis = data.get("axis")
        kind = data.get("kind")
        if kind is None:
            if control is not None and axis is None:
                kind = BindKind.DIGITAL
            elif axis is not None and control is None:
                kind = BindKind.ANALOG
            else:
                raise ValueError(f"cannot infer kind for binding {handle!r}")
        kind = BindKind.parse(kind)
        return cls(
            kind,
            str(handle) if handle is not None else "",
            control=str(control) if control is not None else None,
            axis=str(axis) if axis is not None else None,
        )
