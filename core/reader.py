"""Base poller abstraction"""
import abc

from core.state import DigitalState


class UnknownAxisError(LookupError):
    """Raised by pollers asked about a control or axis they do not know."""


class InputPoller(abc.ABC):
    """Host side of the input layer: answers per-frame queries about physical controls."""

    @abc.abstractmethod
    def poll_digital(self, control: str) -> DigitalState:
        raise NotImplementedError

    @abc.abstractmethod
    def poll_analog(self, axis: str, raw: bool = False) -> float:
        raise NotImplementedError

    def update(self):
        """Advance to the next frame. Pollers without frame state can ignore it."""
