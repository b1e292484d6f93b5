"""Binding profiles: desired specs, resolved bindings, and the sync between them"""
import logging
from typing import Dict, List, Optional

from core.binding import Binding
from core.reader import InputPoller
from core.state import BindKind, BindingSpec

LOG = logging.getLogger("bindswitch.profile")


class BindProfile:
    """A named, switchable set of bindings.

    ``specs`` is the desired state and may be edited freely (e.g. by a
    rebinding screen). ``reconcile()`` brings the resolved bindings back in
    line with it, keyed by handle.
    """

    def __init__(self, name: str = "Default", specs: Optional[List[BindingSpec]] = None,
                 enabled: bool = True, poller: Optional[InputPoller] = None):
        self.name = name
        self.specs: List[BindingSpec] = list(specs or [])
        self.poller = poller
        self._bindings: Dict[str, Binding] = {}
        self._warned = set()  # handles already reported as missing
        self._dup_warned = set()
        self._enabled = bool(enabled)

    @classmethod
    def from_dict(cls, data: dict, poller: Optional[InputPoller] = None) -> "BindProfile":
        """Build a profile from a config mapping with ``name``, ``enabled`` and ``bindings``."""
        if not isinstance(data, dict):
            raise ValueError(f"profile entry must be a mapping, got {type(data).__name__}")
        name = str(data.get("name", "Default"))
        specs = []
        seen = set()
        for entry in data.get("bindings") or []:
            try:
                spec = BindingSpec.from_dict(entry)
            except ValueError as e:
                LOG.warning("profile '%s': skipping binding %s: %s", name, entry, e)
                continue
            if spec.handle in seen:
                LOG.warning("profile '%s': duplicate handle '%s', keeping the first", name, spec.handle)
                continue
            seen.add(spec.handle)
            specs.append(spec)
        return cls(name, specs, enabled=bool(data.get("enabled", True)), poller=poller)

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool):
        value = bool(value)
        if value and not self._enabled:
            self._warned.clear()
        self._enabled = value

    @property
    def bindings(self) -> Dict[str, Binding]:
        return self._bindings

    def initialize(self, poller: Optional[InputPoller] = None):
        """Resolve every spec into a binding. Must run before the first query."""
        if poller is not None:
            self.poller = poller
        self._bindings = {}
        self._warned.clear()
        self._dup_warned.clear()
        for spec in self.specs:
            if spec.handle in self._bindings:
                self._dup_warned.add(spec.handle)
                LOG.warning("profile '%s': duplicate handle '%s', keeping the first", self.name, spec.handle)
                continue
            self._add_binding(spec)
        LOG.debug("profile '%s' initialized with %d bindings", self.name, len(self._bindings))

    def _add_binding(self, spec: BindingSpec):
        self._bindings[spec.handle] = Binding.from_spec(spec, self.poller)

    def reconcile(self, force: bool = False):
        """Sync bindings to specs. Called once per frame for the active profile.

        Only diffs when the counts differ, unless ``force`` is set.
        """
        if not self.enabled:
            return
        if not force and len(self._bindings) == len(self.specs):
            return

        wanted = {}
        for spec in self.specs:
            if spec.handle in wanted:
                if spec.handle not in self._dup_warned:
                    self._dup_warned.add(spec.handle)
                    LOG.warning("profile '%s': duplicate handle '%s' in specs, only the first is bound",
                                self.name, spec.handle)
                continue
            wanted[spec.handle] = spec
        stale = [h for h in self._bindings if h not in wanted]
        missing = [s for h, s in wanted.items() if h not in self._bindings]
        if not stale and not missing:
            return

        LOG.warning("profile '%s': binding cache out of sync with specs, syncing", self.name)
        for handle in stale:
            LOG.warning("binding '%s' has no spec in profile '%s', removing it", handle, self.name)
            del self._bindings[handle]
            self._warned.discard(handle)
        for spec in missing:
            LOG.warning("creating binding for spec '%s' in profile '%s'", spec.handle, self.name)
            self._add_binding(spec)
            self._warned.discard(spec.handle)

    def has_bind(self, handle: str) -> bool:
        return handle in self._bindings

    def get_binding(self, handle: str) -> Optional[Binding]:
        return self._bindings.get(handle)

    def _lookup(self, handle: str) -> Optional[Binding]:
        bind = self._bindings.get(handle)
        if bind is not None and self.enabled:
            return bind
        # first miss per handle is a warning, repeats every frame would flood the log
        log = LOG.debug if handle in self._warned else LOG.warning
        self._warned.add(handle)
        if bind is None:
            log("bind '%s' does not exist in profile '%s', ignoring", handle, self.name)
        else:
            log("bind '%s' polled while profile '%s' is disabled, ignoring", handle, self.name)
        return None

    def is_axis(self, handle: str) -> bool:
        """True if the handle is bound to something other than a digital control."""
        bind = self._lookup(handle)
        if bind is None:
            return False
        return bind.kind is not BindKind.DIGITAL

    def get_button(self, handle: str) -> bool:
        bind = self._lookup(handle)
        return bind.is_pressed() if bind is not None else False

    def get_button_down(self, handle: str) -> bool:
        bind = self._lookup(handle)
        return bind.is_pressed_down() if bind is not None else False

    def get_button_up(self, handle: str) -> bool:
        bind = self._lookup(handle)
        return bind.is_released() if bind is not None else False

    def get_axis(self, handle: str) -> float:
        bind = self._lookup(handle)
        return bind.get_axis_value() if bind is not None else 0.0

    def get_axis_raw(self, handle: str) -> float:
        bind = self._lookup(handle)
        return bind.get_axis_raw_value() if bind is not None else 0.0

    def __repr__(self):
        return f"BindProfile({self.name!r}, specs={len(self.specs)}, bindings={len(self._bindings)}, enabled={self.enabled})"
