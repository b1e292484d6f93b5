"""Input manager: load YAML binding profiles and route polls to the active one"""
import yaml
import logging
from typing import List, Optional, Union

from core.profile import BindProfile
from core.reader import InputPoller

LOG = logging.getLogger("bindswitch.manager")


class InputManager:
    """Owns the profiles and forwards every query to the active one.

    An out-of-range ``active_profile_index`` (including an empty profile
    list) is a tolerated state: every query answers False / 0.0.
    """

    def __init__(self, profiles: Optional[List[BindProfile]] = None, active_profile_index: int = 0,
                 poller: Optional[InputPoller] = None):
        self.profiles: List[BindProfile] = list(profiles or [])
        self.active_profile_index = active_profile_index
        self.poller = poller
        self._warned_index = None  # last invalid index reported

    @classmethod
    def from_config(cls, data: dict, poller: Optional[InputPoller] = None) -> "InputManager":
        if not isinstance(data, dict):
            raise ValueError("binding config must be a mapping with a 'profiles' list")
        profiles = []
        for entry in data.get("profiles") or []:
            try:
                profiles.append(BindProfile.from_dict(entry, poller))
            except ValueError as e:
                LOG.warning("skipping profile %s: %s", entry, e)
        mgr = cls(profiles, poller=poller)
        active = data.get("active_profile", 0)
        if isinstance(active, str):
            mgr.active_profile_index = mgr.find_profile(active)
            if mgr.active_profile_index < 0:
                LOG.warning("active profile '%s' not found in config", active)
        else:
            mgr.active_profile_index = int(active or 0)
        return mgr

    @classmethod
    def load_config(cls, path: str, poller: Optional[InputPoller] = None) -> "InputManager":
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        LOG.info("loaded binding config %s", path)
        return cls.from_config(data, poller)

    def initialize_all(self):
        """Resolve bindings for every profile. Call once before the first frame."""
        for profile in self.profiles:
            profile.initialize(self.poller)

    def tick(self):
        """Per-frame hook: reconcile the active profile only."""
        profile = self.get_active_profile()
        if profile is not None:
            profile.reconcile()

    def _resolve_index(self) -> Optional[int]:
        """The active index as an int, or None when it selects no profile."""
        raw = self.active_profile_index
        try:
            idx = int(raw)
        except (TypeError, ValueError, OverflowError):
            idx = None
        # 1.0 selects profile 1, 1.5 or True select nothing
        if idx is not None and (isinstance(raw, bool) or idx != raw):
            idx = None
        if idx is not None and len(self.profiles) > 0 and 0 <= idx < len(self.profiles):
            self._warned_index = None
            return idx
        if self._warned_index != repr(raw):
            self._warned_index = repr(raw)
            LOG.warning("active profile index %r is invalid (%d profiles), input disabled", raw, len(self.profiles))
        return None

    def find_profile(self, name: str) -> int:
        for i, profile in enumerate(self.profiles):
            if profile.name == name:
                return i
        return -1

    def set_active_profile(self, selection: Union[int, str]) -> bool:
        """Switch profiles and sync the new one before returning.

        ``selection`` is an index or a profile name. Returns whether the
        resulting selection is valid.
        """
        if isinstance(selection, str):
            idx = self.find_profile(selection)
            if idx < 0:
                LOG.warning("no profile named '%s'", selection)
        else:
            idx = selection
        self.active_profile_index = idx
        idx = self._resolve_index()
        if idx is None:
            return False
        profile = self.profiles[idx]
        profile.reconcile(force=True)
        LOG.info("active profile -> '%s' (%d)", profile.name, idx)
        return True

    def get_active_profile(self) -> Optional[BindProfile]:
        idx = self._resolve_index()
        return self.profiles[idx] if idx is not None else None

    def get_button(self, handle: str) -> bool:
        profile = self.get_active_profile()
        return profile.get_button(handle) if profile is not None else False

    def get_button_down(self, handle: str) -> bool:
        profile = self.get_active_profile()
        return profile.get_button_down(handle) if profile is not None else False

    def get_button_up(self, handle: str) -> bool:
        profile = self.get_active_profile()
        return profile.get_button_up(handle) if profile is not None else False

    def get_axis(self, handle: str) -> float:
        profile = self.get_active_profile()
        return profile.get_axis(handle) if profile is not None else 0.0

    def get_axis_raw(self, handle: str) -> float:
        profile = self.get_active_profile()
        return profile.get_axis_raw(handle) if profile is not None else 0.0

    def is_axis(self, handle: str) -> bool:
        profile = self.get_active_profile()
        return profile.is_axis(handle) if profile is not None else False

    def has_bind(self, handle: str) -> bool:
        profile = self.get_active_profile()
        return profile.has_bind(handle) if profile is not None else False
