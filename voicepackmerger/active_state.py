"""The host application's "currently active voicepack" slot.

The merge engine never touches this slot. Only :class:`CombinedPackSwitch`
reads and writes it, to put the combined voicepack in use and to give the
previously active one back.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from .consolidator import PackConsolidator
from .logging_utils import log_info, log_warn
from .models import VoicepackConfiguration


class ActiveSlot:
    """Holds the voicepack in use. Last write wins, get/set are not atomic."""

    def __init__(self, active: VoicepackConfiguration | None = None) -> None:
        self._active = active

    def get_active(self) -> VoicepackConfiguration | None:
        return self._active

    def set_active(self, config: VoicepackConfiguration | None) -> None:
        self._active = config

    def is_active(self, config: VoicepackConfiguration | None) -> bool:
        return config is not None and self._active is config

    @contextmanager
    def borrow(self, config: VoicepackConfiguration) -> Iterator[VoicepackConfiguration]:
        """Make ``config`` active for the duration of the block, then restore the previous one."""

        snapshot = self._active
        self._active = config
        try:
            yield config
        finally:
            self._active = snapshot


class CombinedPackSwitch:
    def __init__(self, slot: ActiveSlot, consolidator: PackConsolidator) -> None:
        self.slot = slot
        self.consolidator = consolidator
        self.backup: VoicepackConfiguration | None = None
        self._use_combined = False
        self._installed: VoicepackConfiguration | None = None

    @property
    def use_combined(self) -> bool:
        return self._use_combined

    def set_use_combined(self, enabled: bool) -> bool:
        """Switch the active voicepack to the combined one or back.

        Returns the resulting state. Enabling is refused while the combined
        voicepack is invalid.
        """

        combined = self.consolidator.combined
        if enabled:
            if not combined.is_valid():
                log_warn("Combined voicepack is empty, keeping the current voicepack active.")
                return self._use_combined
            if not self.slot.is_active(self._installed):
                self.backup = self.slot.get_active()
            self._install(combined)
        elif self.slot.is_active(self._installed):
            self.slot.set_active(self.backup)
        else:
            # The host loaded another voicepack meanwhile, the backup is stale.
            self.backup = self.slot.get_active()

        self._use_combined = enabled
        if not enabled:
            self._installed = None
        log_info(f"Use combined voicepack: {'on' if enabled else 'off'}")
        return self._use_combined

    def _install(self, combined: VoicepackConfiguration) -> None:
        self.slot.set_active(combined)
        self._installed = combined

    def refresh(self) -> None:
        """Install the current combined voicepack after it was rebuilt."""

        combined = self.consolidator.combined
        if self._use_combined and combined.is_valid() and combined is not self._installed:
            self._install(combined)

    def check_still_active(self) -> bool:
        """Turn the switch off when the host replaced the combined voicepack.

        A combined voicepack rebuilt since it was installed is installed in
        its place when the slot still holds the previous one.
        """

        if not self._use_combined:
            return False
        if self.slot.is_active(self._installed):
            self.refresh()
        else:
            self._use_combined = False
            self._installed = None
            self.backup = self.slot.get_active()
            log_info("Another voicepack was activated, combined voicepack no longer in use.")
        return self._use_combined


__all__ = ["ActiveSlot", "CombinedPackSwitch"]
