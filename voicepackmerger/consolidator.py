from __future__ import annotations

from typing import Iterable, List

from .equivalence import equivalent_configurations
from .errors import LoadError
from .logging_utils import log_debug, log_info
from .merge_engine import ResourceCollision, log_resource_collision, merge_configurations
from .models import COMBINED_PACK_NAME, VoicepackConfiguration, default_configuration, describe
from .pack_io import PackExporter, PackLoader


class PackConsolidator:
    """Keeps an ordered list of voicepack sources merged into one voicepack.

    Sources are folded in the order they were added. Removing a source
    rebuilds the combined voicepack from the remaining list.
    """

    def __init__(
        self,
        loader: PackLoader,
        achievement_keys: Iterable[str],
        combined_name: str = COMBINED_PACK_NAME,
    ) -> None:
        self.loader = loader
        self.achievement_keys: List[str] = list(achievement_keys)
        self.combined_name = combined_name
        self.sources: List[str] = []
        self.collisions: List[ResourceCollision] = []
        self.combined = self._initial_configuration()

    def _initial_configuration(self) -> VoicepackConfiguration:
        return default_configuration(self.achievement_keys, name=self.combined_name)

    def _reset(self) -> None:
        self.combined = self._initial_configuration()
        self.collisions = []

    def _record_collision(self, collision: ResourceCollision) -> None:
        self.collisions.append(collision)
        log_resource_collision(collision)

    def _merge_source(self, source: str) -> bool:
        try:
            pack = self.loader.load(source)
        except LoadError:
            return False
        if not pack.is_valid():
            return False
        self.combined = merge_configurations(self.combined, pack, on_collision=self._record_collision)
        log_info(f"Merged voicepack '{pack.name}' from {source}")
        log_debug(describe(pack), indent=2)
        return True

    def add_packs(self, sources: Iterable[str]) -> List[str]:
        """Merge each source into the combined voicepack, returning those accepted."""

        if not self.sources:
            self._reset()
        accepted: List[str] = []
        for source in sources:
            if self._merge_source(source):
                self.sources.append(source)
                accepted.append(source)
        return accepted

    def remove_packs(self, sources: Iterable[str]) -> None:
        for source in sources:
            if source in self.sources:
                self.sources.remove(source)
        self.recombine()

    def recombine(self) -> None:
        """Rebuild the combined voicepack from the tracked sources."""

        self._reset()
        remaining: List[str] = []
        for source in self.sources:
            if self._merge_source(source):
                remaining.append(source)
        self.sources = remaining

    def export(self, exporter: PackExporter, destination: str) -> bool:
        if not self.combined.is_valid():
            return False
        exporter.export(self.combined, destination)
        return True

    def matches(self, other: VoicepackConfiguration | None) -> bool:
        return equivalent_configurations(self.combined, other)


__all__ = ["PackConsolidator"]
