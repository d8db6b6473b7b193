from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Tuple

DEFAULT_SOUND_PATH = "default"
COMBINED_PACK_NAME = "Combined Voicepack"


@dataclass(slots=True, frozen=True)
class SoundRef:
    asset_path: str
    packaged_path: str | None = None

    @property
    def is_default(self) -> bool:
        return self.asset_path.strip().lower() == DEFAULT_SOUND_PATH


DEFAULT_SOUND = SoundRef(DEFAULT_SOUND_PATH, None)


@dataclass(slots=True, frozen=True)
class AchievementBinding:
    """Sound configuration of a single achievement.

    ``primary`` is the legacy one-sound slot, ``extra`` holds the sounds of a
    multi-sound achievement. A normalized binding never uses both at once.
    """

    primary: SoundRef = DEFAULT_SOUND
    extra: Tuple[SoundRef, ...] | None = None

    @property
    def has_extra(self) -> bool:
        return self.extra is not None

    @property
    def is_default(self) -> bool:
        return self.primary.is_default and not self.extra


DEFAULT_BINDING = AchievementBinding()

AchievementMap = Dict[str, AchievementBinding]
ResourceStore = Dict[str, bytes]


@dataclass(slots=True)
class PackMetadata:
    name: str | None = None
    author: str | None = None
    description: str | None = None
    sample_image: str | None = None
    backup_sample_image: str | None = None


@dataclass(slots=True)
class VoicepackConfiguration:
    metadata: PackMetadata | None = None
    achievements: AchievementMap = field(default_factory=dict)
    resources: ResourceStore | None = field(default_factory=dict)
    guid: str | None = None
    background_image: str | None = None
    packaged_background_image: str | None = None
    background_image_disabled: bool = False
    source: str | None = None

    def is_valid(self) -> bool:
        """Return True when the voicepack holds at least one achievement."""
        return bool(self.achievements)

    @property
    def name(self) -> str:
        if self.metadata and self.metadata.name:
            return self.metadata.name
        return self.source or "<unnamed>"

    @property
    def customized_keys(self) -> List[str]:
        return [key for key, binding in self.achievements.items() if not binding.is_default]

    def copy(self) -> "VoicepackConfiguration":
        return replace(
            self,
            metadata=replace(self.metadata) if self.metadata is not None else None,
            achievements=dict(self.achievements),
            resources=dict(self.resources) if self.resources is not None else None,
        )


def default_configuration(
    achievement_keys: Iterable[str],
    name: str | None = None,
) -> VoicepackConfiguration:
    """Build a voicepack with every achievement bound to the default sound."""

    return VoicepackConfiguration(
        metadata=PackMetadata(name=name, author="", description=""),
        achievements={key: DEFAULT_BINDING for key in achievement_keys},
        resources={},
    )


def _row(label: str, value: object) -> str:
    return f"{label:<30}{value}"


def describe(config: VoicepackConfiguration | None, limit: int = 5) -> str:
    """Render a readable dump of a voicepack, mostly for debugging."""

    if config is None:
        return "voicepack is None"

    lines = [
        _row("Source:", config.source),
        _row("GUID:", config.guid),
        _row("Background image:", config.background_image),
        _row("Packaged background image:", config.packaged_background_image),
        _row("Background image disabled:", config.background_image_disabled),
    ]

    metadata = config.metadata
    if metadata is None:
        lines.append("Metadata: none")
    else:
        lines.append("Metadata:")
        lines.append(_row("  Name:", metadata.name))
        lines.append(_row("  Author:", metadata.author))
        lines.append(_row("  Description:", metadata.description))
        lines.append(_row("  Sample image:", metadata.sample_image))
        lines.append(_row("  Backup sample image:", metadata.backup_sample_image))

    lines.append(f"Achievements: {len(config.achievements)} entries")
    for key, binding in list(config.achievements.items())[:limit]:
        lines.append(_row("  Key:", key))
        lines.append(_row("    Sound:", binding.primary.asset_path))
        lines.append(_row("    Packaged sound:", binding.primary.packaged_path))
        for sound in binding.extra or ():
            lines.append(_row("    Extra sound:", f"{sound.asset_path} ({sound.packaged_path})"))

    resources = config.resources or {}
    lines.append(f"Resources: {len(resources)} entries")
    for key in list(resources)[:limit]:
        lines.append(_row("  Key:", key))
    return "\n".join(lines)
