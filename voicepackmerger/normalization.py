from __future__ import annotations

from typing import List, Sequence

from .errors import InvalidBindingError
from .models import DEFAULT_BINDING, AchievementBinding, AchievementMap, SoundRef


def to_sound_list(binding: AchievementBinding | None) -> List[SoundRef]:
    """Return every custom sound of a binding, whichever slot holds it."""

    if binding is None:
        raise InvalidBindingError("Achievement binding is missing")
    if not binding.primary.is_default:
        return [binding.primary]
    if binding.extra is not None:
        return list(binding.extra)
    return []


def from_sound_list(sounds: Sequence[SoundRef]) -> AchievementBinding:
    """Build the minimal binding (default, single or multi-sound) for a list of sounds."""

    if not sounds:
        return DEFAULT_BINDING
    if len(sounds) == 1:
        return AchievementBinding(primary=sounds[0])
    return AchievementBinding(extra=tuple(sounds))


def normalize_binding(binding: AchievementBinding | None) -> AchievementBinding:
    return from_sound_list(to_sound_list(binding))


def normalize_achievements(achievements: AchievementMap) -> AchievementMap:
    return {key: normalize_binding(binding) for key, binding in achievements.items()}


__all__ = [
    "to_sound_list",
    "from_sound_list",
    "normalize_binding",
    "normalize_achievements",
]
