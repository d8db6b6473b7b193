from __future__ import annotations

from collections import Counter

from .models import AchievementBinding, AchievementMap, PackMetadata, ResourceStore, VoicepackConfiguration


def equal_single_sound(a: AchievementBinding, b: AchievementBinding) -> bool:
    return a.primary == b.primary


def equal_sound_sets(a: AchievementBinding, b: AchievementBinding) -> bool:
    """Compare the multi-sound lists of two bindings, ignoring order.

    Each sound must be matched as many times as it occurs, so ``[x, x, y]``
    and ``[x, y, y]`` are different.
    """

    if a.extra is None and b.extra is None:
        return True
    if a.extra is None or b.extra is None:
        return False
    if len(a.extra) != len(b.extra):
        return False
    return Counter(a.extra) == Counter(b.extra)


def equal_achievement_maps(a: AchievementMap, b: AchievementMap) -> bool:
    """Compare two achievement maps over the keys of ``a``.

    Both maps are expected to share the same achievement universe, keys only
    present in ``b`` are not looked at.
    """

    for key, binding in a.items():
        if key not in b:
            return False
        other = b[key]
        if not equal_single_sound(binding, other):
            return False
        if not equal_sound_sets(binding, other):
            return False
    return True


def equal_resource_stores(a: ResourceStore | None, b: ResourceStore | None) -> bool:
    """Compare resource stores by key set and blob size (not blob content)."""

    if a is None and b is None:
        return True
    if a is None or b is None:
        return False
    if len(a) != len(b):
        return False
    for key, blob in a.items():
        if key not in b:
            return False
        if len(blob) != len(b[key]):
            return False
    return True


def equal_metadata(a: PackMetadata | None, b: PackMetadata | None) -> bool:
    if a is None and b is None:
        return True
    if a is None or b is None:
        return False
    return (
        a.name == b.name
        and a.author == b.author
        and a.description == b.description
        and a.sample_image == b.sample_image
        and a.backup_sample_image == b.backup_sample_image
    )


def equivalent_configurations(
    a: VoicepackConfiguration | None,
    b: VoicepackConfiguration | None,
) -> bool:
    """Change detection: do two voicepacks bind the same sounds?"""

    a_valid = a is not None and a.is_valid()
    b_valid = b is not None and b.is_valid()
    if not a_valid and not b_valid:
        return True
    if not a_valid or not b_valid:
        return False
    return equal_achievement_maps(a.achievements, b.achievements)


__all__ = [
    "equal_single_sound",
    "equal_sound_sets",
    "equal_achievement_maps",
    "equal_resource_stores",
    "equal_metadata",
    "equivalent_configurations",
]
