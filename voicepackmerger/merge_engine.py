from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable

from .errors import AchievementKeyNotFoundError, InvalidInputError, InvalidOperationError
from .logging_utils import log_collision
from .models import AchievementBinding, AchievementMap, ResourceStore, VoicepackConfiguration
from .normalization import from_sound_list, to_sound_list


@dataclass(slots=True, frozen=True)
class ResourceCollision:
    key: str
    base_size: int
    incoming_size: int


CollisionHandler = Callable[[ResourceCollision], None]


def log_resource_collision(collision: ResourceCollision) -> None:
    log_collision(
        f"Duplicate resource key '{collision.key}' while merging: "
        f"{collision.base_size} bytes replaced by {collision.incoming_size} bytes"
    )


def merge_bindings(base: AchievementBinding, incoming: AchievementBinding) -> AchievementBinding:
    """Combine the sounds of two bindings, base sounds first, without de-duplication."""

    combined = to_sound_list(base) + to_sound_list(incoming)
    return from_sound_list(combined)


def merge_achievement_maps(base: AchievementMap, incoming: AchievementMap) -> AchievementMap:
    """Merge ``incoming`` into a copy of ``base``.

    The keys of ``base`` are the achievement universe; each of them must be
    present in ``incoming``. Extra keys of ``incoming`` are ignored.
    """

    merged: AchievementMap = {}
    for key, binding in base.items():
        if key not in incoming:
            raise AchievementKeyNotFoundError(key)
        merged[key] = merge_bindings(binding, incoming[key])
    return merged


def merge_resources(
    base: ResourceStore | None,
    incoming: ResourceStore | None,
    on_collision: CollisionHandler | None = None,
) -> ResourceStore | None:
    """Merge two resource stores, the incoming blob winning on a shared key.

    Every overwritten key is reported to ``on_collision`` (logged when no
    handler is given); a collision never stops the merge. Two missing stores
    merge into a missing store.
    """

    if base is None and incoming is None:
        return None
    if not incoming:
        return dict(base or {})
    if not base:
        return dict(incoming)

    report = on_collision or log_resource_collision
    merged: ResourceStore = dict(base)
    for key, blob in incoming.items():
        if key in merged:
            report(ResourceCollision(key=key, base_size=len(merged[key]), incoming_size=len(blob)))
        merged[key] = blob
    return merged


def merge_configurations(
    base: VoicepackConfiguration,
    incoming: VoicepackConfiguration | None,
    on_collision: CollisionHandler | None = None,
) -> VoicepackConfiguration:
    """Fold ``incoming`` into ``base`` and return the result as a new voicepack.

    Neither argument is modified. Metadata, guid and background settings are
    taken from ``base``; combining them is left to the caller.
    """

    if base is None or not base.is_valid():
        raise InvalidOperationError("Cannot merge into a voicepack without achievements")
    if incoming is None or not incoming.is_valid():
        raise InvalidInputError("Voicepack to merge is missing or has no achievements")

    achievements = merge_achievement_maps(base.achievements, incoming.achievements)
    resources = merge_resources(base.resources, incoming.resources, on_collision)

    return replace(
        base,
        metadata=replace(base.metadata) if base.metadata is not None else None,
        achievements=achievements,
        resources=resources,
        source=None,
    )


__all__ = [
    "ResourceCollision",
    "CollisionHandler",
    "log_resource_collision",
    "merge_bindings",
    "merge_achievement_maps",
    "merge_resources",
    "merge_configurations",
]
