from __future__ import annotations

from pathlib import Path
from typing import Any, List

from openpyxl import Workbook

from .consolidator import PackConsolidator
from .logging_utils import log_collision, log_info, log_ok
from .merge_engine import ResourceCollision
from .models import AchievementBinding, VoicepackConfiguration
from .normalization import to_sound_list


def _format_sounds(binding: AchievementBinding) -> str:
    return ", ".join(
        f"{sound.asset_path} ({sound.packaged_path})" if sound.packaged_path else sound.asset_path
        for sound in to_sound_list(binding)
    )


def print_merge_summary(consolidator: PackConsolidator) -> None:
    combined = consolidator.combined
    log_info(f"Voicepacks combined into '{combined.name}': {len(consolidator.sources)}")
    for source in consolidator.sources:
        log_info(source, indent=2)

    customized = combined.customized_keys
    log_info(f"Achievements with custom sounds: {len(customized)} of {len(combined.achievements)}")
    for key in customized:
        count = len(to_sound_list(combined.achievements[key]))
        log_info(f"{key}: {count} sound(s)", indent=2)

    if consolidator.collisions:
        log_collision("Resource keys overwritten while merging:")
        for collision in consolidator.collisions:
            log_collision(
                f"{collision.key}: {collision.base_size} -> {collision.incoming_size} bytes",
                indent=2,
            )
    else:
        log_ok("No resource key collisions found.")


def _build_achievement_rows(combined: VoicepackConfiguration) -> List[List[Any]]:
    rows: List[List[Any]] = []
    for key, binding in sorted(combined.achievements.items()):
        rows.append(
            [
                key,  # achievement
                len(to_sound_list(binding)),  # sound_count
                _format_sounds(binding),  # sounds
            ]
        )
    return rows


def _build_collision_rows(collisions: List[ResourceCollision]) -> List[List[Any]]:
    return [[collision.key, collision.base_size, collision.incoming_size] for collision in collisions]


def export_report(output_path: Path, consolidator: PackConsolidator) -> None:
    """Write an Excel report describing the combined voicepack."""

    output_path.parent.mkdir(parents=True, exist_ok=True)

    workbook = Workbook()

    sources_sheet = workbook.active
    if not sources_sheet:
        sources_sheet = workbook.create_sheet("sources")
    else:
        sources_sheet.title = "sources"
    sources_sheet.append(["order", "source"])
    for order, source in enumerate(consolidator.sources, start=1):
        sources_sheet.append([order, source])

    achievements_sheet = workbook.create_sheet("achievements")
    achievements_sheet.append(["achievement", "sound count", "sounds"])
    for row in _build_achievement_rows(consolidator.combined):
        achievements_sheet.append(row)

    collisions_sheet = workbook.create_sheet("collisions")
    collisions_sheet.append(["resource key", "base size", "incoming size"])
    for row in _build_collision_rows(consolidator.collisions):
        collisions_sheet.append(row)

    workbook.save(output_path)
    workbook.close()


__all__ = ["print_merge_summary", "export_report"]
