from __future__ import annotations

from typing import Dict, Iterable

import pytest

from voicepackmerger.errors import LoadError
from voicepackmerger.models import (
    DEFAULT_BINDING,
    AchievementBinding,
    PackMetadata,
    SoundRef,
    VoicepackConfiguration,
)

ACHIEVEMENTS = ["A1", "A2", "A3"]


def single(asset: str, packaged: str | None = None) -> AchievementBinding:
    return AchievementBinding(primary=SoundRef(asset, packaged))


def multi(*assets: str) -> AchievementBinding:
    return AchievementBinding(extra=tuple(SoundRef(asset) for asset in assets))


def make_pack(
    bindings: Dict[str, AchievementBinding] | None = None,
    resources: Dict[str, bytes] | None = None,
    keys: Iterable[str] = ACHIEVEMENTS,
    name: str = "Sample Pack",
) -> VoicepackConfiguration:
    achievements = {key: DEFAULT_BINDING for key in keys}
    achievements.update(bindings or {})
    return VoicepackConfiguration(
        metadata=PackMetadata(
            name=name,
            author="Sample Author",
            description="Sample description",
            sample_image="sample.png",
            backup_sample_image="sample_backup.png",
        ),
        achievements=achievements,
        resources=dict(resources or {}),
    )


class DictLoader:
    """Loader serving prepared voicepacks, raising LoadError for unknown sources."""

    def __init__(self, packs: Dict[str, VoicepackConfiguration]) -> None:
        self.packs = packs
        self.calls: list[str] = []

    def load(self, source: str) -> VoicepackConfiguration:
        self.calls.append(source)
        if source not in self.packs:
            raise LoadError(f"unknown voicepack {source}")
        return self.packs[source].copy()


@pytest.fixture
def sample_pack() -> VoicepackConfiguration:
    return make_pack(
        {
            "A1": single("sounds/a1.wav", "a1"),
            "A2": multi("sounds/a2_1.wav", "sounds/a2_2.wav"),
        },
        resources={"a1": b"12345", "image": b"png"},
    )
