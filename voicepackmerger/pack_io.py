"""Reading and writing voicepacks described by a ``pack.toml`` manifest.

Layout of a pack directory::

    pack.toml
    resources/<file>   (any path, referenced from the manifest)

Manifest::

    guid = "..."

    [metadata]
    name = "..."
    author = "..."
    description = "..."
    sample_image = "..."
    backup_sample_image = "..."

    [background]
    image = "..."
    packaged_image = "..."
    disabled = false

    [achievements.HEADSHOT]
    sound = "sounds/headshot.wav"
    packaged = "headshot"

    [achievements.KILL_STREAK]
    sounds = [{ sound = "a.wav", packaged = "a" }, { sound = "b.wav" }]

    [resources]
    headshot = "resources/headshot.bin"
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Protocol

import toml

from .errors import ExportError, LoadError
from .file_utils import ensure_directory, safe_file_name
from .models import (
    DEFAULT_BINDING,
    AchievementBinding,
    AchievementMap,
    PackMetadata,
    ResourceStore,
    SoundRef,
    VoicepackConfiguration,
)
from .normalization import normalize_binding

MANIFEST_NAME = "pack.toml"
RESOURCE_DIR = "resources"


class PackLoader(Protocol):
    def load(self, source: str) -> VoicepackConfiguration:
        ...


class PackExporter(Protocol):
    def export(self, config: VoicepackConfiguration, destination: str) -> None:
        ...


def manifest_path(source: str | Path) -> Path:
    path = Path(source).expanduser()
    if path.is_dir():
        return path / MANIFEST_NAME
    return path


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


def _table(data: Dict[str, Any], name: str, manifest: Path) -> Dict[str, Any]:
    value = data.get(name, {})
    if not isinstance(value, dict):
        raise LoadError(f"'{name}' must be a table in {manifest}")
    return value


def _parse_sound(raw: Any, manifest: Path, key: str) -> SoundRef:
    if isinstance(raw, str):
        return SoundRef(raw)
    if not isinstance(raw, dict) or "sound" not in raw:
        raise LoadError(f"Invalid sound entry for achievement '{key}' in {manifest}")
    return SoundRef(str(raw["sound"]), _optional_str(raw.get("packaged")))


def _parse_binding(raw: Any, manifest: Path, key: str) -> AchievementBinding:
    if not isinstance(raw, dict):
        raise LoadError(f"Achievement '{key}' in {manifest} must be a table")
    extra = None
    if "sounds" in raw:
        if not isinstance(raw["sounds"], list):
            raise LoadError(f"'sounds' of achievement '{key}' in {manifest} must be a list")
        extra = tuple(_parse_sound(item, manifest, key) for item in raw["sounds"])
    primary = SoundRef(str(raw.get("sound", "default")), _optional_str(raw.get("packaged")))
    return AchievementBinding(primary=primary, extra=extra)


def _parse_resources(raw: Dict[str, Any], manifest: Path) -> ResourceStore:
    resources: ResourceStore = {}
    for key, relative in raw.items():
        blob_path = manifest.parent / str(relative)
        try:
            resources[key] = blob_path.read_bytes()
        except OSError as exc:
            raise LoadError(f"Cannot read resource '{key}' from {blob_path}: {exc}") from exc
    return resources


class TomlPackLoader:
    """Load voicepacks from TOML manifests.

    Achievements of ``achievement_keys`` missing from a manifest are filled
    in with the default binding, so every loaded pack shares the same
    achievement universe.
    """

    def __init__(self, achievement_keys: Iterable[str] | None = None) -> None:
        self.achievement_keys: List[str] = list(achievement_keys or [])

    def load(self, source: str) -> VoicepackConfiguration:
        manifest = manifest_path(source)
        if not manifest.exists():
            raise LoadError(f"Voicepack manifest {manifest} not found")
        try:
            data = toml.loads(manifest.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as exc:
            raise LoadError(f"Cannot read voicepack manifest {manifest}: {exc}") from exc
        except toml.TomlDecodeError as exc:
            raise LoadError(f"Invalid TOML in voicepack manifest: {manifest}") from exc

        raw_metadata = data.get("metadata")
        metadata = None
        if isinstance(raw_metadata, dict):
            metadata = PackMetadata(
                name=raw_metadata.get("name"),
                author=raw_metadata.get("author"),
                description=raw_metadata.get("description"),
                sample_image=raw_metadata.get("sample_image"),
                backup_sample_image=raw_metadata.get("backup_sample_image"),
            )

        achievements: AchievementMap = {}
        for key, raw in _table(data, "achievements", manifest).items():
            achievements[key] = normalize_binding(_parse_binding(raw, manifest, key))
        for key in self.achievement_keys:
            achievements.setdefault(key, DEFAULT_BINDING)

        background = _table(data, "background", manifest)
        resources = _parse_resources(_table(data, "resources", manifest), manifest)
        return VoicepackConfiguration(
            metadata=metadata,
            achievements=achievements,
            resources=resources,
            guid=data.get("guid"),
            background_image=background.get("image"),
            packaged_background_image=background.get("packaged_image"),
            background_image_disabled=bool(background.get("disabled", False)),
            source=str(source),
        )


def _sound_table(sound: SoundRef) -> Dict[str, str]:
    table = {"sound": sound.asset_path}
    if sound.packaged_path is not None:
        table["packaged"] = sound.packaged_path
    return table


def _without_none(table: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in table.items() if value is not None}


def build_manifest(config: VoicepackConfiguration, resource_files: Dict[str, str]) -> Dict[str, Any]:
    """Return the manifest document of a voicepack; default bindings are omitted."""

    document: Dict[str, Any] = _without_none({"guid": config.guid})
    if config.metadata is not None:
        metadata = config.metadata
        document["metadata"] = _without_none(
            {
                "name": metadata.name,
                "author": metadata.author,
                "description": metadata.description,
                "sample_image": metadata.sample_image,
                "backup_sample_image": metadata.backup_sample_image,
            }
        )
    document["background"] = _without_none(
        {
            "image": config.background_image,
            "packaged_image": config.packaged_background_image,
            "disabled": config.background_image_disabled,
        }
    )

    achievements: Dict[str, Any] = {}
    for key, binding in config.achievements.items():
        if binding.is_default:
            continue
        table: Dict[str, Any] = {}
        if not binding.primary.is_default:
            table.update(_sound_table(binding.primary))
        if binding.extra:
            table["sounds"] = [_sound_table(sound) for sound in binding.extra]
        achievements[key] = table
    document["achievements"] = achievements
    document["resources"] = dict(resource_files)
    return document


class TomlPackExporter:
    def export(self, config: VoicepackConfiguration, destination: str) -> None:
        target_dir = Path(destination).expanduser()
        resource_files: Dict[str, str] = {}
        try:
            ensure_directory(target_dir / RESOURCE_DIR)
            for index, (key, blob) in enumerate((config.resources or {}).items()):
                relative = f"{RESOURCE_DIR}/{index:04d}_{safe_file_name(key)}"
                (target_dir / relative).write_bytes(blob)
                resource_files[key] = relative
            manifest = build_manifest(config, resource_files)
            (target_dir / MANIFEST_NAME).write_text(toml.dumps(manifest), encoding="utf-8")
        except OSError as exc:
            raise ExportError(f"Cannot export voicepack to {target_dir}: {exc}") from exc


__all__ = [
    "PackLoader",
    "PackExporter",
    "TomlPackLoader",
    "TomlPackExporter",
    "build_manifest",
    "manifest_path",
]
