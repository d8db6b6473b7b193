"""Core package for combining achievement voicepacks."""

from .active_state import ActiveSlot, CombinedPackSwitch
from .consolidator import PackConsolidator
from .equivalence import (
    equal_achievement_maps,
    equal_metadata,
    equal_resource_stores,
    equal_single_sound,
    equal_sound_sets,
    equivalent_configurations,
)
from .errors import (
    AchievementKeyNotFoundError,
    ConfigError,
    ExportError,
    InvalidBindingError,
    InvalidInputError,
    InvalidOperationError,
    LoadError,
    VoicepackError,
)
from .load_config import ProgramConfig, load_program_config
from .merge_engine import ResourceCollision, merge_configurations
from .models import (
    AchievementBinding,
    PackMetadata,
    SoundRef,
    VoicepackConfiguration,
    default_configuration,
    describe,
)
from .normalization import from_sound_list, to_sound_list
from .pack_io import TomlPackExporter, TomlPackLoader
from .report import export_report, print_merge_summary

__all__ = [
    "AchievementBinding",
    "PackMetadata",
    "SoundRef",
    "VoicepackConfiguration",
    "default_configuration",
    "describe",
    "to_sound_list",
    "from_sound_list",
    "merge_configurations",
    "ResourceCollision",
    "equal_single_sound",
    "equal_sound_sets",
    "equal_achievement_maps",
    "equal_resource_stores",
    "equal_metadata",
    "equivalent_configurations",
    "PackConsolidator",
    "ActiveSlot",
    "CombinedPackSwitch",
    "TomlPackLoader",
    "TomlPackExporter",
    "ProgramConfig",
    "load_program_config",
    "print_merge_summary",
    "export_report",
    "VoicepackError",
    "InvalidBindingError",
    "InvalidOperationError",
    "InvalidInputError",
    "AchievementKeyNotFoundError",
    "LoadError",
    "ExportError",
    "ConfigError",
]
