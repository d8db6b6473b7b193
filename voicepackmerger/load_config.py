from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

import toml

from .errors import ConfigError
from .logging_utils import log_warn
from .models import COMBINED_PACK_NAME


@dataclass(slots=True)
class ProgramConfig:
    achievements: List[str] = field(default_factory=list)
    packs: List[Path] = field(default_factory=list)
    combined_name: str = COMBINED_PACK_NAME
    output: Path | None = None
    report: Path | None = None


def _resolve(base_dir: Path, raw: str) -> Path:
    path = Path(raw).expanduser()
    if path.is_absolute():
        return path
    return base_dir / path


def load_program_config(config_path: Path) -> ProgramConfig:
    """Load the achievement universe and the packs to combine from a TOML file.

    Relative paths are resolved against the directory of the config file.
    A missing file yields the defaults.
    """

    if not config_path.exists():
        log_warn(f"Config file {config_path} not found. Proceeding with defaults.")
        return ProgramConfig()

    raw_text = config_path.read_text(encoding="utf-8")
    try:
        config = toml.loads(raw_text)
    except toml.TomlDecodeError as exc:
        raise ConfigError(f"Invalid TOML in config file: {config_path}") from exc

    achievements = config.get("achievements", [])
    packs = config.get("packs", [])
    if not isinstance(achievements, list) or not isinstance(packs, list):
        raise ConfigError(f"'achievements' and 'packs' must be lists in {config_path}")

    base_dir = config_path.parent
    output = config.get("output")
    report = config.get("report")
    return ProgramConfig(
        achievements=[str(key) for key in achievements],
        packs=[_resolve(base_dir, str(pack)) for pack in packs],
        combined_name=str(config.get("combined_name", COMBINED_PACK_NAME)),
        output=_resolve(base_dir, str(output)) if output else None,
        report=_resolve(base_dir, str(report)) if report else None,
    )
