from __future__ import annotations

import re
from pathlib import Path

UNSAFE_CHARS_PATTERN = re.compile(r"[^A-Za-z0-9._-]+")


def ensure_directory(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def safe_file_name(key: str) -> str:
    cleaned = UNSAFE_CHARS_PATTERN.sub("_", key).strip("._")
    return cleaned or "resource"
