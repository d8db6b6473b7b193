from __future__ import annotations

LEVEL_DEFAULT = "info"

_verbose = False


def set_verbose(enabled: bool) -> None:
    global _verbose
    _verbose = enabled


def _normalize_level(level: str | None) -> str:
    if not level:
        return LEVEL_DEFAULT
    return level.strip().lower() or LEVEL_DEFAULT


def log(message: str, level: str = LEVEL_DEFAULT, indent: int = 0) -> None:
    prefix = " " * max(indent, 0)
    normalized = _normalize_level(level)
    first, *rest = message.splitlines() or [""]
    print(f"{prefix}[{normalized}] {first}")
    # continuation lines line up with the text after the level tag
    padding = prefix + " " * (len(normalized) + 3)
    for line in rest:
        print(f"{padding}{line}")


def log_debug(message: str, indent: int = 0) -> None:
    if _verbose:
        log(message, "debug", indent)


def log_info(message: str, indent: int = 0) -> None:
    log(message, "info", indent)


def log_warn(message: str, indent: int = 0) -> None:
    log(message, "warn", indent)


def log_collision(message: str, indent: int = 0) -> None:
    log(message, "collision", indent)


def log_ok(message: str, indent: int = 0) -> None:
    log(message, "ok", indent)
