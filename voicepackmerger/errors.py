"""Exceptions raised by the voicepack merger.

Resource-key collisions are deliberately absent: they are resolved during a
merge and reported through the diagnostic channel instead.
"""

from __future__ import annotations


class VoicepackError(Exception):
    """Base class for all voicepack merger errors."""


class InvalidBindingError(VoicepackError, ValueError):
    """Raised when an achievement binding is missing where one is required."""


class InvalidOperationError(VoicepackError, RuntimeError):
    """Raised when a merge is attempted on an invalid base voicepack."""


class InvalidInputError(VoicepackError, ValueError):
    """Raised when the voicepack merged into a base is missing or invalid."""


class AchievementKeyNotFoundError(VoicepackError, KeyError):
    """Raised when an achievement of the base voicepack is absent from the other one."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Achievement '{self.key}' not found in the voicepack being merged"


class LoadError(VoicepackError):
    """Raised by a loader when a voicepack source cannot be read."""


class ExportError(VoicepackError):
    """Raised by an exporter when a voicepack cannot be written."""


class ConfigError(VoicepackError, ValueError):
    """Raised when the program configuration file is malformed."""
