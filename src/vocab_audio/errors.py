from __future__ import annotations

from typing import Optional, Sequence


class VocabAudioError(RuntimeError):
    """Base class for every failure raised by this package."""


class ParseError(VocabAudioError):
    """The vocabulary source could not be read."""


class NetworkError(VocabAudioError):
    """A speech request failed in transport or returned a non-success status."""


class MediaToolError(VocabAudioError):
    """ffmpeg failed; `command` and `stderr` describe the failed invocation."""

    def __init__(self, message: str, *, command: Optional[Sequence[str]] = None, stderr: str = "") -> None:
        super().__init__(message)
        self.command = list(command) if command else []
        self.stderr = stderr


class MissingToolError(VocabAudioError):
    """ffmpeg (or ffprobe) is not installed."""


class CombineError(VocabAudioError):
    """The per-row artifacts of a directory could not be combined."""
