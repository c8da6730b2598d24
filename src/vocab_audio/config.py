from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

DEFAULT_TTS_URL = "https://translate.google.com/translate_tts"
DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

MANIFEST_FILENAME = "manifest.json"
RETRY_FILENAME = "failed_items.csv"
ARTIFACT_PREFIX = "word_"


@dataclass(frozen=True)
class GeneratorConfig:
    """Settings for turning one vocabulary table into per-row clips."""

    output_dir: Path = Path("bilingual_audio")
    temp_dir: Path = Path("temp_audio")
    pause_duration: float = 1.5
    row_delay: float = 0.5
    progress_every: int = 10
    source_lang: str = "de"
    target_lang: str = "en"
    header: Tuple[str, str] = ("German", "English")
    index_width: int = 3
    tts_url: str = DEFAULT_TTS_URL
    user_agent: str = DEFAULT_USER_AGENT
    request_timeout: Optional[float] = 30.0
    ffmpeg: str = "ffmpeg"
    sample_rate: int = 24000
    bitrate: str = "64k"

    @classmethod
    def from_env(cls, **overrides) -> "GeneratorConfig":
        env = {
            "tts_url": os.getenv("VOCAB_AUDIO_TTS_URL"),
            "user_agent": os.getenv("VOCAB_AUDIO_USER_AGENT"),
            "ffmpeg": os.getenv("VOCAB_AUDIO_FFMPEG"),
        }
        values = {k: v for k, v in env.items() if v}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


@dataclass(frozen=True)
class CombineConfig:
    silence_duration: float = 2.5
    output_filename: str = "combined_vocabulary.mp3"
    album: Optional[str] = None
    artist: str = "Homebrew"
    ffmpeg: str = "ffmpeg"
    sample_rate: int = 24000
    bitrate: str = "64k"
