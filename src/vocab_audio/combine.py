from __future__ import annotations

import os
import re
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from mutagen import File, MutagenError

from .config import ARTIFACT_PREFIX, CombineConfig
from .errors import CombineError, MediaToolError
from .media import PROBER, clip_duration, concat_list_file, ensure_tools, make_silence

ARTIFACT_PATTERN = re.compile(rf"^{ARTIFACT_PREFIX}(\d+)\.mp3$", re.IGNORECASE)


@dataclass
class CombineResult:
    output_file: Path
    file_count: int
    estimated_duration: float


def collect_artifacts(directory) -> List[Path]:
    """Per-row clips of `directory`, sorted by their number (word_10 after word_9)."""
    try:
        names = os.listdir(directory)
    except OSError as exc:
        raise CombineError(f"Cannot read directory {directory}: {exc}") from exc
    numbered = []
    for name in names:
        m = ARTIFACT_PATTERN.match(name)
        if m:
            numbered.append((int(m.group(1)), name))
    numbered.sort()
    return [Path(directory) / name for _, name in numbered]


def clear_artifacts(directory) -> List[Path]:
    """Delete per-row clips left in `directory` by an earlier run."""
    removed = collect_artifacts(directory)
    for path in removed:
        os.remove(path)
    if removed:
        print(f"Removed {len(removed)} old clips from {directory}")
    return removed


def build_concat_list(audio_files: Sequence, silence_file) -> List:
    """Interleave the silence file between consecutive clips."""
    entries: List = []
    for i, f in enumerate(audio_files):
        if i > 0:
            entries.append(silence_file)
        entries.append(f)
    return entries


def estimate_duration(audio_files: Sequence, silence_duration: float, duration_of: Callable = clip_duration) -> float:
    if not audio_files:
        return 0.0
    total = sum(duration_of(f) for f in audio_files)
    return total + (len(audio_files) - 1) * silence_duration


def format_duration(seconds: float) -> str:
    minutes, secs = divmod(round(seconds), 60)
    return f"{minutes}m {secs}s"


def _tag_output(output_file: Path, title: str, album: str, artist: str) -> None:
    try:
        audio = File(output_file, easy=True)
        if audio is None:
            print(f"WARN: Skipping tags for unsupported file: {output_file}")
            return
        if audio.tags is None:
            audio.add_tags()
        audio["title"] = [title]
        audio["album"] = [album]
        audio["artist"] = [artist]
        audio.save()
    except MutagenError as exc:
        print(f"WARN: Could not tag {output_file}: {exc}")


def combine_directory(directory, output_file=None, config: Optional[CombineConfig] = None, title: Optional[str] = None) -> CombineResult:
    """Concatenate every word_NNN.mp3 of `directory` with silence in between."""
    config = config or CombineConfig()
    ensure_tools(config.ffmpeg, PROBER)
    output_file = Path(output_file or config.output_filename)
    output_file.parent.mkdir(parents=True, exist_ok=True)

    audio_files = collect_artifacts(directory)
    if not audio_files:
        raise CombineError(f"No audio files found in {directory} (expected {ARTIFACT_PREFIX}NNN.mp3)")
    print(f"Found {len(audio_files)} audio files")

    with tempfile.TemporaryDirectory(prefix="vocab_audio_") as work_dir:
        silence_file = Path(work_dir) / "silence.mp3"
        print(f"Creating {config.silence_duration}s silence interval...")
        try:
            make_silence(config.silence_duration, silence_file, config.ffmpeg, config.sample_rate, config.bitrate)
        except MediaToolError as exc:
            raise CombineError(f"Failed to create silence file: {exc}") from exc

        duration = estimate_duration(audio_files, config.silence_duration)
        print(f"Estimated total duration: {format_duration(duration)}")

        entries = build_concat_list(audio_files, silence_file)
        print(f"Combining {len(audio_files)} files ({len(entries)} entries)...")
        try:
            concat_list_file(entries, Path(work_dir) / "concat_list.txt", output_file, config.ffmpeg)
        except MediaToolError as exc:
            raise CombineError(f"Failed to combine audio files: {exc}") from exc

    title = title or output_file.stem
    _tag_output(output_file, title, config.album or title, config.artist)
    print(f'Created "{output_file}"')
    return CombineResult(output_file, len(audio_files), duration)
