"""Thin wrappers around the ffmpeg / ffprobe command-line tools."""
from __future__ import annotations

import os
import shutil
import subprocess
import sys
from pathlib import Path
from typing import List, Sequence

from pydub.utils import mediainfo

from .errors import MediaToolError, MissingToolError

# pydub.utils.mediainfo finds ffprobe on PATH by itself
PROBER = "ffprobe"

INSTALL_HINT = (
    "Please install ffmpeg first:\n"
    "- macOS: brew install ffmpeg\n"
    "- Ubuntu/Debian: sudo apt install ffmpeg\n"
    "- Windows: Download from https://ffmpeg.org/"
)


def ensure_tools(*binaries: str) -> None:
    for binary in binaries or ("ffmpeg",):
        if shutil.which(binary) is None:
            raise MissingToolError(f"'{binary}' is required but was not found.\n{INSTALL_HINT}")


def run_ffmpeg(cmd: Sequence[str]) -> None:
    try:
        subprocess.run(list(cmd), stdout=subprocess.DEVNULL, stderr=subprocess.PIPE, check=True)
    except subprocess.CalledProcessError as exc:
        stderr = (exc.stderr or b"").decode("utf-8", errors="ignore")
        raise MediaToolError(
            f"{cmd[0]} exited with status {exc.returncode}: {stderr[-500:].strip()}",
            command=cmd,
            stderr=stderr,
        ) from exc
    except OSError as exc:
        raise MediaToolError(f"Could not run {cmd[0]}: {exc}", command=cmd) from exc


def make_silence(duration, output_file, ffmpeg="ffmpeg", sample_rate=24000, bitrate="64k"):
    """Render `duration` seconds of mono MP3 silence. Raises MediaToolError."""
    cmd = [
        ffmpeg,
        "-f",
        "lavfi",
        "-i",
        f"anullsrc=r={sample_rate}:cl=mono",
        "-t",
        str(duration),
        "-c:a",
        "libmp3lame",
        "-b:a",
        bitrate,
        str(output_file),
        "-y",
    ]
    run_ffmpeg(cmd)
    return output_file


def concat_files(input_files: Sequence, output_file, ffmpeg="ffmpeg"):
    """Byte-level concatenation via ffmpeg's concat: protocol (no re-encode)."""
    inputs = [str(f) for f in input_files]
    if not inputs:
        raise MediaToolError("Nothing to concatenate")
    cmd = [ffmpeg, "-i", "concat:" + "|".join(inputs), "-c", "copy", str(output_file), "-y"]
    run_ffmpeg(cmd)
    return output_file


def concat_list_file(input_files: Sequence, list_file, output_file, ffmpeg="ffmpeg"):
    """Sequential concatenation of many files via the concat demuxer."""
    lines = []
    for f in input_files:
        escaped = str(Path(f).resolve()).replace("'", "'\\''")
        lines.append(f"file '{escaped}'")
    Path(list_file).write_text("\n".join(lines), encoding="utf-8")
    cmd = [ffmpeg, "-f", "concat", "-safe", "0", "-i", str(list_file), "-c", "copy", str(output_file), "-y"]
    run_ffmpeg(cmd)
    return output_file


def clip_duration(path) -> float:
    """Duration in seconds as reported by ffprobe; 0.0 when unknown."""
    try:
        info = mediainfo(str(path))
        return float(info.get("duration", 0.0))
    except (OSError, ValueError, subprocess.SubprocessError) as exc:
        print(f"WARN: Could not get duration for {path}: {exc}", file=sys.stderr)
        return 0.0


class SilenceGenerator(object):
    """Per-row pause clips. Falls back to an empty file when ffmpeg fails."""

    def __init__(self, ffmpeg="ffmpeg", sample_rate=24000, bitrate="64k"):
        self.ffmpeg = ffmpeg
        self.sample_rate = sample_rate
        self.bitrate = bitrate

    def generate(self, duration, output_file):
        try:
            make_silence(duration, output_file, self.ffmpeg, self.sample_rate, self.bitrate)
        except MediaToolError as exc:
            print(f"WARN: Error creating silence, using empty placeholder: {exc}", file=sys.stderr)
            Path(output_file).write_bytes(b"")
        return output_file


class ClipAssembler(object):
    def __init__(self, ffmpeg="ffmpeg"):
        self.ffmpeg = ffmpeg

    def assemble(self, first_clip, silence_clip, second_clip, output_file):
        """Join first + silence + second. An empty silence clip means no pause."""
        for clip in (first_clip, second_clip):
            if os.path.getsize(clip) == 0:
                raise MediaToolError(f"Speech clip {Path(clip).name} is empty")
        files: List = [first_clip, silence_clip, second_clip]
        if os.path.getsize(silence_clip) == 0:
            print(f"WARN: Silence clip is empty, joining {Path(output_file).name} without pause", file=sys.stderr)
            files.remove(silence_clip)
        return concat_files(files, output_file, self.ffmpeg)
