from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from contextlib import suppress
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from .config import ARTIFACT_PREFIX, GeneratorConfig
from .media import ClipAssembler, SilenceGenerator
from .speech import SpeechFetcher
from .vocabulary import VocabularyRow


class RowState(Enum):
    PENDING = "pending"
    FETCHING = "fetching"
    GENERATING_SILENCE = "generating_silence"
    ASSEMBLING = "assembling"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class RowResult:
    index: int
    source: str
    target: str
    success: bool
    output_path: Optional[Path] = None
    error: Optional[str] = None
    failed_stage: Optional[RowState] = None

    def __post_init__(self):
        if self.success != (self.output_path is not None and self.error is None):
            raise ValueError("A row result has either an output path or an error, never both")

    @classmethod
    def ok(cls, row: VocabularyRow, output_path: Path) -> "RowResult":
        return cls(row.index, row.source, row.target, True, output_path=Path(output_path))

    @classmethod
    def failed(cls, row: VocabularyRow, error: str, stage: RowState) -> "RowResult":
        return cls(row.index, row.source, row.target, False, error=error or "unknown error", failed_stage=stage)


def artifact_name(index: int, width: int = 3) -> str:
    """0-based row index -> 1-based zero-padded artifact filename (word_007.mp3)."""
    return f"{ARTIFACT_PREFIX}{index + 1:0{width}d}.mp3"


class RowProcessor(object):
    """Turn one vocabulary row into `<source> <pause> <target>` audio.

    Intermediate clips live in the temp directory and are always removed
    before `process` returns; the finished clip goes to the output directory.
    """

    def __init__(
        self,
        config: GeneratorConfig,
        fetcher: Optional[SpeechFetcher] = None,
        silence: Optional[SilenceGenerator] = None,
        assembler: Optional[ClipAssembler] = None,
    ):
        self.config = config
        self.fetcher = fetcher or SpeechFetcher.from_config(config)
        self.silence = silence or SilenceGenerator(config.ffmpeg, config.sample_rate, config.bitrate)
        self.assembler = assembler or ClipAssembler(config.ffmpeg)

    def intermediate_paths(self, index: int):
        temp_dir = Path(self.config.temp_dir)
        return (
            temp_dir / f"temp_{index}_source.mp3",
            temp_dir / f"temp_{index}_target.mp3",
            temp_dir / f"temp_silence_{index}.mp3",
        )

    def output_path(self, index: int) -> Path:
        return Path(self.config.output_dir) / artifact_name(index, self.config.index_width)

    def _download(self, text: str, lang: str, filename: Path) -> Path:
        audio = self.fetcher.fetch(text, lang)
        filename.write_bytes(audio)
        return filename

    def _fetch_both(self, row: VocabularyRow, source_file: Path, target_file: Path) -> None:
        with ThreadPoolExecutor(max_workers=2) as pool:
            source_job = pool.submit(self._download, row.source, self.config.source_lang, source_file)
            target_job = pool.submit(self._download, row.target, self.config.target_lang, target_file)
        # Both jobs are finished here; the source error wins when both fail.
        source_job.result()
        target_job.result()

    def process(self, row: VocabularyRow) -> RowResult:
        print(f"Processing {row.index + 1}: {row.source[:40]}...")
        source_file, target_file, silence_file = self.intermediate_paths(row.index)
        output_file = self.output_path(row.index)
        Path(self.config.temp_dir).mkdir(parents=True, exist_ok=True)
        Path(self.config.output_dir).mkdir(parents=True, exist_ok=True)

        state = RowState.PENDING
        try:
            state = RowState.FETCHING
            self._fetch_both(row, source_file, target_file)

            state = RowState.GENERATING_SILENCE
            self.silence.generate(self.config.pause_duration, silence_file)

            state = RowState.ASSEMBLING
            self.assembler.assemble(source_file, silence_file, target_file, output_file)
        except Exception as exc:  # noqa: BLE001
            with suppress(OSError):
                os.remove(output_file)
            print(f"Failed: {row.source[:30]}... ({exc})")
            return RowResult.failed(row, str(exc), state)
        finally:
            for path in (source_file, target_file, silence_file):
                with suppress(OSError):
                    os.remove(path)

        print(f"Created: {output_file.name}")
        return RowResult.ok(row, output_file)
