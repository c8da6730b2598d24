from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from .combine import clear_artifacts
from .config import GeneratorConfig
from .manifest import build_manifest, write_manifest, write_retry_list
from .media import ensure_tools
from .row import RowProcessor, RowResult
from .vocabulary import VocabularyRow, read_vocabulary


@dataclass
class BatchSummary:
    total: int
    successful: int
    failed: int
    output_dir: Path
    manifest_path: Optional[Path] = None
    retry_path: Optional[Path] = None


class BatchRunner(object):
    """Process rows one after another, then write the manifest and retry list."""

    def __init__(
        self,
        config: GeneratorConfig,
        processor: Optional[RowProcessor] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config
        self.processor = processor or RowProcessor(config)
        self.sleep = sleep
        self.results: List[RowResult] = []

    def _report_progress(self, done: int, total: int) -> None:
        every = self.config.progress_every
        if (every > 0 and done % every == 0) or done == total:
            print(f"Progress: {done}/{total} ({round(done / total * 100)}%)")

    def run(self, rows: Sequence[VocabularyRow], source_file="") -> BatchSummary:
        output_dir = Path(self.config.output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        clear_artifacts(output_dir)
        self.results = []

        for i, row in enumerate(rows):
            if i > 0 and self.config.row_delay > 0:
                # rate limit for the TTS endpoint
                self.sleep(self.config.row_delay)
            self.results.append(self.processor.process(row))
            self._report_progress(i + 1, len(rows))

        manifest = build_manifest(self.results, source_file, self.config.pause_duration)
        manifest_path = write_manifest(manifest, output_dir)
        retry_path = write_retry_list(self.results, output_dir, self.config.header)
        return BatchSummary(
            total=manifest["total"],
            successful=manifest["successful"],
            failed=manifest["failed"],
            output_dir=output_dir,
            manifest_path=manifest_path,
            retry_path=retry_path,
        )


def generate_audio_from_csv(csv_file, config: Optional[GeneratorConfig] = None, runner: Optional[BatchRunner] = None) -> BatchSummary:
    """Check preconditions, parse the table and run the batch."""
    config = config or GeneratorConfig()
    ensure_tools(config.ffmpeg)
    print(f"Reading vocabulary from: {csv_file}")
    rows = read_vocabulary(csv_file, config.header)
    print(f"Found {len(rows)} vocabulary items\n")

    runner = runner or BatchRunner(config)
    summary = runner.run(rows, source_file=csv_file)

    print("\n" + "=" * 50)
    print("Generation Complete!")
    print(f"Success: {summary.successful}/{summary.total}")
    print(f"Output directory: {summary.output_dir.resolve()}")
    if summary.retry_path:
        print(f"Failed items saved: {summary.retry_path}")
    print(f"Manifest saved: {summary.manifest_path}")
    return summary
