"""Table-level wrappers: one CSV -> one MP3, and a whole directory of CSVs."""
from __future__ import annotations

import shutil
import sys
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Callable, List, Optional

from .combine import combine_directory
from .config import CombineConfig, GeneratorConfig
from .errors import VocabAudioError
from .generate import BatchSummary, generate_audio_from_csv
from .media import PROBER, ensure_tools


@dataclass
class TableResult:
    csv_file: Path
    success: bool
    output_file: Optional[Path] = None
    retry_file: Optional[Path] = None
    summary: Optional[BatchSummary] = None
    error: Optional[str] = None


def make_table(
    csv_file,
    mp3_dir="mp3",
    config: Optional[GeneratorConfig] = None,
    combine_config: Optional[CombineConfig] = None,
    keep_intermediate: bool = False,
) -> TableResult:
    """Generate, combine and file away the MP3 for one vocabulary table.

    Raises VocabAudioError (or OSError for file system trouble) when any step fails.
    """
    csv_file = Path(csv_file)
    if not csv_file.is_file():
        raise VocabAudioError(f"CSV file not found: {csv_file}")
    config = config or GeneratorConfig()
    combine_config = combine_config or CombineConfig(ffmpeg=config.ffmpeg)
    mp3_dir = Path(mp3_dir)
    mp3_dir.mkdir(parents=True, exist_ok=True)
    basename = csv_file.stem
    if keep_intermediate:
        # tables of one make_all run must not share clip directories
        config = replace(config, output_dir=Path(config.output_dir) / basename, temp_dir=Path(config.temp_dir) / basename)
    print(f"Processing: {csv_file} (base name: {basename})")

    try:
        print("Step 1: Generating audio files from CSV...")
        summary = generate_audio_from_csv(csv_file, config)

        retry_file = None
        if summary.retry_path:
            retry_file = mp3_dir / f"{basename}.failed.csv"
            shutil.copyfile(summary.retry_path, retry_file)
            print(f"Failed items copied to {retry_file}")

        print("Step 2: Combining audio files...")
        target = mp3_dir / f"{basename}.mp3"
        combine_directory(config.output_dir, target, combine_config, title=basename)
    finally:
        if not keep_intermediate:
            print("Cleaning up intermediate files...")
            shutil.rmtree(config.output_dir, ignore_errors=True)
            shutil.rmtree(config.temp_dir, ignore_errors=True)

    print(f"Success! Input: {csv_file} Output: {target}")
    return TableResult(csv_file, True, target, retry_file, summary)


def make_all(
    csv_dir,
    mp3_dir="mp3",
    config: Optional[GeneratorConfig] = None,
    combine_config: Optional[CombineConfig] = None,
    keep_intermediate: bool = False,
    make: Callable = make_table,
) -> List[TableResult]:
    """Run `make_table` for every *.csv in `csv_dir`; one failure does not stop the rest."""
    csv_dir = Path(csv_dir)
    if not csv_dir.is_dir():
        raise VocabAudioError(f"CSV directory not found: {csv_dir}")
    csv_files = sorted(csv_dir.glob("*.csv"))
    if not csv_files:
        raise VocabAudioError(f"No CSV files found in {csv_dir}")
    config = config or GeneratorConfig()
    ensure_tools(config.ffmpeg, PROBER)

    results = []
    for csv_file in csv_files:
        print(f"\n=== Processing: {csv_file.name} ===")
        try:
            result = make(csv_file, mp3_dir, config, combine_config, keep_intermediate)
            print(f"Successfully processed: {csv_file.name}")
        except (VocabAudioError, OSError) as exc:
            print(f"Failed to process: {csv_file.name} ({exc})", file=sys.stderr)
            result = TableResult(csv_file, False, error=str(exc))
        results.append(result)
    return results
