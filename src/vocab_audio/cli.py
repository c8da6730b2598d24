from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from . import __version__
from .batch import make_all, make_table
from .combine import combine_directory, format_duration
from .config import CombineConfig, GeneratorConfig
from .errors import VocabAudioError
from .generate import generate_audio_from_csv


app = typer.Typer(help="Bilingual vocabulary audio: CSV word lists to narrated MP3.", add_completion=False)


def _fail(exc: Exception) -> None:
    typer.echo(f"Error: {exc}", err=True)
    raise typer.Exit(1)


def _build_config(
    env_file: Path,
    output_dir: Optional[Path] = None,
    pause: Optional[float] = None,
    delay: Optional[float] = None,
    source_lang: Optional[str] = None,
    target_lang: Optional[str] = None,
) -> GeneratorConfig:
    load_dotenv(env_file, override=True)
    return GeneratorConfig.from_env(
        output_dir=output_dir,
        pause_duration=pause,
        row_delay=delay,
        source_lang=source_lang,
        target_lang=target_lang,
    )


def _version_callback(value: bool):
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(False, "--version", callback=_version_callback, is_eager=True),
):
    pass


@app.command("generate")
def generate(
    csv_file: Path = typer.Argument(Path("e-a.csv"), dir_okay=False),
    output_dir: Path = typer.Option(Path("bilingual_audio"), "--output-dir", "-d"),
    pause: float = typer.Option(1.5, "--pause", help="Seconds between source and target term"),
    delay: float = typer.Option(0.5, "--delay", help="Seconds to wait between rows"),
    source_lang: str = typer.Option("de", "--source-lang", "-s"),
    target_lang: str = typer.Option("en", "--target-lang", "-t"),
    env_file: Path = typer.Option(Path(".env"), "--env-file", exists=False),
):
    """Create one word_NNN.mp3 per row plus manifest.json (and failed_items.csv)."""
    if not csv_file.is_file():
        typer.echo(f'Error: CSV file "{csv_file}" not found.', err=True)
        raise typer.Exit(1)
    config = _build_config(env_file, output_dir, pause, delay, source_lang, target_lang)
    try:
        summary = generate_audio_from_csv(csv_file, config)
    except VocabAudioError as exc:
        _fail(exc)
    typer.echo(f"Created {summary.successful}/{summary.total} clips in {summary.output_dir}")


@app.command("combine")
def combine(
    input_dir: Path = typer.Argument(Path("bilingual_audio"), file_okay=False),
    output_file: Path = typer.Option(Path("combined_vocabulary.mp3"), "--output", "-o", dir_okay=False),
    silence: float = typer.Option(2.5, "--silence", help="Seconds of silence between items"),
    album: Optional[str] = typer.Option(None, "--album"),
    artist: str = typer.Option("Homebrew", "--artist"),
    env_file: Path = typer.Option(Path(".env"), "--env-file", exists=False),
):
    """Join word_NNN.mp3 files in numeric order into a single MP3."""
    config = _build_config(env_file)
    combine_config = CombineConfig(silence_duration=silence, album=album, artist=artist, ffmpeg=config.ffmpeg)
    try:
        result = combine_directory(input_dir, output_file, combine_config)
    except VocabAudioError as exc:
        _fail(exc)
    typer.echo(f"Created {result.output_file}: {result.file_count} items, {format_duration(result.estimated_duration)}")


@app.command("make")
def make(
    csv_file: Path = typer.Argument(..., dir_okay=False),
    mp3_dir: Path = typer.Option(Path("mp3"), "--mp3-dir"),
    pause: float = typer.Option(1.5, "--pause"),
    silence: float = typer.Option(2.5, "--silence"),
    source_lang: str = typer.Option("de", "--source-lang", "-s"),
    target_lang: str = typer.Option("en", "--target-lang", "-t"),
    keep_intermediate: bool = typer.Option(False, "--keep-intermediate"),
    env_file: Path = typer.Option(Path(".env"), "--env-file", exists=False),
):
    """Generate and combine one CSV into <mp3-dir>/<name>.mp3."""
    if not csv_file.is_file():
        typer.echo(f"Error: CSV file not found: {csv_file}", err=True)
        raise typer.Exit(1)
    config = _build_config(env_file, pause=pause, source_lang=source_lang, target_lang=target_lang)
    combine_config = CombineConfig(silence_duration=silence, ffmpeg=config.ffmpeg)
    try:
        result = make_table(csv_file, mp3_dir, config, combine_config, keep_intermediate)
    except (VocabAudioError, OSError) as exc:
        _fail(exc)
    typer.echo(f"Created {result.output_file}")


@app.command("make-all")
def make_all_tables(
    csv_dir: Path = typer.Argument(Path("csv"), file_okay=False),
    mp3_dir: Path = typer.Option(Path("mp3"), "--mp3-dir"),
    pause: float = typer.Option(1.5, "--pause"),
    silence: float = typer.Option(2.5, "--silence"),
    source_lang: str = typer.Option("de", "--source-lang", "-s"),
    target_lang: str = typer.Option("en", "--target-lang", "-t"),
    keep_intermediate: bool = typer.Option(False, "--keep-intermediate"),
    env_file: Path = typer.Option(Path(".env"), "--env-file", exists=False),
):
    """Run `make` for every CSV in a directory, continuing past failures."""
    config = _build_config(env_file, pause=pause, source_lang=source_lang, target_lang=target_lang)
    combine_config = CombineConfig(silence_duration=silence, ffmpeg=config.ffmpeg)
    try:
        results = make_all(csv_dir, mp3_dir, config, combine_config, keep_intermediate)
    except VocabAudioError as exc:
        _fail(exc)
    failed = [r for r in results if not r.success]
    for r in results:
        status = f"ok -> {r.output_file}" if r.success else f"FAILED ({r.error})"
        typer.echo(f"{r.csv_file.name}: {status}")
    if failed:
        raise typer.Exit(1)


def main():
    app()


if __name__ == "__main__":
    main()
