import os
import sys
import subprocess
from pathlib import Path


def run_cli(*args, cwd=None, check=True):
    repo_root = Path(__file__).resolve().parents[1]
    python_bin = repo_root / ".venv" / "bin" / "python"
    if not python_bin.exists():
        python_bin = Path(sys.executable)
    env = os.environ.copy()
    env["PYTHONPATH"] = str(repo_root / "src")
    env["PATH"] = ""  # no ffmpeg, no accidental network tools
    cmd = [str(python_bin), "-m", "vocab_audio.cli", *args]
    return subprocess.run(cmd, cwd=cwd or repo_root, check=check, capture_output=True, env=env)


def test_version():
    proc = run_cli("--version")
    assert proc.stdout.strip() == b"0.1.0"


def test_generate_missing_csv(tmp_path: Path):
    proc = run_cli("generate", str(tmp_path / "missing.csv"), cwd=tmp_path, check=False)
    assert proc.returncode == 1
    assert b"not found" in proc.stderr


def test_generate_without_ffmpeg(tmp_path: Path):
    csv_file = tmp_path / "words.csv"
    csv_file.write_text("Hallo,Hello\n", encoding="utf-8")
    proc = run_cli("generate", str(csv_file), "--output-dir", str(tmp_path / "out"), cwd=tmp_path, check=False)
    assert proc.returncode == 1
    assert b"ffmpeg" in proc.stderr
    assert b"brew install ffmpeg" in proc.stderr
    assert not (tmp_path / "out" / "manifest.json").exists()


def test_make_missing_csv(tmp_path: Path):
    proc = run_cli("make", str(tmp_path / "nope.csv"), cwd=tmp_path, check=False)
    assert proc.returncode == 1
    assert b"CSV file not found" in proc.stderr


def test_combine_without_ffmpeg(tmp_path: Path):
    proc = run_cli("combine", str(tmp_path), "--output", str(tmp_path / "out.mp3"), cwd=tmp_path, check=False)
    assert proc.returncode == 1
    assert b"Error:" in proc.stderr


def test_make_all_missing_directory(tmp_path: Path):
    proc = run_cli("make-all", str(tmp_path / "csv"), cwd=tmp_path, check=False)
    assert proc.returncode == 1
    assert b"CSV directory not found" in proc.stderr
