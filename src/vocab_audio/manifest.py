from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Sequence

from .config import MANIFEST_FILENAME, RETRY_FILENAME
from .row import RowResult
from .vocabulary import VocabularyRow, format_vocabulary


def build_manifest(results: Sequence[RowResult], source_file, pause_duration: float, generated_at: Optional[datetime] = None) -> dict:
    """Project the per-row results into the manifest record (1-based indices)."""
    generated_at = generated_at or datetime.now(timezone.utc)
    successful = sum(1 for r in results if r.success)
    return {
        "generated_at": generated_at.isoformat(),
        "source_file": str(source_file),
        "total": len(results),
        "successful": successful,
        "failed": len(results) - successful,
        "pause_duration": pause_duration,
        "items": [
            {
                "index": r.index + 1,
                "source": r.source,
                "target": r.target,
                "success": r.success,
                "file": r.output_path.name if r.success else None,
                "error": r.error,
            }
            for r in results
        ],
    }


def write_manifest(manifest: dict, output_dir) -> Path:
    path = Path(output_dir) / MANIFEST_FILENAME
    with open(path, "w", encoding="utf-8") as f:
        json.dump(manifest, f, indent=2, ensure_ascii=False)
    return path


def write_retry_list(results: Sequence[RowResult], output_dir, header=("German", "English")) -> Optional[Path]:
    """Write failed rows back in input format. Returns None (and drops a stale list) when nothing failed."""
    path = Path(output_dir) / RETRY_FILENAME
    failed = [VocabularyRow(r.index, r.source, r.target) for r in results if not r.success]
    if not failed:
        if path.exists():
            os.remove(path)
        return None
    path.write_text(format_vocabulary(failed, header), encoding="utf-8")
    return path
